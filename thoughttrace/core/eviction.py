"""Size-bound enforcement for record sequences.

The main history is trimmed chain-aware: the oldest *completed* chain is
removed as a unit, so an open chain is never split. Only when no record in
the history is terminal does eviction fall back to dropping the single
oldest record. Branches are trimmed plain FIFO.

Both functions mutate the list they are given in place.
"""

import logging
from typing import Callable, List, Optional

from thoughttrace.core.chains import find_chain_indices, first_terminal_index
from thoughttrace.types import ThoughtRecord

logger = logging.getLogger(__name__)

ChainCallback = Callable[[List[ThoughtRecord]], None]


def enforce_history_limit(
    history: List[ThoughtRecord],
    limit: int,
    chain_aware: bool = True,
    on_chain: Optional[ChainCallback] = None,
) -> int:
    """Trim ``history`` to at most ``limit`` records.

    Args:
        history: The main sequence, oldest first.
        limit: Maximum number of records to keep.
        chain_aware: Evict whole completed chains before falling back to FIFO.
        on_chain: Called with each completed chain removed as a unit.

    Returns:
        Number of records evicted.
    """
    evicted = 0
    while len(history) > limit:
        end = first_terminal_index(history) if chain_aware else None
        chain = find_chain_indices(history, end) if end is not None else []

        if chain:
            removed = history[chain[0] : chain[-1] + 1]
            del history[chain[0] : chain[-1] + 1]
            evicted += len(removed)
            logger.debug("Evicted completed chain of %d thought(s) from history", len(removed))
            if on_chain is not None:
                on_chain(removed)
        else:
            history.pop(0)
            evicted += 1
            logger.debug("Evicted oldest open thought from history (no completed chain)")
    return evicted


def enforce_branch_limit(records: List[ThoughtRecord], limit: int) -> int:
    """Trim a branch to at most ``limit`` records, oldest first."""
    overflow = len(records) - limit
    if overflow <= 0:
        return 0
    del records[:overflow]
    return overflow
