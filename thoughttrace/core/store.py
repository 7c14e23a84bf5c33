"""TraceStore - the bounded reasoning-trace store.

Accepts a stream of thought records, routes each to the main history or to
its named branch, and keeps both within their configured bounds:

- the main history is trimmed chain-aware (see ``core.eviction``);
- branches are evicted whole, least recently used first, and each branch
  is trimmed FIFO to ``max_thoughts_per_branch``;
- completed chains that are removed as a unit can leave a
  :class:`~thoughttrace.types.ChainSummary` in a bounded archive.

A store is a plain in-process object owned by one session. It does no
locking and no I/O; callers sharing one instance must serialize access.
"""

import itertools
import logging
import uuid
from collections import deque
from typing import Any, Deque, Dict, List, Mapping, Optional, Tuple, Union

from thoughttrace.config import TraceStoreConfig
from thoughttrace.core.branches import BranchStore
from thoughttrace.core.chains import chain_boundaries, completed_chains
from thoughttrace.core.eviction import enforce_history_limit
from thoughttrace.core.validation import validate_thought
from thoughttrace.types import (
    BranchMetadata,
    ChainBoundary,
    ChainSummary,
    ClearResult,
    MemoryStats,
    ThoughtRecord,
    preview,
)

logger = logging.getLogger(__name__)


class TraceStore:
    """Bounded store for thought records and their branches."""

    def __init__(
        self,
        config: Union[TraceStoreConfig, Mapping[str, Any], None] = None,
        **overrides: Any,
    ) -> None:
        if config is None:
            config = TraceStoreConfig()
        elif not isinstance(config, TraceStoreConfig):
            config = TraceStoreConfig.from_dict(config)
        if overrides:
            config = config.merged(overrides)
        self.config = config

        self._ticks = itertools.count(1)
        self._history: List[ThoughtRecord] = []
        self._branches = BranchStore(
            max_branches=config.max_branches,
            max_thoughts_per_branch=config.max_thoughts_per_branch,
            clock=self._tick,
        )
        self._summaries: Deque[ChainSummary] = deque(maxlen=config.max_chain_summaries)

    def _tick(self) -> int:
        return next(self._ticks)

    # =========================================================================
    # Ingest
    # =========================================================================

    def process(self, data: Any) -> ThoughtRecord:
        """Validate ``data``, store it, enforce bounds, return the record.

        Raises:
            ValidationError: If ``data`` is not a valid thought. Nothing is
                stored in that case.
        """
        record = validate_thought(data)

        if record.branch_id:
            self._branches.append(record.branch_id, record)
        else:
            self._history.append(record)
            on_chain = self._archive if self.config.cleanup_on_complete else None
            enforce_history_limit(
                self._history,
                self.config.max_thought_history,
                chain_aware=self.config.enable_auto_cleanup,
                on_chain=on_chain,
            )
        return record

    def _archive(self, chain: List[ThoughtRecord], branch_id: Optional[str] = None) -> None:
        if not self.config.retain_chain_summaries or not chain:
            return
        self._summaries.append(
            ChainSummary(
                id=str(uuid.uuid4()),
                completed_at=self._tick(),
                thought_count=len(chain),
                first_thought_preview=preview(chain[0].text),
                final_thought_preview=preview(chain[-1].text),
                estimated_total=chain[-1].estimated_total,
                branch_id=branch_id,
            )
        )

    # =========================================================================
    # Main history
    # =========================================================================

    def get_thought_history(self) -> List[ThoughtRecord]:
        return list(self._history)

    def get_thought_count(self) -> int:
        return len(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def get_chain_boundaries(self) -> List[ChainBoundary]:
        return chain_boundaries(self._history)

    def get_completed_chains_in_history(self) -> List[ChainBoundary]:
        return completed_chains(self._history)

    def has_completed_chains(self) -> bool:
        return any(record.is_terminal for record in self._history)

    # =========================================================================
    # Branches
    # =========================================================================

    def get_branch(self, branch_id: str) -> List[ThoughtRecord]:
        """Records of one branch; counts as an access. Unknown ids give []."""
        return self._branches.get(branch_id)

    def get_branches(self) -> Dict[str, List[ThoughtRecord]]:
        """All branches by id. Does not update recency."""
        return self._branches.items()

    def get_branch_ids(self) -> List[str]:
        return self._branches.ids()

    def get_branch_count(self) -> int:
        return len(self._branches)

    def get_branch_metadata(self, branch_id: str) -> Optional[BranchMetadata]:
        return self._branches.metadata(branch_id)

    def get_branch_chain_boundaries(self, branch_id: str) -> List[ChainBoundary]:
        return chain_boundaries(self._branches.peek(branch_id))

    def get_completed_chains_in_branch(self, branch_id: str) -> List[ChainBoundary]:
        return completed_chains(self._branches.peek(branch_id))

    def clear_branch(self, branch_id: str) -> bool:
        return self._branches.remove(branch_id)

    def clear_all_branches(self) -> None:
        self._branches.clear()

    # =========================================================================
    # Completed chains and the summary archive
    # =========================================================================

    def clear_completed_chains(self) -> ClearResult:
        """Remove every completed chain from history and branches.

        Open chains are kept in order. Each removed chain is archived when
        ``retain_chain_summaries`` is on. Branch recency is not changed.
        """
        result = ClearResult()
        self._history, result.history_chains = self._drop_completed(self._history)
        for branch_id in self._branches.ids():
            remaining, count = self._drop_completed(self._branches.peek(branch_id), branch_id)
            if count:
                self._branches.replace(branch_id, remaining)
                result.branch_chains += count
        if result.total:
            logger.debug(
                "Cleared %d completed chain(s) from history and %d from branches",
                result.history_chains,
                result.branch_chains,
            )
        return result

    def _drop_completed(
        self, records: List[ThoughtRecord], branch_id: Optional[str] = None
    ) -> Tuple[List[ThoughtRecord], int]:
        chains = completed_chains(records)
        for boundary in chains:
            self._archive(records[boundary.start_index : boundary.end_index + 1], branch_id)
        if not chains:
            return records, 0
        return records[chains[-1].end_index + 1 :], len(chains)

    def get_chain_summaries(self) -> List[ChainSummary]:
        return list(self._summaries)

    def clear_chain_summaries(self) -> None:
        self._summaries.clear()

    # =========================================================================
    # Stats
    # =========================================================================

    def get_memory_stats(self) -> MemoryStats:
        return MemoryStats(
            thought_history_count=len(self._history),
            thought_history_limit=self.config.max_thought_history,
            branch_count=len(self._branches),
            branch_limit=self.config.max_branches,
            per_branch_limit=self.config.max_thoughts_per_branch,
            branch_thought_counts=self._branches.counts(),
            completed_chains_in_history=len(completed_chains(self._history)),
            chain_summary_count=len(self._summaries),
            chain_summary_limit=self.config.max_chain_summaries,
        )
