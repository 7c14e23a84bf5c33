"""Chain detection over an ordered sequence of thought records.

A chain is a maximal contiguous run of records ending in one terminal
record (``continues_next is False``). Only the trailing run of a sequence
can be open.
"""

from typing import List, Optional, Sequence

from thoughttrace.types import ChainBoundary, ThoughtRecord


def find_chain_indices(records: Sequence[ThoughtRecord], end_index: int) -> List[int]:
    """Return the indices of the completed chain ending at ``end_index``.

    Walks backward from ``end_index - 1`` and stops at the previous terminal
    record, which belongs to the previous chain and is excluded. If the
    record at ``end_index`` is missing or not terminal, returns ``[]``.
    """
    if end_index < 0 or end_index >= len(records):
        return []
    if not records[end_index].is_terminal:
        return []

    start = end_index
    while start > 0 and not records[start - 1].is_terminal:
        start -= 1
    return list(range(start, end_index + 1))


def first_terminal_index(records: Sequence[ThoughtRecord]) -> Optional[int]:
    """Index of the oldest terminal record, or None if every record is open."""
    for i, record in enumerate(records):
        if record.is_terminal:
            return i
    return None


def chain_boundaries(records: Sequence[ThoughtRecord]) -> List[ChainBoundary]:
    """Split a sequence into its chains, oldest first, including an open tail."""
    boundaries: List[ChainBoundary] = []
    start = 0
    for i, record in enumerate(records):
        if record.is_terminal:
            boundaries.append(ChainBoundary(start, i, True))
            start = i + 1
    if start < len(records):
        boundaries.append(ChainBoundary(start, len(records) - 1, False))
    return boundaries


def completed_chains(records: Sequence[ThoughtRecord]) -> List[ChainBoundary]:
    return [b for b in chain_boundaries(records) if b.is_complete]
