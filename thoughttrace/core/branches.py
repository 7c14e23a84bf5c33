"""Named branches with least-recently-used eviction.

Every branch carries :class:`~thoughttrace.types.BranchMetadata` stamped
from a logical clock owned by the store. Creation, append and read all
count as access. When a new branch would exceed ``max_branches``, whole
branches are evicted, least recently accessed first; a branch is never
truncated to make room for another.
"""

import logging
from typing import Callable, Dict, List, Optional

from thoughttrace.core.eviction import enforce_branch_limit
from thoughttrace.types import BranchMetadata, ThoughtRecord

logger = logging.getLogger(__name__)


class BranchStore:
    """Holds branches and their recency metadata."""

    def __init__(
        self,
        max_branches: int,
        max_thoughts_per_branch: int,
        clock: Callable[[], int],
    ) -> None:
        self.max_branches = max_branches
        self.max_thoughts_per_branch = max_thoughts_per_branch
        self._clock = clock
        self._branches: Dict[str, List[ThoughtRecord]] = {}
        self._metadata: Dict[str, BranchMetadata] = {}

    def __len__(self) -> int:
        return len(self._branches)

    def __contains__(self, branch_id: object) -> bool:
        return branch_id in self._branches

    # ---- Writes ----

    def append(self, branch_id: str, record: ThoughtRecord) -> bool:
        """Append ``record`` to ``branch_id``, creating the branch if needed.

        Returns False if the branch could not be created (``max_branches``
        is 0), in which case the record is dropped.
        """
        if branch_id not in self._branches:
            self._make_room()
            if len(self._branches) >= self.max_branches:
                logger.debug("Branch limit is %d; dropping thought for %r",
                             self.max_branches, branch_id)
                return False
            now = self._clock()
            self._branches[branch_id] = []
            self._metadata[branch_id] = BranchMetadata(created_at=now, last_accessed_at=now)

        records = self._branches[branch_id]
        records.append(record)
        self._touch(branch_id)

        trimmed = enforce_branch_limit(records, self.max_thoughts_per_branch)
        if trimmed:
            logger.debug("Trimmed %d thought(s) from branch %r", trimmed, branch_id)
        return True

    def replace(self, branch_id: str, records: List[ThoughtRecord]) -> None:
        """Swap the records of an existing branch without touching its metadata."""
        if branch_id in self._branches:
            self._branches[branch_id] = list(records)

    def remove(self, branch_id: str) -> bool:
        if branch_id not in self._branches:
            return False
        del self._branches[branch_id]
        self._metadata.pop(branch_id, None)
        return True

    def clear(self) -> None:
        self._branches.clear()
        self._metadata.clear()

    # ---- Reads ----

    def get(self, branch_id: str) -> List[ThoughtRecord]:
        """Return a copy of a branch, marking it accessed. Unknown ids give []."""
        records = self._branches.get(branch_id)
        if records is None:
            return []
        self._touch(branch_id)
        return list(records)

    def peek(self, branch_id: str) -> List[ThoughtRecord]:
        """Like get() but without updating recency."""
        return list(self._branches.get(branch_id, ()))

    def ids(self) -> List[str]:
        return list(self._branches)

    def items(self) -> Dict[str, List[ThoughtRecord]]:
        return {branch_id: list(records) for branch_id, records in self._branches.items()}

    def metadata(self, branch_id: str) -> Optional[BranchMetadata]:
        meta = self._metadata.get(branch_id)
        if meta is None:
            return None
        return BranchMetadata(meta.created_at, meta.last_accessed_at)

    def counts(self) -> Dict[str, int]:
        return {branch_id: len(records) for branch_id, records in self._branches.items()}

    # ---- Recency ----

    def _touch(self, branch_id: str) -> None:
        self._metadata[branch_id].last_accessed_at = self._clock()

    def _least_recently_used(self) -> Optional[str]:
        # min() keeps the first of equal keys, i.e. the oldest insertion
        if not self._metadata:
            return None
        return min(self._metadata, key=lambda b: self._metadata[b].last_accessed_at)

    def _make_room(self) -> None:
        while self._branches and len(self._branches) >= self.max_branches:
            victim = self._least_recently_used()
            if victim is None:
                break
            logger.debug("Evicting least recently used branch %r (%d thought(s))",
                         victim, len(self._branches[victim]))
            self.remove(victim)
