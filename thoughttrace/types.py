"""
Shared types for thoughttrace.

These dataclasses are the vocabulary between the validator, the store,
the MCP handlers and the CLI. Records are frozen; everything else is a
snapshot handed out by value.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Length of the text previews kept in chain summaries.
PREVIEW_LENGTH = 100


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    """Shorten text for summaries, marking truncation with an ellipsis."""
    if len(text) <= length:
        return text
    return text[:length] + "..."


# === Records ===


@dataclass(frozen=True)
class ThoughtRecord:
    """One reasoning step.

    ``continues_next`` is False on the terminal step of a chain.
    A record with ``branch_id`` lives in that branch, otherwise in the
    main history.
    """

    text: str
    sequence_number: int
    estimated_total: int
    continues_next: bool
    is_revision: Optional[bool] = None
    revises_sequence: Optional[int] = None
    branch_origin: Optional[int] = None
    branch_id: Optional[str] = None
    needs_more_steps: Optional[bool] = None

    @property
    def is_terminal(self) -> bool:
        return self.continues_next is False

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire shape, omitting absent optional fields."""
        data: Dict[str, Any] = {
            "text": self.text,
            "sequenceNumber": self.sequence_number,
            "estimatedTotal": self.estimated_total,
            "continuesNext": self.continues_next,
        }
        optional = {
            "isRevision": self.is_revision,
            "revisesSequence": self.revises_sequence,
            "branchOrigin": self.branch_origin,
            "branchId": self.branch_id,
            "needsMoreSteps": self.needs_more_steps,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data


@dataclass
class BranchMetadata:
    """Logical timestamps for one branch, used for LRU eviction."""

    created_at: int
    last_accessed_at: int


# === Chains ===


@dataclass(frozen=True)
class ChainBoundary:
    """A maximal run of records inside one sequence.

    Complete runs end in a terminal record; only the trailing run of a
    sequence can be open.
    """

    start_index: int
    end_index: int
    is_complete: bool

    @property
    def length(self) -> int:
        return self.end_index - self.start_index + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startIndex": self.start_index,
            "endIndex": self.end_index,
            "isComplete": self.is_complete,
        }


@dataclass(frozen=True)
class ChainSummary:
    """Compact archive entry for a completed chain that was removed."""

    id: str
    completed_at: int  # Logical timestamp of removal
    thought_count: int
    first_thought_preview: str
    final_thought_preview: str
    estimated_total: int  # Estimate carried by the terminal record
    branch_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "completedAt": self.completed_at,
            "thoughtCount": self.thought_count,
            "firstThoughtPreview": self.first_thought_preview,
            "finalThoughtPreview": self.final_thought_preview,
            "estimatedTotal": self.estimated_total,
        }
        if self.branch_id is not None:
            data["branchId"] = self.branch_id
        return data


# === Results ===


@dataclass
class ClearResult:
    """Result of clearing completed chains."""

    history_chains: int = 0
    branch_chains: int = 0

    @property
    def total(self) -> int:
        return self.history_chains + self.branch_chains


@dataclass
class MemoryStats:
    """Point-in-time counts and limits of a store."""

    thought_history_count: int
    thought_history_limit: int
    branch_count: int
    branch_limit: int
    per_branch_limit: int
    branch_thought_counts: Dict[str, int] = field(default_factory=dict)
    completed_chains_in_history: int = 0
    chain_summary_count: int = 0
    chain_summary_limit: int = 0

    @property
    def total_branch_thoughts(self) -> int:
        return sum(self.branch_thought_counts.values())

    @property
    def total_thoughts(self) -> int:
        return self.thought_history_count + self.total_branch_thoughts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "thoughtHistoryCount": self.thought_history_count,
            "thoughtHistoryLimit": self.thought_history_limit,
            "branchCount": self.branch_count,
            "branchLimit": self.branch_limit,
            "perBranchLimit": self.per_branch_limit,
            "branchThoughtCounts": dict(self.branch_thought_counts),
            "totalBranchThoughts": self.total_branch_thoughts,
            "totalThoughts": self.total_thoughts,
            "completedChainsInHistory": self.completed_chains_in_history,
            "chainSummaryCount": self.chain_summary_count,
            "chainSummaryLimit": self.chain_summary_limit,
        }
