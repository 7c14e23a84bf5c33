"""thoughttrace core - validation, chain detection, eviction and the store.

Public names are re-exported here:
    from thoughttrace.core import TraceStore, validate_thought
"""

from thoughttrace.core.branches import BranchStore
from thoughttrace.core.chains import (
    chain_boundaries,
    completed_chains,
    find_chain_indices,
    first_terminal_index,
)
from thoughttrace.core.eviction import enforce_branch_limit, enforce_history_limit
from thoughttrace.core.store import TraceStore
from thoughttrace.core.validation import (
    MAX_BRANCH_ID_LENGTH,
    normalize_branch_id,
    sanitize_string,
    validate_thought,
)

__all__ = [
    "TraceStore",
    "BranchStore",
    # Validation
    "validate_thought",
    "sanitize_string",
    "normalize_branch_id",
    "MAX_BRANCH_ID_LENGTH",
    # Chains
    "find_chain_indices",
    "first_terminal_index",
    "chain_boundaries",
    "completed_chains",
    # Eviction
    "enforce_history_limit",
    "enforce_branch_limit",
]
