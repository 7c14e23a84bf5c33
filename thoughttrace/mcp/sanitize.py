"""Shared sanitization utilities for the MCP layer."""

from typing import Any, List, Optional

from thoughttrace.core.validation import (
    MAX_BRANCH_ID_LENGTH,
    normalize_branch_id,
    sanitize_string,
)


def validate_enum(
    value: Any,
    field_name: str,
    valid_values: List[str],
    default: Optional[str] = None,
) -> str:
    """Validate an enum value, falling back to ``default`` when absent.

    Raises:
        ValueError: If the value is missing without a default, or not allowed.
    """
    if value is None:
        if default is not None:
            return default
        raise ValueError(f"{field_name} is required")

    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")

    if value not in valid_values:
        raise ValueError(f"{field_name} must be one of {valid_values}, got '{value}'")

    return value


def validate_flag(value: Any, default: bool = False) -> bool:
    """Booleans pass through; anything else becomes ``default``."""
    return value if isinstance(value, bool) else default


def sanitize_branch_id(value: Any, required: bool = True) -> Optional[str]:
    """Check a branch id argument and normalize it the way stored ids are."""
    branch_id = sanitize_string(value, "branchId", MAX_BRANCH_ID_LENGTH, required=required)
    return normalize_branch_id(branch_id)
