"""Input validation for thought records.

``validate_thought`` is the only gate between untyped input and the store:
it either returns a complete :class:`~thoughttrace.types.ThoughtRecord`
or raises :class:`~thoughttrace.protocols.ValidationError` naming the
offending field. It never mutates anything, so a failed call leaves the
store untouched.

Branch ids are normalized here and by the MCP argument checks in the same
way, so the id a thought is stored under is the id a reader must send.
"""

import re
from typing import Any, Mapping, Optional

from thoughttrace.protocols import ValidationError
from thoughttrace.types import ThoughtRecord

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

MAX_BRANCH_ID_LENGTH = 200


def _as_int(value: Any) -> Optional[int]:
    """``value`` as an int, or None. Integral floats count; bools do not."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    # JSON clients may send 3.0 for 3
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _require_positive_int(data: Mapping[str, Any], name: str) -> int:
    value = data.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"Invalid {name}: must be a number", name)
    number = _as_int(value)
    if number is None:
        raise ValidationError(f"Invalid {name}: must be an integer", name)
    if number < 1:
        raise ValidationError(f"Invalid {name}: must be a positive integer", name)
    return number


def _optional_bool(data: Mapping[str, Any], name: str) -> Optional[bool]:
    value = data.get(name)
    return value if isinstance(value, bool) else None


def normalize_branch_id(value: str) -> Optional[str]:
    """Strip control characters and surrounding whitespace; blank gives None."""
    return _CONTROL_CHARS.sub("", value).strip() or None


def _optional_branch_id(data: Mapping[str, Any]) -> Optional[str]:
    value = data.get("branchId")
    if not isinstance(value, str):
        return None
    if len(value) > MAX_BRANCH_ID_LENGTH:
        raise ValidationError(
            f"Invalid branchId: too long (max {MAX_BRANCH_ID_LENGTH} characters, got {len(value)})",
            "branchId",
        )
    return normalize_branch_id(value)


def validate_thought(data: Any) -> ThoughtRecord:
    """Turn an untyped thought input into a ThoughtRecord.

    Required fields are checked in wire order: ``text``, ``sequenceNumber``,
    ``estimatedTotal``, ``continuesNext``. Optional fields of the wrong type
    are dropped rather than coerced. ``branchId`` is normalized with
    :func:`normalize_branch_id`.

    Raises:
        ValidationError: If a required field is missing or mistyped, or
            ``branchId`` is longer than ``MAX_BRANCH_ID_LENGTH``.
    """
    if not isinstance(data, Mapping):
        raise ValidationError("Invalid text: must be a string", "text")

    text = data.get("text")
    if not isinstance(text, str) or not text:
        raise ValidationError("Invalid text: must be a non-empty string", "text")

    sequence_number = _require_positive_int(data, "sequenceNumber")
    estimated_total = _require_positive_int(data, "estimatedTotal")

    continues_next = data.get("continuesNext")
    if not isinstance(continues_next, bool):
        raise ValidationError("Invalid continuesNext: must be a boolean", "continuesNext")

    return ThoughtRecord(
        text=text,
        sequence_number=sequence_number,
        estimated_total=estimated_total,
        continues_next=continues_next,
        is_revision=_optional_bool(data, "isRevision"),
        revises_sequence=_as_int(data.get("revisesSequence")),
        branch_origin=_as_int(data.get("branchOrigin")),
        branch_id=_optional_branch_id(data),
        needs_more_steps=_optional_bool(data, "needsMoreSteps"),
    )


# =============================================================================
# Argument helpers
# =============================================================================


def sanitize_string(
    value: Any, field_name: str, max_length: int = 1000, required: bool = True
) -> str:
    """Validate a string argument and strip control characters.

    Newlines, tabs and carriage returns are kept.

    Raises:
        ValueError: If validation fails.
    """
    if value is None and not required:
        return ""

    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string, got {type(value).__name__}")

    if required and not value.strip():
        raise ValueError(f"{field_name} cannot be empty")

    if len(value) > max_length:
        raise ValueError(f"{field_name} too long (max {max_length} characters, got {len(value)})")

    return _CONTROL_CHARS.sub("", value)
