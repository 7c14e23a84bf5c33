"""
Pytest fixtures and test configuration for thoughttrace tests.
"""

from typing import Any, Dict, Optional

import pytest

from thoughttrace.core import TraceStore
from thoughttrace.types import ThoughtRecord


def _thought(
    num: int,
    total: int,
    continues: bool,
    text: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "text": text if text is not None else f"Thought number {num}",
        "sequenceNumber": num,
        "estimatedTotal": total,
        "continuesNext": continues,
    }
    data.update(extra)
    return data


@pytest.fixture
def thought():
    """Factory for main-history thought inputs (wire shape)."""
    return _thought


@pytest.fixture
def branch_thought():
    """Factory for branch thought inputs (wire shape)."""

    def make(
        num: int,
        total: int,
        continues: bool,
        branch_id: str,
        text: Optional[str] = None,
        origin: int = 1,
    ) -> Dict[str, Any]:
        return _thought(num, total, continues, text, branchId=branch_id, branchOrigin=origin)

    return make


@pytest.fixture
def record():
    """Factory for already-validated ThoughtRecords."""

    def make(text: str, continues: bool = True, num: int = 1, total: int = 3) -> ThoughtRecord:
        return ThoughtRecord(
            text=text, sequence_number=num, estimated_total=total, continues_next=continues
        )

    return make


@pytest.fixture
def store():
    """A store with default configuration."""
    return TraceStore()


@pytest.fixture
def make_store():
    """Factory for stores with configuration overrides."""

    def make(**overrides: Any) -> TraceStore:
        return TraceStore(**overrides)

    return make
