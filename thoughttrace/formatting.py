"""Plain-text rendering of thought records for tool output and the CLI."""

from typing import Iterable, List

from thoughttrace.types import ChainBoundary, ThoughtRecord


def format_header(record: ThoughtRecord) -> str:
    position = f"Thought {record.sequence_number}/{record.estimated_total}"
    if record.is_revision and record.revises_sequence:
        return f"{position} (Revising Thought {record.revises_sequence}):"
    if record.branch_id and record.branch_origin:
        return f'{position} (Branch "{record.branch_id}" from Thought {record.branch_origin}):'
    if record.branch_id:
        return f'{position} (Branch "{record.branch_id}"):'
    return f"{position}:"


def format_thought(record: ThoughtRecord) -> str:
    """Render one record with a header and a status footer."""
    lines = [format_header(record), record.text, ""]
    if record.continues_next:
        lines.append("Continuing to next thought...")
        if record.needs_more_steps:
            lines.append("More thoughts needed than initially estimated.")
    else:
        lines.append("Thinking process complete.")
    return "\n".join(lines)


def format_trace(records: List[ThoughtRecord], boundaries: Iterable[ChainBoundary]) -> str:
    """Render a whole sequence, one section per chain."""
    sections = []
    for n, boundary in enumerate(boundaries, 1):
        status = "complete" if boundary.is_complete else "open"
        sections.append(f"--- Chain {n} ({boundary.length} thought(s), {status}) ---")
        for record in records[boundary.start_index : boundary.end_index + 1]:
            sections.append(format_thought(record))
            sections.append("")
    return "\n".join(sections).rstrip()
