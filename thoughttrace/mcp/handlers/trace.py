"""Handlers for trace tools: trace, history, branch, status, clear."""

import json
import logging
from typing import Any, Dict

from thoughttrace.core import TraceStore, validate_thought
from thoughttrace.formatting import format_thought, format_trace
from thoughttrace.mcp.sanitize import sanitize_branch_id, validate_enum, validate_flag
from thoughttrace.mcp.tool_definitions import CLEAR_SCOPES, OUTPUT_FORMATS

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_trace(arguments: Dict[str, Any]) -> Dict[str, Any]:
    # Rejects with ValidationError (a ValueError) before anything is stored
    return validate_thought(arguments).to_dict()


def validate_trace_history(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {"format": validate_enum(arguments.get("format"), "format", OUTPUT_FORMATS, "text")}


def validate_trace_branch(arguments: Dict[str, Any]) -> Dict[str, Any]:
    sanitized: Dict[str, Any] = {}
    sanitized["branchId"] = sanitize_branch_id(arguments.get("branchId"))
    sanitized["format"] = validate_enum(arguments.get("format"), "format", OUTPUT_FORMATS, "text")
    return sanitized


def validate_trace_status(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {"includeSummaries": validate_flag(arguments.get("includeSummaries"), False)}


def validate_trace_clear(arguments: Dict[str, Any]) -> Dict[str, Any]:
    sanitized: Dict[str, Any] = {}
    sanitized["scope"] = validate_enum(arguments.get("scope"), "scope", CLEAR_SCOPES)
    sanitized["branchId"] = sanitize_branch_id(arguments.get("branchId"), required=False)
    if sanitized["branchId"] and sanitized["scope"] != "branches":
        raise ValueError("branchId is only valid with scope 'branches'")
    return sanitized


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def handle_trace(args: Dict[str, Any], store: TraceStore) -> str:
    record = store.process(args)
    logger.info("\n%s", format_thought(record))
    return json.dumps(
        {
            "sequenceNumber": record.sequence_number,
            "estimatedTotal": record.estimated_total,
            "continuesNext": record.continues_next,
            "branches": store.get_branch_ids(),
            "thoughtHistoryLength": store.get_thought_count(),
        },
        indent=2,
    )


def handle_trace_history(args: Dict[str, Any], store: TraceStore) -> str:
    history = store.get_thought_history()
    boundaries = store.get_chain_boundaries()
    if args.get("format") == "json":
        return json.dumps(
            {
                "thoughts": [record.to_dict() for record in history],
                "chains": [boundary.to_dict() for boundary in boundaries],
            },
            indent=2,
        )
    if not history:
        return "No thoughts recorded."
    return format_trace(history, boundaries)


def handle_trace_branch(args: Dict[str, Any], store: TraceStore) -> str:
    branch_id = args["branchId"]
    records = store.get_branch(branch_id)
    boundaries = store.get_branch_chain_boundaries(branch_id)
    if args.get("format") == "json":
        return json.dumps(
            {
                "branchId": branch_id,
                "thoughts": [record.to_dict() for record in records],
                "chains": [boundary.to_dict() for boundary in boundaries],
            },
            indent=2,
        )
    if not records:
        return f"Branch '{branch_id}' has no thoughts."
    return f"Branch '{branch_id}'\n\n" + format_trace(records, boundaries)


def handle_trace_status(args: Dict[str, Any], store: TraceStore) -> str:
    status = store.get_memory_stats().to_dict()
    if args.get("includeSummaries"):
        status["chainSummaries"] = [s.to_dict() for s in store.get_chain_summaries()]
    return json.dumps(status, indent=2)


def handle_trace_clear(args: Dict[str, Any], store: TraceStore) -> str:
    scope = args["scope"]
    cleared: Dict[str, Any] = {"scope": scope}

    if scope in ("history", "all"):
        cleared["thoughts"] = store.get_thought_count()
        store.clear_history()
    if scope == "branches" and args.get("branchId"):
        cleared["branchId"] = args["branchId"]
        cleared["removed"] = store.clear_branch(args["branchId"])
    elif scope in ("branches", "all"):
        cleared["branches"] = store.get_branch_count()
        store.clear_all_branches()
    if scope == "completed":
        result = store.clear_completed_chains()
        cleared["historyChains"] = result.history_chains
        cleared["branchChains"] = result.branch_chains
    if scope in ("summaries", "all"):
        cleared["summaries"] = len(store.get_chain_summaries())
        store.clear_chain_summaries()

    return json.dumps(cleared, indent=2)


# ---------------------------------------------------------------------------
# Registry dicts
# ---------------------------------------------------------------------------

HANDLERS = {
    "trace": handle_trace,
    "trace_history": handle_trace_history,
    "trace_branch": handle_trace_branch,
    "trace_status": handle_trace_status,
    "trace_clear": handle_trace_clear,
}

VALIDATORS = {
    "trace": validate_trace,
    "trace_history": validate_trace_history,
    "trace_branch": validate_trace_branch,
    "trace_status": validate_trace_status,
    "trace_clear": validate_trace_clear,
}
