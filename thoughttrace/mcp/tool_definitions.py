"""MCP tool schema definitions for thoughttrace.

Each Tool() defines the name, description, and JSON Schema for one MCP tool.
Validators and handlers live in thoughttrace.mcp.handlers.
"""

from mcp.types import Tool

OUTPUT_FORMATS = ["text", "json"]
CLEAR_SCOPES = ["history", "branches", "completed", "summaries", "all"]

_FORMAT_PROPERTY = {
    "type": "string",
    "enum": OUTPUT_FORMATS,
    "description": "Output format (default: text)",
    "default": "text",
}

TOOLS = [
    Tool(
        name="trace",
        description=(
            "Record one step of a reasoning trace. Steps are kept in order; a step with "
            "continuesNext=false closes the current chain. Set branchId (and branchOrigin) "
            "to explore an alternative path without disturbing the main trace. Use "
            "isRevision/revisesSequence to revise an earlier step, and needsMoreSteps when "
            "the original estimate was too low."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "text": {
                    "type": "string",
                    "description": "The content of this reasoning step",
                },
                "sequenceNumber": {
                    "type": "integer",
                    "minimum": 1,
                    "description": "Position of this step (1-indexed)",
                },
                "estimatedTotal": {
                    "type": "integer",
                    "minimum": 1,
                    "description": "Current estimate of the total number of steps",
                },
                "continuesNext": {
                    "type": "boolean",
                    "description": "Whether another step follows; false ends the chain",
                },
                "isRevision": {
                    "type": "boolean",
                    "description": "Whether this step revises an earlier one",
                },
                "revisesSequence": {
                    "type": "integer",
                    "minimum": 1,
                    "description": "Sequence number of the step being revised",
                },
                "branchOrigin": {
                    "type": "integer",
                    "minimum": 1,
                    "description": "Sequence number this branch starts from",
                },
                "branchId": {
                    "type": "string",
                    "description": "Identifier of the branch this step belongs to",
                },
                "needsMoreSteps": {
                    "type": "boolean",
                    "description": "Whether more steps are needed than estimated",
                },
            },
            "required": ["text", "sequenceNumber", "estimatedTotal", "continuesNext"],
        },
    ),
    Tool(
        name="trace_history",
        description="Show the main reasoning trace with its chain boundaries.",
        inputSchema={
            "type": "object",
            "properties": {
                "format": _FORMAT_PROPERTY,
            },
        },
    ),
    Tool(
        name="trace_branch",
        description="Show the steps recorded in one branch. Unknown branches are empty.",
        inputSchema={
            "type": "object",
            "properties": {
                "branchId": {
                    "type": "string",
                    "description": "Branch identifier",
                },
                "format": _FORMAT_PROPERTY,
            },
            "required": ["branchId"],
        },
    ),
    Tool(
        name="trace_status",
        description=(
            "Show memory usage of the trace store: counts and limits for the main trace, "
            "branches and archived chain summaries."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "includeSummaries": {
                    "type": "boolean",
                    "description": "Include archived chain summaries (default: false)",
                    "default": False,
                },
            },
        },
    ),
    Tool(
        name="trace_clear",
        description=(
            "Clear part of the trace store. 'completed' removes finished chains and keeps "
            "open ones; 'branches' with a branchId removes just that branch."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "scope": {
                    "type": "string",
                    "enum": CLEAR_SCOPES,
                    "description": "What to clear",
                },
                "branchId": {
                    "type": "string",
                    "description": "Branch to clear (scope 'branches' only)",
                },
            },
            "required": ["scope"],
        },
    ),
]
