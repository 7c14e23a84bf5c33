"""Handler registry for MCP tools.

Merges HANDLERS and VALIDATORS from all sub-modules into unified dicts.
"""

from typing import Callable, Dict

from thoughttrace.mcp.handlers.trace import HANDLERS as _TRACE_H
from thoughttrace.mcp.handlers.trace import VALIDATORS as _TRACE_V

HANDLERS: Dict[str, Callable] = {
    **_TRACE_H,
}

VALIDATORS: Dict[str, Callable] = {
    **_TRACE_V,
}
