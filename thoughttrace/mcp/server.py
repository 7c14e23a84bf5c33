"""
thoughttrace MCP Server - reasoning-trace tools for MCP clients.

Exposes a TraceStore as MCP tools over stdio. Each server process owns
exactly one store, handed in by the caller; there is no process-wide
default instance.

Usage:
    thoughttrace mcp  # Start MCP server (stdio transport)
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    TextContent,
    Tool,
)

from thoughttrace.config import TraceStoreConfig
from thoughttrace.core import TraceStore
from thoughttrace.mcp.handlers import HANDLERS, VALIDATORS
from thoughttrace.mcp.tool_definitions import TOOLS

logger = logging.getLogger(__name__)

SERVER_NAME = "thoughttrace"


# =============================================================================
# INPUT VALIDATION & ERROR HANDLING
# =============================================================================


def validate_tool_input(name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and sanitize MCP tool inputs."""
    try:
        if not isinstance(name, str):
            raise ValueError(f"tool name must be a string, got {type(name).__name__}")
        if not name:
            raise ValueError("tool name must not be empty")
        if not isinstance(arguments, dict):
            raise ValueError(f"arguments must be an object, got {type(arguments).__name__}")

        validator = VALIDATORS.get(name)
        if validator is None:
            raise ValueError(f"Unknown tool: {name}")
        return validator(arguments)

    except (ValueError, TypeError) as e:
        logger.warning(f"Input validation failed for tool {name}: {e}")
        raise


def handle_tool_error(e: Exception, tool_name: str, arguments: Dict[str, Any]) -> List[TextContent]:
    """Turn an exception into a safe tool response."""
    if isinstance(e, (ValueError, TypeError)):
        # Input validation error
        return [TextContent(type="text", text=f"Invalid input: {str(e)}")]

    # Unknown error - log full details but return generic message
    argument_keys = list(arguments.keys()) if isinstance(arguments, dict) else []
    logger.error(
        f"Internal error in tool {tool_name}",
        extra={
            "tool_name": tool_name,
            "arguments_keys": argument_keys,
            "error_type": type(e).__name__,
            "error_message": str(e),
        },
        exc_info=True,
    )
    return [TextContent(type="text", text="Internal server error")]


# =============================================================================
# MCP PROTOCOL HANDLERS
# =============================================================================


class TraceToolService:
    """Tool listing and dispatch bound to one TraceStore."""

    def __init__(self, store: TraceStore) -> None:
        self.store = store

    async def list_tools(self) -> list[Tool]:
        """List available trace tools."""
        return list(TOOLS)

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls with validation and error handling."""
        try:
            sanitized_args = validate_tool_input(name, arguments)

            handler = HANDLERS.get(name)
            if handler is None:
                # Should not reach here due to validation
                logger.error(f"Unexpected tool name after validation: {name}")
                return [TextContent(type="text", text=f"Tool '{name}' is not available")]

            result = handler(sanitized_args, self.store)
            return [TextContent(type="text", text=result)]

        except Exception as e:
            return handle_tool_error(e, name, arguments)


def build_server(store: TraceStore) -> Server:
    """Create an MCP server whose tools operate on ``store``."""
    server = Server(SERVER_NAME)
    service = TraceToolService(store)
    server.list_tools()(service.list_tools)
    server.call_tool()(service.call_tool)
    return server


async def run_server(store: TraceStore) -> None:
    """Run the MCP server on stdio until the client disconnects."""
    server = build_server(store)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main(config: Optional[TraceStoreConfig] = None) -> None:
    """Entry point for MCP server.

    Without an explicit config the store is configured from
    ``THOUGHTTRACE_*`` environment variables over the defaults.
    """
    if config is None:
        config = TraceStoreConfig.from_env()
    logger.debug("Starting %s MCP server with %s", SERVER_NAME, config)
    asyncio.run(run_server(TraceStore(config)))


if __name__ == "__main__":
    main()
