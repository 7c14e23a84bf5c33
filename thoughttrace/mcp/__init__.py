"""MCP tool surface for thoughttrace."""
