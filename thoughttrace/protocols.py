"""
Error hierarchy for thoughttrace.

Every error raised by the store, the configuration layer, or the MCP
surface derives from TraceError. Input errors also derive from ValueError
so callers that only know about built-in exceptions still catch them.
"""

from typing import Optional

# =============================================================================
# ERRORS
# =============================================================================


class TraceError(Exception):
    """Base for all thoughttrace errors."""

    pass


class ValidationError(TraceError, ValueError):
    """Raised when a thought input is missing a field or has the wrong type.

    ``field`` carries the wire name of the offending field
    (``text``, ``sequenceNumber``, ``estimatedTotal`` or ``continuesNext``).
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ConfigError(TraceError, ValueError):
    """Raised when a store configuration value is unknown or out of range."""

    def __init__(self, message: str, option: Optional[str] = None):
        super().__init__(message)
        self.option = option
