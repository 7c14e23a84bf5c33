"""
thoughttrace - Bounded reasoning-trace store.

Keeps a stream of thought records, and their named branches, inside fixed
memory bounds without splitting an unfinished chain of reasoning.
"""

from .config import TraceStoreConfig
from .core import TraceStore, validate_thought
from .protocols import ConfigError, TraceError, ValidationError
from .types import ThoughtRecord

try:
    from importlib.metadata import version

    __version__ = version("thoughttrace")
except Exception:
    __version__ = "0.0.0"

__all__ = [
    "TraceStore",
    "TraceStoreConfig",
    "ThoughtRecord",
    "validate_thought",
    "TraceError",
    "ValidationError",
    "ConfigError",
]
