"""Store configuration.

Options are merged over ``DEFAULTS``. Either the Python spelling
(``max_thought_history``) or the wire spelling (``maxThoughtHistory``)
is accepted, so tool arguments and JSON config can be passed straight
through. Environment variables use the ``THOUGHTTRACE_`` prefix.
"""

import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from thoughttrace.protocols import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "THOUGHTTRACE_"

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")

# wire spelling -> attribute name
WIRE_NAMES = {
    "maxThoughtHistory": "max_thought_history",
    "maxBranches": "max_branches",
    "maxThoughtsPerBranch": "max_thoughts_per_branch",
    "enableAutoCleanup": "enable_auto_cleanup",
    "cleanupOnComplete": "cleanup_on_complete",
    "retainChainSummaries": "retain_chain_summaries",
    "maxChainSummaries": "max_chain_summaries",
}


@dataclass(frozen=True)
class TraceStoreConfig:
    """Memory bounds and cleanup behavior for a TraceStore."""

    # Upper bound on main history length
    max_thought_history: int = 1000
    # Upper bound on live branches; least recently used are evicted
    max_branches: int = 50
    # Upper bound on records per branch; oldest are evicted
    max_thoughts_per_branch: int = 200
    # Chain-aware eviction of the main history; False evicts plain FIFO
    enable_auto_cleanup: bool = True
    # Archive a summary of each completed chain evicted by the history bound
    cleanup_on_complete: bool = True
    # Keep chain summaries at all
    retain_chain_summaries: bool = True
    # Upper bound on the summary archive; oldest are dropped
    max_chain_summaries: int = 100

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type in (bool, "bool"):
                if not isinstance(value, bool):
                    raise ConfigError(
                        f"{f.name} must be a boolean, got {type(value).__name__}", f.name
                    )
            else:
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigError(
                        f"{f.name} must be an integer, got {type(value).__name__}", f.name
                    )
                if value < 0:
                    raise ConfigError(f"{f.name} must be >= 0, got {value}", f.name)

    @classmethod
    def from_dict(cls, overrides: Optional[Mapping[str, Any]] = None) -> "TraceStoreConfig":
        """Build a config from a partial mapping merged over the defaults."""
        return DEFAULTS.merged(overrides or {})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TraceStoreConfig":
        """Build a config from ``THOUGHTTRACE_*`` environment variables."""
        if environ is None:
            environ = os.environ
        overrides: Dict[str, Any] = {}
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            raw = environ.get(key)
            if raw is None or raw.strip() == "":
                continue
            overrides[f.name] = _parse_env_value(key, raw, f.type in (bool, "bool"))
        if overrides:
            logger.debug("Config overrides from environment: %s", sorted(overrides))
        return DEFAULTS.merged(overrides)

    def merged(self, overrides: Mapping[str, Any]) -> "TraceStoreConfig":
        """Return a copy with ``overrides`` applied; unknown keys are rejected."""
        known = {f.name for f in fields(self)}
        changes: Dict[str, Any] = {}
        for key, value in overrides.items():
            name = WIRE_NAMES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown configuration option: {key}", key)
            changes[name] = value
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _parse_env_value(key: str, raw: str, is_bool: bool) -> Any:
    value = raw.strip().lower()
    if is_bool:
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise ConfigError(f"{key} must be one of {_TRUE_VALUES + _FALSE_VALUES}", key)
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{key} must be an integer, got {raw!r}", key) from e


DEFAULTS = TraceStoreConfig()
