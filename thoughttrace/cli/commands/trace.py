"""Trace commands for thoughttrace CLI: replay, config, mcp."""

import json
import logging
import sys
from typing import IO, Iterator, Tuple

from thoughttrace.config import TraceStoreConfig
from thoughttrace.core import TraceStore
from thoughttrace.formatting import format_thought
from thoughttrace.protocols import ValidationError

logger = logging.getLogger(__name__)


def _read_lines(path: str) -> Iterator[Tuple[int, str]]:
    if path == "-":
        yield from enumerate(sys.stdin, 1)
        return
    with open(path, encoding="utf-8") as f:
        yield from enumerate(f, 1)


def replay_lines(lines, store: TraceStore, out: IO[str], quiet: bool = False) -> int:
    """Feed JSON-lines thought inputs into ``store``.

    Bad lines are reported on stderr and skipped. Returns the number of
    lines that failed.
    """
    failures = 0
    for line_no, line in lines:
        line = line.strip()
        if not line:
            continue
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            print(f"line {line_no}: invalid JSON ({e.msg})", file=sys.stderr)
            failures += 1
            continue
        try:
            record = store.process(data)
        except ValidationError as e:
            print(f"line {line_no}: {e}", file=sys.stderr)
            failures += 1
            continue
        if not quiet:
            print(format_thought(record), file=out)
            print(file=out)
    return failures


def cmd_replay(args, config: TraceStoreConfig) -> int:
    """Replay a JSON-lines file of thoughts and report the resulting store."""
    store = TraceStore(config)
    failures = replay_lines(_read_lines(args.file), store, sys.stdout, quiet=args.json)

    if args.json:
        print(json.dumps(store.get_memory_stats().to_dict(), indent=2))
    else:
        stats = store.get_memory_stats()
        print(
            f"Replayed: {stats.thought_history_count} thought(s) in history, "
            f"{stats.branch_count} branch(es), {stats.total_branch_thoughts} branch thought(s)"
        )
    if failures:
        logger.warning(f"{failures} line(s) could not be replayed")
        return 1
    return 0


def cmd_config(args, config: TraceStoreConfig) -> int:
    """Print the effective configuration."""
    print(json.dumps(config.to_dict(), indent=2))
    return 0


def cmd_mcp(args, config: TraceStoreConfig) -> int:
    """Start MCP server."""
    from thoughttrace.mcp.server import main as mcp_main

    mcp_main(config)
    return 0
