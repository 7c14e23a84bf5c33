"""
thoughttrace CLI - Command-line interface for the reasoning-trace store.

Usage:
    thoughttrace mcp
    thoughttrace replay FILE [--json]
    thoughttrace config

Store limits come from THOUGHTTRACE_* environment variables and can be
overridden per invocation with the global flags below.
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from thoughttrace.cli.commands.trace import cmd_config, cmd_mcp, cmd_replay
from thoughttrace.config import TraceStoreConfig

logger = logging.getLogger(__name__)

COMMANDS = {
    "mcp": cmd_mcp,
    "replay": cmd_replay,
    "config": cmd_config,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thoughttrace",
        description="Bounded store for reasoning traces",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--max-thought-history", type=int, default=None,
                        help="Maximum thoughts kept in the main history")
    parser.add_argument("--max-branches", type=int, default=None,
                        help="Maximum number of live branches")
    parser.add_argument("--max-thoughts-per-branch", type=int, default=None,
                        help="Maximum thoughts kept per branch")
    parser.add_argument("--no-auto-cleanup", dest="auto_cleanup", action="store_false",
                        default=None, help="Evict plain FIFO instead of whole chains")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("mcp", help="Start MCP server (stdio transport)")

    p_replay = subparsers.add_parser("replay", help="Replay a JSON-lines file of thoughts")
    p_replay.add_argument("file", help="Path to a .jsonl file, or - for stdin")
    p_replay.add_argument("--json", "-j", action="store_true",
                          help="Print memory stats as JSON instead of each thought")

    subparsers.add_parser("config", help="Show effective configuration")

    return parser


def config_from_args(args) -> TraceStoreConfig:
    """Flags override environment, which overrides defaults."""
    overrides: Dict[str, Any] = {}
    if args.max_thought_history is not None:
        overrides["max_thought_history"] = args.max_thought_history
    if args.max_branches is not None:
        overrides["max_branches"] = args.max_branches
    if args.max_thoughts_per_branch is not None:
        overrides["max_thoughts_per_branch"] = args.max_thoughts_per_branch
    if args.auto_cleanup is not None:
        overrides["enable_auto_cleanup"] = args.auto_cleanup
    return TraceStoreConfig.from_env().merged(overrides)


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Logs go to stderr so the stdio transport stays clean
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = config_from_args(args)
    except (ValueError, TypeError) as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    try:
        status = COMMANDS[args.command](args, config)
    except (ValueError, TypeError) as e:
        logger.error(f"Input validation error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()
