"""Primer CLI entry points.
This module exposes commands that replay and check trie version histories.
It maps argparse commands onto the replay runner.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Sequence

from cli.check_command import add_check_command, run_check_command
from cli.replay_command import add_replay_command, run_replay_command
from core.config import TrieConfig
from core.constants import SUPPORTED_PRUNE_MODES
from core.errors import TrieConfigError
from core.logging_config import configure_logging, get_logger


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="primer", description="Persistent trie CLI")
    parser.add_argument(
        "--prune-mode",
        choices=SUPPORTED_PRUNE_MODES,
        help="Override PRIMER_PRUNE_MODE for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_replay_command(subparsers)
    add_check_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the primer CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.prune_mode)
    except TrieConfigError as error:
        print(f"config_error={error}")
        return 1
    configure_logging(config.log_level)
    if args.command == "replay":
        exit_code = run_replay_command(config, args)
    elif args.command == "check":
        exit_code = run_check_command(config, args)
    else:
        parser.error(f"Unsupported command: {args.command}")
        return 2
    get_logger(__name__, config.log_level).info(
        "cli_command_completed", command=args.command, exit_code=exit_code
    )
    return exit_code


def _build_config(prune_mode: str | None) -> TrieConfig:
    """Build runtime config with optional prune-mode override.

    Args:
        prune_mode: Optional override value.

    Returns:
        Validated config.
    """
    config = TrieConfig.from_env()
    if prune_mode:
        config = replace(config, prune_mode=prune_mode)
    return config
