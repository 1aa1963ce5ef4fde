"""Invariant check command wiring for primer CLI."""

from __future__ import annotations

import argparse
from dataclasses import asdict, replace
import json
from typing import Any

from core.config import TrieConfig
from core.errors import TrieError
from ptrie.traversal import collect_stats
from ptrie.verification import verify_trie
from replay.runner import run_replay
from replay.script_reader import load_replay_script


def add_check_command(subparsers: Any) -> None:
    """Register check subcommand."""
    parser = subparsers.add_parser(
        "check",
        help="Replay a script with invariant checks and print final stats",
    )
    parser.add_argument("script", help="Path to YAML replay script")


def run_check_command(config: TrieConfig, args: argparse.Namespace) -> int:
    """Replay with verification enabled and report the latest version."""
    config = replace(config, verify_invariants=True)
    try:
        report = run_replay(load_replay_script(args.script), config)
        for version in report.versions:
            verify_trie(version)
    except TrieError as error:
        print(f"check_error={error}")
        return 1
    stats = collect_stats(report.latest.root)
    print("ok")
    print(f"versions={len(report.versions)}")
    print(json.dumps(asdict(stats), sort_keys=True))
    return 0
