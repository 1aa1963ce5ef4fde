"""Replay command wiring for primer CLI."""

from __future__ import annotations

import argparse
from dataclasses import asdict, replace
import json
from typing import Any

from core.config import TrieConfig
from core.errors import TrieError
from replay.replay_types import ReplayStepResult
from replay.runner import run_replay
from replay.script_reader import load_replay_script


def add_replay_command(subparsers: Any) -> None:
    """Register replay subcommand."""
    parser = subparsers.add_parser(
        "replay",
        help="Replay a YAML script of put/remove/get steps",
    )
    parser.add_argument("script", help="Path to YAML replay script")
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check structural invariants after every mutation",
    )


def run_replay_command(config: TrieConfig, args: argparse.Namespace) -> int:
    """Execute a replay script and print one JSON line per get/stats step."""
    if args.verify:
        config = replace(config, verify_invariants=True)
    try:
        report = run_replay(load_replay_script(args.script), config)
    except TrieError as error:
        print(f"replay_error={error}")
        return 1
    for result in report.results:
        line = render_step_result(result)
        if line is not None:
            print(line)
    return 0


def render_step_result(result: ReplayStepResult) -> str | None:
    """Render a read step as a JSON line.

    Args:
        result: Executed step result.

    Returns:
        JSON line for get and stats steps, None for mutations.
    """
    payload: dict[str, object] = {"step": result.index, "op": result.op, "base": result.base}
    if result.op == "get":
        payload.update(key=result.key, found=result.found, value=result.value)
    elif result.op == "stats" and result.stats is not None:
        payload.update(asdict(result.stats))
    else:
        return None
    return json.dumps(payload, sort_keys=True, default=_json_default)


def _json_default(value: object) -> object:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="backslashreplace")
    return str(value)
