"""Replay execution.

This module applies a validated replay script to a growing list of
trie versions. Version 0 is the empty trie; every put or remove step
appends the version it produced, so later steps can read or branch
from any earlier one.
"""

from __future__ import annotations

from typing import cast

from core.config import TrieConfig
from core.errors import ReplayScriptError
from core.logging_config import get_logger
from ptrie.traversal import collect_stats
from ptrie.trie import Trie
from replay.replay_types import ReplayReport, ReplayScript, ReplayStep, ReplayStepResult


def run_replay(script: ReplayScript, config: TrieConfig | None = None) -> ReplayReport:
    """Execute every step of a replay script.

    Args:
        script: Validated replay script.
        config: Optional runtime configuration for the initial empty trie.

    Returns:
        Report holding all versions and per-step results.

    Raises:
        ReplayScriptError: If a step references an unknown version.
        TrieTypeError: If a put step's value does not match its type.
    """
    versions: list[Trie] = [Trie(config=config)]
    results: list[ReplayStepResult] = []
    for index, step in enumerate(script.steps):
        base = _resolve_base(step, index, len(versions))
        results.append(_run_step(step, index, base, versions))
    trie_config = versions[0].config
    get_logger(__name__, trie_config.log_level).info(
        "replay_completed",
        step_count=len(script.steps),
        version_count=len(versions),
        prune_mode=trie_config.prune_mode,
    )
    return ReplayReport(versions=tuple(versions), results=tuple(results))


def _run_step(
    step: ReplayStep, index: int, base: int, versions: list[Trie]
) -> ReplayStepResult:
    """Apply one step against ``versions[base]``.

    Args:
        step: Step to execute.
        index: Step index for reporting.
        base: Resolved version index.
        versions: Version list; mutating steps append to it.

    Returns:
        Step result row.
    """
    trie = versions[base]
    if step.op == "put":
        versions.append(trie.put(step.key, step.value, step.value_type))
        return ReplayStepResult(
            index=index, op=step.op, base=base, version=len(versions) - 1, key=step.key
        )
    if step.op == "remove":
        versions.append(trie.remove(step.key))
        return ReplayStepResult(
            index=index, op=step.op, base=base, version=len(versions) - 1, key=step.key
        )
    if step.op == "get":
        missing = object()
        value = trie.get(step.key, cast(type, step.value_type), missing)
        found = value is not missing
        return ReplayStepResult(
            index=index,
            op=step.op,
            base=base,
            key=step.key,
            found=found,
            value=value if found else None,
        )
    return ReplayStepResult(index=index, op=step.op, base=base, stats=collect_stats(trie.root))


def _resolve_base(step: ReplayStep, index: int, version_count: int) -> int:
    if step.base is None:
        return version_count - 1
    if step.base < version_count:
        return step.base
    raise ReplayScriptError(
        f"Replay step {index} references version {step.base}, "
        f"but only versions 0..{version_count - 1} exist at that point."
    )
