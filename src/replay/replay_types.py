"""Typed replay models.

This module defines replay script steps, per-step results and the
final report that keeps every version produced during a replay.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping

from core.types import TrieKey, TrieStats
from ptrie.trie import Trie

ReplayOperation = Literal["put", "remove", "get", "stats"]
SUPPORTED_REPLAY_OPERATIONS: tuple[ReplayOperation, ...] = ("put", "remove", "get", "stats")
REPLAY_VALUE_TYPES: Mapping[str, type] = {
    "int": int,
    "str": str,
    "float": float,
    "bool": bool,
    "bytes": bytes,
    "list": list,
    "dict": dict,
    "none": type(None),
}


@dataclass(frozen=True)
class ReplayStep:
    """One operation from a replay script.

    Attributes:
        op: Operation name.
        key: Target key; empty for stats steps.
        value: Value for put steps.
        value_type: Requested type for get steps, optional tag for put steps.
        base: Version index to operate on; latest when None.
    """

    op: ReplayOperation
    key: TrieKey = ""
    value: object = None
    value_type: type | None = None
    base: int | None = None


@dataclass(frozen=True)
class ReplayScript:
    """Validated replay script root object."""

    version: int
    steps: tuple[ReplayStep, ...]


@dataclass(frozen=True)
class ReplayStepResult:
    """Outcome of one executed replay step.

    Attributes:
        index: Zero-based step index.
        op: Operation name.
        base: Version index the step read from.
        version: Version index produced by put/remove steps.
        key: Key the step targeted.
        found: Whether a get step resolved a value.
        value: Value returned by a get step.
        stats: Structural summary for stats steps.
    """

    index: int
    op: ReplayOperation
    base: int
    version: int | None = None
    key: TrieKey = ""
    found: bool = False
    value: object = None
    stats: TrieStats | None = None


@dataclass(frozen=True)
class ReplayReport:
    """All versions and step results produced by a replay."""

    versions: tuple[Trie, ...]
    results: tuple[ReplayStepResult, ...] = field(default_factory=tuple)

    @property
    def latest(self) -> Trie:
        """Most recently produced version."""
        return self.versions[-1]
