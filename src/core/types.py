"""Shared typed models.

This module defines immutable data models used by the trie, traversal,
replay, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

TrieKey = Union[str, bytes]
Symbol = Union[str, int]


@dataclass(frozen=True)
class TrieEntry:
    """One gettable key with its stored value.

    Attributes:
        key: Full key rebuilt from the path symbols.
        value: Stored value object.
        value_type: Runtime type tag recorded when the value was put.
    """

    key: TrieKey
    value: object
    value_type: type


@dataclass(frozen=True)
class TrieStats:
    """Structural summary of one trie version.

    Attributes:
        node_count: Nodes reachable from the root, root included.
        value_count: Value-bearing nodes among them.
        max_depth: Longest root-to-node path length in symbols.
    """

    node_count: int
    value_count: int
    max_depth: int
