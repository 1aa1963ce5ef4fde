"""Public API surface for primer.

This module provides a stable import path for trie users.
It re-exports the versioned trie, its nodes and typed models.
"""

from __future__ import annotations

from core.config import TrieConfig
from core.errors import TrieError, TrieInvariantError, TrieTypeError
from core.types import TrieEntry, TrieStats
from ptrie.node import TrieNode, TrieNodeWithValue
from ptrie.traversal import collect_stats, shared_nodes
from ptrie.trie import Trie
from ptrie.verification import find_invariant_violations, verify_trie

__all__ = [
    "Trie",
    "TrieConfig",
    "TrieEntry",
    "TrieError",
    "TrieInvariantError",
    "TrieNode",
    "TrieNodeWithValue",
    "TrieStats",
    "TrieTypeError",
    "collect_stats",
    "find_invariant_violations",
    "shared_nodes",
    "verify_trie",
]
