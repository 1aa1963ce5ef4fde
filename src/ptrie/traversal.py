"""Read-only walks over trie node graphs.

This module rebuilds keys from path symbols, summarizes node graphs,
and counts nodes shared between two versions by identity.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from core.types import Symbol, TrieEntry, TrieKey, TrieStats
from ptrie.node import TrieNode, TrieNodeWithValue


def iter_entries(root: TrieNode | None) -> Iterator[TrieEntry]:
    """Yield every value-bearing entry in sorted symbol order.

    Args:
        root: Root node of a version, or None for the empty trie.

    Yields:
        Entries with rebuilt keys, values and type tags.
    """
    if root is None:
        return
    stack: list[tuple[TrieNode, tuple[Symbol, ...]]] = [(root, ())]
    while stack:
        node, path = stack.pop()
        if isinstance(node, TrieNodeWithValue):
            yield TrieEntry(key=build_key(path), value=node.value, value_type=node.value_type)
        ordered = sorted(node.children.items(), key=_symbol_order, reverse=True)
        for symbol, child in ordered:
            stack.append((child, path + (symbol,)))


def iter_items(root: TrieNode | None) -> Iterator[tuple[TrieKey, object]]:
    """Yield ``(key, value)`` pairs in sorted symbol order."""
    for entry in iter_entries(root):
        yield entry.key, entry.value


def iter_nodes(root: TrieNode | None) -> Iterator[tuple[TrieNode, int]]:
    """Yield every reachable node with its depth, root first.

    Args:
        root: Root node, or None.

    Yields:
        Pairs of node and depth in symbols.
    """
    if root is None:
        return
    stack: list[tuple[TrieNode, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        for child in node.children.values():
            stack.append((child, depth + 1))


def collect_stats(root: TrieNode | None) -> TrieStats:
    """Summarize the node graph of one version.

    Args:
        root: Root node, or None.

    Returns:
        Node, value and depth counts; all zero for the empty trie.
    """
    node_count = 0
    value_count = 0
    max_depth = 0
    for node, depth in iter_nodes(root):
        node_count += 1
        if node.has_value:
            value_count += 1
        max_depth = max(max_depth, depth)
    return TrieStats(node_count=node_count, value_count=value_count, max_depth=max_depth)


def shared_nodes(left: TrieNode | None, right: TrieNode | None) -> int:
    """Count nodes reachable from both roots by identity.

    Args:
        left: Root of the first version.
        right: Root of the second version.

    Returns:
        Number of distinct node objects the two versions share.
    """
    left_ids = {id(node) for node, _ in iter_nodes(left)}
    right_ids = {id(node) for node, _ in iter_nodes(right)}
    return len(left_ids & right_ids)


def build_key(path: Sequence[Symbol]) -> TrieKey:
    """Rebuild a key from its path symbols.

    Args:
        path: Symbols from root to node.

    Returns:
        ``bytes`` when the symbols are byte values, otherwise ``str``.
    """
    if path and isinstance(path[0], int):
        return bytes(path)
    return "".join(str(symbol) for symbol in path)


def _symbol_order(item: tuple[Symbol, TrieNode]) -> tuple[bool, Symbol]:
    symbol = item[0]
    return isinstance(symbol, str), symbol
