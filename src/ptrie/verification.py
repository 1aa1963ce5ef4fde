"""Structural invariant checks for trie versions.

This module walks a version and reports nodes that break the trie's
structural rules. It backs the PRIMER_VERIFY_INVARIANTS mode and the
CLI check command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.constants import MAX_BYTE_SYMBOL, PRUNE_MODE_PARENT
from core.errors import TrieInvariantError
from core.logging_config import get_logger
from core.types import Symbol
from ptrie.node import TrieNode, TrieNodeWithValue
from ptrie.traversal import build_key

if TYPE_CHECKING:
    from ptrie.trie import Trie


def find_invariant_violations(
    root: TrieNode | None, allow_empty_interior: bool = False
) -> list[str]:
    """Collect human-readable invariant violations for a node graph.

    Args:
        root: Root node of a version, or None.
        allow_empty_interior: Tolerate valueless childless nodes left behind
            by single-level pruning.

    Returns:
        Violation messages; empty when the graph is well formed.
    """
    if root is None:
        return []
    if root.has_value:
        return ["Root node carries a value; only non-empty keys may hold values."]
    violations: list[str] = []
    seen: set[int] = set()
    stack: list[tuple[TrieNode, tuple[Symbol, ...]]] = [(root, ())]
    while stack:
        node, path = stack.pop()
        if id(node) in seen:
            violations.append(f"Node at key {build_key(path)!r} is reachable by more than one path.")
            continue
        seen.add(id(node))
        violations.extend(_check_node(node, path, allow_empty_interior))
        for symbol, child in node.children.items():
            symbol_problem = _check_symbol(symbol, path)
            if symbol_problem:
                violations.append(symbol_problem)
                continue
            stack.append((child, path + (symbol,)))
    return violations


def verify_trie(trie: Trie) -> None:
    """Fail fast when a version breaks a structural invariant.

    Args:
        trie: Version to check.

    Raises:
        TrieInvariantError: If any violation is found.
    """
    allow_empty_interior = trie.config.prune_mode == PRUNE_MODE_PARENT
    violations = find_invariant_violations(trie.root, allow_empty_interior)
    if not violations:
        return
    logger = get_logger(__name__, trie.config.log_level)
    logger.error(
        "trie_invariant_violation", violation_count=len(violations), first=violations[0]
    )
    raise TrieInvariantError(
        f"Trie failed {len(violations)} structural check(s): {violations[0]} "
        "The node graph is corrupted; rebuild the version from a known-good parent."
    )


def _check_node(
    node: TrieNode, path: tuple[Symbol, ...], allow_empty_interior: bool
) -> list[str]:
    problems: list[str] = []
    if path and not allow_empty_interior and not node.has_value and not node.children:
        problems.append(f"Valueless node at key {build_key(path)!r} has no children.")
    if isinstance(node, TrieNodeWithValue) and not isinstance(node.value, node.value_type):
        problems.append(
            f"Value at key {build_key(path)!r} is {type(node.value).__name__}, "
            f"tagged as {node.value_type.__name__}."
        )
    return problems


def _check_symbol(symbol: object, path: tuple[Symbol, ...]) -> str | None:
    if isinstance(symbol, str) and len(symbol) == 1:
        return None
    if isinstance(symbol, int) and not isinstance(symbol, bool) and 0 <= symbol <= MAX_BYTE_SYMBOL:
        return None
    return f"Invalid symbol {symbol!r} under key {build_key(path)!r}."
