"""Persistent trie versions.

This module owns the path-copying algorithms behind ``put`` and
``remove``. Every mutation clones only the nodes on the root-to-key
path, splices the clones together, and returns a new Trie; every node
off that path is shared by identity with the previous version, which
stays fully readable.

A Trie is safe to read from any number of threads. Deriving version
N+1 from version N is a pure computation; choosing which version is
"current" is left to the caller.
"""

from __future__ import annotations

from typing import Any, Iterator

from core.config import TrieConfig
from core.constants import PRUNE_MODE_CASCADE
from core.errors import TrieInvariantError, TrieTypeError
from core.logging_config import get_logger
from core.types import Symbol, TrieEntry, TrieKey
from ptrie.node import TrieNode, TrieNodeWithValue
from ptrie.traversal import iter_entries, iter_items
from ptrie.verification import verify_trie


class Trie:
    """Immutable handle on one trie version."""

    __slots__ = ("_root", "_config")

    def __init__(self, root: TrieNode | None = None, config: TrieConfig | None = None) -> None:
        """Create a trie version.

        Args:
            root: Root node, or None for the empty trie.
            config: Optional runtime configuration; read from env when omitted.

        Raises:
            TrieInvariantError: If the root carries a value.
        """
        if root is not None and root.has_value:
            raise TrieInvariantError(
                "Trie root cannot carry a value; the empty key never holds one. "
                "Pass a valueless TrieNode as root."
            )
        object.__setattr__(self, "_root", root)
        object.__setattr__(self, "_config", config or TrieConfig.from_env())

    @property
    def root(self) -> TrieNode | None:
        """Root node of this version, None when empty."""
        return self._root

    @property
    def config(self) -> TrieConfig:
        """Configuration inherited by derived versions."""
        return self._config

    @property
    def is_empty(self) -> bool:
        """Whether this version has no root node."""
        return self._root is None

    def get_node(self, key: TrieKey) -> TrieNode | None:
        """Walk to the node at ``key`` without modifying anything.

        Args:
            key: ``str`` or ``bytes`` key; the empty key resolves to the root.

        Returns:
            Node reached after consuming the key, or None when absent.
        """
        node = self._root
        for symbol in _normalize_key(key):
            if node is None:
                return None
            node = node.child(symbol)
        return node

    def get(self, key: TrieKey, value_type: type, default: object = None) -> object:
        """Look up the value stored at ``key`` as ``value_type``.

        Absence and type mismatch are reported the same way, by
        returning ``default``.

        Args:
            key: Key to resolve.
            value_type: Exact type the value was stored under.
            default: Returned when no value of that type exists.

        Returns:
            Stored value object, shared with the trie; do not mutate it.
        """
        node = self.get_node(key)
        if node is None:
            return default
        value_node = node.as_value_node(value_type)
        if value_node is None:
            return default
        return value_node.value

    def put(self, key: TrieKey, value: object, value_type: type | None = None) -> Trie:
        """Return a new version with ``value`` stored at ``key``.

        Existing children at ``key`` stay attached to the new value node,
        so longer keys under it remain reachable. The empty key cannot
        hold a value and leaves the trie unchanged.

        Args:
            key: Non-empty ``str`` or ``bytes`` key.
            value: Value to store by reference.
            value_type: Type tag for lookups; defaults to ``type(value)``.

        Returns:
            New trie version.

        Raises:
            TrieTypeError: If ``value`` is not an instance of ``value_type``.
        """
        symbols = _normalize_key(key)
        if not symbols:
            return self._derive(self._root)
        cloned = 0
        created = 1
        if self._root is not None:
            new_root = self._root.clone()
            cloned += 1
        else:
            new_root = TrieNode()
            created += 1
        parent = new_root
        for symbol in symbols[:-1]:
            existing = parent.child(symbol)
            if existing is not None:
                current = existing.clone()
                cloned += 1
            else:
                current = TrieNode()
                created += 1
            parent._attach(symbol, current)
            parent = current
        last = symbols[-1]
        previous = parent.child(last)
        children = previous.children if previous is not None else None
        parent._attach(last, TrieNodeWithValue(value, children, value_type))
        self._logger.debug(
            "trie_put", key_length=len(symbols), cloned_nodes=cloned, created_nodes=created
        )
        return self._derive(new_root)

    def remove(self, key: TrieKey) -> Trie:
        """Return a new version without a value at ``key``.

        The terminal node loses its value but keeps its children. A
        terminal left without children is unlinked from its parent; in
        cascade mode every ancestor emptied by that unlink is unlinked
        too, and a root left without children yields the empty trie.

        Args:
            key: ``str`` or ``bytes`` key.

        Returns:
            New trie version; it shares the same root when nothing was removed.

        Raises:
            TrieInvariantError: If the path vanished during the mutating walk.
        """
        symbols = _normalize_key(key)
        target = self.get_node(symbols) if symbols else None
        if self._root is None or target is None or not target.has_value:
            self._logger.debug("trie_remove_noop", key_length=len(symbols))
            return self._derive(self._root)
        new_root = self._root.clone()
        cloned = 1
        path: list[tuple[TrieNode, Symbol]] = []
        parent = new_root
        for depth, symbol in enumerate(symbols[:-1]):
            existing = parent.child(symbol)
            if existing is None:
                raise self._path_vanished(symbols, depth)
            current = existing.clone()
            cloned += 1
            parent._attach(symbol, current)
            path.append((parent, symbol))
            parent = current
        last = symbols[-1]
        terminal = parent.child(last)
        if terminal is None:
            raise self._path_vanished(symbols, len(symbols) - 1)
        if terminal.children:
            parent._attach(last, TrieNode(terminal.children))
            self._logger.debug(
                "trie_remove",
                key_length=len(symbols),
                cloned_nodes=cloned,
                created_nodes=1,
                pruned_nodes=0,
                published_nodes=cloned + 1,
            )
            return self._derive(new_root)
        parent._detach(last)
        pruned = 1
        discarded_clones = 0
        if self._config.prune_mode == PRUNE_MODE_CASCADE:
            discarded_clones = _prune_empty_ancestors(parent, path)
            pruned += discarded_clones
            if not new_root.children:
                new_root = None
                discarded_clones += 1
        self._logger.debug(
            "trie_remove",
            key_length=len(symbols),
            cloned_nodes=cloned,
            created_nodes=0,
            pruned_nodes=pruned,
            published_nodes=cloned - discarded_clones,
        )
        self._logger.debug("trie_pruned", key_length=len(symbols), pruned_nodes=pruned)
        return self._derive(new_root)

    def entries(self) -> Iterator[TrieEntry]:
        """Iterate entries with keys, values and type tags in key order."""
        return iter_entries(self._root)

    def items(self) -> Iterator[tuple[TrieKey, object]]:
        """Iterate ``(key, value)`` pairs in key order."""
        return iter_items(self._root)

    def keys(self) -> Iterator[TrieKey]:
        """Iterate keys that hold a value, in key order."""
        for key, _ in iter_items(self._root):
            yield key

    @property
    def _logger(self) -> Any:
        return get_logger(__name__, self._config.log_level)

    def _path_vanished(self, symbols: TrieKey, depth: int) -> TrieInvariantError:
        """Log and build the error for a child missing during path copying."""
        self._logger.error("trie_path_vanished", key_length=len(symbols), depth=depth)
        return TrieInvariantError(
            f"Child at depth {depth} of a {len(symbols)}-symbol key disappeared during path "
            "copying after lookup confirmed it. The node graph is corrupted; rebuild from a "
            "known-good version."
        )

    def _derive(self, root: TrieNode | None) -> Trie:
        derived = Trie(root, self._config)
        if self._config.verify_invariants:
            verify_trie(derived)
        return derived

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, bytes, bytearray)):
            return False
        node = self.get_node(key)
        return node is not None and node.has_value

    def __iter__(self) -> Iterator[TrieKey]:
        return self.keys()

    def __len__(self) -> int:
        return sum(1 for _ in iter_entries(self._root))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trie):
            return NotImplemented
        if self._root is other._root:
            return True
        return list(self.entries()) == list(other.entries())

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Trie versions are immutable; cannot set '{name}'.")

    def __copy__(self) -> Trie:
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> Trie:
        return self

    def __repr__(self) -> str:
        if self._root is None:
            return "Trie(empty)"
        return f"Trie(size={len(self)})"


def _normalize_key(key: object) -> TrieKey:
    """Validate a key and return it as ``str`` or ``bytes``.

    Args:
        key: Caller-supplied key.

    Returns:
        ``str`` unchanged, or ``bytes`` for any bytes-like key.

    Raises:
        TrieTypeError: If the key is neither text nor bytes.
    """
    if isinstance(key, (str, bytes)):
        return key
    if isinstance(key, (bytearray, memoryview)):
        return bytes(key)
    raise TrieTypeError(
        f"Invalid trie key of type {type(key).__name__}: expected str or bytes. "
        "Encode the key before using it."
    )


def _prune_empty_ancestors(node: TrieNode, path: list[tuple[TrieNode, Symbol]]) -> int:
    """Unlink cloned ancestors left without value or children.

    Args:
        node: Deepest cloned node whose child was just unlinked.
        path: Cloned ``(parent, symbol)`` pairs from the root down to ``node``.

    Returns:
        Number of ancestors unlinked.
    """
    pruned = 0
    while path and not node.has_value and not node.children:
        ancestor, symbol = path.pop()
        ancestor._detach(symbol)
        node = ancestor
        pruned += 1
    return pruned

