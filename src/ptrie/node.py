"""Immutable trie nodes.

A node is one trie level: a mapping from key symbols to child nodes.
``TrieNodeWithValue`` additionally owns one value and the runtime type
tag it was stored under, so lookups can recover the value only as the
exact type it was put with.

Nodes are shared between trie versions and are never mutated once a
Trie that reaches them has been returned. The ``_attach``/``_detach``
helpers exist only for path copying inside ``ptrie.trie``, which calls
them on fresh clones before publishing them.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from core.errors import TrieTypeError
from core.types import Symbol


class TrieNode:
    """Valueless trie node holding labeled children."""

    __slots__ = ("_children",)

    has_value = False

    def __init__(self, children: Mapping[Symbol, TrieNode] | None = None) -> None:
        """Create a node from a children mapping.

        Args:
            children: Optional symbol-to-child mapping; copied, not aliased.
        """
        self._children: dict[Symbol, TrieNode] = dict(children) if children else {}

    @property
    def children(self) -> Mapping[Symbol, TrieNode]:
        """Read-only view of the children mapping."""
        return MappingProxyType(self._children)

    def child(self, symbol: Symbol) -> TrieNode | None:
        """Return the child reached by ``symbol`` or None."""
        return self._children.get(symbol)

    def clone(self) -> TrieNode:
        """Return a shallow copy sharing every child reference.

        Returns:
            New node whose children dict can be spliced independently.
        """
        return TrieNode(self._children)

    def as_value_node(self, value_type: type) -> TrieNodeWithValue | None:
        """Recover this node as a value node of ``value_type``.

        Args:
            value_type: Exact type the caller expects.

        Returns:
            None, since a valueless node never carries a value.
        """
        return None

    def _attach(self, symbol: Symbol, child: TrieNode) -> None:
        self._children[symbol] = child

    def _detach(self, symbol: Symbol) -> None:
        del self._children[symbol]

    def __repr__(self) -> str:
        return f"TrieNode(children={sorted(map(repr, self._children))})"


class TrieNodeWithValue(TrieNode):
    """Trie node that also owns one type-tagged value."""

    __slots__ = ("_value", "_value_type")

    has_value = True

    def __init__(
        self,
        value: object,
        children: Mapping[Symbol, TrieNode] | None = None,
        value_type: type | None = None,
    ) -> None:
        """Create a value-bearing node.

        Args:
            value: Value to store. The node keeps the reference, not a copy.
            children: Optional symbol-to-child mapping.
            value_type: Type tag for lookups; defaults to ``type(value)``.

        Raises:
            TrieTypeError: If ``value`` is not an instance of ``value_type``.
        """
        super().__init__(children)
        self._value = value
        self._value_type = resolve_value_type(value, value_type)

    @property
    def value(self) -> object:
        """Stored value."""
        return self._value

    @property
    def value_type(self) -> type:
        """Runtime type tag recorded at construction."""
        return self._value_type

    def clone(self) -> TrieNodeWithValue:
        """Return a shallow copy keeping the same value reference.

        Returns:
            New value node with a copied children dict.
        """
        return TrieNodeWithValue(self._value, self._children, self._value_type)

    def as_value_node(self, value_type: type) -> TrieNodeWithValue | None:
        """Recover this node when its type tag is exactly ``value_type``.

        Args:
            value_type: Exact type the caller expects.

        Returns:
            This node on a tag match, otherwise None. Subclasses do not match.
        """
        if self._value_type is value_type:
            return self
        return None

    def __repr__(self) -> str:
        return (
            f"TrieNodeWithValue(value={self._value!r}, "
            f"value_type={self._value_type.__name__}, "
            f"children={sorted(map(repr, self._children))})"
        )


def resolve_value_type(value: object, value_type: type | None) -> type:
    """Resolve and validate the type tag for a stored value.

    Args:
        value: Value being stored.
        value_type: Explicit type tag, or None to use ``type(value)``.

    Returns:
        Type tag to record on the node.

    Raises:
        TrieTypeError: If the tag is not a class or does not describe ``value``.
    """
    if value_type is None:
        return type(value)
    if not isinstance(value_type, type):
        raise TrieTypeError(
            f"Invalid value type {value_type!r}: expected a class. "
            "Pass a concrete type such as int or str."
        )
    if not isinstance(value, value_type):
        raise TrieTypeError(
            f"Value of type {type(value).__name__} cannot be stored as {value_type.__name__}. "
            "Pass a matching value_type or omit it to use the value's own type."
        )
    return value_type
