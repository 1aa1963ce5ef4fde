"""Unit tests for trie lookup and insertion."""

from __future__ import annotations

import copy

import pytest

from core.config import TrieConfig
from core.errors import TrieInvariantError, TrieTypeError
from ptrie.node import TrieNode, TrieNodeWithValue
from ptrie.trie import Trie


def test_get_on_empty_trie_returns_none() -> None:
    """Empty trie should report absent values."""
    assert Trie().get("cat", int) is None


def test_put_then_get_returns_value() -> None:
    """Stored value should be retrievable with its own type."""
    trie = Trie().put("cat", 1)

    assert trie.get("cat", int) == 1


def test_get_with_mismatched_type_returns_none() -> None:
    """Type mismatch should look exactly like absence."""
    trie = Trie().put("cat", 1)

    assert trie.get("cat", str) is None


def test_get_returns_default_when_absent() -> None:
    """Caller-supplied default should be returned for missing keys."""
    missing = object()

    assert Trie().put("a", 1).get("b", int, missing) is missing


def test_get_on_prefix_without_value_returns_none() -> None:
    """Interior valueless nodes should not yield values."""
    trie = Trie().put("cat", 1)

    assert trie.get("ca", int) is None


def test_heterogeneous_values_are_recovered_by_type() -> None:
    """Different keys may hold values of different types."""
    trie = Trie().put("n", 7).put("s", "seven").put("b", b"\x07")

    assert (trie.get("n", int), trie.get("s", str), trie.get("b", bytes)) == (7, "seven", b"\x07")


def test_put_stores_reference_not_copy() -> None:
    """The trie should keep the caller's object by reference."""
    payload = {"count": 1}
    trie = Trie().put("k", payload)

    assert trie.get("k", dict) is payload


def test_put_with_explicit_value_type_uses_tag() -> None:
    """Explicit tags should override the value's own class."""
    trie = Trie().put("flag", True, value_type=int)

    assert trie.get("flag", int) is True and trie.get("flag", bool) is None


def test_put_with_incompatible_value_type_raises() -> None:
    """Incompatible explicit tags should raise before publishing."""
    trie = Trie().put("a", 1)

    with pytest.raises(TrieTypeError):
        trie.put("a", "one", value_type=int)

    assert trie.get("a", int) == 1


def test_put_empty_key_is_noop() -> None:
    """Empty key should leave contents and root untouched."""
    trie = Trie().put("a", 1)

    updated = trie.put("", 2)

    assert updated.root is trie.root and updated == trie


def test_put_empty_key_on_empty_trie_stays_empty() -> None:
    """Empty key on the empty trie should keep it empty."""
    assert Trie().put("", 1).is_empty


def test_put_overwrite_keeps_deeper_entries() -> None:
    """Overwriting a key should keep longer keys below it reachable."""
    trie = Trie().put("ab", 2).put("a", 1).put("a", 10)

    assert trie.get("a", int) == 10 and trie.get("ab", int) == 2


def test_put_overwrite_can_change_value_type() -> None:
    """A key may be re-put with a value of another type."""
    trie = Trie().put("k", 1).put("k", "one")

    assert trie.get("k", str) == "one" and trie.get("k", int) is None


def test_bytes_keys_are_supported() -> None:
    """Byte keys should walk by byte symbols."""
    trie = Trie().put(b"\x00\xff", 5)

    assert trie.get(b"\x00\xff", int) == 5 and trie.get(bytearray(b"\x00\xff"), int) == 5


def test_str_and_bytes_keys_are_distinct() -> None:
    """Text and byte keys should not alias each other."""
    trie = Trie().put("a", 1)

    assert trie.get(b"a", int) is None


def test_invalid_key_type_raises() -> None:
    """Keys must be text or bytes."""
    with pytest.raises(TrieTypeError):
        Trie().put(42, 1)  # type: ignore[arg-type]


def test_get_node_empty_key_returns_root() -> None:
    """Empty key lookup should resolve to the root node."""
    trie = Trie().put("a", 1)

    assert trie.get_node("") is trie.root


def test_get_node_returns_none_for_missing_path() -> None:
    """Missing symbols should stop the walk."""
    trie = Trie().put("abc", 1)

    assert trie.get_node("abd") is None and trie.get_node("abcd") is None


def test_get_node_returns_interior_node() -> None:
    """Interior nodes should be resolved without values."""
    trie = Trie().put("abc", 1)

    node = trie.get_node("ab")

    assert isinstance(node, TrieNode) and not node.has_value


def test_contains_checks_for_any_value() -> None:
    """Membership should ignore value types and interior nodes."""
    trie = Trie().put("abc", 1)

    assert "abc" in trie and "ab" not in trie and 3 not in trie


def test_trie_rejects_attribute_assignment() -> None:
    """Trie versions should be immutable handles."""
    trie = Trie()

    with pytest.raises(AttributeError):
        trie._root = TrieNode()  # type: ignore[misc]


def test_copy_returns_same_version() -> None:
    """Copies of a version should share the same handle."""
    trie = Trie().put("a", 1)

    assert copy.copy(trie) is trie and copy.deepcopy(trie) is trie


def test_derived_versions_inherit_config() -> None:
    """Mutations should carry the parent's configuration forward."""
    config = TrieConfig(prune_mode="parent")

    trie = Trie(config=config).put("a", 1).remove("a")

    assert trie.config is config


def test_len_and_keys_follow_sorted_order() -> None:
    """Iteration should list valued keys in symbol order."""
    trie = Trie().put("b", 2).put("a", 1).put("ab", 3)

    assert len(trie) == 3 and list(trie) == ["a", "ab", "b"]


def test_repr_reports_empty_and_size() -> None:
    """Repr should distinguish empty and populated versions."""
    assert repr(Trie()) == "Trie(empty)"
    assert repr(Trie().put("a", 1)) == "Trie(size=1)"


def test_trie_rejects_value_bearing_root() -> None:
    """The root stands for the empty key, which never holds a value."""
    with pytest.raises(TrieInvariantError):
        Trie(TrieNodeWithValue(1))
