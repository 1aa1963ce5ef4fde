"""Unit tests for structured events emitted by trie mutations."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from core.config import TrieConfig
from core.errors import TrieInvariantError
from core.logging_config import configure_logging
from ptrie.node import TrieNode, TrieNodeWithValue
from ptrie.trie import Trie
from ptrie.verification import verify_trie

_DEBUG = TrieConfig(log_level="debug")


def _events(captured: list[dict], name: str) -> list[dict]:
    return [entry for entry in captured if entry["event"] == name]


def test_put_into_empty_trie_reports_created_nodes() -> None:
    """A put into an empty trie creates every node on the path."""
    with capture_logs() as captured:
        Trie(config=_DEBUG).put("ab", 1)

    (event,) = _events(captured, "trie_put")
    assert event["log_level"] == "debug"
    assert (event["key_length"], event["cloned_nodes"], event["created_nodes"]) == (2, 0, 3)


def test_put_below_existing_key_reports_cloned_path() -> None:
    """Extending a stored key clones the existing path and creates one node."""
    trie = Trie(config=_DEBUG).put("ab", 1)

    with capture_logs() as captured:
        trie.put("abc", 2)

    (event,) = _events(captured, "trie_put")
    assert (event["cloned_nodes"], event["created_nodes"]) == (3, 1)


def test_remove_of_only_key_reports_cascade_pruning() -> None:
    """Removing the sole key prunes the whole path and publishes no clones."""
    trie = Trie(config=_DEBUG).put("abc", 1)

    with capture_logs() as captured:
        trie.remove("abc")

    (removed,) = _events(captured, "trie_remove")
    (pruned,) = _events(captured, "trie_pruned")
    assert removed["cloned_nodes"] == 3 and removed["published_nodes"] == 0
    assert removed["pruned_nodes"] == pruned["pruned_nodes"] == 3


def test_remove_of_prefix_key_reports_replacement_node() -> None:
    """Removing a key with children replaces its node instead of pruning."""
    trie = Trie(config=_DEBUG).put("a", 1).put("ab", 2)

    with capture_logs() as captured:
        trie.remove("a")

    (event,) = _events(captured, "trie_remove")
    assert (event["created_nodes"], event["pruned_nodes"], event["published_nodes"]) == (1, 0, 2)
    assert _events(captured, "trie_pruned") == []


def test_parent_mode_prunes_only_terminal() -> None:
    """Single-level pruning keeps emptied ancestors in the published version."""
    config = TrieConfig(prune_mode="parent", log_level="debug")
    trie = Trie(config=config).put("abc", 1)

    with capture_logs() as captured:
        trie.remove("abc")

    (event,) = _events(captured, "trie_remove")
    assert event["pruned_nodes"] == 1 and event["published_nodes"] == 3


def test_remove_of_missing_key_reports_noop() -> None:
    """A remove that finds nothing emits a no-op event only."""
    trie = Trie(config=_DEBUG).put("a", 1)

    with capture_logs() as captured:
        trie.remove("zz")

    assert [entry["event"] for entry in captured] == ["trie_remove_noop"]
    assert captured[0]["key_length"] == 2


def test_default_level_hides_mutation_events() -> None:
    """Warning level should drop debug mutation events."""
    with capture_logs() as captured:
        Trie(config=TrieConfig()).put("ab", 1).remove("ab")

    assert captured == []


def test_config_level_applies_under_warning_process_level() -> None:
    """A debug trie config should log even when the process level is warning."""
    configure_logging("warning")
    trie = Trie(config=_DEBUG).put("ab", 1)

    with capture_logs() as captured:
        trie.remove("ab")

    assert {entry["event"] for entry in captured} == {"trie_remove", "trie_pruned"}


def test_derived_versions_keep_config_level() -> None:
    """Versions derived from a debug trie should keep logging at debug."""
    trie = Trie(config=_DEBUG).put("a", 1).put("b", 2)

    with capture_logs() as captured:
        trie.put("c", 3)

    assert len(_events(captured, "trie_put")) == 1


def test_vanished_path_logs_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """Path copying should log the missing depth before raising."""
    trie = Trie(config=TrieConfig()).put("a", 1)
    monkeypatch.setattr(Trie, "get_node", lambda self, key: TrieNodeWithValue(0))

    with capture_logs() as captured:
        with pytest.raises(TrieInvariantError):
            trie.remove("zz")

    (event,) = _events(captured, "trie_path_vanished")
    assert event["log_level"] == "error" and event["depth"] == 0


def test_invariant_violation_logs_error() -> None:
    """verify_trie should log the violation count before raising."""
    trie = Trie(TrieNode({"a": TrieNode()}), TrieConfig())

    with capture_logs() as captured:
        with pytest.raises(TrieInvariantError):
            verify_trie(trie)

    (event,) = _events(captured, "trie_invariant_violation")
    assert event["log_level"] == "error" and event["violation_count"] == 1
