"""Primer exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Absent keys and type mismatches are never errors; lookups return None.
"""

from __future__ import annotations


class TrieError(Exception):
    """Base exception for all primer failures."""


class TrieConfigError(TrieError):
    """Raised for invalid runtime configuration."""


class TrieTypeError(TrieError):
    """Raised when an explicit value type disagrees with the stored value."""


class TrieInvariantError(TrieError):
    """Raised when the node graph is structurally inconsistent."""


class ReplayScriptError(TrieError):
    """Raised for invalid or unsupported replay scripts."""
