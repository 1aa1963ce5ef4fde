"""Persistent copy-on-write trie.

This package holds immutable trie nodes, the versioned Trie handle,
and read-only traversal and verification helpers built on them.
"""
