"""Declarative replay of trie version histories.

This module loads YAML replay scripts and drives them through the
public Trie API, keeping every produced version addressable.
"""
