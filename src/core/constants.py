"""Core constants used across primer modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in trie and replay logic.
"""

from __future__ import annotations

PRUNE_MODE_CASCADE = "cascade"
PRUNE_MODE_PARENT = "parent"
SUPPORTED_PRUNE_MODES = (PRUNE_MODE_CASCADE, PRUNE_MODE_PARENT)
DEFAULT_PRUNE_MODE = PRUNE_MODE_CASCADE
DEFAULT_VERIFY_INVARIANTS = False
DEFAULT_LOG_LEVEL = "warning"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
TRUE_ENV_VALUES = ("1", "true", "yes", "on")
FALSE_ENV_VALUES = ("0", "false", "no", "off")
MAX_BYTE_SYMBOL = 255
REPLAY_SCRIPT_VERSION = 1
