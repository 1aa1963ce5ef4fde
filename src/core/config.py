"""Runtime configuration model for primer.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_PRUNE_MODE,
    DEFAULT_VERIFY_INVARIANTS,
    FALSE_ENV_VALUES,
    SUPPORTED_LOG_LEVELS,
    SUPPORTED_PRUNE_MODES,
    TRUE_ENV_VALUES,
)
from core.errors import TrieConfigError


@dataclass(frozen=True)
class TrieConfig:
    """Validated runtime configuration.

    Attributes:
        prune_mode: How far removal unlinks emptied nodes ("cascade" or "parent").
        verify_invariants: Whether every mutation re-checks the structure.
        log_level: Minimum structured log level.
    """

    prune_mode: str = DEFAULT_PRUNE_MODE
    verify_invariants: bool = DEFAULT_VERIFY_INVARIANTS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "TrieConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TrieConfigError: If environment values are invalid.
        """
        prune_mode = _parse_choice(
            "PRIMER_PRUNE_MODE",
            os.getenv("PRIMER_PRUNE_MODE", DEFAULT_PRUNE_MODE),
            SUPPORTED_PRUNE_MODES,
        )
        verify_invariants = _parse_bool(
            "PRIMER_VERIFY_INVARIANTS",
            os.getenv("PRIMER_VERIFY_INVARIANTS", str(DEFAULT_VERIFY_INVARIANTS)),
        )
        log_level = _read_log_level()
        return cls(
            prune_mode=prune_mode,
            verify_invariants=verify_invariants,
            log_level=log_level,
        )


def _read_log_level() -> str:
    """Read and validate the log level environment value.

    Returns:
        Lowercase log level name.

    Raises:
        TrieConfigError: If the level is not supported.
    """
    return _parse_choice(
        "PRIMER_LOG_LEVEL",
        os.getenv("PRIMER_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        SUPPORTED_LOG_LEVELS,
    )


def _parse_choice(env_name: str, raw_value: str, choices: tuple[str, ...]) -> str:
    """Parse an enumerated environment value.

    Args:
        env_name: Environment variable name, used in error messages.
        raw_value: Raw string from environment.
        choices: Accepted lowercase values.

    Returns:
        Normalized value.

    Raises:
        TrieConfigError: If value is not one of the choices.
    """
    normalized = raw_value.strip().lower()
    if normalized in choices:
        return normalized
    raise TrieConfigError(
        f"Invalid {env_name} value: expected one of {', '.join(choices)}, "
        f"got '{raw_value}'. Set {env_name} to a supported value."
    )


def _parse_bool(env_name: str, raw_value: str) -> bool:
    """Parse a boolean environment value.

    Args:
        env_name: Environment variable name.
        raw_value: Raw string from environment.

    Returns:
        Parsed boolean.

    Raises:
        TrieConfigError: If value is not a recognized boolean literal.
    """
    normalized = raw_value.strip().lower()
    if normalized in TRUE_ENV_VALUES:
        return True
    if normalized in FALSE_ENV_VALUES:
        return False
    raise TrieConfigError(
        f"Invalid {env_name} value: expected a boolean, got '{raw_value}'. "
        "Use true/false, yes/no, on/off or 1/0."
    )
