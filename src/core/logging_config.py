"""Structured logging configuration.

This module initializes structlog with a stable JSON format.
Callers pass a validated level from TrieConfig; nothing here reads
the environment.
"""

from __future__ import annotations

from functools import lru_cache
import logging
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL


def get_logger(name: str, log_level: str | None = None) -> Any:
    """Return a logger instance.

    Args:
        name: Logger name, usually __name__.
        log_level: Optional level that filters this logger independently
            of the process-wide level.

    Returns:
        A structlog logger with structured output.
    """
    if not structlog.is_configured():
        configure_logging(DEFAULT_LOG_LEVEL)
    if log_level is None:
        return structlog.get_logger(name)
    return _leveled_logger(name, log_level)


def configure_logging(log_level: str) -> None:
    """Configure structlog processors and process-wide level filtering.

    Args:
        log_level: Lowercase level name such as "warning".
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(log_level)),
        cache_logger_on_first_use=True,
    )


@lru_cache(maxsize=None)
def _leveled_logger(name: str, log_level: str) -> Any:
    # Rebinds on every call so later processor changes apply.
    return structlog.wrap_logger(
        None,
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(log_level)),
        cache_logger_on_first_use=False,
        logger_factory_args=(name,),
    )


def _level_number(log_level: str) -> int:
    """Map a level name onto the stdlib numeric level."""
    return int(logging.getLevelName(log_level.upper()))
