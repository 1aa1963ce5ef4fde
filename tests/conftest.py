"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest
import structlog

_PRIMER_ENV_VARS = ("PRIMER_PRUNE_MODE", "PRIMER_VERIFY_INVARIANTS", "PRIMER_LOG_LEVEL")


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clean_primer_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test against default configuration."""
    for env_name in _PRIMER_ENV_VARS:
        monkeypatch.delenv(env_name, raising=False)


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Drop logging configuration applied by a test."""
    yield
    structlog.reset_defaults()
