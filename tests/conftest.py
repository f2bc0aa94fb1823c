"""Pytest configuration for test isolation.

Tests import ``expense_tracker`` straight from ``packages/`` so they also run
from a plain checkout. Logging configuration is process-global (the package
logger gets a handler once), so every test starts from an unconfigured logger
and without the level override from the developer's environment.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
if str(_PKG_DIR) not in sys.path:
    sys.path.insert(0, str(_PKG_DIR))

from expense_tracker.logging_setup import reset_logging  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("EXPENSE_TRACKER_LOG_LEVEL", raising=False)
    reset_logging()
    yield
    reset_logging()
