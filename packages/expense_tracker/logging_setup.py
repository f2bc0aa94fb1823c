"""Logging for ``expense_tracker``.

Everything the package logs goes through the ``expense_tracker`` logger tree.
Modules take a child logger from :func:`get_logger` and never touch handlers;
the console entrypoint is the only caller of :func:`configure_logging`. Until
it runs, a ``NullHandler`` keeps library use silent.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

LEVEL_ENV_VAR = "EXPENSE_TRACKER_LOG_LEVEL"

_ROOT_NAME = "expense_tracker"
_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# The stream handler installed by configure_logging, if any.
_installed: logging.Handler | None = None


def resolve_level(level: int | str | None) -> int:
    """Map ``level`` to a numeric level.

    Accepts an ``int`` or a level name in any case. Anything else falls back
    to ``EXPENSE_TRACKER_LOG_LEVEL`` and then to ``INFO``.
    """

    if isinstance(level, int) and not isinstance(level, bool):
        return level
    for candidate in (level, os.getenv(LEVEL_ENV_VAR)):
        if isinstance(candidate, str) and candidate.strip():
            named = logging.getLevelName(candidate.strip().upper())
            if isinstance(named, int):
                return named
    return logging.INFO


def _replace_handlers(handler: logging.Handler | None) -> logging.Logger:
    global _installed
    root = logging.getLogger(_ROOT_NAME)
    for h in list(root.handlers):
        root.removeHandler(h)
    if handler is not None:
        root.addHandler(handler)
    _installed = handler
    return root


def configure_logging(level: int | str | None = None, *, stream: IO[str] | None = None) -> None:
    """Send package records to ``stream`` (stderr by default).

    Only the first call has an effect; later calls keep the existing setup.
    """

    if _installed is not None:
        return
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root = _replace_handlers(handler)
    root.setLevel(resolve_level(level))
    root.propagate = False


def reset_logging() -> None:
    """Undo :func:`configure_logging` so the next call configures afresh."""

    root = _replace_handlers(None)
    root.setLevel(logging.NOTSET)
    root.propagate = True


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger(_ROOT_NAME)
    if _installed is None and not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)
