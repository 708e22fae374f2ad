"""
Logging configuration for the helm3mixin CLI.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

stdout carries the Dockerfile lines and stderr carries the
``DEBUG: addition of repository failed: ...`` diagnostics, so log
records go to stderr under a ``[helm3mixin]`` prefix that cannot be
mistaken for either.  ``--debug`` only controls diagnostics; log
verbosity is set separately.

Levels are resolved in precedence order:
    -vv / -v / -q  >  HELM3MIXIN_LOG_LEVEL env var  >  WARNING (default)

Optional file output via HELM3MIXIN_LOG_FILE / HELM3MIXIN_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# ── Format strings ──────────────────────────────────────────────

_FMT_CONSOLE = "[helm3mixin] %(levelname)s %(message)s"

# DEBUG level adds the emitting module and line
_FMT_CONSOLE_DEBUG = "[helm3mixin] %(levelname)s %(name)s:%(lineno)d %(message)s"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

DEFAULT_LEVEL = "WARNING"


def resolve_level(verbosity: int = 0, quiet: bool = False, env_level: str | None = None) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if verbosity >= 2:
        return "DEBUG"
    if verbosity == 1:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or DEFAULT_LEVEL


def setup_logging(
    level: str = DEFAULT_LEVEL,
    log_file: str | None = None,
    log_file_level: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure logging for the process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
        stream: Console stream, stderr unless given.
    """
    numeric_level = _parse_level(level)
    fmt = _FMT_CONSOLE_DEBUG if numeric_level <= logging.DEBUG else _FMT_CONSOLE

    console = logging.StreamHandler(stream or sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
