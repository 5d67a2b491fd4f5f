"""
Logging configuration — one setup call at CLI startup.

Modules only ever do ``logger = logging.getLogger(__name__)``.

Console level precedence:
    --debug  >  --verbose  >  --quiet  >  $ENVSTRAP_LOG_LEVEL  >  WARNING

A log file can be added with $ENVSTRAP_LOG_FILE (level from
$ENVSTRAP_LOG_FILE_LEVEL, else the console level). The file always
gets the full diagnostic format.
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV_VAR = "ENVSTRAP_LOG_LEVEL"
FILE_ENV_VAR = "ENVSTRAP_LOG_FILE"
FILE_LEVEL_ENV_VAR = "ENVSTRAP_LOG_FILE_LEVEL"

# (max level, format, datefmt); the first row whose level >= the console level wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LEVEL_ENV_VAR, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler (stderr) and the optional file handler.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file path.
        log_file_level: Level for the log file. Defaults to ``level``.
    """
    console_level = _parse_level(level)
    fmt, datefmt = next(
        (f, d) for limit, f, d in _CONSOLE_FORMATS if console_level <= limit
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name → numeric constant; unknown names fall back to WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
