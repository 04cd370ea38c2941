"""
Logging configuration — one setup call per process.

Called once by the CLI group.  Every module does
``logger = logging.getLogger(__name__)`` and inherits this config.

Console level precedence:
    CLI flag  >  DEVBOX_LOG_LEVEL env var  >  WARNING

DEVBOX_LOG_FILE / DEVBOX_LOG_FILE_LEVEL add a persistent log file.
``attach_run_log()`` adds the per-run log written by ``devbox setup``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# WARNING and above: just the message
_FMT_MINIMAL = "%(message)s"

# INFO: timestamped, like the provisioning log lines
_FMT_VERBOSE = "[%(asctime)s] %(message)s"
_DATEFMT_VERBOSE = "%Y-%m-%d %H:%M:%S"

# DEBUG: full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output: always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_RUN_LOG_HANDLER_NAME = "devbox-run-log"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure logging for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Level for the log file, defaults to ``level``.
    """
    numeric_level = _parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)
        root.addHandler(_file_handler(Path(log_file), file_level))

    root.setLevel(effective_level)

    logging.raiseExceptions = False


def attach_run_log(path: Path, level: str = "INFO") -> Path | None:
    """Also write this run's log to ``path``.

    Returns:
        ``path``, or None when the file cannot be opened (the run
        continues with console logging only).
    """
    numeric_level = _parse_level(level)
    try:
        handler = _file_handler(path, numeric_level)
    except OSError as e:
        logging.getLogger(__name__).warning("Cannot open run log %s: %s", path, e)
        return None

    handler.set_name(_RUN_LOG_HANDLER_NAME)
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _RUN_LOG_HANDLER_NAME:
            root.removeHandler(existing)
            existing.close()
    root.addHandler(handler)
    if root.level > numeric_level:
        root.setLevel(numeric_level)
    return path


def _file_handler(path: Path, level: int) -> logging.FileHandler:
    fh = logging.FileHandler(path, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
    return fh


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
