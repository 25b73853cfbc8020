from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .profiles import ensure_work_dirs

LOGGER_NAME = "roominvoice"
LOG_FILE = "app.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 2 * 1024 * 1024
LOG_BACKUPS = 3

_LOGGER: logging.Logger | None = None


def parse_level(level: str | int) -> int:
    """Return the numeric logging level for a name such as ``"debug"``.

    Raises:
        ValueError: If the name is not a standard logging level.
    """

    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def _attach_handlers(logger: logging.Logger, log_path: Path) -> None:
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    file_handler = RotatingFileHandler(
        log_path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    # stdout carries command output (tables, invoice text).
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)
    logger.addHandler(console)


def get_logger(log_dir: Path | None = None, *, level: str | int | None = None) -> logging.Logger:
    """Return the application logger, configuring it on first use.

    Records go to ``<work>/logs/app.log`` (rotated) and to stderr. ``level``
    may be given on any call and replaces the current level; an unknown level
    name raises ``ValueError`` before anything is configured.
    """

    global _LOGGER
    resolved = parse_level(level) if level is not None else None

    if _LOGGER is None:
        base = Path(log_dir) if log_dir is not None else ensure_work_dirs()["logs"]
        base.mkdir(parents=True, exist_ok=True)

        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(logging.INFO)
        logger.propagate = False
        _attach_handlers(logger, base / LOG_FILE)
        _LOGGER = logger

    if resolved is not None:
        _LOGGER.setLevel(resolved)
    return _LOGGER
