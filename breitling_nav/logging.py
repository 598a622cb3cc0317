"""Diagnostic logging for the navigation core and CLI."""
from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "breitling_nav.log"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_log_file(settings: object, cwd: Optional[Path] = None) -> Path:
    """Where the rotating log lives.

    An absolute BN_LOG_DIR is used as-is. A relative one is anchored at the
    working directory (the same place `.env` is read from), never at the
    installed package location.
    """
    raw = getattr(settings, "BN_LOG_DIR", None) or Path("_logs")
    log_dir = Path(os.fspath(raw)).expanduser()
    if not log_dir.is_absolute():
        log_dir = (cwd or Path.cwd()) / log_dir
    return log_dir / LOG_FILE_NAME


def _level_for(settings: object) -> tuple[str, int]:
    name = str(getattr(settings, "BN_LOG_LEVEL", "INFO") or "INFO").strip().upper()
    return name, getattr(logging, name, logging.INFO)


def _handlers(log_file: Path, level: int, backup_count: int) -> list[logging.Handler]:
    rotating = TimedRotatingFileHandler(
        filename=str(log_file),
        when="midnight",
        backupCount=max(0, backup_count),
        encoding="utf-8",
    )
    handlers: list[logging.Handler] = [rotating, logging.StreamHandler()]
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(settings: object) -> Path:
    """Send root logging to a daily-rotated file plus the console.

    Returns the log file path. Calling it again replaces the handlers it
    installed earlier instead of stacking duplicates.
    """
    log_file = resolve_log_file(settings)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    level_name, level = _level_for(settings)
    backups = int(getattr(settings, "BN_LOG_BACKUP_COUNT", 14) or 0)

    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers = _handlers(log_file, level, backups)
    root.setLevel(level)

    logging.getLogger("breitling_nav").debug("logging to %s at %s", log_file, level_name)
    return log_file
