"""Logging setup for the preview runner and any host that embeds the parser.

The parser modules only create module loggers; configure_logging() is the one
place that touches the root logger. LOG_LEVEL and LOG_FILE come from the
environment (or from Settings) when not passed explicitly.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from routines.infra.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_DEFAULT_LEVEL = "INFO"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3


def resolve_level(name: str | None) -> int:
    """Map a level name to its number; unknown names fall back to INFO."""
    level = getattr(logging, (name or _DEFAULT_LEVEL).strip().upper(), None)
    if not isinstance(level, int):
        return logging.INFO
    return level


def configure_logging(*, level: int | None = None, log_file: str | Path | None = None) -> None:
    """Configure process-wide logging.

    Args:
        level: Log level (e.g. logging.INFO). If None, taken from LOG_LEVEL env.
        log_file: If set, also log to this file with rotation. If None, from LOG_FILE env.
    """
    if level is None:
        level = resolve_level(os.environ.get("LOG_LEVEL"))
    if log_file is None:
        log_file = os.environ.get("LOG_FILE", "").strip() or None

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    root = logging.getLogger()
    root.setLevel(level)
    # Drop handlers from earlier calls (tests call this repeatedly).
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if not log_file:
        return
    try:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as exc:
        root.warning("logging.file unavailable path=%s error=%s; stderr only", log_file, exc)
        return
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)


def configure_logging_from_settings(settings: Settings) -> None:
    configure_logging(level=resolve_level(settings.log_level), log_file=settings.log_file or "")
