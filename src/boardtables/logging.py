"""Logging setup for boardtables.

Console logging is always available; a rotating log file is added when a log
directory is given or ``BOARDTABLES_LOG_DIR`` is set.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_FILE = "boardtables.log"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_BACKUP_COUNT = 3
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# GitHub token shapes and auth headers that must never reach a log line.
_SECRET_PATTERNS = [
    (re.compile(r"gh[pousr]_[A-Za-z0-9]{36,}"), "[GITHUB_TOKEN]"),
    (re.compile(r"github_pat_[A-Za-z0-9_]{22,}"), "[GITHUB_TOKEN]"),
    (re.compile(r"(?i)bearer [A-Za-z0-9._-]+"), "bearer [REDACTED]"),
]


def setup_logging(
    level: str | None = None,
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    console: bool = True,
) -> logging.Logger:
    """Configure the ``boardtables`` logger.

    Args:
        level: Log level name. Defaults to ``BOARDTABLES_LOG_LEVEL`` or INFO.
        log_dir: Directory for a rotating log file. Defaults to
                 ``BOARDTABLES_LOG_DIR``; no file is written when neither is set.
        log_file: Log file name inside ``log_dir``.
        console: Whether to log to stderr.

    Returns:
        The ``boardtables`` logger.
    """
    if level is None:
        level = os.environ.get("BOARDTABLES_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("boardtables")
    logger.setLevel(log_level)
    logger.handlers.clear()
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_dir is None:
        log_dir = os.environ.get("BOARDTABLES_LOG_DIR") or None
    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path / log_file,
            maxBytes=DEFAULT_MAX_BYTES,
            backupCount=DEFAULT_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.debug("Logging initialized (level=%s, dir=%s)", level, log_dir)
    return logger


def truncate_output(output: str, max_length: int = 2000) -> str:
    """Shorten a response body for logging."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Redact GitHub tokens and bearer credentials from ``text``."""
    for pattern, replacement in _SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text
