"""Logging setup for hosts embedding the College ERP core.

Library modules only call ``logging.getLogger(__name__)``. A host calls
``configure_logging`` once (``CampusService.open`` does) to attach handlers
to the ``college_erp`` logger.
"""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "college_erp"
LOG_FILE = "college_erp.log"
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 3
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_REDACTIONS = [
    (re.compile(r"(password|credential)=\S+", re.IGNORECASE), r"\1=[REDACTED]"),
    (
        re.compile(r"(['\"](?:password|credential)['\"]\s*:\s*)['\"][^'\"]*['\"]", re.IGNORECASE),
        r"\1'[REDACTED]'",
    ),
]


def configure_logging(
    level: str = "INFO",
    log_dir: str | Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """Attach handlers to the ``college_erp`` logger, replacing earlier ones.

    Args:
        level: Level name, one of LEVELS (case-insensitive)
        log_dir: Directory for a rotating ``college_erp.log``; no file when None
        console: Whether to also log to stderr

    Returns:
        The ``college_erp`` logger.

    Raises:
        ValueError: If level is not a known level name
    """
    name = level.upper()
    if name not in LEVELS:
        raise ValueError(f"Unknown log level {level!r}")

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(name)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    handlers: list[logging.Handler] = []
    if log_dir is not None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path / LOG_FILE, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
            )
        )
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging configured (level=%s, dir=%s)", name, log_dir)
    return logger


def sanitize_for_log(text: str) -> str:
    """Redact credentials from text before it is logged."""
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text
