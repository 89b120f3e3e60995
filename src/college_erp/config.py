"""Environment-driven settings for the College ERP core."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from college_erp.admin import DEFAULT_CAPACITY, DEFAULT_PASSWORD
from college_erp.ledger import COURSE_FEE
from college_erp.logging import LEVELS

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_PREFIX = "COLLEGE_ERP_"


class ConfigError(Exception):
    """Raised when configuration is invalid."""


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        db_path: SQLite file backing the key-value store
        course_fee: Amount charged on enrollment and refunded on drop
        default_capacity: Seat limit for courses created without one
        default_password: Credential for admin-created students without one
        log_level: Level name for the college_erp logger
        log_dir: Directory for the rotating log file; None logs to the console only
    """

    db_path: str = "college_erp.db"
    course_fee: int = COURSE_FEE
    default_capacity: int = DEFAULT_CAPACITY
    default_password: str = DEFAULT_PASSWORD
    log_level: str = "INFO"
    log_dir: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``COLLEGE_ERP_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Raises:
            ConfigError: If a numeric setting is not a positive integer, or the
                log level is unknown
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            db_path=env.get(f"{ENV_PREFIX}DB_PATH", defaults.db_path),
            course_fee=_positive_int(env, "COURSE_FEE", defaults.course_fee),
            default_capacity=_positive_int(env, "DEFAULT_CAPACITY", defaults.default_capacity),
            default_password=env.get(f"{ENV_PREFIX}DEFAULT_PASSWORD", defaults.default_password),
            log_level=_log_level(env, defaults.log_level),
            log_dir=env.get(f"{ENV_PREFIX}LOG_DIR") or defaults.log_dir,
        )


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


def _log_level(env: Mapping[str, str], default: str) -> str:
    raw = env.get(f"{ENV_PREFIX}LOG_LEVEL")
    if raw is None:
        return default
    level = raw.strip().upper()
    if level not in LEVELS:
        choices = ", ".join(LEVELS)
        raise ConfigError(f"{ENV_PREFIX}LOG_LEVEL must be one of {choices}, got {raw!r}")
    return level
