"""Environment-driven settings for the gallery app."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


def get_env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    return default if value is None else value


def get_env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' must be an integer, got '{value}'.") from None


def get_env_float(name: str, default: Optional[float] = None) -> Optional[float]:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' must be a float, got '{value}'.") from None


def get_env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Truthy: true, 1, yes, on. Falsey: false, 0, no, off, empty."""
    value = os.getenv(name)
    if value is None:
        return default
    val_lower = value.strip().lower()
    if val_lower in ("true", "1", "yes", "on"):
        return True
    if val_lower in ("false", "0", "no", "off", ""):
        return False
    raise ValueError(f"Environment variable '{name}' must be a boolean, got '{value}'.")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    preview_max_rows: int = 5000
    skip_invalid_charts: bool = False
    datetime_parse_ratio: float = 0.8


def load_settings() -> Settings:
    level = (get_env_str("VIZGALLERY_LOG_LEVEL", "INFO") or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Environment variable 'VIZGALLERY_LOG_LEVEL' must be a logging level, got '{level}'.")

    max_rows = get_env_int("VIZGALLERY_PREVIEW_MAX_ROWS", 5000)
    if max_rows <= 0:
        raise ValueError(f"Environment variable 'VIZGALLERY_PREVIEW_MAX_ROWS' must be positive, got '{max_rows}'.")

    ratio = get_env_float("VIZGALLERY_DATETIME_PARSE_RATIO", 0.8)
    if not 0.0 < ratio <= 1.0:
        raise ValueError(f"Environment variable 'VIZGALLERY_DATETIME_PARSE_RATIO' must be in (0, 1], got '{ratio}'.")

    return Settings(
        log_level=level,
        preview_max_rows=max_rows,
        skip_invalid_charts=get_env_bool("VIZGALLERY_SKIP_INVALID_CHARTS", False),
        datetime_parse_ratio=ratio,
    )
