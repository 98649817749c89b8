import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from holes.threshold import DEFAULT_THRESHOLD_MS

load_dotenv()


@dataclass(frozen=True)
class Settings:
    threshold_ms: int = DEFAULT_THRESHOLD_MS
    log_level: int = logging.WARNING
    log_file: Optional[str] = None


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


def _level_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default

    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"{name} is not a logging level: {value!r}")
    return level


def load_settings() -> Settings:
    """
    Read settings from the environment (and .env, loaded at import).

      HOLEFINDER_THRESHOLD_MS  threshold used when -t has no value
      HOLEFINDER_LOG_LEVEL     DEBUG / INFO / WARNING / ERROR
      HOLEFINDER_LOG_FILE      also write logs to this file
    """
    return Settings(
        threshold_ms=_int_env("HOLEFINDER_THRESHOLD_MS", DEFAULT_THRESHOLD_MS),
        log_level=_level_env("HOLEFINDER_LOG_LEVEL", logging.WARNING),
        log_file=os.getenv("HOLEFINDER_LOG_FILE") or None,
    )
