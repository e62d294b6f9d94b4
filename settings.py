from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_DATA_PATH_ENV = "WEATHER_DATA_PATH"
_SAMPLE_SEED_ENV = "WEATHER_SAMPLE_SEED"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    data_path: Optional[str]
    sample_seed: Optional[int]
    log_level: str


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_optional_int(name: str) -> Optional[int]:
    candidate = _read_optional_env(name, None)
    if candidate is None:
        return None
    try:
        return int(candidate)
    except ValueError:
        return None


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        data_path=_read_optional_env(_DATA_PATH_ENV, None),
        sample_seed=_read_optional_int(_SAMPLE_SEED_ENV),
        log_level=_read_log_level("INFO"),
    )
