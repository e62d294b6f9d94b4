from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_INDENT = 3

_INDENT_ENV = "PARSEWEATHER_INDENT"
_SEED_ENV = "PARSEWEATHER_SEED"


@dataclass(frozen=True)
class CLIConfig:
    indent: int = DEFAULT_INDENT
    seed: Optional[int] = None


def _read_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    try:
        return int(candidate)
    except ValueError:
        return None


def load_config(
    indent: Optional[int] = None,
    seed: Optional[int] = None,
) -> CLIConfig:
    if indent is None:
        parsed = _read_int(os.getenv(_INDENT_ENV))
        indent = parsed if parsed is not None and parsed >= 0 else DEFAULT_INDENT
    if seed is None:
        seed = _read_int(os.getenv(_SEED_ENV))
    return CLIConfig(indent=indent, seed=seed)
