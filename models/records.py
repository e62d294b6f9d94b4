"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class UnrecognizedVariable(ValueError):
    """Raised when a variable name does not match any measured field."""

    def __init__(self, name: str) -> None:
        super().__init__(f"The variable {name!r} is not recognized.")
        self.name = name


class Variable(str, Enum):
    """Measured fields addressable by name in aggregate queries."""

    tmax = "tmax"
    tmin = "tmin"
    tmean = "tmean"
    ppt = "ppt"

    @property
    def field_name(self) -> str:
        return _FIELD_NAMES[self]

    def value_of(self, record: WeatherRecord) -> Optional[float]:
        return getattr(record, self.field_name)

    @classmethod
    def parse(cls, name: str | Variable) -> Variable:
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError as exc:
            raise UnrecognizedVariable(str(name)) from exc


_FIELD_NAMES = {
    Variable.tmax: "max_temp",
    Variable.tmin: "min_temp",
    Variable.tmean: "mean_temp",
    Variable.ppt: "gas_concentration",
}


@dataclass(frozen=True, slots=True)
class WeatherRecord:
    """A single day of weather observations; any field may be absent."""

    timestamp: Optional[int] = None
    max_temp: Optional[float] = None
    min_temp: Optional[float] = None
    mean_temp: Optional[float] = None
    gas_concentration: Optional[float] = None

    def with_timestamp(self, timestamp: int) -> WeatherRecord:
        return replace(self, timestamp=timestamp)

    def __str__(self) -> str:
        lines = []
        for name in ("timestamp", "max_temp", "min_temp", "mean_temp", "gas_concentration"):
            value = getattr(self, name)
            lines.append(f"{name}:\t{'' if value is None else value}")
        return "\n".join(lines)
