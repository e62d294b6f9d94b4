"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from models.records import WeatherRecord
from services.codec import encode_record


class WeatherRecordOut(BaseModel):
    """A weather record as exposed over HTTP; absent fields are omitted."""

    date: Optional[str] = Field(default=None, description="Day of the observation, YYYY-MM-DD.")
    tmax: Optional[float] = Field(default=None, description="Maximum temperature in Celsius.")
    tmin: Optional[float] = Field(default=None, description="Minimum temperature in Celsius.")
    tmean: Optional[float] = Field(default=None, description="Mean temperature in Celsius.")
    ppt: Optional[float] = Field(default=None, description="Gas concentration in parts per trillion.")

    @classmethod
    def from_record(cls, record: WeatherRecord) -> WeatherRecordOut:
        return cls.model_validate(encode_record(record))


class LoadResponse(BaseModel):
    """Outcome of ingesting a weather document."""

    loaded: int = Field(..., ge=0, description="Records placed in the archive by this request.")
    total: int = Field(..., ge=0, description="Records held by the archive afterwards.")


class MeanResult(BaseModel):
    """Mean of one variable over a date range."""

    variable: str
    start: str
    end: str
    mean: Optional[float] = Field(
        default=None, description="Null when no record in the range carries the variable."
    )
    count: int = Field(..., ge=0)
    missing_count: int = Field(..., ge=0)
