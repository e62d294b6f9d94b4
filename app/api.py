"""HTTP route definitions for the service."""

from __future__ import annotations

import math
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from app.schemas import LoadResponse, MeanResult, WeatherRecordOut
from models.records import UnrecognizedVariable
from services.dates import date_to_epoch
from services.query import IngestionError, WeatherQueryService, build_default_service

router = APIRouter()


def get_service() -> WeatherQueryService:
    return build_default_service()


def _parse_date(value: str, name: str) -> int:
    timestamp = date_to_epoch(value)
    if timestamp is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} must be a valid YYYY-MM-DD date, got {value!r}.",
        )
    return timestamp


@router.post(
    "/records",
    status_code=status.HTTP_201_CREATED,
    response_model=LoadResponse,
    summary="Load a JSON array or object of weather records.",
)
async def load_records(
    request: Request,
    service: WeatherQueryService = Depends(get_service),
) -> LoadResponse:
    body = await request.body()
    try:
        text = body.decode("utf-8")
        loaded = service.load_document(text, source="request")
    except UnicodeDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body must be UTF-8 encoded JSON.",
        ) from exc
    except IngestionError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "JSON does not match payload format",
                "errors": [str(error) for error in exc.errors],
            },
        ) from exc
    return LoadResponse(loaded=loaded, total=service.record_count())


@router.get(
    "/records/{day}",
    response_model=WeatherRecordOut,
    response_model_exclude_none=True,
    summary="Fetch the weather data recorded for a single day.",
)
def get_record(
    day: str,
    service: WeatherQueryService = Depends(get_service),
) -> WeatherRecordOut:
    record = service.retrieve(_parse_date(day, "day"))
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Data for date {day} is not available.",
        )
    return WeatherRecordOut.from_record(record)


@router.get(
    "/records",
    response_model=List[WeatherRecordOut],
    response_model_exclude_none=True,
    summary="Fetch the weather data within a date range.",
)
def get_records(
    start: str = Query(..., description="First day of the range; must be present in the data."),
    end: str = Query(..., description="Last day of the range."),
    service: WeatherQueryService = Depends(get_service),
) -> List[WeatherRecordOut]:
    records = service.retrieve_range(_parse_date(start, "start"), _parse_date(end, "end"))
    return [WeatherRecordOut.from_record(record) for record in records]


@router.get(
    "/variables/{variable}/mean",
    response_model=MeanResult,
    summary="Mean of a variable over a date range, ignoring days that lack it.",
)
def get_mean(
    variable: str,
    start: str = Query(...),
    end: str = Query(...),
    service: WeatherQueryService = Depends(get_service),
) -> MeanResult:
    begin_sec, end_sec = _parse_date(start, "start"), _parse_date(end, "end")
    try:
        summary = service.summarize(variable, begin_sec, end_sec)
    except UnrecognizedVariable as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return MeanResult(
        variable=summary.variable.value,
        start=start,
        end=end,
        mean=None if math.isnan(summary.mean) else summary.mean,
        count=summary.count,
        missing_count=summary.missing_count,
    )


@router.get(
    "/samples",
    response_model=List[WeatherRecordOut],
    response_model_exclude_none=True,
    summary="Resample a date range from same-day observations of random years.",
)
def get_samples(
    start: str = Query(...),
    end: str = Query(...),
    low_year: int = Query(..., ge=1000, le=2999),
    high_year: int = Query(..., ge=1000, le=2999),
    service: WeatherQueryService = Depends(get_service),
) -> List[WeatherRecordOut]:
    begin_sec, end_sec = _parse_date(start, "start"), _parse_date(end, "end")
    if begin_sec > end_sec or low_year > high_year:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Ranges must be ordered: start <= end and low_year <= high_year.",
        )
    records = service.sample_historical(begin_sec, end_sec, low_year, high_year)
    return [WeatherRecordOut.from_record(record) for record in records]


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
