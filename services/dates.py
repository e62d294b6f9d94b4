"""Conversions between calendar dates, ``yyyy-mm-dd`` strings and epoch seconds."""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Optional, Tuple

SECONDS_PER_DAY = 86400

DATE_PATTERN = re.compile(r"([12]\d{3})-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])")
YEAR_PATTERN = re.compile(r"[12]\d{3}")

_EPOCH = date(1970, 1, 1)


def day_to_epoch(day: date) -> int:
    return (day - _EPOCH).days * SECONDS_PER_DAY


def epoch_to_day(seconds: int) -> date:
    return _EPOCH + timedelta(days=seconds // SECONDS_PER_DAY)


def parse_day(text: str) -> Optional[date]:
    """Return the calendar date for ``yyyy-mm-dd`` or ``None`` when invalid."""
    match = DATE_PATTERN.fullmatch(text)
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def date_to_epoch(text: str) -> Optional[int]:
    day = parse_day(text)
    if day is None:
        return None
    return day_to_epoch(day)


def epoch_to_date(seconds: int) -> str:
    return epoch_to_day(seconds).isoformat()


def parse_date_range(text: str) -> Optional[Tuple[int, int]]:
    """Parse ``YYYY-MM-DD|YYYY-MM-DD`` into an ordered pair of epoch seconds."""
    start_raw, sep, finish_raw = text.partition("|")
    if not sep:
        return None
    start = date_to_epoch(start_raw)
    finish = date_to_epoch(finish_raw)
    if start is None or finish is None or start > finish:
        return None
    return start, finish


def parse_year_range(text: str) -> Optional[Tuple[int, int]]:
    """Parse ``YYYY|YYYY`` into an ordered pair of years."""
    low_raw, sep, high_raw = text.partition("|")
    if not sep:
        return None
    if not YEAR_PATTERN.fullmatch(low_raw) or not YEAR_PATTERN.fullmatch(high_raw):
        return None
    low, high = int(low_raw), int(high_raw)
    if low > high:
        return None
    return low, high
