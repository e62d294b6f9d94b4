"""Tests for the date codec."""

from __future__ import annotations

from datetime import date

import pytest

from services.dates import (
    date_to_epoch,
    day_to_epoch,
    epoch_to_date,
    epoch_to_day,
    parse_date_range,
    parse_year_range,
)


def test_date_to_epoch_is_midnight_utc() -> None:
    assert date_to_epoch("1970-01-01") == 0
    assert date_to_epoch("1970-01-02") == 86400
    assert date_to_epoch("2022-01-01") == 1640995200


@pytest.mark.parametrize(
    "text",
    ["1999-12-31", "2000-02-29", "1901-01-01", "2024-02-29", "2099-07-15", "1969-12-31"],
)
def test_round_trip(text: str) -> None:
    seconds = date_to_epoch(text)

    assert seconds is not None
    assert epoch_to_date(seconds) == text


@pytest.mark.parametrize(
    "text",
    [
        "2022-02-30",
        "2023-02-29",
        "2022-13-01",
        "2022-1-01",
        "22-01-01",
        "3022-01-01",
        "",
        "not a date",
        " 2022-01-01",
        "2022-01-01\n",
    ],
)
def test_invalid_dates_are_absent(text: str) -> None:
    assert date_to_epoch(text) is None


def test_epoch_to_date_floors_to_the_day() -> None:
    assert epoch_to_date(86400 + 3600) == "1970-01-02"
    assert epoch_to_date(-1) == "1969-12-31"


def test_day_conversions_are_inverse() -> None:
    day = date(2016, 2, 29)

    assert epoch_to_day(day_to_epoch(day)) == day


def test_parse_date_range() -> None:
    assert parse_date_range("2022-01-01|2022-01-03") == (
        date_to_epoch("2022-01-01"),
        date_to_epoch("2022-01-03"),
    )
    assert parse_date_range("2022-01-01|2022-01-01") is not None
    assert parse_date_range("2022-01-03|2022-01-01") is None
    assert parse_date_range("2022-01-01") is None
    assert parse_date_range("2022-01-01|2022-02-30") is None


def test_parse_year_range() -> None:
    assert parse_year_range("2018|2022") == (2018, 2022)
    assert parse_year_range("2022|2022") == (2022, 2022)
    assert parse_year_range("2022|2018") is None
    assert parse_year_range("2018-2022") is None
    assert parse_year_range("18|22") is None
    assert parse_year_range(" 2018|2022") is None
    assert parse_year_range("2018|2022\n") is None
