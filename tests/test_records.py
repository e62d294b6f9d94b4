"""Unit tests for the weather record model."""

from __future__ import annotations

import pytest

from models.records import UnrecognizedVariable, Variable, WeatherRecord


def test_records_with_same_fields_are_equal() -> None:
    first = WeatherRecord(timestamp=0, max_temp=12.5, gas_concentration=0.1)
    second = WeatherRecord(timestamp=0, max_temp=12.5, gas_concentration=0.1)

    assert first == second
    assert first != WeatherRecord(timestamp=0, max_temp=12.5)


def test_absent_field_differs_from_zero() -> None:
    assert WeatherRecord(timestamp=0) != WeatherRecord(timestamp=0, min_temp=0.0)
    assert WeatherRecord() == WeatherRecord()


def test_with_timestamp_returns_new_record() -> None:
    record = WeatherRecord(timestamp=86400, mean_temp=3.0)

    restamped = record.with_timestamp(0)

    assert restamped.timestamp == 0
    assert restamped.mean_temp == 3.0
    assert record.timestamp == 86400


def test_str_lists_every_field() -> None:
    text = str(WeatherRecord(timestamp=5, max_temp=1.5))

    assert text.splitlines() == [
        "timestamp:\t5",
        "max_temp:\t1.5",
        "min_temp:\t",
        "mean_temp:\t",
        "gas_concentration:\t",
    ]


@pytest.mark.parametrize(
    ("name", "field"),
    [
        ("tmax", "max_temp"),
        ("tmin", "min_temp"),
        ("tmean", "mean_temp"),
        ("ppt", "gas_concentration"),
    ],
)
def test_variable_resolves_field(name: str, field: str) -> None:
    variable = Variable.parse(name)
    record = WeatherRecord(**{field: 7.0})

    assert variable.field_name == field
    assert variable.value_of(record) == 7.0


def test_unknown_variable_is_rejected() -> None:
    with pytest.raises(UnrecognizedVariable) as excinfo:
        Variable.parse("humidity")

    assert "humidity" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)
