"""Unit tests for the aggregation logic."""

from __future__ import annotations

import logging
import math

import pytest

from models.records import UnrecognizedVariable, Variable, WeatherRecord
from services.aggregator import Aggregator
from services.dates import date_to_epoch


def _record(day: str, **fields: float) -> WeatherRecord:
    """Helper to build a record stamped on ``day``."""

    return WeatherRecord(timestamp=date_to_epoch(day), **fields)


def test_mean_ignores_records_missing_the_variable() -> None:
    aggregator = Aggregator()
    records = [
        _record("2022-01-01", max_temp=10.0),
        _record("2022-01-02", min_temp=-3.0),
        _record("2022-01-03", max_temp=20.0),
    ]

    assert aggregator.mean_of(records, "tmax") == 15.0


def test_mean_of_empty_iterable_is_nan() -> None:
    assert math.isnan(Aggregator().mean_of([], Variable.ppt))


def test_mean_when_all_records_lack_variable_is_nan() -> None:
    records = [_record("2022-01-01", max_temp=1.0), _record("2022-01-02")]

    assert math.isnan(Aggregator().mean_of(records, "tmean"))


def test_summarize_counts_present_and_missing() -> None:
    records = [
        _record("2022-01-01", gas_concentration=0.5),
        _record("2022-01-02"),
        _record("2022-01-03", gas_concentration=1.5),
        _record("2022-01-04"),
    ]

    summary = Aggregator().summarize(records, "ppt")

    assert summary.variable is Variable.ppt
    assert summary.count == 2
    assert summary.missing_count == 2
    assert summary.mean == 1.0


def test_missing_values_are_logged(caplog) -> None:
    records = [_record("2022-01-01", max_temp=1.0), _record("2022-01-02")]

    with caplog.at_level(logging.WARNING):
        Aggregator().mean_of(records, "tmax")

    warnings = [record for record in caplog.records if record.name == "services.aggregator"]
    assert len(warnings) == 1
    assert getattr(warnings[0], "date") == "2022-01-02"
    assert getattr(warnings[0], "variable") == "tmax"


def test_unknown_variable_raises() -> None:
    with pytest.raises(UnrecognizedVariable):
        Aggregator().mean_of([_record("2022-01-01", max_temp=1.0)], "wind")
