"""Aggregation logic for weather records."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from models.records import Variable, WeatherRecord
from services.dates import epoch_to_date

logger = logging.getLogger(__name__)


@dataclass
class VariableSummary:
    """Computed statistics for one variable over a batch of records."""

    variable: Variable
    count: int = 0
    missing_count: int = 0
    mean: float = math.nan


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def summarize(
        self, records: Iterable[WeatherRecord], variable: Variable | str
    ) -> VariableSummary:
        variable = Variable.parse(variable)
        summary = VariableSummary(variable=variable)
        total = 0.0

        for record in records:
            value = variable.value_of(record)
            if value is None:
                summary.missing_count += 1
                date = epoch_to_date(record.timestamp) if record.timestamp is not None else None
                logger.warning(
                    "Record is missing the variable and is ignored for the mean",
                    extra={"date": date, "variable": variable.value},
                )
                continue
            summary.count += 1
            total += value

        if summary.count:
            summary.mean = total / summary.count

        return summary

    def mean_of(self, records: Iterable[WeatherRecord], variable: Variable | str) -> float:
        """Mean of ``variable`` over the records that carry it, NaN when none do."""
        return self.summarize(records, variable).mean
