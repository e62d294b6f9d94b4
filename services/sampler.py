"""Historical resampling of the archive."""

from __future__ import annotations

import logging
import random
from datetime import date, timedelta
from typing import List, MutableSequence, Optional, Protocol

from datastore.archive import WeatherArchive
from models.records import WeatherRecord
from services.dates import day_to_epoch

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def shuffle(self, x: MutableSequence[int]) -> None: ...


class HistoricalSampler:
    """Builds a synthetic history from same-day observations of random years."""

    def __init__(self, rng: Optional[RandomSource] = None) -> None:
        self._rng: RandomSource = rng if rng is not None else random.Random()

    def sample(
        self,
        archive: WeatherArchive,
        start: date,
        end: date,
        low_year: int,
        high_year: int,
    ) -> List[WeatherRecord]:
        """Return one record per day in ``[start, end]`` that has a match.

        For each day the candidate years are shuffled afresh and walked in
        order; the first year with an observation on the same month and day
        supplies the measurements, re-stamped to the requested day. Days with
        no match in any candidate year are omitted.
        """
        years = list(range(low_year, high_year + 1))
        sampled: List[WeatherRecord] = []
        if not years:
            return sampled

        current = start
        while current <= end:
            self._rng.shuffle(years)
            match = self._first_match(archive, current, years)
            if match is not None:
                sampled.append(match.with_timestamp(day_to_epoch(current)))
            current += timedelta(days=1)

        logger.info(
            "Sampled historical records",
            extra={"record_count": len(sampled), "year": f"{low_year}-{high_year}"},
        )
        return sampled

    @staticmethod
    def _first_match(
        archive: WeatherArchive, day: date, years: List[int]
    ) -> Optional[WeatherRecord]:
        for year in years:
            try:
                candidate = day.replace(year=year)
            except ValueError:
                logger.debug(
                    "Skipping nonexistent calendar date",
                    extra={"date": f"{year}-{day.month:02d}-{day.day:02d}", "year": year},
                )
                continue
            record = archive.retrieve(day_to_epoch(candidate))
            if record is not None:
                return record
        return None
