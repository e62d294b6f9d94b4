"""Query orchestration over a single weather archive."""

from __future__ import annotations

import logging
import random
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import List, Optional, Sequence

from datastore.archive import WeatherArchive
from models.records import Variable, WeatherRecord
from services.aggregator import Aggregator, VariableSummary
from services.codec import DecodeError, decode_document
from services.dates import epoch_to_day
from services.sampler import HistoricalSampler
from settings import get_settings

logger = logging.getLogger(__name__)


class IngestionError(ValueError):
    """Raised when an ingestion document contains records that cannot be decoded."""

    def __init__(self, errors: Sequence[DecodeError]) -> None:
        self.errors = list(errors)
        reasons = "; ".join(str(error) for error in self.errors)
        super().__init__(f"Failed to load weather data: {reasons}")


class WeatherQueryService:
    """Coordinates loading, lookups, aggregates and resampling for one archive.

    Every call holds the service lock, so the archive is never touched by two
    threads at once.
    """

    def __init__(
        self,
        archive: WeatherArchive,
        aggregator: Aggregator,
        sampler: HistoricalSampler,
    ) -> None:
        self.archive = archive
        self.aggregator = aggregator
        self.sampler = sampler
        self._lock = Lock()

    def load_document(self, text: str, source: str = "<document>") -> int:
        """Decode a whole JSON document and add its records atomically.

        Nothing is added when any record fails to decode. Returns the number
        of records that were placed in the archive.
        """
        document = decode_document(text)
        if not document.ok:
            logger.error(
                "Rejected weather document",
                extra={"source": source, "error_count": len(document.errors)},
            )
            raise IngestionError(document.errors)

        placeable: List[WeatherRecord] = []
        for index, record in enumerate(document.records):
            if record.timestamp is None:
                logger.warning(
                    "Dropping record without a usable date",
                    extra={"source": source, "reason": f"record {index} has no valid date"},
                )
                continue
            placeable.append(record)

        with self._lock:
            self.archive.extend(placeable)
            total = len(self.archive)
        logger.info(
            "Loaded weather document",
            extra={"source": source, "record_count": len(placeable)},
        )
        logger.debug("Archive size after load", extra={"record_count": total})
        return len(placeable)

    def load_file(self, path: Path) -> int:
        text = Path(path).read_text(encoding="utf-8")
        return self.load_document(text, source=str(path))

    def record_count(self) -> int:
        with self._lock:
            return len(self.archive)

    def retrieve(self, timestamp: int) -> Optional[WeatherRecord]:
        with self._lock:
            return self.archive.retrieve(timestamp)

    def retrieve_range(self, begin_sec: int, end_sec: int) -> List[WeatherRecord]:
        with self._lock:
            return self.archive.retrieve_range(begin_sec, end_sec)

    def summarize(
        self, variable: Variable | str, begin_sec: int, end_sec: int
    ) -> VariableSummary:
        variable = Variable.parse(variable)
        records = self.retrieve_range(begin_sec, end_sec)
        return self.aggregator.summarize(records, variable)

    def mean_of(self, variable: Variable | str, begin_sec: int, end_sec: int) -> float:
        """Mean of ``variable`` over the range, or NaN when no record carries it."""
        return self.summarize(variable, begin_sec, end_sec).mean

    def sample_historical(
        self, start_sec: int, end_sec: int, low_year: int, high_year: int
    ) -> List[WeatherRecord]:
        with self._lock:
            return self.sampler.sample(
                self.archive,
                epoch_to_day(start_sec),
                epoch_to_day(end_sec),
                low_year,
                high_year,
            )


def build_sampler(seed: Optional[int] = None) -> HistoricalSampler:
    rng = random.Random(seed) if seed is not None else None
    return HistoricalSampler(rng=rng)


@lru_cache
def build_default_service() -> WeatherQueryService:
    """Factory that wires the service from settings and loads the configured data file."""
    settings = get_settings()
    service = WeatherQueryService(
        archive=WeatherArchive(),
        aggregator=Aggregator(),
        sampler=build_sampler(settings.sample_seed),
    )
    if settings.data_path:
        service.load_file(Path(settings.data_path))
    return service
