"""Ordered in-memory store of weather records keyed by epoch timestamp."""

from __future__ import annotations

from bisect import bisect_left, bisect_right, insort
from dataclasses import replace
from typing import Dict, Iterable, Iterator, List, Optional

from models.records import WeatherRecord


class WeatherArchive:
    """Records keyed by their timestamp, iterated in ascending order.

    The archive performs no locking of its own; callers sharing it between
    threads must synchronize access themselves.
    """

    def __init__(self, records: Iterable[WeatherRecord] = ()) -> None:
        self._records: Dict[int, WeatherRecord] = {}
        self._keys: List[int] = []
        self.extend(records)

    def add_data(self, record: WeatherRecord) -> None:
        """Insert ``record``, replacing any record stored under the same timestamp.

        Records without a timestamp cannot be placed and are ignored.
        """
        timestamp = record.timestamp
        if timestamp is None:
            return
        if timestamp not in self._records:
            insort(self._keys, timestamp)
        self._records[timestamp] = replace(record)

    def extend(self, records: Iterable[WeatherRecord]) -> None:
        for record in records:
            self.add_data(record)

    def retrieve(self, timestamp: int) -> Optional[WeatherRecord]:
        return self._records.get(timestamp)

    def retrieve_range(self, begin_sec: int, end_sec: int) -> List[WeatherRecord]:
        """Return the records from ``begin_sec`` onwards, in ascending order.

        ``begin_sec`` must be stored verbatim, otherwise nothing is returned.
        When ``end_sec`` is stored the result stops there (inclusive); when it
        is not, the result runs through the last stored record.
        """
        if begin_sec > end_sec or begin_sec not in self._records:
            return []

        start = bisect_left(self._keys, begin_sec)
        if end_sec in self._records:
            stop = bisect_right(self._keys, end_sec)
        else:
            stop = len(self._keys)
        return [self._records[key] for key in self._keys[start:stop]]

    def timestamps(self) -> List[int]:
        return list(self._keys)

    def clear(self) -> None:
        self._records.clear()
        self._keys.clear()

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[WeatherRecord]:
        return iter([self._records[key] for key in self._keys])

    def __contains__(self, timestamp: object) -> bool:
        return timestamp in self._records
