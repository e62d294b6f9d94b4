"""JSON decoding and encoding of weather records."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from models.records import WeatherRecord
from services.dates import date_to_epoch, epoch_to_date

DATE_KEY = "date"
TMAX_KEY = "tmax"
TMIN_KEY = "tmin"
TMEAN_KEY = "tmean"
PPT_KEY = "ppt"

_NUMERIC_KEYS = (
    (TMAX_KEY, "max_temp"),
    (TMIN_KEY, "min_temp"),
    (TMEAN_KEY, "mean_temp"),
    (PPT_KEY, "gas_concentration"),
)

OUTPUT_PRECISION = 6


@dataclass(frozen=True)
class DecodeError:
    """Details about a payload that could not be turned into a record."""

    index: Optional[int]
    reason: str

    def __str__(self) -> str:
        if self.index is None:
            return self.reason
        return f"record {self.index}: {self.reason}"


@dataclass
class DecodedDocument:
    records: List[WeatherRecord] = field(default_factory=list)
    errors: List[DecodeError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unsupported JSON constant {name}")


def decode_record(payload: Any, index: int = 0) -> Union[WeatherRecord, DecodeError]:
    """Build a record from a decoded JSON object.

    Keys that are missing or hold the wrong type leave the matching field
    absent. A payload that is not an object, or a number too large for a
    float, is reported as a ``DecodeError``.
    """
    if not isinstance(payload, dict):
        return DecodeError(index=index, reason="JSON does not match payload format")

    values: Dict[str, Any] = {}
    raw_date = payload.get(DATE_KEY)
    if isinstance(raw_date, str):
        values["timestamp"] = date_to_epoch(raw_date)

    for key, attribute in _NUMERIC_KEYS:
        raw = payload.get(key)
        if not _is_number(raw):
            continue
        try:
            value = float(raw)
        except OverflowError:
            value = math.inf
        if not math.isfinite(value):
            return DecodeError(index=index, reason=f"{key}: numeric value out of range")
        values[attribute] = value

    return WeatherRecord(**values)


def decode_document(text: str) -> DecodedDocument:
    """Decode a whole ingestion document: an array of records or one record."""
    document = DecodedDocument()
    try:
        tree = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        document.errors.append(DecodeError(index=None, reason=f"invalid JSON: {exc}"))
        return document

    if isinstance(tree, list):
        payloads: Iterable[Any] = tree
    elif isinstance(tree, dict):
        payloads = [tree]
    else:
        document.errors.append(
            DecodeError(index=None, reason="document must be a JSON object or array")
        )
        return document

    for index, payload in enumerate(payloads):
        result = decode_record(payload, index=index)
        if isinstance(result, DecodeError):
            document.errors.append(result)
        else:
            document.records.append(result)
    return document


def _round(value: float) -> float:
    return float(f"{value:.{OUTPUT_PRECISION}g}")


def encode_record(record: WeatherRecord) -> Dict[str, Any]:
    """Return a JSON-ready mapping holding only the present fields."""
    payload: Dict[str, Any] = {}
    if record.timestamp is not None:
        payload[DATE_KEY] = epoch_to_date(record.timestamp)
    for key, attribute in _NUMERIC_KEYS:
        value = getattr(record, attribute)
        if value is not None:
            payload[key] = _round(value)
    return payload


def dumps_record(record: WeatherRecord, indent: int = 3) -> str:
    return json.dumps(encode_record(record), indent=indent)


def dumps_records(records: Iterable[WeatherRecord], indent: int = 3) -> str:
    return json.dumps([encode_record(record) for record in records], indent=indent)
