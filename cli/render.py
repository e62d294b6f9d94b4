from __future__ import annotations

from typing import Iterable, Sequence

import typer

from models.records import WeatherRecord
from services.codec import DecodeError, dumps_record, dumps_records


def echo_error(text: str) -> None:
    typer.secho(text, fg=typer.colors.RED, err=True)


def render_record(record: WeatherRecord, indent: int) -> None:
    typer.echo(dumps_record(record, indent=indent))


def render_records(records: Iterable[WeatherRecord], indent: int) -> None:
    typer.echo(dumps_records(records, indent=indent))


def render_mean(mean: float) -> None:
    typer.echo(f"{mean:.3f}")


def render_decode_errors(errors: Sequence[DecodeError]) -> None:
    echo_error("An error occurred parsing the json file:")
    for error in errors:
        echo_error(f"  - {error}")
