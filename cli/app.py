from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import typer

from cli.config import CLIConfig, load_config
from cli.render import (
    echo_error,
    render_decode_errors,
    render_mean,
    render_record,
    render_records,
)
from datastore.archive import WeatherArchive
from logging_config import configure_logging
from models.records import UnrecognizedVariable, Variable
from services.aggregator import Aggregator
from services.dates import date_to_epoch, parse_date_range, parse_year_range
from services.query import IngestionError, WeatherQueryService, build_sampler


@dataclass
class CLIState:
    config: CLIConfig
    service: WeatherQueryService


app = typer.Typer(
    help=(
        "Load a file of JSON formatted weather data and answer date, range, "
        "mean and historical-sample queries against it."
    ),
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        echo_error("CLI state is uninitialized.")
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    file: Path = typer.Option(
        ...,
        "--file",
        "-f",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Path to the JSON weather data file.",
    ),
    indent: Optional[int] = typer.Option(
        None,
        "--indent",
        min=0,
        help="Indentation of JSON output (defaults to PARSEWEATHER_INDENT env or 3).",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for historical sampling (defaults to PARSEWEATHER_SEED env, else random).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level for diagnostics written to stderr.",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging(log_level.upper() if log_level else None)
    config = load_config(indent=indent, seed=seed)
    service = WeatherQueryService(
        archive=WeatherArchive(),
        aggregator=Aggregator(),
        sampler=build_sampler(config.seed),
    )
    try:
        service.load_file(file)
    except IngestionError as exc:
        render_decode_errors(exc.errors)
        raise typer.Exit(code=1) from exc
    except (OSError, UnicodeDecodeError) as exc:
        echo_error(f"Unable to read {file}: {exc}")
        raise typer.Exit(code=1) from exc
    ctx.obj = CLIState(config=config, service=service)


def _require_date_range(text: str, param_hint: str) -> Tuple[int, int]:
    bounds = parse_date_range(text)
    if bounds is None:
        raise typer.BadParameter(
            f"{text!r} is not a date range formatted as YYYY-MM-DD|YYYY-MM-DD.",
            param_hint=param_hint,
        )
    return bounds


@app.command("date")
def date_command(
    ctx: typer.Context,
    day: str = typer.Argument(..., metavar="YYYY-MM-DD", help="Day to retrieve."),
) -> None:
    """Print the weather data recorded for a single day."""
    state = _get_state(ctx)
    timestamp = date_to_epoch(day)
    if timestamp is None:
        raise typer.BadParameter(f"{day!r} is not a valid YYYY-MM-DD date.", param_hint="DAY")
    record = state.service.retrieve(timestamp)
    if record is None:
        echo_error(f"Data for date: {day} is not available")
        raise typer.Exit(code=1)
    render_record(record, state.config.indent)


@app.command("range")
def range_command(
    ctx: typer.Context,
    date_range: str = typer.Argument(
        ...,
        metavar="YYYY-MM-DD|YYYY-MM-DD",
        help="Date range; quote it so the shell does not read '|' as a pipe.",
    ),
) -> None:
    """Print the weather data within a date range as a JSON array.

    The first day of the range must be present in the data; when the last day
    is missing, every record after the first day is printed.
    """
    state = _get_state(ctx)
    begin, end = _require_date_range(date_range, "DATE_RANGE")
    render_records(state.service.retrieve_range(begin, end), state.config.indent)


@app.command("mean")
def mean_command(
    ctx: typer.Context,
    first: str = typer.Argument(..., metavar="RANGE|VARIABLE"),
    second: str = typer.Argument(..., metavar="VARIABLE|RANGE"),
) -> None:
    """Print the mean of tmax, tmin, tmean or ppt over a date range.

    The range and the variable may be given in either order. Days missing the
    variable are ignored.
    """
    state = _get_state(ctx)
    bounds = parse_date_range(first)
    range_text, variable_name = first, second
    if bounds is None:
        bounds = parse_date_range(second)
        range_text, variable_name = second, first
    if bounds is None:
        raise typer.BadParameter("One input must be a date range formatted as YYYY-MM-DD|YYYY-MM-DD.")

    try:
        variable = Variable.parse(variable_name)
    except UnrecognizedVariable as exc:
        raise typer.BadParameter(
            f"{exc} Possible variables are: {', '.join(v.value for v in Variable)}."
        ) from exc

    mean = state.service.mean_of(variable, *bounds)
    if math.isnan(mean):
        echo_error(
            f"Could not calculate a mean; data for variable \"{variable.value}\" "
            f"is not present within the time range {range_text}"
        )
        raise typer.Exit(code=1)
    render_mean(mean)


@app.command("sample")
def sample_command(
    ctx: typer.Context,
    first: str = typer.Argument(..., metavar="DATE_RANGE|YEAR_RANGE"),
    second: str = typer.Argument(..., metavar="YEAR_RANGE|DATE_RANGE"),
) -> None:
    """Print a synthetic history for a date range sampled from a year range.

    Each day of YYYY-MM-DD|YYYY-MM-DD takes the data recorded on the same day
    of a randomly chosen year from YYYY|YYYY. Days with no data in any of
    those years are omitted.
    """
    state = _get_state(ctx)
    date_bounds, year_bounds = parse_date_range(first), parse_year_range(second)
    if date_bounds is None or year_bounds is None:
        date_bounds, year_bounds = parse_date_range(second), parse_year_range(first)
    if date_bounds is None or year_bounds is None:
        raise typer.BadParameter(
            "Expected a date range YYYY-MM-DD|YYYY-MM-DD and a year range YYYY|YYYY."
        )

    records = state.service.sample_historical(*date_bounds, *year_bounds)
    render_records(records, state.config.indent)
