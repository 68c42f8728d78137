"""Typer CLI for workcal."""

from __future__ import annotations

import datetime
import json
import logging
import sys

import typer

from workcal.grid import CalendarDay, CalendarService, CalendarYearView, format_calendar_year
from workcal.holidays import PRESETS, get_holidays
from workcal.store import CalendarStore, StoreError

app = typer.Typer(
    name="workcal",
    help="Working-day calendars: yearly month/week grids with weekends and "
    "holidays, and next-working-day lookups.",
    add_completion=False,
)


def _parse_date(value: str) -> datetime.date:
    """Parse a YYYY-MM-DD date string."""
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Invalid date format {value!r}. Use YYYY-MM-DD.") from None


def _current_year() -> int:
    return datetime.date.today().year


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code=1)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("workcal").setLevel(logging.DEBUG if verbose else logging.WARNING)


# ---------------------------------------------------------------------------
# Store resolution
# ---------------------------------------------------------------------------

STORE_OPTION = typer.Option(
    None,
    "--store",
    envvar="WORKCAL_STORE",
    help="Path to a JSON store of calendars and holidays.",
)
PRESET_OPTION = typer.Option(
    "us",
    "--preset",
    "-p",
    help=f"Holiday preset used when no store is given ({', '.join(sorted(PRESETS))}).",
)


def _open_store(store: str | None, preset: str, years: list[int]) -> CalendarStore:
    if store is not None:
        try:
            return CalendarStore.load(store)
        except StoreError as exc:
            raise _fail(str(exc)) from None
    try:
        return CalendarStore.from_preset(preset, years)
    except (KeyError, ValueError) as exc:
        raise _fail(str(exc.args[0])) from None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("year")
def year_view(
    country: str = typer.Option(
        "us",
        "--country",
        "-c",
        help="Calendar country.",
    ),
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        help="Calendar year. Defaults to the current year.",
    ),
    padded: bool = typer.Option(
        False,
        "--padded/--unpadded",
        help="Pad every month to complete Monday-Sunday rows.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output the calendar as JSON.",
    ),
    store: str | None = STORE_OPTION,
    preset: str = PRESET_OPTION,
) -> None:
    """Show the calendar grid for a country and year."""
    resolved_year = year if year is not None else _current_year()
    service = CalendarService(_open_store(store, preset, [resolved_year]))

    try:
        if padded:
            view = service.get_padded_calendar_year(country, resolved_year)
        else:
            view = service.get_calendar_year(country, resolved_year)
    except ValueError as exc:
        raise _fail(str(exc)) from None

    if view is None:
        raise _fail(f"No calendar configured for {country!r} {resolved_year}.")

    if output_json:
        json.dump(_serialize_year(view), sys.stdout, indent=2)
        typer.echo()
    else:
        typer.echo(format_calendar_year(view))


@app.command("next-workday")
def next_workday(
    date: str = typer.Argument(..., help="Start date (YYYY-MM-DD)."),
    store: str | None = STORE_OPTION,
    preset: str = PRESET_OPTION,
) -> None:
    """Print the first working day after DATE."""
    start = _parse_date(date)
    # The search may run into the next year's holidays.
    years = [start.year, min(start.year + 1, datetime.MAXYEAR)]
    service = CalendarService(_open_store(store, preset, years))
    try:
        result = service.get_next_work_day(start)
    except OverflowError:
        msg = f"No working day after {start.isoformat()} before {datetime.date.max}."
        raise _fail(msg) from None
    typer.echo(result.isoformat())


@app.command()
def countries(
    store: str | None = STORE_OPTION,
    preset: str = PRESET_OPTION,
) -> None:
    """List configured countries, one calendar each."""
    calendar_store = _open_store(store, preset, [_current_year()])
    for record in calendar_store.unique_country_calendars():
        typer.echo(f"  {record.country:<8} {record.year}")


@app.command()
def calendars(
    store: str | None = STORE_OPTION,
    preset: str = PRESET_OPTION,
) -> None:
    """List every configured calendar."""
    calendar_store = _open_store(store, preset, [_current_year()])
    for record in calendar_store.calendars():
        typer.echo(f"  {record.country:<8} {record.year}")


@app.command()
def holidays(
    country: str = typer.Option(
        "us",
        "--country",
        "-c",
        help=f"Country preset ({', '.join(sorted(PRESETS))}).",
    ),
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        help="Year to list holidays for. Defaults to the current year.",
    ),
    store: str | None = STORE_OPTION,
) -> None:
    """List holidays for a country preset, or every holiday in a store."""
    if store is not None:
        records = _open_store(store, country, []).holidays()
        if year is not None:
            records = [h for h in records if h.date.year == year]
        for h in records:
            typer.echo(f"    {h.date.strftime('%a, %b %d %Y'):>17}  {h.name}")
        return

    resolved_year = year if year is not None else _current_year()

    try:
        preset = get_holidays(country, resolved_year)
    except KeyError as exc:
        raise _fail(exc.args[0]) from None

    typer.echo(f"  {PRESETS[country]}, {resolved_year}")
    typer.echo()
    for h in preset:
        typer.echo(f"    {h.date.strftime('%a, %b %d'):>12}  {h.name}")


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------

_DAY_NAMES = ("MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY")


def _serialize_day(day: CalendarDay) -> dict[str, object]:
    return {
        "date": day.date.isoformat(),
        "day_of_week": _DAY_NAMES[day.day_of_week],
        "day_type": day.day_type.value,
        "holiday_name": day.holiday_name,
        "description": day.description,
    }


def _serialize_year(view: CalendarYearView) -> dict[str, object]:
    return {
        "country": view.country,
        "year": view.year,
        "months": [
            {
                "month": m.month,
                "weeks": [
                    {
                        "ordinal": w.ordinal,
                        "days": [_serialize_day(d) for d in w.days],
                    }
                    for w in m.weeks
                ],
            }
            for m in view.months
        ],
    }


def main() -> None:
    """Entry point for the CLI."""
    app()
