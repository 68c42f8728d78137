"""In-memory calendar and holiday records.

A :class:`CalendarStore` is a read-only snapshot of the configured
calendars and holidays.  It satisfies :class:`workcal.grid.CalendarSource`
and can be loaded from a JSON document::

    {
      "calendars": [{"country": "uk", "year": 2017}],
      "holidays": [
        {"date": "2017-01-02", "name": "New Year (observed)", "description": "..."}
      ]
    }

Holidays are keyed by date only; they are not scoped to a country or a
calendar.
"""

from __future__ import annotations

import datetime
import json
import logging
import pathlib
from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

from workcal.grid import CalendarRecord, HolidayRecord
from workcal.holidays import get_holidays

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreError(ValueError):
    """Raised when a store document cannot be loaded."""


def distinct_by_key(items: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    """Keep the first item for each key, preserving encounter order."""
    seen: set[Hashable] = set()
    result: list[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        result.append(item)
    return result


class CalendarStore:
    def __init__(
        self,
        calendars: Iterable[CalendarRecord] = (),
        holidays: Iterable[HolidayRecord] = (),
    ):
        self._calendars: list[CalendarRecord] = list(calendars)
        # Later records for the same date replace earlier ones.
        self._holidays: dict[datetime.date, HolidayRecord] = {h.date: h for h in holidays}

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_calendar(self, country: str, year: int) -> CalendarRecord | None:
        for record in self._calendars:
            if record.country == country and record.year == year:
                return record
        logger.debug("Calendar not found: %s, %s", country, year)
        return None

    def find_holiday(self, day: datetime.date) -> HolidayRecord | None:
        return self._holidays.get(day)

    def calendars(self) -> list[CalendarRecord]:
        return list(self._calendars)

    def holidays(self) -> list[HolidayRecord]:
        return sorted(self._holidays.values(), key=lambda h: h.date)

    def unique_country_calendars(self) -> list[CalendarRecord]:
        """One calendar per country: the first one configured."""
        return distinct_by_key(self._calendars, lambda c: c.country)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_preset(cls, country: str, years: Iterable[int]) -> CalendarStore:
        """Build a store from a built-in holiday preset.

        Raises ``KeyError`` if the preset is not supported.
        """
        calendars: list[CalendarRecord] = []
        holidays: list[HolidayRecord] = []
        for year in years:
            holidays.extend(get_holidays(country, year))
            calendars.append(CalendarRecord(country, year))
        return cls(calendars, holidays)

    @classmethod
    def from_dict(cls, data: object) -> CalendarStore:
        if not isinstance(data, dict) or "calendars" not in data:
            raise StoreError("Store document must contain a 'calendars' key.")

        raw_calendars = data["calendars"]
        raw_holidays = data.get("holidays", [])
        if not isinstance(raw_calendars, list):
            raise StoreError("'calendars' must be a list.")
        if not isinstance(raw_holidays, list):
            raise StoreError("'holidays' must be a list.")

        calendars = [_parse_calendar(i, raw) for i, raw in enumerate(raw_calendars)]
        holidays = [_parse_holiday(i, raw) for i, raw in enumerate(raw_holidays)]
        return cls(calendars, holidays)

    @classmethod
    def load(cls, path: str | pathlib.Path) -> CalendarStore:
        p = pathlib.Path(path)
        if not p.exists():
            raise StoreError(f"Store file not found: {path}")

        try:
            data = json.loads(p.read_text())
        except json.JSONDecodeError as exc:
            raise StoreError(f"Invalid JSON in store file: {exc}") from None

        store = cls.from_dict(data)
        logger.info(
            "Loaded %d calendars and %d holidays from %s",
            len(store._calendars),
            len(store._holidays),
            p,
        )
        return store


def _parse_calendar(index: int, raw: object) -> CalendarRecord:
    if not isinstance(raw, dict):
        raise StoreError(f"Calendar #{index + 1} must be an object.")
    country = raw.get("country")
    year = raw.get("year")
    if not isinstance(country, str) or not country:
        raise StoreError(f"Calendar #{index + 1} needs a non-empty 'country'.")
    if not isinstance(year, int) or isinstance(year, bool):
        raise StoreError(f"Calendar #{index + 1} needs an integer 'year'.")
    return CalendarRecord(country, year)


def _parse_holiday(index: int, raw: object) -> HolidayRecord:
    if not isinstance(raw, dict):
        raise StoreError(f"Holiday #{index + 1} must be an object.")
    name = raw.get("name")
    if not isinstance(name, str) or not name:
        raise StoreError(f"Holiday #{index + 1} needs a non-empty 'name'.")
    try:
        day = datetime.date.fromisoformat(raw.get("date", ""))
    except (TypeError, ValueError):
        msg = f"Holiday {name!r} has an invalid date {raw.get('date')!r}. Use YYYY-MM-DD."
        raise StoreError(msg) from None
    return HolidayRecord(day, name, raw.get("description"))
