"""Built-in holiday presets.

Each preset yields the *observed* public holidays of a year as
:class:`~workcal.grid.HolidayRecord`s.  A holiday falling on Saturday is
observed the preceding Friday; one falling on Sunday is observed the
following Monday, and the record's description says so.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable

from workcal.grid import HolidayRecord

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _nth_weekday(year: int, month: int, weekday: int, n: int) -> datetime.date:
    """Return the *n*-th occurrence of *weekday* in *month* of *year*.

    *weekday* follows ``datetime`` convention: 0 = Monday … 6 = Sunday.
    *n* is 1-based.
    """
    first = datetime.date(year, month, 1)
    delta = (weekday - first.weekday()) % 7
    return first + datetime.timedelta(days=delta, weeks=n - 1)


def _last_weekday(year: int, month: int, weekday: int) -> datetime.date:
    """Return the last occurrence of *weekday* in *month* of *year*."""
    if month == 12:
        last = datetime.date(year, 12, 31)
    else:
        last = datetime.date(year, month + 1, 1) - datetime.timedelta(days=1)
    return last - datetime.timedelta(days=(last.weekday() - weekday) % 7)


def _fixed(year: int, month: int, day: int, name: str) -> HolidayRecord:
    """A fixed-date holiday moved to its observed weekday."""
    actual = datetime.date(year, month, day)
    if actual.weekday() == 5:
        observed = actual - datetime.timedelta(days=1)
    elif actual.weekday() == 6:
        observed = actual + datetime.timedelta(days=1)
    else:
        return HolidayRecord(actual, name)
    return HolidayRecord(observed, f"{name} (observed)", f"Falls on {actual.strftime('%A, %B %d')}")


def _floating(day: datetime.date, name: str) -> HolidayRecord:
    return HolidayRecord(day, name)


# ---------------------------------------------------------------------------
# Country presets
# ---------------------------------------------------------------------------

PRESETS: dict[str, str] = {
    "us": "United States federal holidays",
}


def us_holidays(year: int) -> list[HolidayRecord]:
    """US federal holidays (observed) for *year*."""
    return sorted(
        [
            _fixed(year, 1, 1, "New Year's Day"),
            _floating(_nth_weekday(year, 1, 0, 3), "Martin Luther King Jr. Day"),
            _floating(_nth_weekday(year, 2, 0, 3), "Presidents' Day"),
            _floating(_last_weekday(year, 5, 0), "Memorial Day"),
            _fixed(year, 6, 19, "Juneteenth"),
            _fixed(year, 7, 4, "Independence Day"),
            _floating(_nth_weekday(year, 9, 0, 1), "Labor Day"),
            _floating(_nth_weekday(year, 11, 3, 4), "Thanksgiving"),
            _fixed(year, 12, 25, "Christmas Day"),
        ],
        key=lambda h: h.date,
    )


_PRESET_FNS: dict[str, Callable[[int], list[HolidayRecord]]] = {
    "us": us_holidays,
}


def get_holidays(country: str, year: int) -> list[HolidayRecord]:
    """Return the holidays of the given *country* preset for *year*.

    Raises ``KeyError`` if the country is not supported.
    """
    fn = _PRESET_FNS.get(country)
    if fn is None:
        supported = ", ".join(sorted(PRESETS))
        msg = f"Unknown country preset {country!r}. Supported: {supported}"
        raise KeyError(msg)
    return fn(year)
