"""Calendar grid builder.

Turns a ``(country, year)`` pair and a holiday lookup into a nested
month -> week -> day structure, and finds the next working day after a
given date.

Rules:
  * Saturday and Sunday are weekend days.  Weekend status dominates holiday
    status: a holiday falling on a weekend is reported as ``WEEKEND`` and
    its name is not attached.
  * Weeks are ISO-8601 weeks (Monday start, week 1 holds the first
    Thursday) but never cross a month boundary.
  * Padding extends each month's first and last week with ``PADDED`` days
    so every month spans complete Monday-Sunday rows.
"""

from __future__ import annotations

import calendar
import datetime
import enum
import logging
from collections.abc import Callable
from typing import NamedTuple, Protocol

logger = logging.getLogger(__name__)

ONE_DAY = datetime.timedelta(days=1)
MONDAY = 0
SUNDAY = 6

# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


class DayType(str, enum.Enum):
    WEEKDAY = "WEEKDAY"
    WEEKEND = "WEEKEND"
    HOLIDAY = "HOLIDAY"
    PADDED = "PADDED"


class CalendarRecord(NamedTuple):
    """A configured calendar: which country and year a request targets."""

    country: str
    year: int


class HolidayRecord(NamedTuple):
    """A named holiday.  Looked up by date alone."""

    date: datetime.date
    name: str
    description: str | None = None


class CalendarDay(NamedTuple):
    """One classified day.

    ``day_of_week`` follows ``datetime`` convention: 0 = Monday … 6 = Sunday.
    """

    date: datetime.date
    day_of_week: int
    day_type: DayType
    holiday_name: str | None = None
    description: str | None = None


class CalendarWeek(NamedTuple):
    """A run of days from one ISO week, all within the same month."""

    ordinal: int
    days: list[CalendarDay]


class CalendarMonth(NamedTuple):
    month: int
    weeks: list[CalendarWeek]

    def days(self) -> list[CalendarDay]:
        return [d for w in self.weeks for d in w.days]


class CalendarYearView(NamedTuple):
    """Twelve months, January to December, for one calendar."""

    country: str
    year: int
    months: list[CalendarMonth]

    def days(self) -> list[CalendarDay]:
        return [d for m in self.months for d in m.days()]


HolidayLookup = Callable[[datetime.date], HolidayRecord | None]
"""Signature: find_holiday(date) -> matching holiday record or None."""


class CalendarSource(Protocol):
    """Read access to configured calendars and holidays."""

    def find_calendar(self, country: str, year: int) -> CalendarRecord | None: ...

    def find_holiday(self, day: datetime.date) -> HolidayRecord | None: ...


# ---------------------------------------------------------------------------
# Day classification
# ---------------------------------------------------------------------------


def is_weekend(day: datetime.date) -> bool:
    return day.weekday() >= 5


def iso_week(day: datetime.date) -> int:
    return day.isocalendar()[1]


def classify_day(day: datetime.date, find_holiday: HolidayLookup) -> CalendarDay:
    """Classify *day* as weekend, holiday or plain weekday.

    Weekends win over holidays; a weekend holiday keeps no name.
    """
    weekday = day.weekday()
    if is_weekend(day):
        return CalendarDay(day, weekday, DayType.WEEKEND)

    holiday = find_holiday(day)
    if holiday is not None:
        return CalendarDay(day, weekday, DayType.HOLIDAY, holiday.name, holiday.description)
    return CalendarDay(day, weekday, DayType.WEEKDAY)


# ---------------------------------------------------------------------------
# Weeks, months, years
# ---------------------------------------------------------------------------


def build_week(
    start: datetime.date,
    month: int,
    find_holiday: HolidayLookup,
) -> tuple[CalendarWeek, datetime.date | None]:
    """Collect days from *start* until the ISO week or the month changes.

    Returns the week and the first date it did not consume, or ``None``
    when the week ends on the last representable date.
    """
    ordinal = iso_week(start)
    days: list[CalendarDay] = []

    current = start
    while True:
        days.append(classify_day(current, find_holiday))
        if current == datetime.date.max:
            return CalendarWeek(ordinal, days), None
        current += ONE_DAY
        if iso_week(current) != ordinal or current.month != month:
            break

    return CalendarWeek(ordinal, days), current


def build_month(year: int, month: int, find_holiday: HolidayLookup) -> CalendarMonth:
    weeks: list[CalendarWeek] = []

    cursor: datetime.date | None = datetime.date(year, month, 1)
    while cursor is not None and cursor.month == month:
        week, cursor = build_week(cursor, month, find_holiday)
        weeks.append(week)

    return CalendarMonth(month, weeks)


def _check_year(country: str, year: int) -> None:
    if not country:
        raise ValueError("country must be a non-empty string")
    if not datetime.MINYEAR <= year <= datetime.MAXYEAR:
        msg = f"year must be between {datetime.MINYEAR} and {datetime.MAXYEAR}; got {year}"
        raise ValueError(msg)


def build_year(record: CalendarRecord, find_holiday: HolidayLookup) -> CalendarYearView:
    """Build the unpadded view: 12 months, each split into ISO weeks."""
    _check_year(record.country, record.year)
    months = [build_month(record.year, month, find_holiday) for month in range(1, 13)]
    return CalendarYearView(record.country, record.year, months)


# ---------------------------------------------------------------------------
# Padding
# ---------------------------------------------------------------------------


def _padded_day(day: datetime.date) -> CalendarDay:
    return CalendarDay(day, day.weekday(), DayType.PADDED)


def pad_month(month: CalendarMonth, year: int) -> CalendarMonth:
    """Return *month* with its first week starting Monday and its last
    week ending Sunday.

    Boundary days from the neighbouring months are always ``PADDED``,
    whatever their weekend or holiday status would be.
    """
    if not month.weeks:
        return month

    leading: list[CalendarDay] = []
    edge = datetime.date(year, month.month, 1)
    while edge.weekday() != MONDAY:
        edge -= ONE_DAY
        leading.insert(0, _padded_day(edge))

    trailing: list[CalendarDay] = []
    last_week = month.weeks[-1]
    edge = last_week.days[-1].date
    while edge.weekday() != SUNDAY:
        if edge == datetime.date.max:
            raise ValueError(f"cannot pad {year}-{month.month:02d} past {edge.isoformat()}")
        edge += ONE_DAY
        trailing.append(_padded_day(edge))

    weeks = list(month.weeks)
    if len(weeks) == 1:
        only = weeks[0]
        weeks[0] = only._replace(days=leading + only.days + trailing)
    else:
        weeks[0] = weeks[0]._replace(days=leading + weeks[0].days)
        weeks[-1] = last_week._replace(days=last_week.days + trailing)

    return month._replace(weeks=weeks)


def pad_year(view: CalendarYearView) -> CalendarYearView:
    return view._replace(months=[pad_month(m, view.year) for m in view.months])


# ---------------------------------------------------------------------------
# Next working day
# ---------------------------------------------------------------------------


def next_workday(day: datetime.date, find_holiday: HolidayLookup) -> datetime.date:
    """Return the first date after *day* that is neither a weekend nor a holiday."""
    candidate = day + ONE_DAY
    while is_weekend(candidate) or find_holiday(candidate) is not None:
        candidate += ONE_DAY
    return candidate


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class CalendarService:
    """Answers calendar queries against a :class:`CalendarSource`.

    Holds no state between calls; every view is built fresh.
    """

    def __init__(self, source: CalendarSource):
        self.source = source

    def get_calendar_year(self, country: str, year: int) -> CalendarYearView | None:
        logger.debug("Request to get year: %s, %s", country, year)
        _check_year(country, year)

        record = self.source.find_calendar(country, year)
        if record is None:
            logger.debug("No calendar configured for %s, %s", country, year)
            return None
        return build_year(CalendarRecord(country, record.year), self.source.find_holiday)

    def get_padded_calendar_year(self, country: str, year: int) -> CalendarYearView | None:
        logger.debug("Request to get padded year: %s, %s", country, year)
        view = self.get_calendar_year(country, year)
        if view is None:
            return None
        return pad_year(view)

    def get_next_work_day(self, day: datetime.date) -> datetime.date:
        logger.debug("Request to get next work day: %s", day)
        return next_workday(day, self.source.find_holiday)


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------

_MARKERS = {
    DayType.WEEKDAY: " ",
    DayType.WEEKEND: "W",
    DayType.HOLIDAY: "H",
    DayType.PADDED: ".",
}


def format_calendar_year(view: CalendarYearView) -> str:
    """Return a month-by-month grid of *view*, one row per week."""
    lines: list[str] = [
        "",
        f"  Calendar {view.country} {view.year}",
        "  Legend: W=Weekend  H=Holiday  .=Padding",
        "",
    ]

    for month in view.months:
        lines.append(f"  {calendar.month_name[month.month]} {view.year}")
        lines.append("  Wk  Mo  Tu  We  Th  Fr  Sa  Su")

        for week in month.weeks:
            cells = ["    "] * 7
            for day in week.days:
                cells[day.day_of_week] = f" {day.date.day:>2}{_MARKERS[day.day_type]}"
            lines.append(f"  {week.ordinal:>2} " + "".join(cells).rstrip())

        for day in month.days():
            if day.day_type is DayType.HOLIDAY:
                lines.append(f"    {day.date.strftime('%a, %b %d'):>12}  {day.holiday_name}")
        lines.append("")

    return "\n".join(lines)
