"""workcal: working-day calendars.

Builds a year of months and ISO weeks with every day classified as
weekday, weekend or holiday, optionally padded to full Monday-Sunday
rows, and finds the next working day after a date.
"""

from workcal.grid import (
    CalendarDay,
    CalendarMonth,
    CalendarRecord,
    CalendarService,
    CalendarSource,
    CalendarWeek,
    CalendarYearView,
    DayType,
    HolidayRecord,
    build_year,
    classify_day,
    next_workday,
    pad_year,
)
from workcal.holidays import get_holidays, us_holidays
from workcal.store import CalendarStore, StoreError, distinct_by_key

__all__ = [
    "CalendarDay",
    "CalendarMonth",
    "CalendarRecord",
    "CalendarService",
    "CalendarSource",
    "CalendarStore",
    "CalendarWeek",
    "CalendarYearView",
    "DayType",
    "HolidayRecord",
    "StoreError",
    "build_year",
    "classify_day",
    "distinct_by_key",
    "get_holidays",
    "next_workday",
    "pad_year",
    "us_holidays",
]
