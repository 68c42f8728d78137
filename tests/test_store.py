from __future__ import annotations

import datetime
import json

import pytest

from workcal.grid import CalendarRecord, HolidayRecord
from workcal.store import CalendarStore, StoreError, distinct_by_key


def _make_store() -> CalendarStore:
    return CalendarStore(
        calendars=[
            CalendarRecord("uk", 2017),
            CalendarRecord("fr", 2017),
            CalendarRecord("uk", 2018),
            CalendarRecord("de", 2018),
            CalendarRecord("fr", 2018),
        ],
        holidays=[
            HolidayRecord(datetime.date(2017, 12, 25), "Christmas Day"),
            HolidayRecord(datetime.date(2017, 1, 2), "New Year (observed)", "Bank holiday"),
        ],
    )


class TestDistinctByKey:
    def test_first_occurrence_wins(self) -> None:
        items = [("a", 1), ("b", 2), ("a", 3), ("c", 4), ("b", 5)]
        assert distinct_by_key(items, lambda i: i[0]) == [("a", 1), ("b", 2), ("c", 4)]

    def test_empty(self) -> None:
        assert distinct_by_key([], lambda i: i) == []


class TestLookups:
    def test_find_calendar(self) -> None:
        store = _make_store()
        assert store.find_calendar("uk", 2018) == CalendarRecord("uk", 2018)
        assert store.find_calendar("uk", 2019) is None
        assert store.find_calendar("es", 2017) is None

    def test_find_holiday_by_date_only(self) -> None:
        store = _make_store()
        holiday = store.find_holiday(datetime.date(2017, 1, 2))
        assert holiday is not None
        assert holiday.name == "New Year (observed)"
        assert store.find_holiday(datetime.date(2017, 1, 3)) is None

    def test_holidays_sorted_by_date(self) -> None:
        dates = [h.date for h in _make_store().holidays()]
        assert dates == [datetime.date(2017, 1, 2), datetime.date(2017, 12, 25)]

    def test_unique_country_calendars(self) -> None:
        unique = _make_store().unique_country_calendars()
        assert unique == [
            CalendarRecord("uk", 2017),
            CalendarRecord("fr", 2017),
            CalendarRecord("de", 2018),
        ]

    def test_calendars_returns_copy(self) -> None:
        store = _make_store()
        store.calendars().clear()
        assert len(store.calendars()) == 5


class TestFromPreset:
    def test_one_calendar_per_year(self) -> None:
        store = CalendarStore.from_preset("us", [2025, 2026])
        assert store.calendars() == [CalendarRecord("us", 2025), CalendarRecord("us", 2026)]
        assert len(store.holidays()) == 18
        assert store.find_holiday(datetime.date(2025, 12, 25)) is not None

    def test_unknown_preset(self) -> None:
        with pytest.raises(KeyError):
            CalendarStore.from_preset("zz", [2025])


class TestLoad:
    def test_load_round_trip(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        path.write_text(
            json.dumps(
                {
                    "calendars": [{"country": "uk", "year": 2017}],
                    "holidays": [{"date": "2017-01-02", "name": "New Year (observed)"}],
                }
            )
        )
        store = CalendarStore.load(path)
        assert store.calendars() == [CalendarRecord("uk", 2017)]
        assert store.find_holiday(datetime.date(2017, 1, 2)) == HolidayRecord(
            datetime.date(2017, 1, 2), "New Year (observed)", None
        )

    def test_holidays_optional(self) -> None:
        store = CalendarStore.from_dict({"calendars": []})
        assert store.holidays() == []

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(StoreError, match="not found"):
            CalendarStore.load(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{nope")
        with pytest.raises(StoreError, match="Invalid JSON"):
            CalendarStore.load(path)

    @pytest.mark.parametrize(
        ("data", "message"),
        [
            ([], "'calendars' key"),
            ({"calendars": {}}, "must be a list"),
            ({"calendars": [], "holidays": "x"}, "must be a list"),
            ({"calendars": ["uk"]}, "must be an object"),
            ({"calendars": [{"country": "", "year": 2017}]}, "country"),
            ({"calendars": [{"country": "uk", "year": "2017"}]}, "integer 'year'"),
            ({"calendars": [], "holidays": [{"date": "2017-01-02"}]}, "'name'"),
            ({"calendars": [], "holidays": [{"date": "02/01/2017", "name": "x"}]}, "invalid date"),
            ({"calendars": [], "holidays": [{"name": "x"}]}, "invalid date"),
        ],
    )
    def test_invalid_documents(self, data: object, message: str) -> None:
        with pytest.raises(StoreError, match=message):
            CalendarStore.from_dict(data)

    def test_store_error_is_value_error(self) -> None:
        assert issubclass(StoreError, ValueError)
