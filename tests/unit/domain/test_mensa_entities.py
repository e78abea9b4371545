"""
Tests for Mensa domain entities.

Covers weekday folding of Plan.days() and Plan.day() and Plan.to_dict().
"""
import json
import pytest
from dataclasses import FrozenInstanceError
from datetime import date

from mensa_plan.domain.entities import Day, Mensa, Menu, Place, Plan
from mensa_plan.domain.errors import InvalidDate, MalformedDate
from mensa_plan.domain.value_objects import Price, Weekday


def _menu(name: str = "Pasta", note=None) -> Menu:
    return Menu(
        category="Essen 1",
        name=name,
        price=Price("3,50", "5,90", "7,40", "4,05"),
        note=note,
    )


def _plan(*days: Day) -> Plan:
    return Plan(place=Place(id="610", mensa=Mensa(name="Mensa Rempartstraße"), days=days))


class TestDay:
    """Tests for Day entity."""

    def test_weekday_is_derived_from_date(self):
        day = Day(date="23.05.2023")
        assert day.weekday() is Weekday.TUE
        assert day.to_date() == date(2023, 5, 23)

    def test_weekday_of_malformed_date_raises(self):
        with pytest.raises(MalformedDate):
            Day(date="23/05/2023").weekday()

    def test_weekday_of_invalid_date_raises(self):
        with pytest.raises(InvalidDate):
            Day(date="31.02.2023").weekday()

    def test_defaults_to_no_menues(self):
        assert Day(date="23.05.2023").menues == ()

    def test_is_immutable(self):
        day = Day(date="23.05.2023")
        with pytest.raises(FrozenInstanceError):
            day.date = "24.05.2023"


class TestMenu:
    """Tests for Menu entity."""

    def test_note_is_optional(self):
        assert _menu().note is None
        assert _menu(note="vegan").note == "vegan"


class TestPlan:
    """Tests for Plan aggregate."""

    def test_mensa_name(self):
        assert _plan().mensa_name == "Mensa Rempartstraße"

    def test_days_keyed_by_weekday(self):
        monday = Day(date="22.05.2023", menues=(_menu("A"),))
        tuesday = Day(date="23.05.2023", menues=(_menu("B"),))
        plan = _plan(tuesday, monday)

        days = plan.days()
        assert days == {Weekday.MON: monday, Weekday.TUE: tuesday}

    def test_day_lookup(self):
        tuesday = Day(date="23.05.2023")
        plan = _plan(tuesday)
        assert plan.day(Weekday.TUE) is tuesday
        assert plan.day(Weekday.WED) is None

    def test_unresolvable_days_are_skipped(self):
        good = Day(date="24.05.2023")
        plan = _plan(Day(date="23/05/2023"), Day(date="31.02.2023"), good)

        assert plan.days() == {Weekday.WED: good}

    def test_duplicate_weekday_keeps_last(self):
        first = Day(date="23.05.2023", menues=(_menu("first"),))
        second = Day(date="30.05.2023", menues=(_menu("second"),))
        plan = _plan(first, second)

        assert plan.day(Weekday.TUE) is second

    def test_empty_plan_has_no_days(self):
        assert _plan().days() == {}


class TestPlanToDict:
    """Tests for Plan.to_dict()."""

    def test_nested_data_in_received_order(self):
        plan = _plan(
            Day(date="23.05.2023", menues=(_menu("B", note="vegan"),)),
            Day(date="22.05.2023", menues=(_menu("A"),)),
        )

        data = plan.to_dict()

        assert data["place"]["id"] == "610"
        assert data["place"]["mensa"] == {"name": "Mensa Rempartstraße"}
        assert [day["date"] for day in data["place"]["days"]] == ["23.05.2023", "22.05.2023"]
        assert data["place"]["days"][0]["menues"][0] == {
            "category": "Essen 1",
            "name": "B",
            "price": {
                "price_students": "3,50",
                "price_workers": "5,90",
                "price_guests": "7,40",
                "price_school": "4,05",
            },
            "note": "vegan",
        }

    def test_serializes_to_json(self):
        plan = _plan(Day(date="22.05.2023", menues=(_menu(),)))

        decoded = json.loads(json.dumps(plan.to_dict()))

        assert decoded["place"]["days"][0]["menues"][0]["note"] is None
        assert decoded["place"]["days"][0]["menues"][0]["price"]["price_guests"] == "7,40"
