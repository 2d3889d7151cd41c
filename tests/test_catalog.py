"""
Unit tests — facility catalog (wizard/catalog.py).

Covers the calendar helpers, per-session availability and the generated
pickup schedule. Random availability is driven by seeded generators, so
every assertion here is deterministic.
"""
from __future__ import annotations

import random
from datetime import date

import pytest

from pitchbot.wizard import catalog

TODAY = date(2025, 6, 18)   # a Wednesday


class TestCalendar:
    def test_booking_years(self) -> None:
        assert [o.value for o in catalog.booking_years(TODAY)] == ["2025", "2026"]

    def test_months_of_current_year_start_now(self) -> None:
        months = catalog.available_months("2025", TODAY)
        assert months[0].value == "6"
        assert len(months) == 7

    def test_months_of_next_year_are_all_open(self) -> None:
        assert len(catalog.available_months("2026", TODAY)) == 12

    def test_past_year_has_no_months(self) -> None:
        assert catalog.available_months("2024", TODAY) == []

    def test_current_month_skips_past_days(self) -> None:
        days = catalog.available_days("6", "2025", TODAY)
        assert days[0] == 18
        assert days[-1] == 30

    def test_past_month_has_no_days(self) -> None:
        assert catalog.available_days("5", "2025", TODAY) == []

    def test_leap_february(self) -> None:
        assert catalog.available_days("2", "2028", TODAY)[-1] == 29

    def test_no_month_no_days(self) -> None:
        assert catalog.available_days("", "2025", TODAY) == []

    @pytest.mark.parametrize("month, day, year", [("2", "30", "2025"), ("", "1", "2025"), ("13", "1", "2025")])
    def test_impossible_dates(self, month: str, day: str, year: str) -> None:
        assert catalog.parse_booking_date(month, day, year) is None

    def test_parse_date(self) -> None:
        assert catalog.parse_booking_date("7", "15", "2025") == date(2025, 7, 15)

    @pytest.mark.parametrize("hour, label", [(8, "8:00 AM"), (12, "12:00 PM"), (17, "5:00 PM"), (20, "8:00 PM")])
    def test_format_hour(self, hour: int, label: str) -> None:
        assert catalog.format_hour(hour) == label


class TestFieldSlots:
    def test_slots_cover_8am_to_8pm(self) -> None:
        slots = catalog.field_time_slots(random.Random(1))
        assert [s.hour for s in slots] == list(range(8, 21))

    def test_peak_pricing(self) -> None:
        slots = {s.hour: s for s in catalog.field_time_slots(random.Random(1))}
        assert slots[16].price == catalog.OFF_PEAK_PRICE
        assert all(slots[h].price == catalog.PEAK_PRICE for h in (17, 18, 19, 20))

    def test_same_seed_same_availability(self) -> None:
        a = catalog.field_time_slots(random.Random("token:field-slots"))
        b = catalog.field_time_slots(random.Random("token:field-slots"))
        assert a == b


class TestCampWeeks:
    def test_upcoming_summer_before_june(self) -> None:
        weeks = catalog.camp_weeks(date(2025, 3, 1))
        assert weeks[0].start == date(2025, 6, 9)       # first Monday on/after June 8
        assert weeks[0].start.weekday() == 0

    def test_next_summer_from_june(self) -> None:
        weeks = catalog.camp_weeks(TODAY)
        assert weeks[0].start.year == 2026

    def test_week_three_is_full(self) -> None:
        weeks = catalog.camp_weeks(TODAY)
        assert [w.available for w in weeks] == [True, True, False, True]
        assert [w.id for w in weeks] == ["week1", "week2", "week3", "week4"]


class TestPickupGames:
    def test_schedule_covers_two_weeks(self) -> None:
        games = catalog.pickup_games(TODAY, random.Random(7))
        assert min(g.day for g in games) == TODAY
        assert max(g.day for g in games) <= date(2025, 7, 1)

    def test_spots_available_within_capacity(self) -> None:
        for g in catalog.pickup_games(TODAY, random.Random(7)):
            assert 1 <= g.spots_available <= g.spots_total

    def test_weekend_mornings(self) -> None:
        games = catalog.pickup_games(TODAY, random.Random(7))
        saturday = [g for g in games if g.day == date(2025, 6, 21)]
        assert any(g.id.endswith("-3") for g in saturday)

    def test_week_filter(self) -> None:
        games = catalog.pickup_games(TODAY, random.Random(7))
        this_week = catalog.games_in_week(games, 0, TODAY)
        assert this_week
        assert all(date(2025, 6, 16) <= g.day <= date(2025, 6, 22) for g in this_week)


class TestLookups:
    def test_find_helpers(self) -> None:
        assert catalog.find_field("field-3").capacity == "9v9"
        assert catalog.find_package("deluxe").price == 400
        assert catalog.find_camp("elite").price == 499
        assert catalog.find_training("individual").price == 75
        assert catalog.find_field("nope") is None

    @pytest.mark.parametrize("category, league, gender, expected", [
        ("Adult", "Coed", "",       "Adult Coed"),
        ("Youth", "U12",  "Female", "Youth U12 Girls"),
        ("Youth", "U10",  "Male",   "Youth U10 Boys"),
    ])
    def test_league_display_name(self, category: str, league: str, gender: str, expected: str) -> None:
        assert catalog.league_display_name(category, league, gender) == expected
