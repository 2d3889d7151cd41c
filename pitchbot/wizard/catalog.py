"""
Facility catalog — everything a customer can pick from in the booking flows.

Static offerings (fields, party packages, camps, training programmes,
leagues) live here as constants. Options that depend on the calendar or on
availability are derived by functions: valid booking days, per-session
random time-slot availability and the generated pickup-game schedule.

Availability is not a scheduling engine: it is drawn from a random
generator seeded by the wizard session, so it is stable while one customer
is booking and differs between sessions.
"""
from __future__ import annotations

import calendar
import random
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, NamedTuple, Optional


class Option(NamedTuple):
    value: str
    label: str


# ─────────────────────────── Calendar ─────────────────────────────────────────

MONTHS: List[Option] = [
    Option(str(i), calendar.month_name[i]) for i in range(1, 13)
]


def booking_years(today: date) -> List[Option]:
    """Bookings are accepted for the current and the next calendar year."""
    return [Option(str(y), str(y)) for y in (today.year, today.year + 1)]


def available_months(year: str, today: date) -> List[Option]:
    """Months of `year` that still have bookable days."""
    selected_year = int(year) if year else today.year
    if selected_year < today.year:
        return []
    if selected_year == today.year:
        return [m for m in MONTHS if int(m.value) >= today.month]
    return list(MONTHS)


def days_in_month(month: str, year: str) -> int:
    if not month or not year:
        return 31
    return calendar.monthrange(int(year), int(month))[1]


def available_days(month: str, year: str, today: date) -> List[int]:
    """
    Days that can be booked in the selected month.
    Past days of the current month are excluded; an unset year means this year.
    """
    if not month:
        return []
    selected_year = int(year) if year else today.year
    selected_month = int(month)
    if (selected_year, selected_month) < (today.year, today.month):
        return []

    all_days = range(1, days_in_month(month, str(selected_year)) + 1)
    if (selected_year, selected_month) == (today.year, today.month):
        return [d for d in all_days if d >= today.day]
    return list(all_days)


def parse_booking_date(month: str, day: str, year: str) -> Optional[date]:
    """Build a date from the three picker values; None when they do not form one."""
    try:
        return date(int(year), int(month), int(day))
    except (TypeError, ValueError):
        return None


def format_hour(hour: int) -> str:
    display = hour - 12 if hour > 12 else hour
    suffix = "PM" if hour >= 12 else "AM"
    return f"{display}:00 {suffix}"


# ─────────────────────────── Field rental ─────────────────────────────────────

@dataclass(frozen=True)
class PitchField:
    id: str
    name: str
    size: str
    capacity: str
    surface: str

    @property
    def label(self) -> str:
        return f"{self.name} · {self.capacity} · {self.size}"


FIELDS: List[PitchField] = [
    PitchField("field-1", "Field 1", "40x60", "5v5", "Turf"),
    PitchField("field-2", "Field 2", "50x80", "7v7", "Turf"),
    PitchField("field-3", "Field 3", "60x100", "9v9", "Turf"),
]

PEAK_HOURS = range(17, 21)
PEAK_PRICE = 150
OFF_PEAK_PRICE = 100

RENTAL_DURATIONS: List[Option] = [Option(str(h), f"{h} hr") for h in (1, 2, 3)]


@dataclass(frozen=True)
class TimeSlot:
    id: str
    label: str
    hour: int
    price: int
    available: bool


def field_time_slots(rng: random.Random) -> List[TimeSlot]:
    """Hourly slots 8 AM – 8 PM; roughly 70% are free in a given session."""
    slots = []
    for hour in range(8, 21):
        slots.append(TimeSlot(
            id=f"slot-{hour}",
            label=format_hour(hour),
            hour=hour,
            price=PEAK_PRICE if hour in PEAK_HOURS else OFF_PEAK_PRICE,
            available=rng.random() > 0.3,
        ))
    return slots


def find_field(field_id: str) -> Optional[PitchField]:
    return next((f for f in FIELDS if f.id == field_id), None)


# ─────────────────────────── Birthday parties ─────────────────────────────────

@dataclass(frozen=True)
class PartyPackage:
    id: str
    name: str
    price: int
    duration: str
    max_guests: int
    description: str


BIRTHDAY_PACKAGES: List[PartyPackage] = [
    PartyPackage("basic",    "Basic Party",    250, "2 hours", 15, "Perfect for smaller celebrations"),
    PartyPackage("deluxe",   "Deluxe Party",   400, "3 hours", 25, "Our most popular package"),
    PartyPackage("ultimate", "Ultimate Party", 600, "4 hours", 35, "The complete celebration experience"),
]

BIRTHDAY_TIME_SLOTS: List[TimeSlot] = [
    TimeSlot(str(i), format_hour(hour), hour, 0, available)
    for i, (hour, available) in enumerate(
        [(10, True), (11, True), (12, False), (13, True),
         (14, True), (15, False), (16, True), (17, True)],
        start=1,
    )
]

CAKE_OPTIONS: List[Option] = [
    Option("chocolate", "Chocolate Cake"),
    Option("vanilla",   "Vanilla Cake"),
    Option("custom",    "Custom Design"),
    Option("none",      "No Cake (I'll bring my own)"),
]

GUEST_COUNTS: List[Option] = [Option(str(n), str(n)) for n in (5, 10, 15, 20, 25, 30, 35)]


def find_package(package_id: str) -> Optional[PartyPackage]:
    return next((p for p in BIRTHDAY_PACKAGES if p.id == package_id), None)


# ─────────────────────────── Camps ────────────────────────────────────────────

@dataclass(frozen=True)
class CampOption:
    id: str
    name: str
    description: str
    duration: str
    age_range: str
    price: int


CAMP_OPTIONS: List[CampOption] = [
    CampOption("summer-intensive", "Summer Intensive",    "Full-day camp focused on skill development",    "5 days", "8-14",  399),
    CampOption("goalkeeper",       "Goalkeeper Academy",  "Specialized training for aspiring goalkeepers", "3 days", "10-16", 299),
    CampOption("elite",            "Elite Development",   "Advanced camp for competitive players",         "5 days", "12-17", 499),
]


@dataclass(frozen=True)
class CampWeek:
    id: str
    label: str
    start: date
    available: bool


# Index of the camp week that is sold out this season
_FULL_WEEK = 3


def camp_weeks(today: date) -> List[CampWeek]:
    """
    Four Monday–Friday camp weeks of the coming summer, starting with the
    first Monday on or after June 8.
    """
    season = today.year if today.month < 6 else today.year + 1
    first = date(season, 6, 8)
    first += timedelta(days=(7 - first.weekday()) % 7)

    weeks = []
    for n in range(1, 5):
        start = first + timedelta(weeks=n - 1)
        end = start + timedelta(days=4)
        if start.month == end.month:
            span = f"{start:%B} {start.day}-{end.day}"
        else:
            span = f"{start:%B} {start.day} - {end:%B} {end.day}"
        weeks.append(CampWeek(
            id=f"week{n}",
            label=f"Week {n}: {span}, {season}",
            start=start,
            available=n != _FULL_WEEK,
        ))
    return weeks


TSHIRT_SIZES: List[Option] = [
    Option(s, s) for s in ("Youth S", "Youth M", "Youth L", "Adult S", "Adult M", "Adult L", "Adult XL")
]

CAMPER_GENDERS: List[Option] = [Option("male", "Male"), Option("female", "Female")]


def find_camp(camp_id: str) -> Optional[CampOption]:
    return next((c for c in CAMP_OPTIONS if c.id == camp_id), None)


# ─────────────────────────── Training ─────────────────────────────────────────

@dataclass(frozen=True)
class TrainingType:
    value: str
    label: str
    description: str
    price: int


TRAINING_TYPES: List[TrainingType] = [
    TrainingType("individual",        "Individual Training",  "1-on-1 personalized sessions",           75),
    TrainingType("small-group",       "Small Group Training", "Groups of 2-4 players",                  50),
    TrainingType("position-specific", "Position-Specific",    "Goalkeeper, striker, defender training", 60),
]

SKILL_LEVELS: List[Option] = [
    Option("beginner",     "Beginner"),
    Option("intermediate", "Intermediate"),
    Option("advanced",     "Advanced"),
]

FOCUS_AREAS: List[Option] = [
    Option("ball-control", "Ball Control"),
    Option("shooting",     "Shooting"),
    Option("passing",      "Passing"),
    Option("dribbling",    "Dribbling"),
    Option("defense",      "Defense"),
    Option("fitness",      "Fitness"),
]

WEEKDAYS: List[Option] = [
    Option(calendar.day_name[i].lower(), calendar.day_name[i]) for i in range(7)
]

TRAINING_TIMES: List[Option] = [
    Option("morning",   "Morning (8AM - 12PM)"),
    Option("afternoon", "Afternoon (12PM - 5PM)"),
    Option("evening",   "Evening (5PM - 8PM)"),
]


def find_training(value: str) -> Optional[TrainingType]:
    return next((t for t in TRAINING_TYPES if t.value == value), None)


# ─────────────────────────── Leagues ──────────────────────────────────────────

LEAGUE_FEE = 150

LEAGUE_CATEGORIES: List[Option] = [Option("Adult", "Adult"), Option("Youth", "Youth")]
ADULT_LEAGUES: List[str] = ["Men", "Women", "Coed", "Over 40", "Over 50"]
YOUTH_LEAGUES: List[str] = ["U8", "U10", "U12", "U14", "U16", "U18"]
YOUTH_GENDERS: List[Option] = [Option("Male", "Boys"), Option("Female", "Girls")]

EXPERIENCE_LEVELS: List[Option] = [
    Option("beginner",     "Beginner"),
    Option("intermediate", "Intermediate"),
    Option("advanced",     "Advanced"),
]

LEAGUE_DAYS: List[Option] = [
    Option("weekday-evening", "Weekday Evenings"),
    Option("friday",          "Friday Nights"),
    Option("saturday",        "Saturday"),
    Option("sunday",          "Sunday"),
]


def league_display_name(category: str, league: str, youth_gender: str) -> str:
    if category == "Youth" and youth_gender:
        gender = next((g.label for g in YOUTH_GENDERS if g.value == youth_gender), youth_gender)
        return f"Youth {league} {gender}"
    return f"{category} {league}".strip()


# ─────────────────────────── Pickup games ─────────────────────────────────────

@dataclass(frozen=True)
class PickupGame:
    id: str
    day: date
    time: str
    location: str
    format: str
    spots_total: int
    spots_available: int
    skill_level: str
    price_per_player: int

    @property
    def label(self) -> str:
        return f"{self.day:%a %b} {self.day.day} · {self.time.split(' - ')[0]} · {self.format}"


MAX_SPOTS_PER_BOOKING = 4


def pickup_games(today: date, rng: random.Random) -> List[PickupGame]:
    """Two weeks of pickup games: evening 7v7 / 5v5 runs plus weekend mornings."""
    games = []
    for offset in range(14):
        day = today + timedelta(days=offset)

        if offset % 2 == 0:
            games.append(PickupGame(
                id=f"game-{offset}-1",
                day=day,
                time="6:00 PM - 7:30 PM",
                location="Central Sports Complex",
                format="7v7",
                spots_total=14,
                spots_available=rng.randint(3, 10),
                skill_level=rng.choice(["Beginner", "Intermediate", "Advanced"]),
                price_per_player=15,
            ))

        if offset % 3 == 0:
            games.append(PickupGame(
                id=f"game-{offset}-2",
                day=day,
                time="7:30 PM - 9:00 PM",
                location="Central Sports Complex" if offset % 2 == 0 else "Riverside Fields",
                format="5v5",
                spots_total=10,
                spots_available=rng.randint(2, 7),
                skill_level=rng.choice(["Intermediate", "Advanced", "All Levels"]),
                price_per_player=18,
            ))

        if day.weekday() in (5, 6):
            games.append(PickupGame(
                id=f"game-{offset}-3",
                day=day,
                time="10:00 AM - 11:30 AM",
                location="Riverside Fields",
                format="7v7",
                spots_total=14,
                spots_available=rng.randint(4, 13),
                skill_level="All Levels",
                price_per_player=15,
            ))
    return games


def week_bounds(week_offset: int, today: date) -> tuple[date, date]:
    """Monday and Sunday of the week `week_offset` weeks from the current one."""
    monday = today - timedelta(days=today.weekday()) + timedelta(weeks=week_offset)
    return monday, monday + timedelta(days=6)


def games_in_week(games: List[PickupGame], week_offset: int, today: date) -> List[PickupGame]:
    start, end = week_bounds(week_offset, today)
    return [g for g in games if start <= g.day <= end]


PICKUP_WEEKS: List[Option] = [Option("0", "This week"), Option("1", "Next week"), Option("2", "In two weeks")]
