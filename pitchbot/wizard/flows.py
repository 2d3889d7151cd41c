"""
The six booking flows offered by the facility.

Each flow supplies only what differs between services: its steps, its form
model, the payload groups sent to the Booking API and the summary shown on
review and confirmation. Step progression, validation and submission are
shared (see `machine.py` and `coordinator.py`).

Payload layout (all flows):
    service_type  : ServiceType value
    selection     : what was booked (field/league/game/programme/camp/package + date/time)
    participants  : party / player / camper / team details
    contact       : who booked it
    payment       : simulated card details
    total_price   : whole dollars
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pitchbot.wizard import catalog
from pitchbot.wizard.catalog import Option
from pitchbot.wizard.forms import (
    BirthdayForm,
    BookingForm,
    CampForm,
    FieldRentalForm,
    LeagueForm,
    PickupForm,
    TrainingForm,
)
from pitchbot.wizard.steps import (
    BookingSummary,
    FieldInput,
    FlowContext,
    InputKind,
    ServiceFlowConfig,
    ServiceType,
    StepDefinition,
    StepKind,
)
from pitchbot.wizard.validators import PAYMENT_FIELDS

CHOICE = InputKind.CHOICE
MULTI = InputKind.MULTI


# ─────────────────────────── Shared pieces ────────────────────────────────────

def _static(options: List[Option]):
    return lambda form, ctx: list(options)


def _payment_step(number: int) -> StepDefinition:
    return StepDefinition(
        number=number,
        label="Payment",
        kind=StepKind.PAYMENT,
        required_fields=PAYMENT_FIELDS,
        inputs=(
            FieldInput("card_number", "Card number"),
            FieldInput("card_expiry", "Expiry (MM/YY)"),
            FieldInput("card_cvv",    "CVV"),
            FieldInput("billing_zip", "Billing ZIP"),
        ),
    )


def _review_step(number: int) -> StepDefinition:
    return StepDefinition(number=number, label="Review", kind=StepKind.REVIEW)


def _contact_inputs(name_field: str = "name", name_label: str = "Full name") -> tuple:
    return (
        FieldInput(name_field, name_label),
        FieldInput("email", "Email"),
        FieldInput("phone", "Phone"),
    )


def _payment_group(form: BookingForm) -> Dict[str, str]:
    return {
        "card_number": form.card_number,
        "card_expiry": form.card_expiry,
        "card_cvv":    form.card_cvv,
        "billing_zip": form.billing_zip,
    }


def _payload(
    service: ServiceType,
    form: BookingForm,
    selection: Dict[str, Any],
    participants: Dict[str, Any],
    contact: Dict[str, Any],
    total_price: int,
) -> Dict[str, Any]:
    return {
        "service_type": service.value,
        "selection":    selection,
        "participants": participants,
        "contact":      contact,
        "payment":      _payment_group(form),
        "total_price":  total_price,
    }


def _label(options: List[Option], value: str) -> str:
    return next((o.label for o in options if o.value == value), value)


# ── Date pickers (field rental, birthday) ─────────────────────────────────────

def _year_options(form, ctx: FlowContext) -> List[Option]:
    return catalog.booking_years(ctx.today)


def _month_options(form, ctx: FlowContext) -> List[Option]:
    if not form.year:
        return []
    return catalog.available_months(form.year, ctx.today)


def _day_options(form, ctx: FlowContext) -> List[Option]:
    days = catalog.available_days(form.month, form.year, ctx.today)
    return [Option(str(d), str(d)) for d in days]


def _chosen_date(form) -> Optional[date]:
    return catalog.parse_booking_date(form.month, form.day, form.year)


def _date_is_bookable(form, ctx: FlowContext) -> bool:
    chosen = _chosen_date(form)
    if chosen is None or chosen < ctx.today:
        return False
    return chosen.day in catalog.available_days(form.month, form.year, ctx.today)


def _format_date(form) -> str:
    chosen = _chosen_date(form)
    return f"{chosen:%B} {chosen.day}, {chosen.year}" if chosen else ""


def _date_inputs() -> tuple:
    return (
        FieldInput("year",  "Year",  CHOICE, _year_options),
        FieldInput("month", "Month", CHOICE, _month_options),
        FieldInput("day",   "Day",   CHOICE, _day_options),
    )


_DATE_DEPENDENTS = {"year": ("month", "day"), "month": ("day",)}


# ─────────────────────────── Field rental ─────────────────────────────────────

def _rental_slots(ctx: FlowContext) -> List[catalog.TimeSlot]:
    return [s for s in catalog.field_time_slots(ctx.rng("field-slots")) if s.available]


def _rental_slot(form: FieldRentalForm, ctx: FlowContext) -> Optional[catalog.TimeSlot]:
    return next((s for s in _rental_slots(ctx) if s.id == form.time_slot), None)


def _rental_slot_options(form, ctx: FlowContext) -> List[Option]:
    return [Option(s.id, f"{s.label} · ${s.price}") for s in _rental_slots(ctx)]


def _rental_total(form: FieldRentalForm, ctx: FlowContext) -> int:
    slot = _rental_slot(form, ctx)
    return slot.price * form.duration if slot else 0


def _rental_payload(form: FieldRentalForm, ctx: FlowContext) -> Dict[str, Any]:
    pitch = catalog.find_field(form.field)
    slot = _rental_slot(form, ctx)
    chosen = _chosen_date(form)
    return _payload(
        ServiceType.FIELD_RENTAL,
        form,
        selection={
            "field": {
                "id": pitch.id, "name": pitch.name, "size": pitch.size,
                "capacity": pitch.capacity, "surface": pitch.surface,
            } if pitch else {"id": form.field},
            "date": chosen.isoformat() if chosen else None,
            "time_slot": {
                "id": slot.id, "time": slot.label, "hour": slot.hour, "price": slot.price,
            } if slot else {"id": form.time_slot},
            "duration_hours": form.duration,
        },
        participants={"players": form.players},
        contact={"name": form.name, "email": form.email, "phone": form.phone},
        total_price=_rental_total(form, ctx),
    )


def _rental_summary(form: FieldRentalForm, ctx: FlowContext) -> BookingSummary:
    pitch = catalog.find_field(form.field)
    slot = _rental_slot(form, ctx)
    when = _format_date(form)
    if slot:
        when = f"{when} at {slot.label}"
    return BookingSummary(
        title="Field Booked!",
        who=form.name,
        what=pitch.label if pitch else form.field,
        when=when,
        total_price=_rental_total(form, ctx),
        details=[f"Duration: {form.duration} hr", f"Players: {form.players}"],
    )


FIELD_RENTAL_FLOW = ServiceFlowConfig(
    service_type=ServiceType.FIELD_RENTAL,
    title="Field Rental",
    emoji="🏟",
    form_model=FieldRentalForm,
    steps=(
        StepDefinition(
            number=1, label="Field", kind=StepKind.SELECTION,
            inputs=(
                FieldInput("field", "Field", CHOICE,
                           _static([Option(f.id, f.label) for f in catalog.FIELDS])),
            ),
        ),
        StepDefinition(
            number=2, label="Date & Time", kind=StepKind.DETAILS,
            required_fields=("month", "day", "year", "time_slot"),
            inputs=_date_inputs() + (
                FieldInput("time_slot", "Time slot", CHOICE, _rental_slot_options),
                FieldInput("duration",  "Duration",  CHOICE, _static(catalog.RENTAL_DURATIONS), optional=True),
                FieldInput("players",   "Players",   CHOICE,
                           _static([Option(str(n), str(n)) for n in (6, 8, 10, 12, 14, 18)]), optional=True),
            ),
            check=lambda form, ctx: _date_is_bookable(form, ctx) and _rental_slot(form, ctx) is not None,
        ),
        StepDefinition(
            number=3, label="Contact", kind=StepKind.CONTACT,
            required_fields=("name", "email", "phone"),
            inputs=_contact_inputs(),
        ),
        _payment_step(4),
    ),
    build_payload=_rental_payload,
    summarize=_rental_summary,
    dependents=_DATE_DEPENDENTS,
)


# ─────────────────────────── League ───────────────────────────────────────────

def _league_options(form: LeagueForm, ctx: FlowContext) -> List[Option]:
    if form.category == "Adult":
        names = catalog.ADULT_LEAGUES
    elif form.category == "Youth" and form.youth_gender:
        names = catalog.YOUTH_LEAGUES
    else:
        names = []
    return [Option(n, n) for n in names]


def _league_name(form: LeagueForm) -> str:
    return catalog.league_display_name(form.category, form.league, form.youth_gender)


def _league_payload(form: LeagueForm, ctx: FlowContext) -> Dict[str, Any]:
    return _payload(
        ServiceType.LEAGUE,
        form,
        selection={
            "category": form.category,
            "league": form.league,
            "youth_gender": form.youth_gender or None,
            "display_name": _league_name(form),
        },
        participants={
            "team_name": form.team_name,
            "player_count": form.player_count,
            "experience_level": form.experience_level,
            "preferred_day": form.preferred_day,
            "additional_info": form.additional_info,
        },
        contact={"name": form.captain_name, "email": form.email, "phone": form.phone},
        total_price=catalog.LEAGUE_FEE,
    )


def _league_summary(form: LeagueForm, ctx: FlowContext) -> BookingSummary:
    return BookingSummary(
        title="Team Registered!",
        who=f"{form.team_name} (captain {form.captain_name})",
        what=_league_name(form),
        when=_label(catalog.LEAGUE_DAYS, form.preferred_day),
        total_price=catalog.LEAGUE_FEE,
        details=[
            f"Players: {form.player_count}",
            f"Level: {_label(catalog.EXPERIENCE_LEVELS, form.experience_level)}",
        ],
    )


LEAGUE_FLOW = ServiceFlowConfig(
    service_type=ServiceType.LEAGUE,
    title="League Registration",
    emoji="🏆",
    form_model=LeagueForm,
    steps=(
        StepDefinition(
            number=1, label="League", kind=StepKind.SELECTION,
            inputs=(
                FieldInput("category", "Category", CHOICE, _static(catalog.LEAGUE_CATEGORIES)),
                FieldInput("youth_gender", "Division", CHOICE, _static(catalog.YOUTH_GENDERS),
                           visible=lambda form: form.category == "Youth"),
                FieldInput("league", "League", CHOICE, _league_options),
            ),
            check=lambda form, ctx: form.league in [o.value for o in _league_options(form, ctx)],
        ),
        StepDefinition(
            number=2, label="Team & Captain", kind=StepKind.CONTACT,
            required_fields=("team_name", "captain_name", "email", "phone"),
            inputs=(
                FieldInput("team_name", "Team name"),
                *_contact_inputs("captain_name", "Captain name"),
                FieldInput("player_count", "Roster size", CHOICE,
                           _static([Option(str(n), str(n)) for n in (5, 7, 10, 12, 15)]), optional=True),
            ),
        ),
        StepDefinition(
            number=3, label="Preferences", kind=StepKind.DETAILS,
            required_fields=("experience_level", "preferred_day"),
            inputs=(
                FieldInput("experience_level", "Experience", CHOICE, _static(catalog.EXPERIENCE_LEVELS)),
                FieldInput("preferred_day", "Preferred day", CHOICE, _static(catalog.LEAGUE_DAYS)),
                FieldInput("additional_info", "Notes", optional=True),
            ),
        ),
        _review_step(4),
        _payment_step(5),
    ),
    build_payload=_league_payload,
    summarize=_league_summary,
    dependents={"category": ("league", "youth_gender"), "youth_gender": ("league",)},
)


# ─────────────────────────── Pickup ───────────────────────────────────────────

def _session_games(ctx: FlowContext) -> List[catalog.PickupGame]:
    return catalog.pickup_games(ctx.today, ctx.rng("pickup-games"))


def _pickup_game(form: PickupForm, ctx: FlowContext) -> Optional[catalog.PickupGame]:
    return next((g for g in _session_games(ctx) if g.id == form.game_id), None)


def _game_options(form: PickupForm, ctx: FlowContext) -> List[Option]:
    games = catalog.games_in_week(_session_games(ctx), form.week, ctx.today)
    return [
        Option(g.id, f"{g.label} · {g.spots_available} left · ${g.price_per_player}")
        for g in games
    ]


def _max_spots(game: Optional[catalog.PickupGame]) -> int:
    if game is None:
        return 0
    return min(game.spots_available, catalog.MAX_SPOTS_PER_BOOKING)


def _spot_options(form: PickupForm, ctx: FlowContext) -> List[Option]:
    return [Option(str(n), str(n)) for n in range(1, _max_spots(_pickup_game(form, ctx)) + 1)]


def _pickup_total(form: PickupForm, ctx: FlowContext) -> int:
    game = _pickup_game(form, ctx)
    return game.price_per_player * form.spots if game else 0


def _pickup_payload(form: PickupForm, ctx: FlowContext) -> Dict[str, Any]:
    game = _pickup_game(form, ctx)
    selection: Dict[str, Any] = {"game_id": form.game_id}
    if game:
        selection.update(
            date=game.day.isoformat(),
            time=game.time,
            location=game.location,
            format=game.format,
            skill_level=game.skill_level,
            price_per_player=game.price_per_player,
        )
    return _payload(
        ServiceType.PICKUP,
        form,
        selection=selection,
        participants={"spots": form.spots},
        contact={"name": form.name, "email": form.email, "phone": form.phone},
        total_price=_pickup_total(form, ctx),
    )


def _pickup_summary(form: PickupForm, ctx: FlowContext) -> BookingSummary:
    game = _pickup_game(form, ctx)
    return BookingSummary(
        title="You're In!",
        who=form.name,
        what=f"{game.format} pickup · {game.skill_level}" if game else form.game_id,
        when=f"{game.day:%A, %B} {game.day.day} · {game.time}" if game else "",
        total_price=_pickup_total(form, ctx),
        details=[f"Location: {game.location}" if game else "", f"Spots: {form.spots}"],
    )


PICKUP_FLOW = ServiceFlowConfig(
    service_type=ServiceType.PICKUP,
    title="Pickup Games",
    emoji="👟",
    form_model=PickupForm,
    steps=(
        StepDefinition(
            number=1, label="Game", kind=StepKind.SELECTION,
            required_fields=("game_id",),
            inputs=(
                FieldInput("week", "Week", CHOICE, _static(catalog.PICKUP_WEEKS), optional=True),
                FieldInput("game_id", "Game", CHOICE, _game_options),
            ),
            check=lambda form, ctx: _pickup_game(form, ctx) is not None,
        ),
        StepDefinition(
            number=2, label="Spots", kind=StepKind.DETAILS,
            required_fields=("spots",),
            inputs=(FieldInput("spots", "Spots", CHOICE, _spot_options),),
            check=lambda form, ctx: form.spots <= _max_spots(_pickup_game(form, ctx)),
        ),
        StepDefinition(
            number=3, label="Contact", kind=StepKind.CONTACT,
            required_fields=("name", "email", "phone"),
            inputs=_contact_inputs(),
        ),
        _review_step(4),
        _payment_step(5),
    ),
    build_payload=_pickup_payload,
    summarize=_pickup_summary,
    dependents={"week": ("game_id", "spots"), "game_id": ("spots",)},
)


# ─────────────────────────── Training ─────────────────────────────────────────

def _training_price(form: TrainingForm) -> int:
    programme = catalog.find_training(form.training_type)
    return programme.price if programme else 0


def _training_payload(form: TrainingForm, ctx: FlowContext) -> Dict[str, Any]:
    programme = catalog.find_training(form.training_type)
    return _payload(
        ServiceType.TRAINING,
        form,
        selection={
            "training_type": form.training_type,
            "label": programme.label if programme else form.training_type,
            "price_per_session": _training_price(form),
            "preferred_days": list(form.preferred_days),
            "preferred_time": form.preferred_time,
        },
        participants={
            "player": {
                "name": form.player_name,
                "age": form.player_age,
                "skill_level": form.skill_level,
            },
            "focus_areas": list(form.focus_areas),
            "additional_info": form.additional_info,
        },
        contact={"name": form.parent_name, "email": form.email, "phone": form.phone},
        total_price=_training_price(form),
    )


def _training_summary(form: TrainingForm, ctx: FlowContext) -> BookingSummary:
    programme = catalog.find_training(form.training_type)
    days = ", ".join(_label(catalog.WEEKDAYS, d) for d in form.preferred_days)
    return BookingSummary(
        title="Training Booked!",
        who=f"{form.player_name} (parent {form.parent_name})",
        what=programme.label if programme else form.training_type,
        when=f"{days} · {_label(catalog.TRAINING_TIMES, form.preferred_time)}",
        total_price=_training_price(form),
        details=["Focus: " + ", ".join(_label(catalog.FOCUS_AREAS, a) for a in form.focus_areas)],
    )


TRAINING_FLOW = ServiceFlowConfig(
    service_type=ServiceType.TRAINING,
    title="Private Training",
    emoji="🎯",
    form_model=TrainingForm,
    steps=(
        StepDefinition(
            number=1, label="Training Type", kind=StepKind.SELECTION,
            inputs=(
                FieldInput("training_type", "Programme", CHOICE, _static([
                    Option(t.value, f"{t.label} · ${t.price}/session") for t in catalog.TRAINING_TYPES
                ])),
            ),
        ),
        StepDefinition(
            number=2, label="Player", kind=StepKind.DETAILS,
            required_fields=("player_name", "skill_level", "focus_areas"),
            inputs=(
                FieldInput("player_name", "Player name"),
                FieldInput("player_age", "Player age", optional=True),
                FieldInput("skill_level", "Skill level", CHOICE, _static(catalog.SKILL_LEVELS)),
                FieldInput("focus_areas", "Focus areas", MULTI, _static(catalog.FOCUS_AREAS)),
            ),
        ),
        StepDefinition(
            number=3, label="Parent & Schedule", kind=StepKind.CONTACT,
            required_fields=("parent_name", "email", "phone", "preferred_days", "preferred_time"),
            inputs=(
                *_contact_inputs("parent_name", "Parent name"),
                FieldInput("preferred_days", "Preferred days", MULTI, _static(catalog.WEEKDAYS)),
                FieldInput("preferred_time", "Preferred time", CHOICE, _static(catalog.TRAINING_TIMES)),
                FieldInput("additional_info", "Notes", optional=True),
            ),
        ),
        _review_step(4),
        _payment_step(5),
    ),
    build_payload=_training_payload,
    summarize=_training_summary,
)


# ─────────────────────────── Camps ────────────────────────────────────────────

def _camp_weeks_open(ctx: FlowContext) -> List[catalog.CampWeek]:
    return [w for w in catalog.camp_weeks(ctx.today) if w.available]


def _camp_week(form: CampForm, ctx: FlowContext) -> Optional[catalog.CampWeek]:
    return next((w for w in _camp_weeks_open(ctx) if w.id == form.week), None)


def _camp_price(form: CampForm) -> int:
    camp = catalog.find_camp(form.camp_id)
    return camp.price if camp else 0


def _camp_payload(form: CampForm, ctx: FlowContext) -> Dict[str, Any]:
    camp = catalog.find_camp(form.camp_id)
    week = _camp_week(form, ctx)
    return _payload(
        ServiceType.CAMP,
        form,
        selection={
            "camp": {
                "id": camp.id, "name": camp.name, "duration": camp.duration,
                "age_range": camp.age_range, "price": camp.price,
            } if camp else {"id": form.camp_id},
            "week": {"id": week.id, "label": week.label, "start": week.start.isoformat()}
                    if week else {"id": form.week},
        },
        participants={
            "camper": {
                "first_name": form.camper_first_name,
                "last_name": form.camper_last_name,
                "age": form.camper_age,
                "gender": form.camper_gender,
                "tshirt_size": form.tshirt_size,
                "skill_level": form.skill_level,
            },
            "medical": {
                "conditions": form.medical_conditions,
                "allergies": form.allergies,
                "medications": form.medications,
                "special_needs": form.special_needs,
            },
        },
        contact={
            "name": f"{form.parent_first_name} {form.parent_last_name}".strip(),
            "email": form.email,
            "phone": form.phone,
            "emergency": {"contact": form.emergency_contact, "phone": form.emergency_phone},
        },
        total_price=_camp_price(form),
    )


def _camp_summary(form: CampForm, ctx: FlowContext) -> BookingSummary:
    camp = catalog.find_camp(form.camp_id)
    week = _camp_week(form, ctx)
    return BookingSummary(
        title="Camp Registration Complete!",
        who=f"{form.camper_first_name} {form.camper_last_name}".strip(),
        what=camp.name if camp else form.camp_id,
        when=week.label if week else form.week,
        total_price=_camp_price(form),
        details=[f"T-shirt: {form.tshirt_size}", f"Emergency contact: {form.emergency_contact}"],
    )


CAMP_FLOW = ServiceFlowConfig(
    service_type=ServiceType.CAMP,
    title="Soccer Camps",
    emoji="⛺",
    form_model=CampForm,
    steps=(
        StepDefinition(
            number=1, label="Camp & Week", kind=StepKind.SELECTION,
            inputs=(
                FieldInput("camp_id", "Camp", CHOICE, _static([
                    Option(c.id, f"{c.name} · ages {c.age_range} · ${c.price}") for c in catalog.CAMP_OPTIONS
                ])),
                FieldInput("week", "Week", CHOICE,
                           lambda form, ctx: [Option(w.id, w.label) for w in _camp_weeks_open(ctx)]),
            ),
            check=lambda form, ctx: _camp_week(form, ctx) is not None,
        ),
        StepDefinition(
            number=2, label="Camper", kind=StepKind.DETAILS,
            required_fields=("camper_first_name", "camper_last_name", "camper_age", "tshirt_size", "skill_level"),
            inputs=(
                FieldInput("camper_first_name", "First name"),
                FieldInput("camper_last_name", "Last name"),
                FieldInput("camper_age", "Age"),
                FieldInput("camper_gender", "Gender", CHOICE, _static(catalog.CAMPER_GENDERS), optional=True),
                FieldInput("tshirt_size", "T-shirt size", CHOICE, _static(catalog.TSHIRT_SIZES)),
                FieldInput("skill_level", "Skill level", CHOICE, _static(catalog.SKILL_LEVELS)),
                FieldInput("medical_conditions", "Medical conditions", optional=True),
                FieldInput("allergies", "Allergies", optional=True),
                FieldInput("medications", "Medications", optional=True),
                FieldInput("special_needs", "Special needs", optional=True),
            ),
        ),
        StepDefinition(
            number=3, label="Parent & Emergency", kind=StepKind.CONTACT,
            required_fields=(
                "parent_first_name", "parent_last_name", "email", "phone",
                "emergency_contact", "emergency_phone",
            ),
            inputs=(
                FieldInput("parent_first_name", "Parent first name"),
                FieldInput("parent_last_name", "Parent last name"),
                FieldInput("email", "Email"),
                FieldInput("phone", "Phone"),
                FieldInput("emergency_contact", "Emergency contact"),
                FieldInput("emergency_phone", "Emergency phone"),
            ),
        ),
        _review_step(4),
        _payment_step(5),
    ),
    build_payload=_camp_payload,
    summarize=_camp_summary,
)


# ─────────────────────────── Birthday parties ─────────────────────────────────

def _party_slot(form: BirthdayForm) -> Optional[catalog.TimeSlot]:
    return next(
        (s for s in catalog.BIRTHDAY_TIME_SLOTS if s.id == form.time_slot and s.available), None
    )


def _party_price(form: BirthdayForm) -> int:
    package = catalog.find_package(form.package)
    return package.price if package else 0


def _birthday_payload(form: BirthdayForm, ctx: FlowContext) -> Dict[str, Any]:
    package = catalog.find_package(form.package)
    slot = _party_slot(form)
    chosen = _chosen_date(form)
    return _payload(
        ServiceType.BIRTHDAY,
        form,
        selection={
            "package": {
                "id": package.id, "name": package.name, "price": package.price,
                "duration": package.duration,
            } if package else {"id": form.package},
            "date": chosen.isoformat() if chosen else None,
            "time_slot": {"id": slot.id, "time": slot.label} if slot else {"id": form.time_slot},
        },
        participants={
            "child": {"name": form.child_name, "age": form.child_age},
            "guest_count": form.guest_count,
            "cake_preference": form.cake_preference,
            "special_requests": form.special_requests,
        },
        contact={"name": form.parent_name, "email": form.email, "phone": form.phone},
        total_price=_party_price(form),
    )


def _birthday_summary(form: BirthdayForm, ctx: FlowContext) -> BookingSummary:
    package = catalog.find_package(form.package)
    slot = _party_slot(form)
    when = _format_date(form)
    if slot:
        when = f"{when} at {slot.label}"
    return BookingSummary(
        title="Party Booked!",
        who=f"{form.child_name}'s party (parent {form.parent_name})",
        what=package.name if package else form.package,
        when=when,
        total_price=_party_price(form),
        details=[f"Guests: {form.guest_count}"],
    )


BIRTHDAY_FLOW = ServiceFlowConfig(
    service_type=ServiceType.BIRTHDAY,
    title="Birthday Parties",
    emoji="🎂",
    form_model=BirthdayForm,
    steps=(
        StepDefinition(
            number=1, label="Package", kind=StepKind.SELECTION,
            inputs=(
                FieldInput("package", "Package", CHOICE, _static([
                    Option(p.id, f"{p.name} · {p.duration} · ${p.price}") for p in catalog.BIRTHDAY_PACKAGES
                ])),
            ),
        ),
        StepDefinition(
            number=2, label="Date & Time", kind=StepKind.DETAILS,
            required_fields=("month", "day", "year", "time_slot"),
            inputs=_date_inputs() + (
                FieldInput("time_slot", "Start time", CHOICE, _static([
                    Option(s.id, s.label) for s in catalog.BIRTHDAY_TIME_SLOTS if s.available
                ])),
            ),
            check=lambda form, ctx: _date_is_bookable(form, ctx) and _party_slot(form) is not None,
        ),
        StepDefinition(
            number=3, label="Party Details", kind=StepKind.CONTACT,
            required_fields=("child_name", "parent_name", "email", "phone"),
            inputs=(
                FieldInput("child_name", "Birthday child"),
                FieldInput("child_age", "Turning", optional=True),
                *_contact_inputs("parent_name", "Parent name"),
                FieldInput("guest_count", "Guests", CHOICE, _static(catalog.GUEST_COUNTS), optional=True),
                FieldInput("cake_preference", "Cake", CHOICE, _static(catalog.CAKE_OPTIONS), optional=True),
                FieldInput("special_requests", "Special requests", optional=True),
            ),
        ),
        _review_step(4),
        _payment_step(5),
    ),
    build_payload=_birthday_payload,
    summarize=_birthday_summary,
    dependents=_DATE_DEPENDENTS,
)


# ─────────────────────────── Registry ─────────────────────────────────────────

FLOWS: Dict[ServiceType, ServiceFlowConfig] = {
    flow.service_type: flow
    for flow in (
        FIELD_RENTAL_FLOW, LEAGUE_FLOW, PICKUP_FLOW,
        TRAINING_FLOW, CAMP_FLOW, BIRTHDAY_FLOW,
    )
}


def get_flow(service_type: ServiceType | str) -> ServiceFlowConfig:
    """Step sequence and payload shape for a service; ValueError for unknown services."""
    return FLOWS[ServiceType(service_type)]
