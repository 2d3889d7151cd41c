"""
Typed booking forms — one pydantic v2 model per service flow.

Field defaults are the documented reset state of each flow. Assignments are
validated (`validate_assignment=True`) and unknown attributes are rejected
(`extra="forbid"`), so a handler can never write a field the flow does not
own or a value of the wrong type.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class BookingForm(BaseModel):
    """Fields every flow collects: payment details of the simulated checkout."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    card_number: str = ""
    card_expiry: str = ""
    card_cvv: str = ""
    billing_zip: str = ""


class FieldRentalForm(BookingForm):
    field: str = ""
    month: str = ""
    day: str = ""
    year: str = ""
    time_slot: str = ""
    duration: int = Field(default=1, ge=1, le=3)     # hours
    players: int = Field(default=10, ge=1, le=30)
    name: str = ""
    email: str = ""
    phone: str = ""


class LeagueForm(BookingForm):
    category: str = ""           # "Adult" | "Youth"
    league: str = ""
    youth_gender: str = ""       # "Male" | "Female", youth leagues only
    team_name: str = ""
    captain_name: str = ""
    email: str = ""
    phone: str = ""
    player_count: int = Field(default=10, ge=5, le=25)
    experience_level: str = ""
    preferred_day: str = ""
    additional_info: str = ""


class PickupForm(BookingForm):
    week: int = Field(default=0, ge=0, le=2)         # schedule filter, weeks from now
    game_id: str = ""
    spots: int = Field(default=1, ge=1, le=4)
    name: str = ""
    email: str = ""
    phone: str = ""


class TrainingForm(BookingForm):
    training_type: str = ""
    player_name: str = ""
    player_age: str = ""
    skill_level: str = ""
    focus_areas: List[str] = Field(default_factory=list)
    parent_name: str = ""
    email: str = ""
    phone: str = ""
    preferred_days: List[str] = Field(default_factory=list)
    preferred_time: str = ""
    additional_info: str = ""


class CampForm(BookingForm):
    camp_id: str = ""
    week: str = ""
    camper_first_name: str = ""
    camper_last_name: str = ""
    camper_age: str = ""
    camper_gender: str = ""
    tshirt_size: str = ""
    skill_level: str = ""
    parent_first_name: str = ""
    parent_last_name: str = ""
    email: str = ""
    phone: str = ""
    emergency_contact: str = ""
    emergency_phone: str = ""
    medical_conditions: str = ""
    allergies: str = ""
    medications: str = ""
    special_needs: str = ""


class BirthdayForm(BookingForm):
    package: str = ""
    month: str = ""
    day: str = ""
    year: str = ""
    time_slot: str = ""
    child_name: str = ""
    child_age: str = ""
    parent_name: str = ""
    email: str = ""
    phone: str = ""
    guest_count: int = Field(default=15, ge=1, le=35)
    cake_preference: str = ""
    special_requests: str = ""
