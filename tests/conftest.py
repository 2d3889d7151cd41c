"""
Shared pytest fixtures for the booking bot tests.

Sets required environment variables BEFORE any pitchbot module is imported so
that pydantic-settings and SQLAlchemy engine initialisation use safe test
values.
"""
from __future__ import annotations

import asyncio
import os
from datetime import date
from typing import Any, AsyncGenerator, Dict, List, Mapping

# ── Set env vars before any pitchbot import ───────────────────────────────────
os.environ.setdefault("BOT_TOKEN", "test-token-for-pytest")
os.environ.setdefault("ADMIN_IDS", "123456789")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# ── Third-party ───────────────────────────────────────────────────────────────
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# ── pitchbot imports (safe after env vars are set) ────────────────────────────
from pitchbot.models.base import Base
from pitchbot.wizard import BookingResult, BookingWizard, ServiceType

TODAY = date(2025, 6, 1)      # a Sunday
TOKEN = "test-session"


# ── DB fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """
    Session factory bound to an isolated in-memory SQLite database.
    Schema is created fresh for every test function; the engine is always
    disposed on teardown.
    """
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest.fixture
async def async_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ── Booking API doubles ───────────────────────────────────────────────────────

class FakeBookingApi:
    """Records every payload; answers with a canned result or raises."""

    def __init__(self, success: bool = True, error: Exception | None = None, delay: float = 0.0) -> None:
        self.success = success
        self.error = error
        self.delay = delay
        self.calls: List[Dict[str, Any]] = []
        self.contexts: List[Mapping[str, Any]] = []

    async def create_booking(self, payload: Dict[str, Any], context: Mapping[str, Any]) -> BookingResult:
        self.calls.append(payload)
        self.contexts.append(context)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if not self.success:
            return BookingResult(success=False)
        return BookingResult(success=True, reference="0b7c3a52-1d2e-4f6a-9b8c-7d6e5f4a3b2c", booking_id=1)


@pytest.fixture
def fake_api() -> FakeBookingApi:
    return FakeBookingApi()


# ── Wizard helpers ────────────────────────────────────────────────────────────

def make_wizard(service: ServiceType | str) -> BookingWizard:
    return BookingWizard.for_service(service, today=TODAY, token=TOKEN)


def first_option(wizard: BookingWizard, field: str) -> str:
    """Value of the first option currently offered for `field` on the current step."""
    inp = next(i for i in wizard.current.inputs if i.name == field)
    return wizard.options_for(inp)[0].value


def fill_payment(wizard: BookingWizard) -> None:
    wizard.input_field("card_number", "4242424242424242")
    wizard.input_field("card_expiry", "1230")
    wizard.input_field("card_cvv", "123")
    wizard.input_field("billing_zip", "12345")


def fill_field_rental_to_payment(wizard: BookingWizard) -> None:
    """Walk a field-rental wizard through steps 1-3 with valid data."""
    wizard.choose("field", "field-2")
    assert wizard.advance()

    wizard.choose("year", "2025")
    wizard.choose("month", "7")
    wizard.choose("day", "15")
    wizard.choose("time_slot", first_option(wizard, "time_slot"))
    wizard.choose("duration", "2")
    assert wizard.advance()

    wizard.input_field("name", "Alex Morgan")
    wizard.input_field("email", "alex@example.com")
    wizard.input_field("phone", "5551234567")
    assert wizard.advance()


@pytest.fixture
def field_rental_wizard() -> BookingWizard:
    return make_wizard(ServiceType.FIELD_RENTAL)
