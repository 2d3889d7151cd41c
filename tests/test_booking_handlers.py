"""
Async tests — Pay button handling (handlers/booking.py).

Handlers are called directly with a real FSMContext over MemoryStorage and
lightweight stand-ins for the callback query and the bot; no Telegram
traffic.
"""
from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any, List, Optional

import pytest
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

from conftest import FakeBookingApi, fill_field_rental_to_payment, fill_payment, make_wizard
from pitchbot.handlers.booking import SESSION_EXPIRED, cq_step_next
from pitchbot.states import BookingStates
from pitchbot.wizard import BUSY_MESSAGE, BookingWizard, ServiceType, SubmissionCoordinator

USER_ID = 4242


# ─────────────────────────── Stand-ins ───────────────────────────────────────

class _FakeMessage:
    def __init__(self) -> None:
        self.edits: List[str] = []

    async def edit_text(self, text: str, **kwargs: Any) -> None:
        self.edits.append(text)


class _FakeCallback:
    def __init__(self, user_id: int = USER_ID) -> None:
        self.from_user = SimpleNamespace(id=user_id)
        self.message = _FakeMessage()
        self.answers: List[Optional[str]] = []

    async def answer(self, text: Optional[str] = None, **kwargs: Any) -> None:
        self.answers.append(text)


class _FakeBot:
    def __init__(self) -> None:
        self.photos: List[int] = []
        self.messages: List[int] = []

    async def send_photo(self, chat_id: int, **kwargs: Any) -> None:
        self.photos.append(chat_id)

    async def send_message(self, chat_id: int, **kwargs: Any) -> None:
        self.messages.append(chat_id)


# ─────────────────────────── Fixtures ────────────────────────────────────────

@pytest.fixture
def state() -> FSMContext:
    return FSMContext(
        storage=MemoryStorage(),
        key=StorageKey(bot_id=1, chat_id=USER_ID, user_id=USER_ID),
    )


async def _store(state: FSMContext, wizard: BookingWizard) -> None:
    await state.set_state(BookingStates.wizard)
    await state.update_data(wizard=wizard.to_state())


def _payment_ready() -> BookingWizard:
    wizard = make_wizard(ServiceType.FIELD_RENTAL)
    fill_field_rental_to_payment(wizard)
    fill_payment(wizard)
    return wizard


async def _press_pay(state: FSMContext, api: FakeBookingApi, bot: _FakeBot) -> _FakeCallback:
    callback = _FakeCallback()
    await cq_step_next(
        callback=callback,
        state=state,
        bot=bot,
        coordinator=SubmissionCoordinator(api),
    )
    return callback


# ─────────────────────────── Tests ───────────────────────────────────────────

class TestPayButton:
    async def test_confirmed_booking_clears_session(self, state: FSMContext) -> None:
        api, bot = FakeBookingApi(), _FakeBot()
        await _store(state, _payment_ready())

        callback = await _press_pay(state, api, bot)

        assert len(api.calls) == 1
        assert api.contexts == [{"telegram_id": USER_ID}]
        assert await state.get_data() == {}
        assert bot.photos == [USER_ID]
        assert "Field Booked!" in callback.message.edits[-1]

    async def test_double_tap_submits_once(self, state: FSMContext) -> None:
        api, bot = FakeBookingApi(delay=0.05), _FakeBot()
        await _store(state, _payment_ready())

        first, second = await asyncio.gather(
            _press_pay(state, api, bot),
            _press_pay(state, api, bot),
        )

        assert len(api.calls) == 1
        assert BUSY_MESSAGE in first.answers + second.answers

    async def test_second_tap_after_confirmation_finds_no_session(self, state: FSMContext) -> None:
        api, bot = FakeBookingApi(), _FakeBot()
        await _store(state, _payment_ready())

        await _press_pay(state, api, bot)
        late = await _press_pay(state, api, bot)

        assert len(api.calls) == 1
        assert SESSION_EXPIRED in late.answers

    async def test_unsatisfied_earlier_step_is_reopened(self, state: FSMContext) -> None:
        api, bot = FakeBookingApi(), _FakeBot()
        wizard = _payment_ready()
        wizard.update_field("day", "")
        await _store(state, wizard)

        await _press_pay(state, api, bot)

        assert api.calls == []
        restored = BookingWizard.from_state((await state.get_data())["wizard"])
        assert restored.current_step == 2
        assert restored.is_submitting is False
