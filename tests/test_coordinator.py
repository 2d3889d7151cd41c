"""
Async tests — SubmissionCoordinator (wizard/coordinator.py).

Uses in-memory Booking API doubles from conftest.py; no network or database.
"""
from __future__ import annotations

import asyncio

import pytest

from conftest import FakeBookingApi, fill_field_rental_to_payment, fill_payment, make_wizard
from pitchbot.wizard import (
    FAILURE_MESSAGE,
    BookingWizard,
    ServiceType,
    SubmissionCoordinator,
    SubmissionStatus,
)


@pytest.fixture
def ready_wizard() -> BookingWizard:
    """Field-rental wizard on its payment step with valid card details."""
    wizard = make_wizard(ServiceType.FIELD_RENTAL)
    fill_field_rental_to_payment(wizard)
    fill_payment(wizard)
    return wizard


class TestHappyPath:
    async def test_four_advances_then_submit(self, fake_api: FakeBookingApi) -> None:
        wizard = make_wizard(ServiceType.FIELD_RENTAL)
        fill_field_rental_to_payment(wizard)      # three advances
        fill_payment(wizard)
        assert wizard.advance()                   # fourth: payment validated

        outcome = await SubmissionCoordinator(fake_api).submit(wizard)

        assert outcome.status is SubmissionStatus.CONFIRMED
        assert len(fake_api.calls) == 1
        payload = fake_api.calls[0]
        for group in ("selection", "participants", "contact", "payment"):
            assert payload[group]
        assert wizard.current_step == 1
        assert wizard.form == wizard.flow.form_model()
        assert wizard.is_submitting is False

    async def test_summary_carries_reference(self, ready_wizard: BookingWizard, fake_api: FakeBookingApi) -> None:
        outcome = await SubmissionCoordinator(fake_api).submit(ready_wizard)
        assert outcome.ok
        assert outcome.summary.title == "Field Booked!"
        assert outcome.summary.who == "Alex Morgan"
        assert outcome.summary.reference == outcome.reference
        assert outcome.summary.total_price > 0

    async def test_context_forwarded(self, ready_wizard: BookingWizard, fake_api: FakeBookingApi) -> None:
        await SubmissionCoordinator(fake_api).submit(ready_wizard, context={"telegram_id": 42})
        assert fake_api.contexts == [{"telegram_id": 42}]


class TestRefusals:
    async def test_not_on_final_step(self, fake_api: FakeBookingApi) -> None:
        wizard = make_wizard(ServiceType.FIELD_RENTAL)
        outcome = await SubmissionCoordinator(fake_api).submit(wizard)
        assert outcome.status is SubmissionStatus.INVALID
        assert fake_api.calls == []

    async def test_invalid_payment(self, fake_api: FakeBookingApi) -> None:
        wizard = make_wizard(ServiceType.FIELD_RENTAL)
        fill_field_rental_to_payment(wizard)
        fill_payment(wizard)
        wizard.input_field("card_cvv", "1")
        outcome = await SubmissionCoordinator(fake_api).submit(wizard)
        assert outcome.status is SubmissionStatus.INVALID
        assert wizard.validation_errors == {"card_cvv": "CVV must be 3 digits"}
        assert fake_api.calls == []

    async def test_earlier_step_emptied_after_reaching_payment(
        self, ready_wizard: BookingWizard, fake_api: FakeBookingApi
    ) -> None:
        ready_wizard.update_field("day", "")      # no dependents, progress kept
        assert ready_wizard.is_final_step

        outcome = await SubmissionCoordinator(fake_api).submit(ready_wizard)

        assert outcome.status is SubmissionStatus.INVALID
        assert ready_wizard.first_unsatisfied_step() == 2
        assert fake_api.calls == []

    async def test_date_changed_on_revisit_cannot_be_paid(self, fake_api: FakeBookingApi) -> None:
        wizard = make_wizard(ServiceType.FIELD_RENTAL)
        fill_field_rental_to_payment(wizard)
        assert wizard.jump_to(2)
        wizard.choose("year", "2026")             # clears month and day
        assert not wizard.jump_to(4)
        fill_payment(wizard)

        outcome = await SubmissionCoordinator(fake_api).submit(wizard)

        assert outcome.status is SubmissionStatus.INVALID
        assert fake_api.calls == []

    async def test_duplicate_submission_refused(self, ready_wizard: BookingWizard) -> None:
        api = FakeBookingApi(delay=0.05)
        coordinator = SubmissionCoordinator(api)

        first, second = await asyncio.gather(
            coordinator.submit(ready_wizard),
            coordinator.submit(ready_wizard),
        )
        assert first.status is SubmissionStatus.CONFIRMED
        assert second.status is SubmissionStatus.BUSY
        assert len(api.calls) == 1


class TestFailures:
    @pytest.mark.parametrize("api", [
        FakeBookingApi(success=False),
        FakeBookingApi(error=ConnectionError("backend down")),
        FakeBookingApi(error=RuntimeError("boom")),
    ], ids=["rejected", "network", "unexpected"])
    async def test_failure_keeps_wizard_state(self, ready_wizard: BookingWizard, api: FakeBookingApi) -> None:
        before = ready_wizard.to_state()

        outcome = await SubmissionCoordinator(api).submit(ready_wizard)

        assert outcome.status is SubmissionStatus.FAILED
        assert outcome.message == FAILURE_MESSAGE
        assert ready_wizard.is_submitting is False
        assert ready_wizard.to_state() == before

    async def test_timeout(self, ready_wizard: BookingWizard) -> None:
        api = FakeBookingApi(delay=1.0)
        outcome = await SubmissionCoordinator(api, timeout=0.01).submit(ready_wizard)
        assert outcome.status is SubmissionStatus.FAILED
        assert ready_wizard.current_step == 4
        assert ready_wizard.is_submitting is False

    async def test_retry_after_failure(self, ready_wizard: BookingWizard) -> None:
        api = FakeBookingApi(success=False)
        coordinator = SubmissionCoordinator(api)
        assert (await coordinator.submit(ready_wizard)).status is SubmissionStatus.FAILED

        api.success = True
        assert (await coordinator.submit(ready_wizard)).status is SubmissionStatus.CONFIRMED
        assert len(api.calls) == 2


class TestMountedCheck:
    async def test_unmounted_session_is_not_reset(self, ready_wizard: BookingWizard, fake_api: FakeBookingApi) -> None:
        outcome = await SubmissionCoordinator(fake_api).submit(ready_wizard, is_mounted=lambda: False)
        assert outcome.status is SubmissionStatus.CONFIRMED
        assert ready_wizard.current_step == 4

    async def test_async_mounted_check(self, ready_wizard: BookingWizard, fake_api: FakeBookingApi) -> None:
        async def mounted() -> bool:
            return True

        await SubmissionCoordinator(fake_api).submit(ready_wizard, is_mounted=mounted)
        assert ready_wizard.current_step == 1

    async def test_checkpoint_sees_submitting_flag(self, ready_wizard: BookingWizard, fake_api: FakeBookingApi) -> None:
        seen = []

        async def checkpoint(w: BookingWizard) -> None:
            seen.append(w.to_state()["is_submitting"])

        await SubmissionCoordinator(fake_api).submit(ready_wizard, checkpoint=checkpoint)
        assert seen == [True]
