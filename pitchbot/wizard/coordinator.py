"""
Submission coordinator — hands a finished wizard to the Booking API.

The coordinator is the boundary for submission failures: exceptions,
timeouts and rejected bookings all become a `failed` outcome with a generic
retry message and never propagate further. The wizard is left untouched on
failure (apart from `is_submitting`) and reset after a confirmed booking.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Protocol, Union

from pitchbot.wizard.machine import BookingWizard
from pitchbot.wizard.steps import BookingSummary

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to complete booking. Please try again."
INVALID_MESSAGE = "Please complete the highlighted fields before paying."
BUSY_MESSAGE = "Your booking is already being processed."

MountedCheck = Callable[[], Union[bool, Awaitable[bool]]]
Checkpoint = Callable[[BookingWizard], Awaitable[None]]


@dataclass
class BookingResult:
    success: bool
    reference: Optional[str] = None
    booking_id: Optional[int] = None


class BookingApi(Protocol):
    async def create_booking(
        self, payload: Dict[str, Any], context: Mapping[str, Any]
    ) -> BookingResult:
        ...


class SubmissionStatus(str, Enum):
    BUSY      = "busy"
    INVALID   = "invalid"
    FAILED    = "failed"
    CONFIRMED = "confirmed"


@dataclass
class SubmissionOutcome:
    status: SubmissionStatus
    message: str = ""
    summary: Optional[BookingSummary] = None
    reference: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is SubmissionStatus.CONFIRMED


async def _resolve(check: MountedCheck) -> bool:
    result = check()
    if inspect.isawaitable(result):
        result = await result
    return bool(result)


class SubmissionCoordinator:
    def __init__(self, api: BookingApi, timeout: float = 15.0) -> None:
        self.api = api
        self.timeout = timeout

    async def submit(
        self,
        wizard: BookingWizard,
        is_mounted: Optional[MountedCheck] = None,
        context: Optional[Mapping[str, Any]] = None,
        checkpoint: Optional[Checkpoint] = None,
    ) -> SubmissionOutcome:
        """
        Submit the booking held by `wizard`.

        `is_mounted` is consulted after the API call; when it reports the
        session is gone the confirmation is returned but the wizard is not
        reset. `checkpoint` is awaited once `is_submitting` is set so the
        caller can persist the flag before the request goes out.
        """
        if wizard.is_submitting:
            return SubmissionOutcome(SubmissionStatus.BUSY, BUSY_MESSAGE)
        if not wizard.can_submit():
            return SubmissionOutcome(SubmissionStatus.INVALID, INVALID_MESSAGE)

        payload = wizard.build_payload()
        summary = wizard.summary()

        wizard.is_submitting = True
        result: Optional[BookingResult] = None
        try:
            if checkpoint is not None:
                await checkpoint(wizard)
            result = await asyncio.wait_for(
                self.api.create_booking(payload, dict(context or {})),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Booking submission for %s timed out after %.1fs",
                wizard.service_type.value, self.timeout,
            )
        except Exception:
            logger.exception("Booking submission for %s failed", wizard.service_type.value)
        finally:
            wizard.is_submitting = False

        if result is None or not result.success:
            return SubmissionOutcome(SubmissionStatus.FAILED, FAILURE_MESSAGE)

        summary.reference = result.reference
        logger.info(
            "Booking %s confirmed: %s, $%s",
            result.reference, wizard.service_type.value, summary.total_price,
        )

        if is_mounted is None or await _resolve(is_mounted):
            wizard.reset()
        else:
            logger.info("Booking %s confirmed after its session closed", result.reference)

        return SubmissionOutcome(
            SubmissionStatus.CONFIRMED,
            summary.title,
            summary=summary,
            reference=result.reference,
        )
