"""
Booking service — database operations for confirmed bookings, plus the
Booking API adapter the submission coordinator talks to.

The CRUD helpers receive an AsyncSession and are plain async functions
(no class coupling) for easy unit testing. `DatabaseBookingApi` owns its
own session per submission so a booking is committed atomically or not at
all.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pitchbot.models.models import Booking, BookingStatus
from pitchbot.services.qr_service import make_booking_reference
from pitchbot.wizard.coordinator import BookingResult
from pitchbot.wizard.formatters import digits_only

logger = logging.getLogger(__name__)

PAYLOAD_GROUPS = ("service_type", "selection", "participants", "contact", "payment", "total_price")


# ── Bookings ──────────────────────────────────────────────────────────────────

async def create_booking(
    session: AsyncSession,
    payload: Mapping[str, Any],
    telegram_id: Optional[int] = None,
) -> Booking:
    """
    Persist a wizard payload as a confirmed booking.
    Raises ValueError for a payload missing one of its groups.
    """
    missing = [g for g in PAYLOAD_GROUPS if g not in payload]
    if missing:
        raise ValueError(f"Booking payload is missing {', '.join(missing)}")

    contact = payload["contact"]
    card_digits = digits_only(payload["payment"].get("card_number", ""))

    booking = Booking(
        reference=make_booking_reference(),
        service_type=payload["service_type"],
        status=BookingStatus.CONFIRMED,
        customer_name=contact.get("name", ""),
        email=contact.get("email", ""),
        phone=contact.get("phone", ""),
        telegram_id=telegram_id,
        selection=dict(payload["selection"]),
        participants=dict(payload["participants"]),
        total_price=int(payload["total_price"]),
        card_last4=card_digits[-4:],
    )
    session.add(booking)
    await session.flush()
    return booking


async def get_booking(session: AsyncSession, booking_id: int) -> Optional[Booking]:
    return await session.get(Booking, booking_id)


async def get_booking_by_reference(session: AsyncSession, reference: str) -> Optional[Booking]:
    result = await session.execute(
        select(Booking).where(Booking.reference == reference)
    )
    return result.scalar_one_or_none()


async def list_bookings(
    session: AsyncSession,
    service_type: Optional[str] = None,
    status: Optional[str] = None,
    telegram_id: Optional[int] = None,
    limit: int = 20,
) -> List[Booking]:
    """Most recent bookings first, optionally filtered."""
    q = select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc()).limit(limit)
    if service_type:
        q = q.where(Booking.service_type == service_type)
    if status:
        q = q.where(Booking.status == status)
    if telegram_id is not None:
        q = q.where(Booking.telegram_id == telegram_id)
    result = await session.execute(q)
    return list(result.scalars().all())


async def count_bookings_by_service(session: AsyncSession) -> Dict[str, int]:
    """Confirmed bookings per service type."""
    result = await session.execute(
        select(Booking.service_type, func.count(Booking.id))
        .where(Booking.status == BookingStatus.CONFIRMED)
        .group_by(Booking.service_type)
    )
    return {service: count for service, count in result.all()}


async def cancel_booking(
    session: AsyncSession,
    booking_id: int,
) -> Tuple[Optional[Booking], str]:
    """
    Cancel a confirmed booking.
    Returns (booking, error_message). error_message is empty on success.
    """
    booking = await get_booking(session, booking_id)
    if booking is None:
        return None, "Booking not found."
    if booking.status == BookingStatus.CANCELLED:
        return booking, "Booking is already cancelled."

    booking.status = BookingStatus.CANCELLED
    await session.flush()
    return booking, ""


# ── Booking API adapter ───────────────────────────────────────────────────────

class DatabaseBookingApi:
    """
    Booking API backed by the bookings table.
    `context` may carry the customer's `telegram_id`.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def create_booking(
        self,
        payload: Dict[str, Any],
        context: Mapping[str, Any],
    ) -> BookingResult:
        async with self.session_factory() as session:
            async with session.begin():
                booking = await create_booking(session, payload, context.get("telegram_id"))
        logger.info(
            "Stored booking #%d (%s) for %s", booking.id, booking.service_type, booking.customer_name
        )
        return BookingResult(success=True, reference=booking.reference, booking_id=booking.id)
