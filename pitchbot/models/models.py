"""
ORM models for the facility's booking records.

A Booking is the persisted result of a confirmed wizard submission. The
selection and participant groups are kept as JSON exactly as the flow built
them; of the card only the last four digits are stored.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, BigInteger, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from pitchbot.models.base import Base

# ─────────────────────────── Constants ────────────────────────────────────────

class BookingStatus:
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    EMOJI = {
        "confirmed": "✅",
        "cancelled": "❌",
    }


# ─────────────────────────── Models ───────────────────────────────────────────

class Booking(Base):
    """A confirmed (or later cancelled) booking of any service type."""
    __tablename__ = "bookings"

    id:            Mapped[int]           = mapped_column(Integer, primary_key=True, autoincrement=True)
    reference:     Mapped[str]           = mapped_column(String(36), unique=True, index=True)
    service_type:  Mapped[str]           = mapped_column(String(30), index=True)   # ServiceType value
    status:        Mapped[str]           = mapped_column(String(20), default=BookingStatus.CONFIRMED)
    customer_name: Mapped[str]           = mapped_column(String(255))
    email:         Mapped[str]           = mapped_column(String(255))
    phone:         Mapped[str]           = mapped_column(String(20))
    telegram_id:   Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True, index=True)
    selection:     Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    participants:  Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    total_price:   Mapped[int]           = mapped_column(Integer)               # whole dollars
    card_last4:    Mapped[str]           = mapped_column(String(4))
    created_at:    Mapped[datetime]      = mapped_column(DateTime, default=func.now())

    @property
    def status_emoji(self) -> str:
        return BookingStatus.EMOJI.get(self.status, "❓")

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    @property
    def short_reference(self) -> str:
        return self.reference[:8].upper()
