"""
Booking tickets as QR codes.

Every confirmed booking gets a UUID4 reference; the customer receives it as
a QR image to show at the front desk. Uses `segno`, a pure-Python QR
encoder (no native libs required).
"""
from __future__ import annotations

import io
import uuid

import segno


def make_booking_reference() -> str:
    """Random UUID4 string identifying one booking."""
    return str(uuid.uuid4())


def generate_ticket_qr(reference: str, scale: int = 10, border: int = 2) -> io.BytesIO:
    """
    Render the booking reference as a PNG QR code.

    Returns a seeked BytesIO buffer, ready for aiogram's BufferedInputFile.
    """
    qr  = segno.make_qr(reference, error="H")
    buf = io.BytesIO()
    qr.save(buf, kind="png", scale=scale, border=border)
    buf.seek(0)
    return buf


def is_booking_reference(value: str) -> bool:
    """True for strings that look like a booking reference (UUID4)."""
    try:
        parsed = uuid.UUID(value, version=4)
    except (ValueError, AttributeError, TypeError):
        return False
    return str(parsed) == value.lower()
