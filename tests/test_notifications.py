"""
Unit tests — message rendering (services/notification_service.py) and the
QR ticket encoder (services/qr_service.py). No Telegram calls are made.
"""
from __future__ import annotations

from datetime import datetime

from pitchbot.models.models import Booking, BookingStatus
from pitchbot.services.notification_service import format_booking, format_summary
from pitchbot.services.qr_service import generate_ticket_qr, is_booking_reference, make_booking_reference
from pitchbot.wizard import BookingSummary


class TestFormatSummary:
    def test_contains_who_what_when_price(self) -> None:
        text = format_summary(BookingSummary(
            title="Party Booked!", who="Mia", what="Deluxe Party",
            when="August 2, 2025 at 1:00 PM", total_price=400, details=["Guests: 15"],
        ))
        assert "Mia" in text
        assert "Deluxe Party" in text
        assert "August 2, 2025" in text
        assert "<b>$400</b>" in text
        assert "Guests: 15" in text

    def test_user_text_is_escaped(self) -> None:
        text = format_summary(BookingSummary(
            title="t", who="<script>", what="x", when="", total_price=1,
        ))
        assert "<script>" not in text
        assert "&lt;script&gt;" in text

    def test_reference_shortened(self) -> None:
        text = format_summary(BookingSummary(
            title="t", who="a", what="b", when="", total_price=1,
            reference="0b7c3a52-1d2e-4f6a-9b8c-7d6e5f4a3b2c",
        ))
        assert "0B7C3A52" in text


class TestFormatBooking:
    def test_admin_view_masks_card(self) -> None:
        booking = Booking(
            id=3, reference="0b7c3a52-1d2e-4f6a-9b8c-7d6e5f4a3b2c", service_type="camp",
            status=BookingStatus.CONFIRMED, customer_name="Pat", email="p@x.io",
            phone="(555) 987-6543", total_price=499, card_last4="1881",
            created_at=datetime(2025, 6, 1, 12, 30),
        )
        text = format_booking(booking)
        assert "Soccer Camp" in text
        assert "•••• 1881" in text
        assert "2025-06-01 12:30" in text


class TestQrTicket:
    def test_png_buffer(self) -> None:
        buf = generate_ticket_qr(make_booking_reference())
        assert buf.read(8) == b"\x89PNG\r\n\x1a\n"

    def test_reference_format(self) -> None:
        assert is_booking_reference(make_booking_reference())
        assert not is_booking_reference("not-a-uuid")
