from pitchbot.services.booking_service import (
    create_booking, get_booking, get_booking_by_reference, list_bookings,
    count_bookings_by_service, cancel_booking, DatabaseBookingApi,
)
from pitchbot.services.notification_service import (
    format_summary, format_booking, send_booking_ticket,
    notify_admins_new_booking, notify_booking_cancelled, SERVICE_LABELS,
)
from pitchbot.services.qr_service import make_booking_reference, generate_ticket_qr, is_booking_reference

__all__ = [
    # bookings
    "create_booking", "get_booking", "get_booking_by_reference", "list_bookings",
    "count_bookings_by_service", "cancel_booking", "DatabaseBookingApi",
    # notifications
    "format_summary", "format_booking", "send_booking_ticket",
    "notify_admins_new_booking", "notify_booking_cancelled", "SERVICE_LABELS",
    # QR
    "make_booking_reference", "generate_ticket_qr", "is_booking_reference",
]
