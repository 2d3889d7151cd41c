"""
Keyboards for the admin back-office: booking lists and booking control.
"""
from typing import List

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from pitchbot.keyboards.callbacks import AdminPanelCb, BookingCb
from pitchbot.models.models import Booking
from pitchbot.wizard import FLOWS


def service_filter_kb() -> InlineKeyboardMarkup:
    """Pick which service's bookings to list."""
    builder = InlineKeyboardBuilder()
    builder.row(InlineKeyboardButton(text="📋 All services", callback_data=BookingCb(action="list").pack()))
    buttons = [
        InlineKeyboardButton(
            text=f"{flow.emoji} {flow.title}",
            callback_data=BookingCb(action="list", service=flow.service_type.value).pack(),
        )
        for flow in FLOWS.values()
    ]
    for i in range(0, len(buttons), 2):
        builder.row(*buttons[i:i + 2])
    builder.row(InlineKeyboardButton(text="🔙 Back", callback_data=AdminPanelCb(action="back").pack()))
    return builder.as_markup()


def booking_list_kb(bookings: List[Booking], service: str = "") -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    for b in bookings:
        builder.row(InlineKeyboardButton(
            text=f"{b.status_emoji} #{b.id} {b.customer_name} · ${b.total_price}",
            callback_data=BookingCb(action="view", bid=b.id, service=service).pack(),
        ))
    builder.row(InlineKeyboardButton(text="🔙 Back", callback_data=AdminPanelCb(action="bookings").pack()))
    return builder.as_markup()


def booking_detail_kb(booking: Booking, service: str = "") -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    if booking.is_active:
        builder.row(InlineKeyboardButton(
            text="❌ Cancel booking",
            callback_data=BookingCb(action="cancel", bid=booking.id, service=service).pack(),
        ))
    builder.row(InlineKeyboardButton(
        text="🔙 Back", callback_data=BookingCb(action="list", service=service).pack()
    ))
    return builder.as_markup()


def confirm_cancel_kb(booking_id: int, service: str = "") -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.row(
        InlineKeyboardButton(
            text="✅ Yes, cancel it",
            callback_data=BookingCb(action="cancel_ok", bid=booking_id, service=service).pack(),
        ),
        InlineKeyboardButton(
            text="↩️ Keep",
            callback_data=BookingCb(action="view", bid=booking_id, service=service).pack(),
        ),
    )
    return builder.as_markup()
