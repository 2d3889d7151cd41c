"""
Customer and staff notifications.

After a confirmed booking the customer receives a QR ticket with the
booking summary, and every admin gets a short heads-up. Delivery failures
(user blocked the bot, chat not found) are logged and never interrupt the
booking flow.
"""
from __future__ import annotations

import logging
from typing import Iterable

from aiogram import Bot, html
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest, TelegramForbiddenError
from aiogram.types import BufferedInputFile

from pitchbot.config import settings
from pitchbot.models.models import Booking
from pitchbot.services.qr_service import generate_ticket_qr
from pitchbot.wizard.steps import BookingSummary, ServiceType

logger = logging.getLogger(__name__)

SERVICE_LABELS = {
    ServiceType.FIELD_RENTAL.value: "Field Rental",
    ServiceType.LEAGUE.value:       "League Registration",
    ServiceType.PICKUP.value:       "Pickup Game",
    ServiceType.TRAINING.value:     "Private Training",
    ServiceType.CAMP.value:         "Soccer Camp",
    ServiceType.BIRTHDAY.value:     "Birthday Party",
}


# ── Message bodies ────────────────────────────────────────────────────────────

def format_summary(summary: BookingSummary) -> str:
    """Who / what / when / price block, shared by review and confirmation."""
    lines = [
        f"👤 {html.quote(summary.who)}",
        f"📌 {html.quote(summary.what)}",
    ]
    if summary.when:
        lines.append(f"🗓 {html.quote(summary.when)}")
    lines += [f"• {html.quote(d)}" for d in summary.details if d]
    lines.append(f"\n💵 Total: {html.bold(f'${summary.total_price}')}")
    if summary.reference:
        lines.append(f"🎫 Ref: {html.code(summary.reference[:8].upper())}")
    return "\n".join(lines)


def format_booking(booking: Booking) -> str:
    """Admin view of a stored booking."""
    service = SERVICE_LABELS.get(booking.service_type, booking.service_type)
    return (
        f"{booking.status_emoji} {html.bold(service)} · #{booking.id}\n"
        f"🎫 {html.code(booking.short_reference)}\n\n"
        f"👤 {html.quote(booking.customer_name)}\n"
        f"✉️ {html.quote(booking.email)}\n"
        f"📞 {html.quote(booking.phone)}\n\n"
        f"💵 ${booking.total_price} · card •••• {booking.card_last4}\n"
        f"🕒 {booking.created_at:%Y-%m-%d %H:%M}\n"
        f"Status: {booking.status}"
    )


# ── Delivery ──────────────────────────────────────────────────────────────────

async def send_booking_ticket(bot: Bot, chat_id: int, summary: BookingSummary) -> None:
    """Send the confirmation with the booking reference rendered as a QR code."""
    caption = (
        f"🎉 {html.bold(summary.title)}\n\n"
        f"{format_summary(summary)}\n\n"
        f"Show this QR code at the {html.quote(settings.FACILITY_NAME)} front desk."
    )
    try:
        qr_buf = generate_ticket_qr(summary.reference or "")
        await bot.send_photo(
            chat_id=chat_id,
            photo=BufferedInputFile(qr_buf.read(), filename="booking.png"),
            caption=caption,
            parse_mode=ParseMode.HTML,
        )
    except (TelegramForbiddenError, TelegramBadRequest) as e:
        logger.warning("Could not send ticket to chat_id=%d: %s", chat_id, e)


async def notify_admins_new_booking(
    bot: Bot,
    admin_ids: Iterable[int],
    service_title: str,
    summary: BookingSummary,
) -> int:
    """
    Tell every admin about a new booking.
    Returns the number of successfully delivered messages.
    """
    text = (
        f"🆕 {html.bold('New booking')}: {html.quote(service_title)}\n\n"
        f"{format_summary(summary)}"
    )
    count = 0
    for admin_id in admin_ids:
        try:
            await bot.send_message(chat_id=admin_id, text=text, parse_mode=ParseMode.HTML)
            count += 1
        except (TelegramForbiddenError, TelegramBadRequest) as e:
            logger.warning("Could not notify admin telegram_id=%d: %s", admin_id, e)
    return count


async def notify_booking_cancelled(bot: Bot, booking: Booking) -> None:
    """Let the customer know an admin cancelled their booking."""
    if booking.telegram_id is None:
        return
    service = SERVICE_LABELS.get(booking.service_type, booking.service_type)
    text = (
        f"❌ {html.bold('Booking cancelled')}\n\n"
        f"{html.quote(service)} · ref {html.code(booking.short_reference)}\n\n"
        f"Please contact {html.quote(settings.FACILITY_NAME)} if you have questions."
    )
    try:
        await bot.send_message(chat_id=booking.telegram_id, text=text, parse_mode=ParseMode.HTML)
    except (TelegramForbiddenError, TelegramBadRequest) as e:
        logger.warning("Could not notify customer telegram_id=%d: %s", booking.telegram_id, e)
