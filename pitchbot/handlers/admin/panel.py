"""
Admin back-office: booking lists, booking details, cancellations, stats.
"""
import logging

from aiogram import Bot, F, Router
from aiogram.enums import ParseMode
from aiogram.types import CallbackQuery
from sqlalchemy.ext.asyncio import AsyncSession

from pitchbot.keyboards import (
    AdminPanelCb, BookingCb,
    admin_main_menu, back_to_main, service_filter_kb, booking_list_kb,
    booking_detail_kb, confirm_cancel_kb,
)
from pitchbot.middlewares import IsAdmin
from pitchbot.services import (
    SERVICE_LABELS, cancel_booking, count_bookings_by_service, format_booking,
    get_booking, list_bookings, notify_booking_cancelled,
)

logger = logging.getLogger(__name__)
router = Router(name="admin_panel")
router.callback_query.filter(IsAdmin())


# ── Admin home (back) ─────────────────────────────────────────────────────────

@router.callback_query(AdminPanelCb.filter(F.action == "back"))
async def cq_admin_home(callback: CallbackQuery) -> None:
    await callback.message.edit_text(
        "⚡ <b>Staff panel</b>\n\nChoose a section:",
        parse_mode=ParseMode.HTML,
        reply_markup=admin_main_menu(),
    )
    await callback.answer()


# ── Bookings ──────────────────────────────────────────────────────────────────

@router.callback_query(AdminPanelCb.filter(F.action == "bookings"))
async def cq_bookings_menu(callback: CallbackQuery) -> None:
    await callback.message.edit_text(
        "📋 <b>Bookings</b>\n\nWhich service?",
        parse_mode=ParseMode.HTML,
        reply_markup=service_filter_kb(),
    )
    await callback.answer()


@router.callback_query(BookingCb.filter(F.action == "list"))
async def cq_booking_list(
    callback: CallbackQuery,
    callback_data: BookingCb,
    session: AsyncSession,
) -> None:
    service = callback_data.service
    bookings = await list_bookings(session, service_type=service or None)
    title = SERVICE_LABELS.get(service, "All services")
    if not bookings:
        text = f"📋 <b>{title}</b>\n\n<i>No bookings yet.</i>"
    else:
        text = f"📋 <b>{title}</b>\n\nMost recent {len(bookings)} bookings:"
    await callback.message.edit_text(
        text,
        parse_mode=ParseMode.HTML,
        reply_markup=booking_list_kb(bookings, service),
    )
    await callback.answer()


@router.callback_query(BookingCb.filter(F.action == "view"))
async def cq_booking_view(
    callback: CallbackQuery,
    callback_data: BookingCb,
    session: AsyncSession,
) -> None:
    booking = await get_booking(session, callback_data.bid)
    if booking is None:
        await callback.answer("Booking not found.", show_alert=True)
        return
    await callback.message.edit_text(
        format_booking(booking),
        parse_mode=ParseMode.HTML,
        reply_markup=booking_detail_kb(booking, callback_data.service),
    )
    await callback.answer()


@router.callback_query(BookingCb.filter(F.action == "cancel"))
async def cq_booking_cancel_confirm(callback: CallbackQuery, callback_data: BookingCb) -> None:
    await callback.message.edit_text(
        f"Cancel booking #{callback_data.bid}? The customer will be notified.",
        reply_markup=confirm_cancel_kb(callback_data.bid, callback_data.service),
    )
    await callback.answer()


@router.callback_query(BookingCb.filter(F.action == "cancel_ok"))
async def cq_booking_cancel(
    callback: CallbackQuery,
    callback_data: BookingCb,
    session: AsyncSession,
    bot: Bot,
) -> None:
    booking, error = await cancel_booking(session, callback_data.bid)
    if error:
        await callback.answer(error, show_alert=True)
        return

    logger.info("Admin %d cancelled booking #%d", callback.from_user.id, booking.id)
    await notify_booking_cancelled(bot, booking)
    await callback.message.edit_text(
        format_booking(booking),
        parse_mode=ParseMode.HTML,
        reply_markup=booking_detail_kb(booking, callback_data.service),
    )
    await callback.answer("Booking cancelled.")


# ── Stats ─────────────────────────────────────────────────────────────────────

@router.callback_query(AdminPanelCb.filter(F.action == "stats"))
async def cq_stats(callback: CallbackQuery, session: AsyncSession) -> None:
    counts = await count_bookings_by_service(session)
    lines = ["📊 <b>Confirmed bookings</b>", ""]
    for service, label in SERVICE_LABELS.items():
        lines.append(f"{label}: <b>{counts.get(service, 0)}</b>")
    lines += ["", f"Total: <b>{sum(counts.values())}</b>"]
    await callback.message.edit_text(
        "\n".join(lines),
        parse_mode=ParseMode.HTML,
        reply_markup=back_to_main(),
    )
    await callback.answer()
