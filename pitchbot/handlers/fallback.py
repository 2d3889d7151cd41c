"""
Global fallback handler — included LAST in the dispatcher.

Catches any callback query or message that no other router handled:
stale keyboards after a restart (MemoryStorage is wiped on redeploy),
wizard buttons pressed outside a booking session, stray text.
"""
import logging

from aiogram import Router
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from pitchbot.keyboards import admin_main_menu, customer_main_menu

logger = logging.getLogger(__name__)

router = Router(name="fallback")


@router.callback_query()
async def cq_fallback(
    callback: CallbackQuery,
    state: FSMContext,
    is_admin: bool = False,
) -> None:
    await callback.answer("⚠️ This button has expired. Please start again.", show_alert=True)
    await state.clear()
    try:
        await callback.message.edit_text(
            "🔄 <b>Session reset.</b> Back to the main menu:",
            parse_mode=ParseMode.HTML,
            reply_markup=admin_main_menu() if is_admin else customer_main_menu(),
        )
    except TelegramBadRequest as e:
        logger.debug("Stale message not edited: %s", e)


@router.message()
async def msg_fallback(message: Message, is_admin: bool = False) -> None:
    await message.answer(
        "Use the buttons below, or /start to begin.",
        reply_markup=admin_main_menu() if is_admin else customer_main_menu(),
    )
