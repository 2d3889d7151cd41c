"""
Common handlers: /start, /cancel, main menu routing.
"""
import logging

from aiogram import F, Router
from aiogram.enums import ParseMode
from aiogram.filters import Command, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from pitchbot.config import settings
from pitchbot.keyboards import MainMenuCb, admin_main_menu, customer_main_menu

logger = logging.getLogger(__name__)
router = Router(name="common")


def _menu_text(is_admin: bool) -> str:
    if is_admin:
        return f"⚡ <b>{settings.FACILITY_NAME}</b> · staff panel\n\nChoose a section:"
    return f"⚽ <b>{settings.FACILITY_NAME}</b>\n\nWhat would you like to do?"


# ── /start ────────────────────────────────────────────────────────────────────

@router.message(CommandStart())
async def cmd_start(message: Message, state: FSMContext, is_admin: bool) -> None:
    await state.clear()
    name = message.from_user.first_name
    text = (
        f"👋 Welcome to <b>{settings.FACILITY_NAME}</b>, {name}!\n\n"
        f"Here you can:\n"
        f"• 🏟 Rent a field\n"
        f"• 🏆 Register a league team\n"
        f"• 👟 Join a pickup game\n"
        f"• 🎯 Book private training\n"
        f"• ⛺ Sign up for a camp\n"
        f"• 🎂 Host a birthday party\n\n"
        f"Choose an action:"
    )
    await message.answer(
        text,
        parse_mode=ParseMode.HTML,
        reply_markup=admin_main_menu() if is_admin else customer_main_menu(),
    )


@router.message(Command("cancel"))
async def cmd_cancel(message: Message, state: FSMContext, is_admin: bool) -> None:
    await state.clear()
    await message.answer(
        "Cancelled. " + _menu_text(is_admin),
        parse_mode=ParseMode.HTML,
        reply_markup=admin_main_menu() if is_admin else customer_main_menu(),
    )


# ── Main menu callback ────────────────────────────────────────────────────────

@router.callback_query(MainMenuCb.filter(F.action == "main"))
async def cq_main_menu(callback: CallbackQuery, is_admin: bool, state: FSMContext) -> None:
    await state.clear()
    await callback.message.edit_text(
        _menu_text(is_admin),
        parse_mode=ParseMode.HTML,
        reply_markup=admin_main_menu() if is_admin else customer_main_menu(),
    )
    await callback.answer()


@router.callback_query(F.data == "noop")
async def cq_noop(callback: CallbackQuery) -> None:
    await callback.answer()
