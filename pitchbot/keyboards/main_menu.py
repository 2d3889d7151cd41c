"""
Main menu keyboards — customer vs. admin.
"""
from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from pitchbot.keyboards.callbacks import AdminPanelCb, MainMenuCb


def customer_main_menu() -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.row(
        InlineKeyboardButton(text="⚽ Book now",     callback_data=MainMenuCb(action="book").pack()),
    )
    builder.row(
        InlineKeyboardButton(text="🎫 My bookings",  callback_data=MainMenuCb(action="my_bookings").pack()),
    )
    return builder.as_markup()


def admin_main_menu() -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.row(
        InlineKeyboardButton(text="📋 Bookings",     callback_data=AdminPanelCb(action="bookings").pack()),
    )
    builder.row(
        InlineKeyboardButton(text="📊 Stats",        callback_data=AdminPanelCb(action="stats").pack()),
    )
    builder.row(
        InlineKeyboardButton(text="⚽ Book now",     callback_data=MainMenuCb(action="book").pack()),
    )
    return builder.as_markup()


def back_to_main() -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.row(InlineKeyboardButton(text="🔙 Main menu", callback_data=MainMenuCb(action="main").pack()))
    return builder.as_markup()
