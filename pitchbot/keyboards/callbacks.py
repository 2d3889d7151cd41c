"""
Centralized CallbackData factories.
Telegram limits callback_data to 64 bytes — all prefixes are kept short.
"""
from aiogram.filters.callback_data import CallbackData


class MainMenuCb(CallbackData, prefix="mm"):
    action: str           # main | book | my_bookings


class ServiceCb(CallbackData, prefix="svc"):
    service: str          # ServiceType value


class WizardCb(CallbackData, prefix="wz"):
    action: str           # choose | toggle | input | open | next | back | jump | cancel
    field: str = ""       # form field name
    value: str = ""       # option value
    step: int = 0         # target step for jump


class AdminPanelCb(CallbackData, prefix="adm"):
    action: str           # back | bookings | stats


class BookingCb(CallbackData, prefix="bk"):
    action: str           # list | view | cancel | cancel_ok
    bid: int = 0          # booking id
    service: str = ""     # list filter ("" = all)
