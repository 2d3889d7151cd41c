from pitchbot.keyboards.callbacks import (
    MainMenuCb,
    ServiceCb,
    WizardCb,
    AdminPanelCb,
    BookingCb,
)
from pitchbot.keyboards.main_menu import customer_main_menu, admin_main_menu, back_to_main
from pitchbot.keyboards.booking_kb import (
    service_list_kb,
    step_kb,
    display_value,
    cancel_input_kb,
    booking_done_kb,
    my_bookings_kb,
)
from pitchbot.keyboards.admin_kb import (
    service_filter_kb,
    booking_list_kb,
    booking_detail_kb,
    confirm_cancel_kb,
)

__all__ = [
    # callbacks
    "MainMenuCb", "ServiceCb", "WizardCb", "AdminPanelCb", "BookingCb",
    # main menu
    "customer_main_menu", "admin_main_menu", "back_to_main",
    # booking wizard
    "service_list_kb", "step_kb", "display_value", "cancel_input_kb",
    "booking_done_kb", "my_bookings_kb",
    # admin
    "service_filter_kb", "booking_list_kb", "booking_detail_kb", "confirm_cancel_kb",
]
