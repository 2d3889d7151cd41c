from aiogram.fsm.state import State, StatesGroup


class BookingStates(StatesGroup):
    """FSM for the customer booking wizard."""
    choose_service = State()   # Inline: one of the six services
    wizard         = State()   # Step screen; the wizard itself lives in FSM data
    enter_value    = State()   # Text input for one form field
