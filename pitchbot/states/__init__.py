from pitchbot.states.booking_states import BookingStates

__all__ = ["BookingStates"]
