from pitchbot.models.base import Base, engine, AsyncSessionFactory
from pitchbot.models.models import Booking, BookingStatus

__all__ = [
    "Base",
    "engine",
    "AsyncSessionFactory",
    "Booking",
    "BookingStatus",
]
