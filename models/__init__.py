from database.connection import Base
from models.room import Room
from models.user import User, UserRole
from models.booking import Booking, BookingStatus

__all__ = ["Base", "Room", "User", "UserRole", "Booking", "BookingStatus"]
