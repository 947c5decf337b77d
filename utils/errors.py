"""
Domain errors raised by the booking logic and the storage layer
Routes translate them into HTTP responses; nothing here knows about HTTP
"""


class BookingError(Exception):
    """Base class for booking failures the caller can report to the user"""
    kind = "BookingError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTimeRange(BookingError):
    kind = "InvalidTimeRange"

    def __init__(self, message: str = "End time must be after start time"):
        super().__init__(message)


class PastBooking(BookingError):
    kind = "PastBooking"

    def __init__(self, message: str = "Cannot book in the past"):
        super().__init__(message)


class SlotConflict(BookingError):
    kind = "SlotConflict"

    def __init__(self, message: str = "Room is already booked for this time slot", conflicting_id=None):
        super().__init__(message)
        self.conflicting_id = conflicting_id


class RoomNotFound(BookingError):
    kind = "RoomNotFound"

    def __init__(self, message: str = "Room not found"):
        super().__init__(message)


class BookingNotFound(BookingError):
    kind = "BookingNotFound"

    def __init__(self, message: str = "Booking not found"):
        super().__init__(message)


class InfrastructureError(Exception):
    """Storage or network failure beneath the booking logic. Never retried here."""
