"""
Booking validation - time-slot checks and conflict detection

Intervals are half-open [start, end): a booking ending at 11:00 does not
conflict with one starting at 11:00. The validator holds no state besides
its clock, so one instance can be shared by concurrent requests.
"""
from datetime import datetime
from typing import Iterable, Optional

from models.booking import Booking, BookingStatus
from models.room import Room
from schemas.booking import BookingUpdate
from utils.clock import Clock, as_utc, utc_now
from utils.errors import InvalidTimeRange, PastBooking, RoomNotFound, SlotConflict


def intervals_overlap(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    return as_utc(a_start) < as_utc(b_end) and as_utc(b_start) < as_utc(a_end)


def find_conflict(
    start: datetime,
    end: datetime,
    existing_bookings: Iterable[Booking],
    exclude_id: Optional[int] = None,
) -> Optional[Booking]:
    """Return the first active booking overlapping [start, end), if any"""
    for other in existing_bookings:
        if exclude_id is not None and other.id == exclude_id:
            continue
        if other.status == BookingStatus.CANCELLED:
            continue
        if intervals_overlap(start, end, other.start_time, other.end_time):
            return other
    return None


class BookingValidator:
    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    def now(self) -> datetime:
        return as_utc(self.clock())

    def validate_new_booking(
        self,
        room: Optional[Room],
        requester_id: int,
        start: datetime,
        end: datetime,
        existing_bookings: Iterable[Booking],
        purpose: Optional[str] = None,
    ) -> Booking:
        """
        Check a prospective booking and build it

        Args:
            room: The room being booked, None when it does not exist
            requester_id: Id of the acting user, who becomes the owner
            start, end: Requested window
            existing_bookings: Bookings already stored for the room

        Returns:
            Unsaved Booking with status Confirmed

        Raises:
            RoomNotFound, InvalidTimeRange, PastBooking, SlotConflict
        """
        if room is None:
            raise RoomNotFound()

        start = as_utc(start)
        end = as_utc(end)
        now = self.now()

        if start >= end:
            raise InvalidTimeRange()

        if start < now:
            raise PastBooking()

        conflict = find_conflict(start, end, existing_bookings)
        if conflict is not None:
            raise SlotConflict(conflicting_id=conflict.id)

        return Booking(
            room_id=room.id,
            user_id=requester_id,
            start_time=start,
            end_time=end,
            purpose=purpose,
            status=BookingStatus.CONFIRMED,
            created_at=now,
        )

    def apply_partial_update(
        self,
        booking: Booking,
        patch: BookingUpdate,
        existing_bookings: Iterable[Booking],
    ) -> Booking:
        """
        Apply the fields present in patch to booking

        The resulting window is re-checked for ordering and, while the booking
        stays active, against the other bookings of its room. Nothing is
        assigned unless every check passes.
        """
        start = as_utc(patch.start_time) if patch.start_time is not None else as_utc(booking.start_time)
        end = as_utc(patch.end_time) if patch.end_time is not None else as_utc(booking.end_time)
        status = patch.status if patch.status is not None else booking.status
        purpose = patch.purpose if patch.purpose is not None else booking.purpose

        if start >= end:
            raise InvalidTimeRange()

        window_changed = start != as_utc(booking.start_time) or end != as_utc(booking.end_time)
        reactivated = booking.status == BookingStatus.CANCELLED and status != BookingStatus.CANCELLED

        if status != BookingStatus.CANCELLED and (window_changed or reactivated):
            conflict = find_conflict(start, end, existing_bookings, exclude_id=booking.id)
            if conflict is not None:
                raise SlotConflict(conflicting_id=conflict.id)

        booking.start_time = start
        booking.end_time = end
        booking.status = status
        booking.purpose = purpose
        booking.updated_at = self.now()
        return booking
