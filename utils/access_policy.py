"""
Authorization rules for bookings and rooms

A booking can be read, changed or deleted by its owner or by any admin.
Rooms are a public catalog; only admins may write to it.
"""
import enum

from models.booking import Booking
from models.user import UserRole


class AccessDecision(str, enum.Enum):
    ALLOW = "Allow"
    FORBID = "Forbid"


def authorize_booking_access(actor_id: int, actor_role: UserRole, booking: Booking) -> AccessDecision:
    if actor_role == UserRole.ADMIN:
        return AccessDecision.ALLOW
    if booking.user_id == actor_id:
        return AccessDecision.ALLOW
    return AccessDecision.FORBID


def authorize_room_write(actor_role: UserRole) -> AccessDecision:
    if actor_role == UserRole.ADMIN:
        return AccessDecision.ALLOW
    return AccessDecision.FORBID


def can_see_all_bookings(actor_role: UserRole) -> bool:
    """Listing filters to the actor's own bookings unless the actor is an admin"""
    return actor_role == UserRole.ADMIN
