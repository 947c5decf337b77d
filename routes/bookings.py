from contextlib import nullcontext
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
import logging

from database.connection import get_db
from database.repositories import BookingRepository, RoomRepository, room_lock
from models.booking import Booking
from models.user import User
from routes.auth import get_current_user
from schemas.booking import BookingCreate, BookingUpdate, BookingResponse
from utils.access_policy import AccessDecision, authorize_booking_access, can_see_all_bookings
from utils.booking_validator import BookingValidator
from utils.errors import BookingError, BookingNotFound

router = APIRouter()
logger = logging.getLogger(__name__)

_validator = BookingValidator()


def get_booking_validator() -> BookingValidator:
    return _validator


def get_booking_for_actor(booking_id: int, user: User, bookings: BookingRepository) -> Booking:
    """
    Load a booking the current user may act on
    404 when it does not exist, 403 when it belongs to someone else
    """
    booking = bookings.get_by_id(booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail=BookingNotFound().message)

    if authorize_booking_access(user.id, user.role, booking) == AccessDecision.FORBID:
        raise HTTPException(status_code=403, detail="You can only access your own bookings")

    return booking


@router.get("/bookings", response_model=list[BookingResponse])
def list_bookings(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """
    Admins see every booking, everyone else only their own
    """
    bookings = BookingRepository(db)
    if can_see_all_bookings(user.role):
        result = bookings.list_all()
    else:
        result = bookings.list_for_user(user.id)
    return [BookingResponse.model_validate(b) for b in result]


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
def get_booking(booking_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    booking = get_booking_for_actor(booking_id, user, BookingRepository(db))
    return BookingResponse.model_validate(booking)


@router.post("/bookings", response_model=BookingResponse, status_code=201)
def create_booking(
    payload: BookingCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    validator: BookingValidator = Depends(get_booking_validator)
):
    """
    Book a room for the current user
    Rejected with 400 when the room is unknown, the window is empty or in the
    past, or it overlaps an active booking of the same room
    """
    room = RoomRepository(db).get_by_id(payload.room_id)
    bookings = BookingRepository(db)

    # Unknown rooms are rejected without taking a lock
    with room_lock(room.id) if room else nullcontext():
        existing = bookings.find_by_room(room.id, payload.start_time, payload.end_time) if room else []
        try:
            booking = validator.validate_new_booking(
                room,
                user.id,
                payload.start_time,
                payload.end_time,
                existing,
                purpose=payload.purpose,
            )
        except BookingError as e:
            logger.info("Booking rejected for room %s: %s", payload.room_id, e.kind)
            raise HTTPException(status_code=400, detail=e.message)

        booking = bookings.insert(booking)

    logger.info("Booking %s created for room %s by user %s", booking.id, booking.room_id, user.id)
    return BookingResponse.model_validate(booking)


@router.put("/bookings/{booking_id}", status_code=204)
def update_booking(
    booking_id: int,
    patch: BookingUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    validator: BookingValidator = Depends(get_booking_validator)
):
    """
    Partial update of time window, purpose or status
    A changed window is checked again against the other bookings of the room
    """
    bookings = BookingRepository(db)
    booking = get_booking_for_actor(booking_id, user, bookings)

    with room_lock(booking.room_id):
        existing = bookings.find_by_room(booking.room_id)
        try:
            validator.apply_partial_update(booking, patch, existing)
        except BookingError as e:
            logger.info("Update of booking %s rejected: %s", booking_id, e.kind)
            raise HTTPException(status_code=400, detail=e.message)

        bookings.update(booking)

    logger.info("Booking %s updated by user %s", booking_id, user.id)
    return Response(status_code=204)


@router.delete("/bookings/{booking_id}", status_code=204)
def delete_booking(booking_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    bookings = BookingRepository(db)
    booking = get_booking_for_actor(booking_id, user, bookings)

    bookings.delete(booking)
    logger.info("Booking %s deleted by user %s", booking_id, user.id)
    return Response(status_code=204)
