"""
Thin data-access layer over the SQLAlchemy session

Every storage failure is rolled back and re-raised as InfrastructureError so
routes never see driver exceptions. No retries happen here.
"""
import logging
import threading
import weakref
from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from models.booking import Booking, BookingStatus
from models.room import Room
from models.user import User
from utils.errors import InfrastructureError

logger = logging.getLogger(__name__)

# Locks live only while a request holds them
_room_locks = weakref.WeakValueDictionary()
_room_locks_guard = threading.Lock()


@contextmanager
def room_lock(room_id: int):
    """
    Serialize the read-check-write sequence for one room within this process
    Separate processes sharing the database are not covered.
    """
    with _room_locks_guard:
        lock = _room_locks.get(room_id)
        if lock is None:
            lock = threading.Lock()
            _room_locks[room_id] = lock
    with lock:
        yield


class _Repository:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _storage(self, action: str):
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Storage failure while trying to %s", action)
            raise InfrastructureError(f"Storage failure while trying to {action}") from exc

    def _save(self, entity, action: str):
        with self._storage(action):
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)
        return entity

    def _remove(self, entity, action: str):
        with self._storage(action):
            self.db.delete(entity)
            self.db.commit()


class BookingRepository(_Repository):
    def _with_details(self):
        # Room and owner are rendered with every booking, load them in the same query
        return self.db.query(Booking).options(joinedload(Booking.room), joinedload(Booking.user))

    def find_by_room(
        self,
        room_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Booking]:
        """
        Active bookings of a room
        With a window given, only bookings that may overlap it are loaded
        """
        with self._storage("load bookings for room"):
            query = self.db.query(Booking).filter(
                Booking.room_id == room_id,
                Booking.status != BookingStatus.CANCELLED,
            )
            if start is not None and end is not None:
                query = query.filter(Booking.start_time < end, Booking.end_time > start)
            return query.all()

    def get_by_id(self, booking_id: int) -> Optional[Booking]:
        with self._storage("load booking"):
            return self._with_details().filter(Booking.id == booking_id).first()

    def exists_by_id(self, booking_id: int) -> bool:
        with self._storage("check booking"):
            return self.db.query(Booking.id).filter(Booking.id == booking_id).first() is not None

    def list_all(self) -> List[Booking]:
        with self._storage("list bookings"):
            return self._with_details().order_by(Booking.start_time).all()

    def list_for_user(self, user_id: int) -> List[Booking]:
        with self._storage("list bookings"):
            return self._with_details().filter(Booking.user_id == user_id).order_by(Booking.start_time).all()

    def insert(self, booking: Booking) -> Booking:
        booking = self._save(booking, "insert booking")
        return self.get_by_id(booking.id)

    def update(self, booking: Booking) -> Booking:
        return self._save(booking, "update booking")

    def delete(self, booking: Booking) -> None:
        self._remove(booking, "delete booking")


class RoomRepository(_Repository):
    def get_by_id(self, room_id: int) -> Optional[Room]:
        with self._storage("load room"):
            return self.db.query(Room).filter(Room.id == room_id).first()

    def list_all(self) -> List[Room]:
        with self._storage("list rooms"):
            return self.db.query(Room).order_by(Room.id).all()

    def insert(self, room: Room) -> Room:
        return self._save(room, "insert room")

    def update(self, room: Room) -> Room:
        return self._save(room, "update room")

    def delete(self, room: Room) -> None:
        self._remove(room, "delete room")


class UserRepository(_Repository):
    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._storage("load user"):
            return self.db.query(User).filter(User.id == user_id).first()

    def get_by_login(self, email_or_username: str) -> Optional[User]:
        with self._storage("load user"):
            return self.db.query(User).filter(
                or_(User.email == email_or_username, User.username == email_or_username)
            ).first()

    def exists(self, username: str, email: str) -> bool:
        with self._storage("check user"):
            return self.db.query(User.id).filter(
                or_(User.username == username, User.email == email)
            ).first() is not None

    def insert(self, user: User) -> User:
        return self._save(user, "insert user")
