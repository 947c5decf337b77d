from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum, Index, CheckConstraint
from sqlalchemy.orm import relationship
import enum

from database.connection import Base
from utils.clock import utc_now


class BookingStatus(str, enum.Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"


class Booking(Base):
    """
    Booking model - a reservation of one room by one user over [start_time, end_time)

    Times are absolute UTC instants. Bookings that are not cancelled must never
    overlap other active bookings of the same room.
    """
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_bookings_time_order"),
        Index("ix_bookings_room_window", "room_id", "start_time", "end_time"),
    )

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    purpose = Column(String(500), nullable=True)
    status = Column(Enum(BookingStatus), default=BookingStatus.PENDING, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    room = relationship("Room", back_populates="bookings")
    user = relationship("User", back_populates="bookings")

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.CANCELLED

    def __repr__(self):
        return f"<Booking(id={self.id}, room_id={self.room_id}, status={self.status})>"
