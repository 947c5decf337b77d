from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

from models.booking import BookingStatus
from schemas.room import RoomSummary
from schemas.user import UserResponse
from utils.clock import as_utc


def _normalize(value: Optional[datetime]) -> Optional[datetime]:
    return as_utc(value) if value is not None else None


class BookingCreate(BaseModel):
    room_id: int
    start_time: datetime
    end_time: datetime
    purpose: Optional[str] = Field(None, max_length=500)

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_times(cls, value):
        return _normalize(value)


class BookingUpdate(BaseModel):
    """Partial update - fields left out (or null) keep their current value"""
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    purpose: Optional[str] = Field(None, max_length=500)
    status: Optional[BookingStatus] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_times(cls, value):
        return _normalize(value)


class BookingResponse(BaseModel):
    id: int
    room_id: int
    user_id: int
    start_time: datetime
    end_time: datetime
    purpose: Optional[str] = None
    status: BookingStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    room: Optional[RoomSummary] = None
    user: Optional[UserResponse] = None

    @field_validator("start_time", "end_time", "created_at", "updated_at")
    @classmethod
    def normalize_times(cls, value):
        return _normalize(value)

    class Config:
        from_attributes = True
