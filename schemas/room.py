from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class RoomBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    capacity: int = Field(..., ge=1, le=1000)
    location: Optional[str] = Field(None, max_length=200)
    is_available: bool = True
    price_per_hour: Optional[float] = Field(None, ge=0)


class RoomCreate(RoomBase):
    pass


class RoomUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    capacity: Optional[int] = Field(None, ge=1, le=1000)
    location: Optional[str] = Field(None, max_length=200)
    is_available: Optional[bool] = None
    price_per_hour: Optional[float] = Field(None, ge=0)


class RoomSummary(BaseModel):
    id: int
    name: str
    capacity: int
    location: Optional[str] = None
    is_available: bool
    price_per_hour: Optional[float] = None

    class Config:
        from_attributes = True


class RoomResponse(RoomBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
