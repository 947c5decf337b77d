from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
import logging

from database.connection import get_db
from database.repositories import RoomRepository
from models.room import Room
from models.user import User
from routes.auth import require_admin
from schemas.room import RoomResponse, RoomCreate, RoomUpdate
from utils.clock import utc_now

router = APIRouter()
logger = logging.getLogger(__name__)


def get_room_or_404(room_id: int, rooms: RoomRepository) -> Room:
    room = rooms.get_by_id(room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room


@router.get("/rooms", response_model=list[RoomResponse])
def list_rooms(db: Session = Depends(get_db)):
    return RoomRepository(db).list_all()


@router.get("/rooms/{room_id}", response_model=RoomResponse)
def get_room(room_id: int, db: Session = Depends(get_db)):
    return get_room_or_404(room_id, RoomRepository(db))


@router.post("/rooms", response_model=RoomResponse, status_code=201)
def create_room(room: RoomCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    db_room = RoomRepository(db).insert(Room(**room.model_dump()))
    logger.info("Room %s created by %s", db_room.id, admin.username)
    return db_room


@router.put("/rooms/{room_id}", status_code=204)
def update_room(
    room_id: int,
    changes: RoomUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Partial update - only provided fields are changed"""
    rooms = RoomRepository(db)
    room = get_room_or_404(room_id, rooms)

    for field, value in changes.model_dump(exclude_none=True).items():
        setattr(room, field, value)
    room.updated_at = utc_now()

    rooms.update(room)
    logger.info("Room %s updated by %s", room_id, admin.username)
    return Response(status_code=204)


@router.delete("/rooms/{room_id}", status_code=204)
def delete_room(room_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """Deleting a room also removes its bookings"""
    rooms = RoomRepository(db)
    room = get_room_or_404(room_id, rooms)

    rooms.delete(room)
    logger.info("Room %s deleted by %s", room_id, admin.username)
    return Response(status_code=204)
