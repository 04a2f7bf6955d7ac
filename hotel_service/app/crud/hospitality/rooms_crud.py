import logging
import math
from typing import List
from uuid import UUID

from sqlalchemy import exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.database import transaction
from shared.core.exceptions import DuplicateEntryError, NotFoundError, ValidationError
from ...enum.hospitality_enum import BookingStatus, RoomStatus
from ...models.hospitality.bookings import Booking
from ...models.hospitality.hotels import Hotel
from ...models.hospitality.rooms import Room
from ...schemas.hospitality.rooms_schemas import (
    AvailableRoomRequest,
    RoomCreate,
    RoomOut,
    RoomUpdate,
)

logger = logging.getLogger(__name__)


# ----------------- Get All Rooms -----------------
def get_rooms(db: Session) -> List[Room]:
    return db.query(Room).order_by(Room.hotel_id, Room.room_number).all()


def get_rooms_by_hotel(db: Session, hotel_id: UUID) -> List[Room]:
    return (
        db.query(Room)
        .filter(Room.hotel_id == hotel_id)
        .order_by(Room.room_number.asc())
        .all()
    )


# ----------------- Get Single Room -----------------
def get_room(db: Session, room_id: UUID) -> Room:
    room = db.query(Room).filter(Room.id == room_id).first()
    if not room:
        raise NotFoundError(f"Room {room_id} not found")
    return room


# ----------------- Availability -----------------
def build_available_room_filters(params: AvailableRoomRequest):
    filters = [Room.status == RoomStatus.AVAILABLE]

    if params.hotel_id:
        filters.append(Room.hotel_id == params.hotel_id)

    if params.beds:
        filters.append(Room.beds == params.beds)

    if params.bathrooms:
        filters.append(Room.bathrooms == params.bathrooms)

    if params.check_in and params.check_out:
        # same half-open overlap rule the booking engine enforces
        overlapping = exists().where(
            Booking.room_id == Room.id,
            Booking.status != BookingStatus.CANCELLED,
            Booking.check_in < params.check_out,
            Booking.check_out > params.check_in,
        )
        filters.append(~overlapping)

    return filters


def get_available_rooms(db: Session, params: AvailableRoomRequest):
    if params.check_in and params.check_out and params.check_in >= params.check_out:
        raise ValidationError("Check-out date must be after check-in date")

    base_query = db.query(Room).filter(*build_available_room_filters(params))
    total = base_query.count()

    rooms = (
        base_query
        .order_by(Room.hotel_id, Room.room_number, Room.id)
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return {
        "data": [RoomOut.model_validate(room) for room in rooms],
        "total": total,
        "page": params.page,
        "total_pages": math.ceil(total / params.limit),
    }


# ----------------- Create Room -----------------
def create_room(db: Session, room: RoomCreate) -> Room:
    if not db.query(Hotel.id).filter(Hotel.id == room.hotel_id).first():
        raise NotFoundError(f"Hotel {room.hotel_id} not found")

    db_room = Room(**room.model_dump())
    try:
        with transaction(db):
            db.add(db_room)
    except IntegrityError:
        raise DuplicateEntryError(
            f"Room {room.room_number} already exists in this hotel")
    db.refresh(db_room)
    return db_room


# ----------------- Update Room -----------------
def update_room(db: Session, room_id: UUID, room_update: RoomUpdate) -> Room:
    db_room = get_room(db, room_id)
    try:
        with transaction(db):
            for key, value in room_update.model_dump(exclude_unset=True).items():
                setattr(db_room, key, value)
    except IntegrityError:
        raise DuplicateEntryError(
            f"Room {room_update.room_number} already exists in this hotel")
    db.refresh(db_room)
    return db_room


def update_room_status(db: Session, room_id: UUID, status: RoomStatus) -> Room:
    db_room = get_room(db, room_id)
    with transaction(db):
        db_room.status = status
    db.refresh(db_room)
    logger.info("Room %s status set to %s", room_id, status.value)
    return db_room


# ----------------- Delete Room -----------------
def delete_room(db: Session, room_id: UUID):
    db_room = get_room(db, room_id)
    with transaction(db):
        db.delete(db_room)
    return {"message": "Room deleted successfully"}
