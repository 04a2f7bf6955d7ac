from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...schemas.hospitality.rooms_schemas import (
    AvailableRoomRequest,
    AvailableRoomResponse,
    RoomCreate,
    RoomOut,
    RoomStatusUpdate,
    RoomUpdate,
)
from ...crud.hospitality import rooms_crud as crud
from shared.core.database import get_hotel_db as get_db
from shared.core.auth import allow_staff, validate_current_token
from shared.core.schemas import UserToken


router = APIRouter(prefix="/api/rooms", tags=["Rooms"])


# ----------------- Create Room -----------------
@router.post("", response_model=RoomOut, status_code=status.HTTP_201_CREATED)
def create_room_route(
    room: RoomCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    return crud.create_room(db, room)


# ---------------- List Rooms ----------------
@router.get("", response_model=List[RoomOut])
def get_rooms_endpoint(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_rooms(db)


@router.get("/available", response_model=AvailableRoomResponse)
def get_available_rooms_endpoint(
    params: AvailableRoomRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_available_rooms(db, params)


@router.get("/hotel/{hotel_id}", response_model=List[RoomOut])
def get_rooms_by_hotel_endpoint(
    hotel_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_rooms_by_hotel(db, hotel_id)


@router.get("/{room_id}", response_model=RoomOut)
def get_room_endpoint(
    room_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_room(db, room_id)


# ----------------- Update Room -----------------
@router.patch("/{room_id}", response_model=RoomOut)
def update_room_route(
    room_id: UUID,
    room_update: RoomUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    return crud.update_room(db, room_id, room_update)


@router.patch("/{room_id}/status", response_model=RoomOut)
def update_room_status_route(
    room_id: UUID,
    payload: RoomStatusUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    return crud.update_room_status(db, room_id, payload.status)


# ---------------- Delete Room ----------------
@router.delete("/{room_id}")
def delete_room_route(
    room_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    return crud.delete_room(db, room_id)
