from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...schemas.hospitality.hotels_schemas import HotelCreate, HotelOut, HotelRequest, HotelUpdate
from ...crud.hospitality import hotels_crud as crud
from shared.core.database import get_hotel_db as get_db
from shared.core.auth import allow_staff, validate_current_token
from shared.core.schemas import UserToken


router = APIRouter(prefix="/api/hotels", tags=["Hotels"])


@router.post("", response_model=HotelOut, status_code=status.HTTP_201_CREATED)
def create_hotel_route(
    hotel: HotelCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    return crud.create_hotel(db, hotel)


@router.get("", response_model=List[HotelOut])
def get_hotels_endpoint(
    params: HotelRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_hotels(db, params)


@router.get("/{hotel_id}", response_model=HotelOut)
def get_hotel_endpoint(
    hotel_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_hotel(db, hotel_id)


@router.patch("/{hotel_id}", response_model=HotelOut)
def update_hotel_route(
    hotel_id: UUID,
    hotel_update: HotelUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    return crud.update_hotel(db, hotel_id, hotel_update)


@router.delete("/{hotel_id}")
def delete_hotel_route(
    hotel_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    return crud.delete_hotel(db, hotel_id)
