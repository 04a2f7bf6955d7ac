import logging
from typing import List
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.database import transaction
from shared.core.exceptions import NotFoundError
from ...models.hospitality.hotels import Hotel
from ...schemas.hospitality.hotels_schemas import HotelCreate, HotelRequest, HotelUpdate

logger = logging.getLogger(__name__)


# ----------------- Get All Hotels -----------------
def get_hotels(db: Session, params: HotelRequest) -> List[Hotel]:
    query = db.query(Hotel)
    if params.city:
        query = query.filter(func.lower(Hotel.city) == params.city.lower())
    return query.order_by(Hotel.name.asc()).all()


# ----------------- Get Single Hotel -----------------
def get_hotel(db: Session, hotel_id: UUID) -> Hotel:
    hotel = db.query(Hotel).filter(Hotel.id == hotel_id).first()
    if not hotel:
        raise NotFoundError(f"Hotel {hotel_id} not found")
    return hotel


# ----------------- Create Hotel -----------------
def create_hotel(db: Session, hotel: HotelCreate) -> Hotel:
    db_hotel = Hotel(**hotel.model_dump())
    with transaction(db):
        db.add(db_hotel)
    db.refresh(db_hotel)
    logger.info("Created hotel %s (%s)", db_hotel.id, db_hotel.name)
    return db_hotel


# ----------------- Update Hotel -----------------
def update_hotel(db: Session, hotel_id: UUID, hotel_update: HotelUpdate) -> Hotel:
    db_hotel = get_hotel(db, hotel_id)
    with transaction(db):
        for key, value in hotel_update.model_dump(exclude_unset=True).items():
            setattr(db_hotel, key, value)
    db.refresh(db_hotel)
    return db_hotel


# ----------------- Delete Hotel -----------------
def delete_hotel(db: Session, hotel_id: UUID):
    db_hotel = get_hotel(db, hotel_id)
    with transaction(db):
        db.delete(db_hotel)
    logger.info("Deleted hotel %s", hotel_id)
    return {"message": "Hotel deleted successfully"}
