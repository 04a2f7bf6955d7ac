from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...schemas.hospitality.bookings_schemas import (
    BookingBill,
    BookingCreate,
    BookingOut,
    BookingRequest,
    BookingUpdate,
)
from ...crud.hospitality import bookings_crud as crud
from shared.core.database import get_hotel_db as get_db
from shared.core.auth import allow_staff, validate_current_token
from shared.core.schemas import UserToken


router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


# ----------------- Create Booking -----------------
@router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
def create_booking_route(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.create_booking(db, booking)


# ---------------- List Bookings ----------------
@router.get("", response_model=List[BookingOut])
def get_bookings_endpoint(
    params: BookingRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_bookings(db, params)


@router.get("/{booking_id}", response_model=BookingOut)
def get_booking_endpoint(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_booking(db, booking_id)


@router.get("/{booking_id}/bill", response_model=BookingBill)
def get_booking_bill_endpoint(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.calculate_booking_bill(db, booking_id)


# ----------------- Update Booking -----------------
@router.patch("/{booking_id}", response_model=BookingOut)
def update_booking_route(
    booking_id: UUID,
    booking_update: BookingUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.update_booking(db, booking_id, booking_update)


# ----------------- Transitions -----------------
@router.post("/{booking_id}/check-in", response_model=BookingOut)
def check_in_booking_route(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.check_in_booking(db, booking_id)


@router.post("/{booking_id}/check-out", response_model=BookingOut)
def check_out_booking_route(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.check_out_booking(db, booking_id)


@router.post("/{booking_id}/cancel", response_model=BookingOut)
def cancel_booking_route(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.cancel_booking(db, booking_id)


# ---------------- Delete Booking ----------------
@router.delete("/{booking_id}")
def delete_booking_route(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    return crud.delete_booking(db, booking_id)
