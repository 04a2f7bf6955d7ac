import logging
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from shared.core.database import transaction
from shared.core.exceptions import (
    ConflictError,
    IllegalStateTransitionError,
    NotFoundError,
    ValidationError,
)
from shared.utils.converters import to_money
from ...enum.hospitality_enum import TERMINAL_BOOKING_STATUSES, BookingStatus, RoomStatus
from ...models.hospitality.bookings import Booking
from ...models.hospitality.orders import Order
from ...models.hospitality.rooms import Room
from ...schemas.hospitality.bookings_schemas import BookingCreate, BookingRequest, BookingUpdate

logger = logging.getLogger(__name__)

# fields a patch may never null out
REQUIRED_BOOKING_FIELDS = ("user_id", "check_in", "check_out", "total_price")


# ----------------- Helpers -----------------
def _ensure_valid_window(check_in, check_out):
    if check_in >= check_out:
        raise ValidationError("Check-out date must be after check-in date")


def find_conflicting_booking(
    db: Session,
    room_id: UUID,
    check_in,
    check_out,
    exclude_booking_id: Optional[UUID] = None
) -> Optional[Booking]:
    """Return a non-cancelled booking of the room overlapping [check_in, check_out)."""
    query = db.query(Booking).filter(
        Booking.room_id == room_id,
        Booking.status != BookingStatus.CANCELLED,
        Booking.check_in < check_out,
        Booking.check_out > check_in,
    )
    if exclude_booking_id:
        query = query.filter(Booking.id != exclude_booking_id)
    return query.first()


def _ensure_no_conflict(db: Session, room_id: UUID, check_in, check_out, exclude_booking_id=None):
    conflict = find_conflicting_booking(
        db, room_id, check_in, check_out, exclude_booking_id)
    if conflict:
        logger.info("Booking conflict on room %s: [%s, %s) overlaps booking %s",
                    room_id, check_in, check_out, conflict.id)
        raise ConflictError(
            "Room is already booked for the selected dates",
            details={"conflicting_booking_id": str(conflict.id)}
        )


def _set_room_status(db: Session, room_id: UUID, status: RoomStatus):
    room = db.query(Room).filter(Room.id == room_id).first()
    if room:
        room.status = status


# ----------------- Get All Bookings -----------------
def get_bookings(db: Session, params: BookingRequest) -> List[Booking]:
    query = db.query(Booking)

    if params.user_id:
        query = query.filter(Booking.user_id == params.user_id)

    if params.room_id:
        query = query.filter(Booking.room_id == params.room_id)

    if params.room_id and not params.user_id:
        query = query.order_by(Booking.check_in.asc())
    else:
        query = query.order_by(Booking.created_at.desc())

    return query.all()


# ----------------- Get Single Booking -----------------
def get_booking(db: Session, booking_id: UUID) -> Booking:
    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if not booking:
        raise NotFoundError(f"Booking {booking_id} not found")
    return booking


# ----------------- Create Booking -----------------
def create_booking(db: Session, booking: BookingCreate) -> Booking:
    """Register a walk-in stay: the booking starts checked in and the room becomes occupied."""
    _ensure_valid_window(booking.check_in, booking.check_out)

    with transaction(db):
        # lock the room row so concurrent creations for it serialize
        room = (
            db.query(Room)
            .filter(Room.id == booking.room_id)
            .with_for_update()
            .first()
        )
        if not room:
            raise NotFoundError(f"Room {booking.room_id} not found")

        _ensure_no_conflict(db, room.id, booking.check_in, booking.check_out)

        db_booking = Booking(
            user_id=booking.user_id,
            room_id=room.id,
            check_in=booking.check_in,
            check_out=booking.check_out,
            total_price=to_money(booking.total_price),
            special_requests=booking.special_requests,
            status=BookingStatus.CHECKED_IN,
        )
        db.add(db_booking)
        db.flush()

        room.status = RoomStatus.OCCUPIED

    db.refresh(db_booking)
    logger.info("Booking %s created for room %s [%s, %s)",
                db_booking.id, room.id, db_booking.check_in, db_booking.check_out)
    return db_booking


# ----------------- Update Booking -----------------
def update_booking(db: Session, booking_id: UUID, booking_update: BookingUpdate) -> Booking:
    db_booking = get_booking(db, booking_id)
    update_data = booking_update.model_dump(exclude_unset=True)

    for key in REQUIRED_BOOKING_FIELDS:
        if key in update_data and update_data[key] is None:
            raise ValidationError(f"{key} cannot be null")

    if "check_in" in update_data or "check_out" in update_data:
        new_check_in = update_data.get("check_in", db_booking.check_in)
        new_check_out = update_data.get("check_out", db_booking.check_out)
        _ensure_valid_window(new_check_in, new_check_out)
        # cancelled bookings hold no dates
        if db_booking.status != BookingStatus.CANCELLED:
            _ensure_no_conflict(db, db_booking.room_id, new_check_in,
                                new_check_out, exclude_booking_id=db_booking.id)

    if "total_price" in update_data:
        update_data["total_price"] = to_money(update_data["total_price"])

    with transaction(db):
        for key, value in update_data.items():
            setattr(db_booking, key, value)

    db.refresh(db_booking)
    return db_booking


# ----------------- Check In -----------------
def check_in_booking(db: Session, booking_id: UUID) -> Booking:
    db_booking = get_booking(db, booking_id)
    if db_booking.status != BookingStatus.CONFIRMED:
        raise IllegalStateTransitionError(
            f"Cannot check in a booking with status {db_booking.status.value}")

    with transaction(db):
        db_booking.status = BookingStatus.CHECKED_IN
        _set_room_status(db, db_booking.room_id, RoomStatus.OCCUPIED)

    db.refresh(db_booking)
    logger.info("Booking %s checked in", booking_id)
    return db_booking


# ----------------- Bill -----------------
def calculate_booking_bill(db: Session, booking_id: UUID) -> dict:
    """Room charges plus every order of the booking, whatever the order status."""
    db_booking = get_booking(db, booking_id)

    # after checkout total_price already holds the final figure
    room_charges = to_money(
        db_booking.room_charges if db_booking.room_charges is not None
        else db_booking.total_price
    )

    order_totals = (
        db.query(Order.total_price)
        .filter(Order.booking_id == db_booking.id)
        .all()
    )
    orders_total = sum((to_money(row.total_price) for row in order_totals),
                       Decimal("0.00"))

    return {
        "booking_id": db_booking.id,
        "room_charges": room_charges,
        "orders_total": to_money(orders_total),
        "final_total": to_money(room_charges + orders_total),
        "order_count": len(order_totals),
    }


# ----------------- Check Out -----------------
def check_out_booking(db: Session, booking_id: UUID) -> Booking:
    db_booking = get_booking(db, booking_id)
    if db_booking.status != BookingStatus.CHECKED_IN:
        raise IllegalStateTransitionError(
            f"Cannot check out a booking with status {db_booking.status.value}")

    bill = calculate_booking_bill(db, booking_id)

    with transaction(db):
        db_booking.room_charges = bill["room_charges"]
        db_booking.total_price = bill["final_total"]
        db_booking.status = BookingStatus.CHECKED_OUT
        _set_room_status(db, db_booking.room_id, RoomStatus.AVAILABLE)

    db.refresh(db_booking)
    logger.info("Booking %s checked out: room %s + orders %s = %s",
                booking_id, bill["room_charges"], bill["orders_total"], bill["final_total"])
    return db_booking


# ----------------- Cancel -----------------
def cancel_booking(db: Session, booking_id: UUID) -> Booking:
    db_booking = get_booking(db, booking_id)
    if db_booking.status in TERMINAL_BOOKING_STATUSES:
        raise IllegalStateTransitionError(
            f"Cannot cancel a booking with status {db_booking.status.value}")

    previous_status = db_booking.status
    with transaction(db):
        db_booking.status = BookingStatus.CANCELLED
        if previous_status in (BookingStatus.PENDING, BookingStatus.CONFIRMED):
            _set_room_status(db, db_booking.room_id, RoomStatus.AVAILABLE)

    if previous_status == BookingStatus.CHECKED_IN:
        # room stays occupied until staff release it
        logger.warning("Checked-in booking %s cancelled; room %s status left unchanged",
                       booking_id, db_booking.room_id)

    db.refresh(db_booking)
    logger.info("Booking %s cancelled (was %s)", booking_id, previous_status.value)
    return db_booking


# ----------------- Delete Booking -----------------
def delete_booking(db: Session, booking_id: UUID):
    db_booking = get_booking(db, booking_id)
    with transaction(db):
        db.delete(db_booking)
    logger.info("Booking %s deleted", booking_id)
    return {"message": "Booking deleted successfully"}
