import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from shared.core.database import transaction
from shared.core.exceptions import IllegalStateTransitionError, NotFoundError, ValidationError
from shared.utils.converters import to_money, utc_now
from ...enum.hospitality_enum import BookingStatus, OrderStatus
from ...models.hospitality.bookings import Booking
from ...models.hospitality.orders import Order
from ...schemas.hospitality.orders_schemas import OrderCreate, OrderRequest, OrderUpdate

logger = logging.getLogger(__name__)


def _serialize_items(items) -> list:
    # JSON column: keep prices as strings so cents survive the round trip
    return [item.model_dump(mode="json") for item in items]


# ----------------- Get All Orders -----------------
def get_orders(db: Session, params: OrderRequest) -> List[Order]:
    query = db.query(Order)

    if params.booking_id:
        query = query.filter(Order.booking_id == params.booking_id)

    if params.room_id:
        query = query.filter(Order.room_id == params.room_id)

    if params.status:
        query = query.filter(Order.status == params.status)

    if params.status and not (params.booking_id or params.room_id):
        # kitchen queue: oldest first
        query = query.order_by(Order.ordered_at.asc())
    else:
        query = query.order_by(Order.ordered_at.desc())

    return query.all()


# ----------------- Get Single Order -----------------
def get_order(db: Session, order_id: UUID) -> Order:
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise NotFoundError(f"Order {order_id} not found")
    return order


# ----------------- Create Order -----------------
def create_order(db: Session, order: OrderCreate) -> Order:
    booking = db.query(Booking).filter(Booking.id == order.booking_id).first()
    if not booking:
        raise NotFoundError(f"Booking {order.booking_id} not found")

    if booking.status != BookingStatus.CHECKED_IN:
        raise IllegalStateTransitionError(
            "Orders can only be placed for checked-in bookings")

    if booking.room_id != order.room_id:
        raise ValidationError("Order room does not match the booking's room")

    db_order = Order(
        booking_id=order.booking_id,
        room_id=order.room_id,
        order_type=order.order_type,
        items=_serialize_items(order.items),
        total_price=to_money(order.total_price),
        status=order.status,
        notes=order.notes,
    )
    if order.status == OrderStatus.DELIVERED:
        db_order.delivered_at = utc_now()

    with transaction(db):
        db.add(db_order)
    db.refresh(db_order)
    logger.info("Order %s placed for booking %s (%s)",
                db_order.id, booking.id, db_order.total_price)
    return db_order


# ----------------- Update Order -----------------
def update_order(db: Session, order_id: UUID, order_update: OrderUpdate) -> Order:
    db_order = get_order(db, order_id)
    update_data = order_update.model_dump(exclude_unset=True)

    for key in ("items", "total_price", "order_type"):
        if key in update_data and update_data[key] is None:
            raise ValidationError(f"{key} cannot be null")

    if "items" in update_data:
        update_data["items"] = _serialize_items(order_update.items)
    if "total_price" in update_data:
        update_data["total_price"] = to_money(update_data["total_price"])

    with transaction(db):
        for key, value in update_data.items():
            setattr(db_order, key, value)
    db.refresh(db_order)
    return db_order


def update_order_status(db: Session, order_id: UUID, status: OrderStatus) -> Order:
    """Overwrite the status; delivery stamps ``delivered_at``, which is never cleared."""
    db_order = get_order(db, order_id)
    with transaction(db):
        db_order.status = status
        if status == OrderStatus.DELIVERED:
            db_order.delivered_at = utc_now()
    db.refresh(db_order)
    logger.info("Order %s status set to %s", order_id, status.value)
    return db_order


# ----------------- Delete Order -----------------
def delete_order(db: Session, order_id: UUID):
    db_order = get_order(db, order_id)
    with transaction(db):
        db.delete(db_order)
    return {"message": "Order deleted successfully"}
