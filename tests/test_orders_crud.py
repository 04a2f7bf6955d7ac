from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from shared.core.exceptions import IllegalStateTransitionError, NotFoundError, ValidationError
from hotel_service.app.crud.hospitality import orders_crud
from hotel_service.app.enum.hospitality_enum import BookingStatus, OrderStatus, OrderType
from hotel_service.app.schemas.hospitality.orders_schemas import (
    OrderCreate,
    OrderRequest,
    OrderUpdate,
)


def order_for(booking, room_id=None, total="45.00", **extra):
    return OrderCreate(
        booking_id=booking.id,
        room_id=room_id or booking.room_id,
        order_type=OrderType.FOOD,
        items=[{"name": "Shiro", "quantity": 2, "price": "22.50"}],
        total_price=Decimal(total),
        **extra,
    )


@pytest.fixture
def stay(room, make_booking, day):
    return make_booking(room, day(0), day(3), status=BookingStatus.CHECKED_IN)


def test_create_order_for_checked_in_booking(db, stay):
    order = orders_crud.create_order(db, order_for(stay))

    assert order.status == OrderStatus.PENDING
    assert order.total_price == Decimal("45.00")
    assert order.items[0]["name"] == "Shiro"
    assert order.delivered_at is None


def test_create_order_unknown_booking(db, stay):
    payload = order_for(stay)
    payload.booking_id = uuid4()
    with pytest.raises(NotFoundError):
        orders_crud.create_order(db, payload)


@pytest.mark.parametrize("status", [
    BookingStatus.CONFIRMED,
    BookingStatus.CHECKED_OUT,
    BookingStatus.CANCELLED,
])
def test_create_order_requires_active_stay(db, room, make_booking, day, status):
    booking = make_booking(room, day(0), day(3), status=status)
    with pytest.raises(IllegalStateTransitionError):
        orders_crud.create_order(db, order_for(booking))


def test_create_order_room_must_match_booking(db, stay, make_room):
    other_room = make_room()
    with pytest.raises(ValidationError):
        orders_crud.create_order(db, order_for(stay, room_id=other_room.id))


def test_order_requires_items():
    with pytest.raises(PydanticValidationError):
        OrderCreate(booking_id=uuid4(), room_id=uuid4(), items=[], total_price=Decimal("1"))


def test_delivered_stamps_timestamp_and_keeps_it(db, stay):
    order = orders_crud.create_order(db, order_for(stay))

    delivered = orders_crud.update_order_status(db, order.id, OrderStatus.DELIVERED)
    stamped_at = delivered.delivered_at
    assert delivered.status == OrderStatus.DELIVERED
    assert stamped_at is not None

    moved_back = orders_crud.update_order_status(db, order.id, OrderStatus.PREPARING)
    assert moved_back.status == OrderStatus.PREPARING
    assert moved_back.delivered_at == stamped_at


def test_status_overwrite_is_unconditional(db, stay):
    order = orders_crud.create_order(db, order_for(stay))
    orders_crud.update_order_status(db, order.id, OrderStatus.CANCELLED)
    revived = orders_crud.update_order_status(db, order.id, OrderStatus.CONFIRMED)
    assert revived.status == OrderStatus.CONFIRMED


def test_update_order_fields(db, stay):
    order = orders_crud.create_order(db, order_for(stay))
    updated = orders_crud.update_order(db, order.id, OrderUpdate(
        items=[{"name": "Coffee", "quantity": 3, "price": "2.00"}],
        total_price=Decimal("6.00"),
        notes="No sugar",
    ))
    assert updated.total_price == Decimal("6.00")
    assert updated.items == [{"name": "Coffee", "quantity": 3, "price": "2.00", "notes": None}]
    assert updated.notes == "No sugar"


def test_order_update_rejects_status():
    with pytest.raises(PydanticValidationError):
        OrderUpdate(status="delivered")


def test_get_orders_filters(db, stay, make_order):
    first = make_order(stay, "10.00", status=OrderStatus.READY)
    make_order(stay, "12.00")

    by_status = orders_crud.get_orders(db, OrderRequest(status=OrderStatus.READY))
    assert [o.id for o in by_status] == [first.id]

    by_booking = orders_crud.get_orders(db, OrderRequest(booking_id=stay.id))
    assert len(by_booking) == 2


def test_delete_order(db, stay):
    order = orders_crud.create_order(db, order_for(stay))
    orders_crud.delete_order(db, order.id)
    with pytest.raises(NotFoundError):
        orders_crud.get_order(db, order.id)
