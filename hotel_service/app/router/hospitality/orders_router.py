from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...schemas.hospitality.orders_schemas import (
    OrderCreate,
    OrderOut,
    OrderRequest,
    OrderStatusUpdate,
    OrderUpdate,
)
from ...crud.hospitality import orders_crud as crud
from shared.core.database import get_hotel_db as get_db
from shared.core.auth import allow_staff, validate_current_token
from shared.core.schemas import UserToken


router = APIRouter(prefix="/api/orders", tags=["Orders"])


# ----------------- Create Order -----------------
@router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_order_route(
    order: OrderCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.create_order(db, order)


# ---------------- List Orders ----------------
@router.get("", response_model=List[OrderOut])
def get_orders_endpoint(
    params: OrderRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_orders(db, params)


@router.get("/{order_id}", response_model=OrderOut)
def get_order_endpoint(
    order_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_order(db, order_id)


# ----------------- Update Order -----------------
@router.patch("/{order_id}", response_model=OrderOut)
def update_order_route(
    order_id: UUID,
    order_update: OrderUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.update_order(db, order_id, order_update)


@router.patch("/{order_id}/status", response_model=OrderOut)
def update_order_status_route(
    order_id: UUID,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.update_order_status(db, order_id, payload.status)


# ---------------- Delete Order ----------------
@router.delete("/{order_id}")
def delete_order_route(
    order_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    return crud.delete_order(db, order_id)
