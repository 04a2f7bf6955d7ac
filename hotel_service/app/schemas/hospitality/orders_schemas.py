from datetime import datetime
from decimal import Decimal
from uuid import UUID
from typing import List, Optional
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.hospitality_enum import OrderStatus, OrderType


class OrderItem(BaseModel):
    name: str
    quantity: int = Field(..., ge=1)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    notes: Optional[str] = None


# ----------------- Base -----------------
class OrderBase(BaseModel):
    booking_id: UUID
    room_id: UUID
    order_type: OrderType = OrderType.FOOD
    items: List[OrderItem] = Field(..., min_length=1)
    total_price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


# ----------------- Create -----------------
class OrderCreate(OrderBase):
    status: OrderStatus = OrderStatus.PENDING


# ----------------- Update -----------------
class OrderUpdate(BaseModel):
    order_type: Optional[OrderType] = None
    items: Optional[List[OrderItem]] = Field(None, min_length=1)
    total_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    notes: Optional[str] = None

    model_config = {"extra": "forbid"}


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


# ----------------- Out -----------------
class OrderOut(OrderBase):
    id: UUID
    status: OrderStatus
    ordered_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ----------------- Request -----------------
class OrderRequest(EmptyStringModel):
    booking_id: Optional[UUID] = None
    room_id: Optional[UUID] = None
    status: Optional[OrderStatus] = None
