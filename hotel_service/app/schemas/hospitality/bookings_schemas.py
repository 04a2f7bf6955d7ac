from datetime import datetime
from decimal import Decimal
from uuid import UUID
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from shared.utils.converters import as_utc_naive
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.hospitality_enum import BookingStatus


# ----------------- Base -----------------
class BookingBase(BaseModel):
    user_id: UUID
    room_id: UUID
    check_in: datetime
    check_out: datetime
    total_price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    special_requests: Optional[str] = None

    model_config = {"from_attributes": True}


# ----------------- Create -----------------
class BookingCreate(BookingBase):
    """Walk-in booking; the engine always starts it as checked in."""

    @field_validator("check_in", "check_out")
    @classmethod
    def normalize_utc(cls, v):
        return as_utc_naive(v)


# ----------------- Update -----------------
class BookingUpdate(BaseModel):
    """Constrained patch: no ``status``, transitions have their own endpoints."""
    user_id: Optional[UUID] = None
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    total_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    special_requests: Optional[str] = None

    model_config = {"extra": "forbid"}

    @field_validator("check_in", "check_out")
    @classmethod
    def normalize_utc(cls, v):
        return as_utc_naive(v)


# ----------------- Out -----------------
class BookingOut(BookingBase):
    id: UUID
    status: BookingStatus
    room_charges: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ----------------- Request -----------------
class BookingRequest(EmptyStringModel):
    user_id: Optional[UUID] = None
    room_id: Optional[UUID] = None


# ----------------- Bill -----------------
class BookingBill(BaseModel):
    booking_id: UUID
    room_charges: Decimal
    orders_total: Decimal
    final_total: Decimal
    order_count: int
