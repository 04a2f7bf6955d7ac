from datetime import datetime
from decimal import Decimal
from uuid import UUID
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from shared.core.schemas import PageQueryParams, PageResponse
from shared.utils.converters import as_utc_naive
from ...enum.hospitality_enum import RoomStatus, RoomType


# ----------------- Base -----------------
class RoomBase(BaseModel):
    hotel_id: UUID
    room_number: str
    type: RoomType = RoomType.STANDARD
    capacity: int = Field(..., ge=1)
    beds: int = Field(1, ge=1)
    bathrooms: int = Field(1, ge=1)
    price_per_night: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    floor: Optional[int] = None
    description: Optional[str] = None

    model_config = {"from_attributes": True}


# ----------------- Create -----------------
class RoomCreate(RoomBase):
    status: RoomStatus = RoomStatus.AVAILABLE


# ----------------- Update -----------------
class RoomUpdate(BaseModel):
    """Field patch; status changes go through ``RoomStatusUpdate``."""
    room_number: Optional[str] = None
    type: Optional[RoomType] = None
    capacity: Optional[int] = Field(None, ge=1)
    beds: Optional[int] = Field(None, ge=1)
    bathrooms: Optional[int] = Field(None, ge=1)
    price_per_night: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    floor: Optional[int] = None
    description: Optional[str] = None

    model_config = {"extra": "forbid"}


class RoomStatusUpdate(BaseModel):
    status: RoomStatus


# ----------------- Out -----------------
class RoomOut(RoomBase):
    id: UUID
    status: RoomStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ----------------- Request -----------------
class AvailableRoomRequest(PageQueryParams):
    hotel_id: Optional[UUID] = None
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    beds: Optional[int] = Field(None, ge=1)
    bathrooms: Optional[int] = Field(None, ge=1)

    @field_validator("check_in", "check_out")
    @classmethod
    def normalize_utc(cls, v):
        return as_utc_naive(v)


# ----------------- List Response -----------------
class AvailableRoomResponse(PageResponse[RoomOut]):
    pass
