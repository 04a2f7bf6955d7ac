from datetime import datetime
from decimal import Decimal
from uuid import UUID
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


# ----------------- Base -----------------
class HotelBase(BaseModel):
    name: str
    address: str
    city: str
    country: str
    description: Optional[str] = None
    phone: str
    email: EmailStr
    rating: Optional[Decimal] = Field(Decimal("0"), ge=0, le=5, decimal_places=2)

    model_config = {"from_attributes": True}


# ----------------- Create -----------------
class HotelCreate(HotelBase):
    pass


# ----------------- Update -----------------
class HotelUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    rating: Optional[Decimal] = Field(None, ge=0, le=5, decimal_places=2)

    model_config = {"extra": "forbid"}


# ----------------- Out -----------------
class HotelOut(HotelBase):
    id: UUID
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ----------------- Request -----------------
class HotelRequest(EmptyStringModel):
    city: Optional[str] = None
