from datetime import datetime
from uuid import UUID
from typing import Optional
from pydantic import BaseModel

from shared.core.schemas import PageQueryParams, PageResponse
from ...enum.guest_services_enum import InquiryStatus


# ----------------- Base -----------------
class InquiryBase(BaseModel):
    name: str
    phone_number: str
    message: str
    message_amharic: Optional[str] = None
    message_english: Optional[str] = None
    original_language: Optional[str] = None
    ai_analysis: Optional[str] = None
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


# ----------------- Create -----------------
class InquiryCreate(InquiryBase):
    status: InquiryStatus = InquiryStatus.RECEIVED


# ----------------- Update -----------------
class InquiryUpdate(BaseModel):
    status: Optional[InquiryStatus] = None
    notes: Optional[str] = None
    message_amharic: Optional[str] = None
    message_english: Optional[str] = None

    model_config = {"extra": "forbid"}


# ----------------- Out -----------------
class InquiryOut(InquiryBase):
    id: UUID
    status: InquiryStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    addressed_at: Optional[datetime] = None


# ----------------- Request -----------------
class InquiryRequestParams(PageQueryParams):
    status: Optional[InquiryStatus] = None


class InquiryListResponse(PageResponse[InquiryOut]):
    pass


# ----------------- Webhook -----------------
class InquiryWebhookResponse(BaseModel):
    success: bool
    message: str
    inquiry_id: Optional[UUID] = None
