from datetime import datetime
from uuid import UUID
from typing import Optional
from pydantic import BaseModel

from shared.core.schemas import PageQueryParams, PageResponse
from ...enum.guest_services_enum import MaintenanceCategory, MaintenancePriority, MaintenanceStatus


# ----------------- Base -----------------
class MaintenanceRequestBase(BaseModel):
    hotel_id: UUID
    room_id: UUID
    booking_id: UUID
    user_id: UUID
    description: str
    category: MaintenanceCategory = MaintenanceCategory.OTHER
    priority: MaintenancePriority = MaintenancePriority.MEDIUM
    phone_number: Optional[str] = None
    original_message: Optional[str] = None
    ai_analysis: Optional[str] = None
    description_amharic: Optional[str] = None
    original_message_amharic: Optional[str] = None

    model_config = {"from_attributes": True}


# ----------------- Create -----------------
class MaintenanceRequestCreate(MaintenanceRequestBase):
    status: MaintenanceStatus = MaintenanceStatus.PENDING


# ----------------- Update -----------------
class MaintenanceRequestUpdate(BaseModel):
    description: Optional[str] = None
    category: Optional[MaintenanceCategory] = None
    priority: Optional[MaintenancePriority] = None
    status: Optional[MaintenanceStatus] = None
    ai_analysis: Optional[str] = None
    description_amharic: Optional[str] = None

    model_config = {"extra": "forbid"}


# ----------------- Out -----------------
class MaintenanceRequestOut(MaintenanceRequestBase):
    id: UUID
    status: MaintenanceStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None


# ----------------- Request -----------------
class MaintenanceRequestParams(PageQueryParams):
    hotel_id: Optional[UUID] = None
    status: Optional[MaintenanceStatus] = None
    priority: Optional[MaintenancePriority] = None
    category: Optional[MaintenanceCategory] = None


class MaintenanceRequestListResponse(PageResponse[MaintenanceRequestOut]):
    pass


# ----------------- Webhook -----------------
class WebhookResponse(BaseModel):
    success: bool
    message: str
    request_id: Optional[UUID] = None
