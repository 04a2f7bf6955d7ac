from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Form, status
from sqlalchemy.orm import Session

from ...schemas.guest_services.inquiries_schemas import (
    InquiryCreate,
    InquiryListResponse,
    InquiryOut,
    InquiryRequestParams,
    InquiryUpdate,
    InquiryWebhookResponse,
)
from ...crud.guest_services import inquiries_crud as crud
from ...util.message_analyzer import MessageAnalyzer, get_message_analyzer
from shared.core.database import get_hotel_db as get_db
from shared.core.auth import allow_staff, validate_current_token
from shared.core.schemas import UserToken


router = APIRouter(prefix="/api/inquiries", tags=["Inquiries"])


@router.post("", response_model=InquiryOut, status_code=status.HTTP_201_CREATED)
def create_inquiry_route(
    inquiry: InquiryCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.create_inquiry(db, inquiry)


@router.get("", response_model=InquiryListResponse)
def get_inquiries_endpoint(
    params: InquiryRequestParams = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_inquiries(db, params)


@router.get("/{inquiry_id}", response_model=InquiryOut)
def get_inquiry_endpoint(
    inquiry_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_inquiry(db, inquiry_id)


@router.patch("/{inquiry_id}", response_model=InquiryOut)
def update_inquiry_route(
    inquiry_id: UUID,
    inquiry_update: InquiryUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.update_inquiry(db, inquiry_id, inquiry_update)


@router.delete("/{inquiry_id}")
def delete_inquiry_route(
    inquiry_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    return crud.delete_inquiry(db, inquiry_id)


# ----------------- WhatsApp Webhook (no auth) -----------------
@router.post("/webhook/whatsapp", response_model=InquiryWebhookResponse)
def whatsapp_inquiry_webhook(
    sender: str = Form(..., alias="From"),
    body: str = Form(..., alias="Body"),
    profile_name: Optional[str] = Form(None, alias="ProfileName"),
    db: Session = Depends(get_db),
    analyzer: MessageAnalyzer = Depends(get_message_analyzer)
):
    return crud.ingest_whatsapp_inquiry(db, analyzer, sender, body, profile_name)
