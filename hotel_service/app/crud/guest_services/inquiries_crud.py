import json
import logging
import math
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.database import transaction
from shared.core.exceptions import NotFoundError
from shared.utils.converters import utc_now
from ...enum.guest_services_enum import InquiryStatus
from ...models.guest_services.inquiries import Inquiry
from ...schemas.guest_services.inquiries_schemas import (
    InquiryCreate,
    InquiryOut,
    InquiryRequestParams,
    InquiryUpdate,
)
from ...util.message_analyzer import MessageAnalyzer
from .maintenance_crud import strip_whatsapp_prefix

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "Guest"


# ----------------- Get All Inquiries -----------------
def get_inquiries(db: Session, params: InquiryRequestParams):
    base_query = db.query(Inquiry)
    if params.status:
        base_query = base_query.filter(Inquiry.status == params.status)
        order_by = (Inquiry.status.asc(), Inquiry.created_at.desc())
    else:
        order_by = (Inquiry.created_at.desc(),)

    total = base_query.count()
    inquiries = (
        base_query
        .order_by(*order_by)
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return {
        "data": [InquiryOut.model_validate(i) for i in inquiries],
        "total": total,
        "page": params.page,
        "total_pages": math.ceil(total / params.limit),
    }


# ----------------- Get Single Inquiry -----------------
def get_inquiry(db: Session, inquiry_id: UUID) -> Inquiry:
    inquiry = db.query(Inquiry).filter(Inquiry.id == inquiry_id).first()
    if not inquiry:
        raise NotFoundError(f"Inquiry {inquiry_id} not found")
    return inquiry


# ----------------- Create Inquiry -----------------
def create_inquiry(db: Session, inquiry: InquiryCreate) -> Inquiry:
    db_inquiry = Inquiry(**inquiry.model_dump())
    if inquiry.status == InquiryStatus.ADDRESSED:
        db_inquiry.addressed_at = utc_now()

    with transaction(db):
        db.add(db_inquiry)
    db.refresh(db_inquiry)
    return db_inquiry


# ----------------- Update Inquiry -----------------
def update_inquiry(db: Session, inquiry_id: UUID, inquiry_update: InquiryUpdate) -> Inquiry:
    db_inquiry = get_inquiry(db, inquiry_id)
    update_data = inquiry_update.model_dump(exclude_unset=True, exclude_none=True)

    with transaction(db):
        if (update_data.get("status") == InquiryStatus.ADDRESSED
                and db_inquiry.status != InquiryStatus.ADDRESSED):
            db_inquiry.addressed_at = utc_now()
        for key, value in update_data.items():
            setattr(db_inquiry, key, value)

    db.refresh(db_inquiry)
    return db_inquiry


# ----------------- Delete Inquiry -----------------
def delete_inquiry(db: Session, inquiry_id: UUID):
    db_inquiry = get_inquiry(db, inquiry_id)
    with transaction(db):
        db.delete(db_inquiry)
    return {"message": "Inquiry deleted successfully"}


# ----------------- WhatsApp Webhook -----------------
def ingest_whatsapp_inquiry(
    db: Session,
    analyzer: MessageAnalyzer,
    sender: str,
    body: str,
    profile_name: str = None
) -> dict:
    phone_number = strip_whatsapp_prefix(sender)
    name = profile_name or DEFAULT_PROFILE_NAME

    analysis = analyzer.translate_inquiry(body, name)

    try:
        db_inquiry = create_inquiry(db, InquiryCreate(
            name=name,
            phone_number=phone_number,
            message=body,
            message_english=analysis["message_english"],
            message_amharic=analysis["message_amharic"],
            original_language=analysis["original_language"],
            status=InquiryStatus.RECEIVED,
            ai_analysis=json.dumps({
                "summary": analysis["summary"],
                "original_language": analysis["original_language"],
            }),
        ))
    except SQLAlchemyError:
        logger.exception("Failed to store WhatsApp inquiry from %s", phone_number)
        return {
            "success": False,
            "message": "Error processing your inquiry. Please try again or contact us directly.",
        }

    logger.info("Inquiry %s received from %s (%s)", db_inquiry.id,
                phone_number, db_inquiry.original_language)
    return {
        "success": True,
        "message": "Thank you for your inquiry! Our team will get back to you shortly.",
        "inquiry_id": db_inquiry.id,
    }
