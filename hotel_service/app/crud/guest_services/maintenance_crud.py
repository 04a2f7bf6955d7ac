import json
import logging
import math
from uuid import UUID

from sqlalchemy import case
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.database import transaction
from shared.core.exceptions import NotFoundError
from shared.models.users import Users
from shared.utils.converters import utc_now
from ...enum.guest_services_enum import MaintenancePriority, MaintenanceStatus
from ...enum.hospitality_enum import BookingStatus
from ...models.guest_services.maintenance import MaintenanceRequest
from ...models.hospitality.bookings import Booking
from ...schemas.guest_services.maintenance_schemas import (
    MaintenanceRequestCreate,
    MaintenanceRequestOut,
    MaintenanceRequestParams,
    MaintenanceRequestUpdate,
)
from ...util.message_analyzer import MessageAnalyzer

logger = logging.getLogger(__name__)

WHATSAPP_PREFIX = "whatsapp:"

# enum columns are stored as text, so rank priorities explicitly
PRIORITY_RANK = case(
    {
        MaintenancePriority.LOW: 1,
        MaintenancePriority.MEDIUM: 2,
        MaintenancePriority.HIGH: 3,
        MaintenancePriority.URGENT: 4,
    },
    value=MaintenanceRequest.priority,
    else_=0,
)


def strip_whatsapp_prefix(sender: str) -> str:
    sender = (sender or "").strip()
    if sender.startswith(WHATSAPP_PREFIX):
        return sender[len(WHATSAPP_PREFIX):]
    return sender


# ----------------- Build Filters -----------------
def build_maintenance_filters(params: MaintenanceRequestParams):
    filters = []

    if params.hotel_id:
        filters.append(MaintenanceRequest.hotel_id == params.hotel_id)

    if params.status:
        filters.append(MaintenanceRequest.status == params.status)

    if params.priority:
        filters.append(MaintenanceRequest.priority == params.priority)

    if params.category:
        filters.append(MaintenanceRequest.category == params.category)

    return filters


# ----------------- Get All Requests -----------------
def get_maintenance_requests(db: Session, params: MaintenanceRequestParams):
    base_query = db.query(MaintenanceRequest).filter(
        *build_maintenance_filters(params))
    total = base_query.count()

    if params.status or params.priority or params.category:
        order_by = (
            MaintenanceRequest.status.asc(),
            PRIORITY_RANK.desc(),
            MaintenanceRequest.created_at.desc(),
        )
    else:
        order_by = (MaintenanceRequest.created_at.desc(),)

    requests = (
        base_query
        .order_by(*order_by)
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return {
        "data": [MaintenanceRequestOut.model_validate(r) for r in requests],
        "total": total,
        "page": params.page,
        "total_pages": math.ceil(total / params.limit),
    }


# ----------------- Get Single Request -----------------
def get_maintenance_request(db: Session, request_id: UUID) -> MaintenanceRequest:
    request = db.query(MaintenanceRequest).filter(
        MaintenanceRequest.id == request_id).first()
    if not request:
        raise NotFoundError(f"Maintenance request {request_id} not found")
    return request


# ----------------- Create Request -----------------
def create_maintenance_request(db: Session, request: MaintenanceRequestCreate) -> MaintenanceRequest:
    db_request = MaintenanceRequest(**request.model_dump())
    if request.status == MaintenanceStatus.RESOLVED:
        db_request.resolved_at = utc_now()

    with transaction(db):
        db.add(db_request)
    db.refresh(db_request)
    logger.info("Maintenance request %s created (%s/%s)", db_request.id,
                db_request.category.value, db_request.priority.value)
    return db_request


# ----------------- Update Request -----------------
def update_maintenance_request(
    db: Session,
    request_id: UUID,
    request_update: MaintenanceRequestUpdate
) -> MaintenanceRequest:
    db_request = get_maintenance_request(db, request_id)
    update_data = request_update.model_dump(exclude_unset=True, exclude_none=True)

    with transaction(db):
        if (update_data.get("status") == MaintenanceStatus.RESOLVED
                and db_request.resolved_at is None):
            db_request.resolved_at = utc_now()
        for key, value in update_data.items():
            setattr(db_request, key, value)

    db.refresh(db_request)
    return db_request


# ----------------- Delete Request -----------------
def delete_maintenance_request(db: Session, request_id: UUID):
    db_request = get_maintenance_request(db, request_id)
    with transaction(db):
        db.delete(db_request)
    return {"message": "Maintenance request deleted successfully"}


# ----------------- WhatsApp Webhook -----------------
def find_active_booking(db: Session, user_id: UUID):
    return (
        db.query(Booking)
        .filter(
            Booking.user_id == user_id,
            Booking.status == BookingStatus.CHECKED_IN,
        )
        .order_by(Booking.check_in.desc())
        .first()
    )


def ingest_whatsapp_message(
    db: Session,
    auth_db: Session,
    analyzer: MessageAnalyzer,
    sender: str,
    body: str
) -> dict:
    """Turn a guest's WhatsApp message into a maintenance request for their current stay."""
    phone_number = strip_whatsapp_prefix(sender)

    user = auth_db.query(Users).filter(Users.phone == phone_number).first()
    if not user:
        logger.warning("WhatsApp maintenance message from unknown number %s", phone_number)
        return {
            "success": False,
            "message": "User not found. Please contact hotel reception.",
        }

    booking = find_active_booking(db, user.id)
    if not booking:
        logger.warning("No active booking for user %s (%s)", user.id, phone_number)
        return {
            "success": False,
            "message": "No active booking found. Please contact hotel reception.",
        }

    analysis = analyzer.categorize_maintenance(body)

    try:
        db_request = create_maintenance_request(db, MaintenanceRequestCreate(
            hotel_id=booking.room.hotel_id,
            room_id=booking.room_id,
            booking_id=booking.id,
            user_id=user.id,
            description=analysis["summary"],
            description_amharic=analysis["summary_amharic"],
            category=analysis["category"],
            priority=analysis["priority"],
            status=MaintenanceStatus.PENDING,
            phone_number=phone_number,
            original_message=body,
            original_message_amharic=analysis["message_amharic"],
            ai_analysis=json.dumps(analysis, default=str),
        ))
    except SQLAlchemyError:
        logger.exception("Failed to store WhatsApp maintenance request from %s", phone_number)
        return {
            "success": False,
            "message": "Error processing your request. Please contact hotel reception.",
        }

    return {
        "success": True,
        "message": "Maintenance request received. Hotel staff will assist you shortly.",
        "request_id": db_request.id,
    }
