import json
from uuid import uuid4

import pytest

from shared.core.exceptions import AIServiceError, NotFoundError
from hotel_service.app.crud.guest_services import inquiries_crud, maintenance_crud
from hotel_service.app.enum.guest_services_enum import (
    InquiryStatus,
    MaintenanceCategory,
    MaintenancePriority,
    MaintenanceStatus,
)
from hotel_service.app.enum.hospitality_enum import BookingStatus
from hotel_service.app.models.guest_services.inquiries import Inquiry
from hotel_service.app.models.guest_services.maintenance import MaintenanceRequest
from hotel_service.app.schemas.guest_services.inquiries_schemas import (
    InquiryCreate,
    InquiryRequestParams,
    InquiryUpdate,
)
from hotel_service.app.schemas.guest_services.maintenance_schemas import (
    MaintenanceRequestCreate,
    MaintenanceRequestParams,
    MaintenanceRequestUpdate,
)
from hotel_service.app.util.message_analyzer import MessageAnalyzer

GUEST_PHONE = "+251911223344"


@pytest.fixture
def stay(room, make_booking, make_user, day):
    guest = make_user(phone=GUEST_PHONE)
    booking = make_booking(room, day(0), day(3), status=BookingStatus.CHECKED_IN,
                           user_id=guest.id)
    return guest, booking


def ticket(booking, **overrides):
    values = dict(
        hotel_id=booking.room.hotel_id,
        room_id=booking.room_id,
        booking_id=booking.id,
        user_id=booking.user_id,
        description="Shower is leaking",
    )
    values.update(overrides)
    return MaintenanceRequestCreate(**values)


# ----------------- Maintenance -----------------
def test_resolving_stamps_resolved_at_once(db, stay):
    _, booking = stay
    request = maintenance_crud.create_maintenance_request(db, ticket(booking))
    assert request.status == MaintenanceStatus.PENDING
    assert request.resolved_at is None

    resolved = maintenance_crud.update_maintenance_request(
        db, request.id, MaintenanceRequestUpdate(status=MaintenanceStatus.RESOLVED))
    first_stamp = resolved.resolved_at
    assert first_stamp is not None

    again = maintenance_crud.update_maintenance_request(
        db, request.id, MaintenanceRequestUpdate(status=MaintenanceStatus.RESOLVED))
    assert again.resolved_at == first_stamp


def test_filtered_list_orders_by_priority_rank(db, stay):
    _, booking = stay
    for priority in (MaintenancePriority.LOW, MaintenancePriority.URGENT,
                     MaintenancePriority.MEDIUM, MaintenancePriority.HIGH):
        maintenance_crud.create_maintenance_request(
            db, ticket(booking, priority=priority, category=MaintenanceCategory.PLUMBING))
    maintenance_crud.create_maintenance_request(
        db, ticket(booking, category=MaintenanceCategory.HVAC))

    result = maintenance_crud.get_maintenance_requests(
        db, MaintenanceRequestParams(category=MaintenanceCategory.PLUMBING))

    assert result["total"] == 4
    assert [r.priority for r in result["data"]] == [
        MaintenancePriority.URGENT,
        MaintenancePriority.HIGH,
        MaintenancePriority.MEDIUM,
        MaintenancePriority.LOW,
    ]


def test_list_pagination(db, stay):
    _, booking = stay
    for _ in range(12):
        maintenance_crud.create_maintenance_request(db, ticket(booking))

    result = maintenance_crud.get_maintenance_requests(
        db, MaintenanceRequestParams(page=2, limit=5))
    assert result["total"] == 12
    assert result["total_pages"] == 3
    assert len(result["data"]) == 5


def test_delete_maintenance_request(db, stay):
    _, booking = stay
    request = maintenance_crud.create_maintenance_request(db, ticket(booking))
    maintenance_crud.delete_maintenance_request(db, request.id)
    with pytest.raises(NotFoundError):
        maintenance_crud.get_maintenance_request(db, request.id)


def test_whatsapp_message_creates_ticket(db, stay, fake_ai_client):
    guest, booking = stay
    client = fake_ai_client(answer={
        "category": "plumbing",
        "priority": "high",
        "summary": "Guest reports a leaking shower.",
        "summary_amharic": "ሻወር ይፈሳል",
        "message_amharic": "ሻወሩ ይፈሳል",
    })

    result = maintenance_crud.ingest_whatsapp_message(
        db, db, MessageAnalyzer(client), f"whatsapp:{GUEST_PHONE}", "The shower leaks")

    assert result["success"] is True
    request = maintenance_crud.get_maintenance_request(db, result["request_id"])
    assert request.booking_id == booking.id
    assert request.user_id == guest.id
    assert request.hotel_id == booking.room.hotel_id
    assert request.category == MaintenanceCategory.PLUMBING
    assert request.priority == MaintenancePriority.HIGH
    assert request.phone_number == GUEST_PHONE
    assert request.original_message == "The shower leaks"
    assert json.loads(request.ai_analysis)["category"] == "plumbing"


def test_whatsapp_message_survives_ai_outage(db, stay, fake_ai_client):
    client = fake_ai_client(error=AIServiceError("timeout"))
    message = "The air conditioner makes a loud noise " * 5

    result = maintenance_crud.ingest_whatsapp_message(
        db, db, MessageAnalyzer(client), f"whatsapp:{GUEST_PHONE}", message)

    assert result["success"] is True
    request = maintenance_crud.get_maintenance_request(db, result["request_id"])
    assert request.category == MaintenanceCategory.OTHER
    assert request.priority == MaintenancePriority.MEDIUM
    assert request.description == message[:100]
    assert request.original_message_amharic == message


def test_whatsapp_unknown_sender(db, stay, fake_ai_client):
    client = fake_ai_client(answer={})
    result = maintenance_crud.ingest_whatsapp_message(
        db, db, MessageAnalyzer(client), "whatsapp:+10000000000", "Help")

    assert result["success"] is False
    assert "User not found" in result["message"]
    assert client.calls == []
    assert db.query(MaintenanceRequest).count() == 0


def test_whatsapp_without_active_stay(db, make_user, fake_ai_client):
    make_user(phone=GUEST_PHONE)
    result = maintenance_crud.ingest_whatsapp_message(
        db, db, MessageAnalyzer(fake_ai_client(answer={})), GUEST_PHONE, "Help")

    assert result["success"] is False
    assert "No active booking" in result["message"]


# ----------------- Inquiries -----------------
def test_addressing_inquiry_stamps_addressed_at(db):
    inquiry = inquiries_crud.create_inquiry(db, InquiryCreate(
        name="Sara", phone_number="+251900000001", message="Do you have parking?"))
    assert inquiry.status == InquiryStatus.RECEIVED
    assert inquiry.addressed_at is None

    addressed = inquiries_crud.update_inquiry(
        db, inquiry.id, InquiryUpdate(status=InquiryStatus.ADDRESSED, notes="Called back"))
    assert addressed.addressed_at is not None
    assert addressed.notes == "Called back"


def test_inquiry_status_filter(db):
    for n in range(3):
        inquiries_crud.create_inquiry(db, InquiryCreate(
            name=f"Guest {n}", phone_number="+251900000002", message="Price?"))
    inquiries_crud.create_inquiry(db, InquiryCreate(
        name="Done", phone_number="+251900000003", message="Thanks",
        status=InquiryStatus.ADDRESSED))

    result = inquiries_crud.get_inquiries(db, InquiryRequestParams(status=InquiryStatus.RECEIVED))
    assert result["total"] == 3


def test_whatsapp_inquiry_translated(db, fake_ai_client):
    client = fake_ai_client(answer={
        "message_english": "How much is a suite?",
        "message_amharic": "ስዊት ስንት ነው?",
        "original_language": "en",
        "summary": "Asks for suite pricing.",
    })

    result = inquiries_crud.ingest_whatsapp_inquiry(
        db, MessageAnalyzer(client), "whatsapp:+251900000009", "How much is a suite?", "Sara")

    assert result["success"] is True
    inquiry = inquiries_crud.get_inquiry(db, result["inquiry_id"])
    assert inquiry.name == "Sara"
    assert inquiry.phone_number == "+251900000009"
    assert inquiry.original_language == "en"
    assert inquiry.message_amharic == "ስዊት ስንት ነው?"
    assert client.calls == ["Name: Sara\nMessage: How much is a suite?"]


def test_whatsapp_inquiry_defaults(db, fake_ai_client):
    client = fake_ai_client(error=AIServiceError("down"))

    result = inquiries_crud.ingest_whatsapp_inquiry(
        db, MessageAnalyzer(client), "whatsapp:+251900000010", "Selam", None)

    inquiry = db.query(Inquiry).filter(Inquiry.id == result["inquiry_id"]).one()
    assert inquiry.name == "Guest"
    assert inquiry.message_english == "Selam"
    assert inquiry.original_language == "unknown"


def test_unknown_ids_raise(db):
    with pytest.raises(NotFoundError):
        inquiries_crud.get_inquiry(db, uuid4())
    with pytest.raises(NotFoundError):
        maintenance_crud.get_maintenance_request(db, uuid4())
