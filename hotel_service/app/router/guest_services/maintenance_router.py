from uuid import UUID

from fastapi import APIRouter, Depends, Form, status
from sqlalchemy.orm import Session

from ...schemas.guest_services.maintenance_schemas import (
    MaintenanceRequestCreate,
    MaintenanceRequestListResponse,
    MaintenanceRequestOut,
    MaintenanceRequestParams,
    MaintenanceRequestUpdate,
    WebhookResponse,
)
from ...crud.guest_services import maintenance_crud as crud
from ...util.message_analyzer import MessageAnalyzer, get_message_analyzer
from shared.core.database import get_auth_db, get_hotel_db as get_db
from shared.core.auth import allow_staff, validate_current_token
from shared.core.schemas import UserToken


router = APIRouter(prefix="/api/maintenance", tags=["Maintenance"])


@router.post("", response_model=MaintenanceRequestOut, status_code=status.HTTP_201_CREATED)
def create_maintenance_request_route(
    request: MaintenanceRequestCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.create_maintenance_request(db, request)


@router.get("", response_model=MaintenanceRequestListResponse)
def get_maintenance_requests_endpoint(
    params: MaintenanceRequestParams = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_maintenance_requests(db, params)


@router.get("/{request_id}", response_model=MaintenanceRequestOut)
def get_maintenance_request_endpoint(
    request_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_maintenance_request(db, request_id)


@router.patch("/{request_id}", response_model=MaintenanceRequestOut)
def update_maintenance_request_route(
    request_id: UUID,
    request_update: MaintenanceRequestUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.update_maintenance_request(db, request_id, request_update)


@router.delete("/{request_id}")
def delete_maintenance_request_route(
    request_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    return crud.delete_maintenance_request(db, request_id)


# ----------------- WhatsApp Webhook (no auth) -----------------
@router.post("/webhook/whatsapp", response_model=WebhookResponse)
def whatsapp_maintenance_webhook(
    sender: str = Form(..., alias="From"),
    body: str = Form(..., alias="Body"),
    db: Session = Depends(get_db),
    auth_db: Session = Depends(get_auth_db),
    analyzer: MessageAnalyzer = Depends(get_message_analyzer)
):
    return crud.ingest_whatsapp_message(db, auth_db, analyzer, sender, body)
