import uuid
from sqlalchemy import Column, String, Text, DateTime, Enum, ForeignKey, Index, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.guest_services_enum import MaintenanceCategory, MaintenancePriority, MaintenanceStatus


class MaintenanceRequest(Base):
    __tablename__ = "maintenance_requests"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    hotel_id = Column(UUID(as_uuid=True), ForeignKey(
        "hotels.id", ondelete="CASCADE"), nullable=False)
    room_id = Column(UUID(as_uuid=True), ForeignKey(
        "rooms.id", ondelete="CASCADE"), nullable=False)
    booking_id = Column(UUID(as_uuid=True), ForeignKey(
        "bookings.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(UUID(as_uuid=True), nullable=False)

    description = Column(Text, nullable=False)
    category = Column(
        Enum(MaintenanceCategory, name="maintenance_category_enum", native_enum=False,
             values_callable=lambda x: [e.value for e in x]),
        default=MaintenanceCategory.OTHER,
        nullable=False,
    )
    priority = Column(
        Enum(MaintenancePriority, name="maintenance_priority_enum", native_enum=False,
             values_callable=lambda x: [e.value for e in x]),
        default=MaintenancePriority.MEDIUM,
        nullable=False,
    )
    status = Column(
        Enum(MaintenanceStatus, name="maintenance_status_enum", native_enum=False,
             values_callable=lambda x: [e.value for e in x]),
        default=MaintenanceStatus.PENDING,
        nullable=False,
    )
    phone_number = Column(String(32))
    original_message = Column(Text)
    ai_analysis = Column(Text)
    description_amharic = Column(Text)
    original_message_amharic = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())
    resolved_at = Column(DateTime(timezone=True))

    hotel = relationship("Hotel")
    room = relationship("Room")
    booking = relationship("Booking")

    __table_args__ = (
        Index("ix_maintenance_hotel_created", "hotel_id", "created_at"),
    )
