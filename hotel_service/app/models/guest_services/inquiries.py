import uuid
from sqlalchemy import Column, String, Text, DateTime, Enum, func
from sqlalchemy.dialects.postgresql import UUID
from shared.core.database import Base
from ...enum.guest_services_enum import InquiryStatus


class Inquiry(Base):
    __tablename__ = "inquiries"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    phone_number = Column(String(32), nullable=False)
    message = Column(Text, nullable=False)
    message_amharic = Column(Text)
    message_english = Column(Text)
    status = Column(
        Enum(InquiryStatus, name="inquiry_status_enum", native_enum=False,
             values_callable=lambda x: [e.value for e in x]),
        default=InquiryStatus.RECEIVED,
        nullable=False,
    )
    original_language = Column(String(32))
    ai_analysis = Column(Text)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())
    addressed_at = Column(DateTime(timezone=True))
