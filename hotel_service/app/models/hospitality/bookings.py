import uuid
from sqlalchemy import Column, Text, Numeric, DateTime, Enum, ForeignKey, CheckConstraint, Index, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.hospitality_enum import BookingStatus


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # guest lives in the auth database, so no FK here
    user_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    room_id = Column(UUID(as_uuid=True), ForeignKey(
        "rooms.id", ondelete="CASCADE"), nullable=False)
    # naive UTC, like the rest of the booking engine
    check_in = Column(DateTime, nullable=False)
    check_out = Column(DateTime, nullable=False)
    status = Column(
        Enum(BookingStatus, name="booking_status_enum", native_enum=False,
             values_callable=lambda x: [e.value for e in x]),
        default=BookingStatus.PENDING,
        nullable=False,
    )
    total_price = Column(Numeric(10, 2), nullable=False)
    # room charge before orders were added at checkout
    room_charges = Column(Numeric(10, 2))
    special_requests = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    room = relationship("Room", back_populates="bookings")
    orders = relationship("Order", back_populates="booking",
                          cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("check_in < check_out", name="ck_booking_dates"),
        CheckConstraint("total_price >= 0", name="ck_booking_total_price"),
        Index("ix_booking_room_dates", "room_id", "check_in", "check_out"),
    )
