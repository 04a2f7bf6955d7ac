import uuid
from sqlalchemy import Column, String, Text, Integer, Numeric, DateTime, Enum, ForeignKey, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.hospitality_enum import RoomStatus, RoomType


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (UniqueConstraint('hotel_id', 'room_number'),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    hotel_id = Column(UUID(as_uuid=True), ForeignKey(
        "hotels.id", ondelete="CASCADE"), nullable=False, index=True)
    room_number = Column(String(20), nullable=False)
    type = Column(
        Enum(RoomType, name="room_type_enum", native_enum=False,
             values_callable=lambda x: [e.value for e in x]),
        default=RoomType.STANDARD,
        nullable=False,
    )
    capacity = Column(Integer, nullable=False)
    beds = Column(Integer, nullable=False, default=1)
    bathrooms = Column(Integer, nullable=False, default=1)
    price_per_night = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(RoomStatus, name="room_status_enum", native_enum=False,
             values_callable=lambda x: [e.value for e in x]),
        default=RoomStatus.AVAILABLE,
        nullable=False,
        index=True,
    )
    floor = Column(Integer)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    hotel = relationship("Hotel", back_populates="rooms")
    bookings = relationship("Booking", back_populates="room",
                            cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="room",
                          cascade="all, delete-orphan")
