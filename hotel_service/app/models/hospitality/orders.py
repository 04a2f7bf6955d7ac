import uuid
from sqlalchemy import JSON, Column, Text, Numeric, DateTime, Enum, ForeignKey, func
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.hospitality_enum import OrderStatus, OrderType


class Order(Base):
    __tablename__ = "orders"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    booking_id = Column(UUID(as_uuid=True), ForeignKey(
        "bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    room_id = Column(UUID(as_uuid=True), ForeignKey(
        "rooms.id", ondelete="CASCADE"), nullable=False, index=True)
    order_type = Column(
        Enum(OrderType, name="order_type_enum", native_enum=False,
             values_callable=lambda x: [e.value for e in x]),
        default=OrderType.FOOD,
        nullable=False,
    )
    # [{name, quantity, price, notes}]
    items = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(OrderStatus, name="order_status_enum", native_enum=False,
             values_callable=lambda x: [e.value for e in x]),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True,
    )
    notes = Column(Text)
    ordered_at = Column(DateTime(timezone=True), server_default=func.now())
    delivered_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    booking = relationship("Booking", back_populates="orders")
    room = relationship("Room", back_populates="orders")
