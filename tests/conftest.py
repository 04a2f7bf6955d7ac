"""
Shared pytest fixtures: an in-memory SQLite database holding both the auth
and hotel tables, plus factories for the records most tests need.
"""
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.core.auth import token_for_user
from shared.core.database import AuthBase, Base, get_auth_db, get_hotel_db
from shared.models.users import UserRole, Users
from hotel_service.app.enum.hospitality_enum import BookingStatus, RoomStatus, RoomType
from hotel_service.app.models.hospitality import Booking, Hotel, Order, Room
from hotel_service.app.models import guest_services  # noqa: F401
from hotel_service.app.main import app as hotel_app
from hotel_service.app.util.message_analyzer import MessageAnalyzer, get_message_analyzer
from auth_service.app.main import app as auth_app

D0 = datetime(2030, 1, 10, 14, 0)


def day(n: int) -> datetime:
    """``n`` days after the reference check-in date."""
    return D0 + timedelta(days=n)


@pytest.fixture(name="day")
def day_fixture():
    return day


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    AuthBase.metadata.create_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    AuthBase.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hotel(db) -> Hotel:
    hotel = Hotel(
        name="Grand Addis Hotel",
        address="Bole Road 1",
        city="Addis Ababa",
        country="Ethiopia",
        phone="+251111000000",
        email="info@grandaddis.com",
        rating=Decimal("4.50"),
    )
    db.add(hotel)
    db.commit()
    db.refresh(hotel)
    return hotel


@pytest.fixture
def make_room(db, hotel):
    counter = {"n": 100}

    def _make_room(**overrides) -> Room:
        counter["n"] += 1
        values = dict(
            hotel_id=hotel.id,
            room_number=str(counter["n"]),
            type=RoomType.STANDARD,
            capacity=2,
            beds=1,
            bathrooms=1,
            price_per_night=Decimal("100.00"),
            status=RoomStatus.AVAILABLE,
        )
        values.update(overrides)
        room = Room(**values)
        db.add(room)
        db.commit()
        db.refresh(room)
        return room

    return _make_room


@pytest.fixture
def room(make_room) -> Room:
    return make_room()


@pytest.fixture
def make_booking(db):
    """Insert a booking directly, bypassing the engine, in any status."""

    def _make_booking(room, check_in, check_out, status=BookingStatus.CONFIRMED,
                      total_price=Decimal("300.00"), user_id=None) -> Booking:
        booking = Booking(
            user_id=user_id or uuid4(),
            room_id=room.id,
            check_in=check_in,
            check_out=check_out,
            status=status,
            total_price=total_price,
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make_booking


@pytest.fixture
def make_order(db):
    def _make_order(booking, total_price, **overrides) -> Order:
        values = dict(
            booking_id=booking.id,
            room_id=booking.room_id,
            items=[{"name": "Tibs", "quantity": 1, "price": str(total_price)}],
            total_price=Decimal(str(total_price)),
        )
        values.update(overrides)
        order = Order(**values)
        db.add(order)
        db.commit()
        db.refresh(order)
        return order

    return _make_order


@pytest.fixture
def make_user(db):
    def _make_user(email="guest@example.com", role=UserRole.GUEST, phone=None,
                   password="secret123", is_active=True) -> Users:
        user = Users(
            email=email,
            first_name="Abebe",
            last_name="Kebede",
            role=role,
            phone=phone,
            is_active=is_active,
        )
        user.set_password(password)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


class FakeAIClient:
    """Stands in for ``AIClient``: returns a canned answer or raises."""

    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    def complete_json(self, system_prompt, user_content, temperature=0.3):
        self.calls.append(user_content)
        if self.error:
            raise self.error
        return self.answer


@pytest.fixture
def fake_ai_client():
    return FakeAIClient


# ----------------- HTTP clients -----------------
@pytest.fixture
def analyzer_client(fake_ai_client):
    return fake_ai_client(answer={
        "category": "hvac",
        "priority": "high",
        "summary": "Air conditioning is broken.",
    })


@pytest.fixture
def hotel_client(db, analyzer_client):
    def override_db():
        yield db

    hotel_app.dependency_overrides[get_hotel_db] = override_db
    hotel_app.dependency_overrides[get_auth_db] = override_db
    hotel_app.dependency_overrides[get_message_analyzer] = lambda: MessageAnalyzer(analyzer_client)
    yield TestClient(hotel_app)
    hotel_app.dependency_overrides.clear()


@pytest.fixture
def auth_client(db):
    def override_db():
        yield db

    auth_app.dependency_overrides[get_auth_db] = override_db
    yield TestClient(auth_app)
    auth_app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(make_user):
    def _auth_headers(role=UserRole.STAFF, email=None) -> dict:
        user = make_user(email=email or f"{role.value}@hotel.com", role=role)
        return {"Authorization": f"Bearer {token_for_user(user)}"}

    return _auth_headers
