import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from shared.core.config import settings
import auth_service.app.main as auth_main
import hotel_service.app.main as hotel_main


@pytest.fixture
def blank_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


def test_hotel_tables_created_on_startup(monkeypatch, blank_engine):
    monkeypatch.setattr(settings, "AUTO_CREATE_TABLES", True)
    monkeypatch.setattr(hotel_main, "hotel_engine", blank_engine)

    with TestClient(hotel_main.app) as client:
        assert client.get("/api/hotel/health").status_code == 200

    tables = set(inspect(blank_engine).get_table_names())
    assert {"hotels", "rooms", "bookings", "orders"} <= tables


def test_auth_tables_created_on_startup(monkeypatch, blank_engine):
    monkeypatch.setattr(settings, "AUTO_CREATE_TABLES", True)
    monkeypatch.setattr(auth_main, "auth_engine", blank_engine)

    with TestClient(auth_main.app):
        pass

    assert "users" in inspect(blank_engine).get_table_names()


def test_startup_skips_tables_when_disabled(monkeypatch, blank_engine):
    monkeypatch.setattr(settings, "AUTO_CREATE_TABLES", False)
    monkeypatch.setattr(hotel_main, "hotel_engine", blank_engine)

    with TestClient(hotel_main.app):
        pass

    assert inspect(blank_engine).get_table_names() == []
