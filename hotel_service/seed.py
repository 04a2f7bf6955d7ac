"""Populate the auth and hotel databases with demo data.

    python -m hotel_service.seed
"""
import logging
from decimal import Decimal

from faker import Faker

from shared.core.database import (
    AuthBase,
    AuthSessionLocal,
    Base,
    HotelSessionLocal,
    auth_engine,
    hotel_engine,
    transaction,
)
from shared.models.users import UserRole, Users
from hotel_service.app.enum.hospitality_enum import RoomType
from hotel_service.app.models.hospitality import Hotel, Room
from hotel_service.app.models import guest_services  # noqa: F401

logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@hotel.com"
ADMIN_PASSWORD = "admin123"

HOTELS = [
    ("Grand Addis Hotel", "Addis Ababa", Decimal("4.50")),
    ("Lake Tana Resort", "Bahir Dar", Decimal("4.20")),
    ("Simien Lodge", "Gondar", Decimal("4.00")),
]

# type -> (capacity, beds, bathrooms, price per night)
ROOM_LAYOUT = {
    RoomType.STANDARD: (2, 1, 1, Decimal("80.00")),
    RoomType.DELUXE: (2, 2, 1, Decimal("120.00")),
    RoomType.SUITE: (4, 2, 2, Decimal("220.00")),
    RoomType.PRESIDENTIAL: (6, 3, 3, Decimal("450.00")),
}
ROOMS_PER_TYPE = 3

fake = Faker()


def seed_admin(db):
    if db.query(Users).filter(Users.email == ADMIN_EMAIL).first():
        logger.info("Admin user already present")
        return
    admin = Users(
        email=ADMIN_EMAIL,
        first_name="Admin",
        last_name="User",
        role=UserRole.ADMIN,
        phone=fake.msisdn()[:15],
    )
    admin.set_password(ADMIN_PASSWORD)
    with transaction(db):
        db.add(admin)
    logger.info("Created admin user %s", ADMIN_EMAIL)


def seed_hotels(db):
    if db.query(Hotel).first():
        logger.info("Hotels already present, skipping")
        return

    with transaction(db):
        for name, city, rating in HOTELS:
            hotel = Hotel(
                name=name,
                address=fake.street_address(),
                city=city,
                country="Ethiopia",
                description=fake.paragraph(nb_sentences=2),
                phone=fake.phone_number()[:32],
                email=f"info@{name.lower().replace(' ', '')}.com",
                rating=rating,
            )
            db.add(hotel)
            db.flush()

            floor = 1
            for room_type, (capacity, beds, bathrooms, price) in ROOM_LAYOUT.items():
                for n in range(1, ROOMS_PER_TYPE + 1):
                    db.add(Room(
                        hotel_id=hotel.id,
                        room_number=f"{floor}{n:02d}",
                        type=room_type,
                        capacity=capacity,
                        beds=beds,
                        bathrooms=bathrooms,
                        price_per_night=price,
                        floor=floor,
                        description=fake.sentence(),
                    ))
                floor += 1
            logger.info("Seeded %s with %s rooms", name,
                        len(ROOM_LAYOUT) * ROOMS_PER_TYPE)


def main():
    AuthBase.metadata.create_all(bind=auth_engine)
    Base.metadata.create_all(bind=hotel_engine)

    auth_db = AuthSessionLocal()
    hotel_db = HotelSessionLocal()
    try:
        seed_admin(auth_db)
        seed_hotels(hotel_db)
    finally:
        auth_db.close()
        hotel_db.close()


if __name__ == "__main__":
    main()
