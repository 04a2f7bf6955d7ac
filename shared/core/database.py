from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from shared.core.config import AUTH_DATABASE_URL, HOTEL_DATABASE_URL

# Separate bases
AuthBase = declarative_base()
Base = declarative_base()

POOL_SIZE = 2
MAX_OVERFLOW = 2

# Auth DB
auth_engine = create_engine(
    AUTH_DATABASE_URL,
    pool_pre_ping=True,
    pool_recycle=300,
    pool_size=POOL_SIZE,          # max idle connections
    max_overflow=MAX_OVERFLOW,    # max temporary extra connections
    pool_timeout=30               # wait time before failing
)
AuthSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=auth_engine)

# Hotel DB
hotel_engine = create_engine(
    HOTEL_DATABASE_URL,
    pool_pre_ping=True,
    pool_recycle=300,
    pool_size=POOL_SIZE,
    max_overflow=MAX_OVERFLOW,
    pool_timeout=30
)
HotelSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=hotel_engine)

# Dependency


def get_auth_db():
    db = AuthSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_hotel_db():
    db = HotelSessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """Commit the unit of work on success, roll it back on any exception."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
