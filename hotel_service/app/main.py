# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, hotel_engine
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from .models import hospitality, guest_services  # noqa: F401  registers tables
from .router.hospitality import bookings_router, hotels_router, orders_router, rooms_router
from .router.guest_services import inquiries_router, maintenance_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=hotel_engine)
        logger.info("Hotel tables ensured")
    yield


app = FastAPI(title=f"{settings.APP_NAME} - Hotel Service", lifespan=lifespan)


# 1️⃣ CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 2️⃣ Custom JSON response wrapper middleware
app.add_middleware(JsonResponseMiddleware)

# Register exception handlers
setup_exception_handlers(app)

# Routers
app.include_router(hotels_router.router)
app.include_router(rooms_router.router)
app.include_router(bookings_router.router)
app.include_router(orders_router.router)
app.include_router(maintenance_router.router)
app.include_router(inquiries_router.router)


@app.get("/api/hotel/health")
def health():
    return {"status": "healthy"}
