# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from shared.core.config import settings
from shared.core.database import AuthBase, auth_engine
from fastapi.middleware.cors import CORSMiddleware

from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from shared.models import users  # noqa: F401  registers the users table
from .routers import authrouter, userrouter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        AuthBase.metadata.create_all(bind=auth_engine)
        logger.info("Auth tables ensured")
    yield


# This MUST exist for uvicorn
app = FastAPI(title=f"{settings.APP_NAME} - Auth Service", lifespan=lifespan)


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
app.include_router(authrouter.router)
app.include_router(userrouter.router)


@app.get("/api/auth/health")
def health():
    return {"status": "healthy"}
