import logging
import os
from typing import List

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    APP_NAME: str = "Hotel Operations API"

    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", 1440))  # 24 hours default

    DB_USER: str = os.getenv("DB_USER", "postgres")
    DB_PASS: str = os.getenv("DB_PASS", "postgres")
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: str = os.getenv("DB_PORT", "5432")
    DB_SSLMODE: str = os.getenv("DB_SSLMODE", "prefer")
    AUTH_DB_NAME: str = os.getenv("AUTH_DB_NAME", "hotel_auth")
    HOTEL_DB_NAME: str = os.getenv("HOTEL_DB_NAME", "hotel_ops")
    AUTO_CREATE_TABLES: bool = os.getenv("AUTO_CREATE_TABLES", "True").lower() == "true"

    # OpenAI-compatible chat completions endpoint used for message analysis
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")
    AI_BASE_URL: str = os.getenv("AI_BASE_URL", "https://api.openai.com/v1")
    AI_MODEL: str = os.getenv("AI_MODEL", "gpt-4o-mini")
    AI_TIMEOUT_SECONDS: float = float(os.getenv("AI_TIMEOUT_SECONDS", 15))
    AI_MAX_RETRIES: int = int(os.getenv("AI_MAX_RETRIES", 2))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

AUTH_DATABASE_URL = (
    f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.AUTH_DB_NAME}?sslmode={settings.DB_SSLMODE}"
)

HOTEL_DATABASE_URL = (
    f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.HOTEL_DB_NAME}?sslmode={settings.DB_SSLMODE}"
)
