import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

from booking_service.app.enum.booking_enum import Currency

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", 1440))  # 24 hours default

    # Full URL wins; otherwise built from the DB_* parts
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")
    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str | None = os.getenv("DB_HOST")
    DB_PORT: str | None = os.getenv("DB_PORT", "5432")
    DB_NAME: str | None = os.getenv("DB_NAME")

    # read from the environment; an unknown code fails at startup
    BASE_CURRENCY: Currency = Currency.SAR
    BOOKING_NUMBER_PREFIX: str = os.getenv("BOOKING_NUMBER_PREFIX", "BK")
    BOOKING_NUMBER_MAX_ATTEMPTS: int = int(
        os.getenv("BOOKING_NUMBER_MAX_ATTEMPTS", 3))
    ENFORCE_STATUS_TRANSITIONS: bool = os.getenv(
        "ENFORCE_STATUS_TRANSITIONS", "True").lower() == "true"

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = os.getenv(
        "CORS_ORIGINS", "http://localhost:8080,http://127.0.0.1:8002")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()


def _build_database_url() -> str:
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    if settings.DB_HOST:
        return (
            f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
        )
    return "sqlite:///./booking.db"


BOOKING_DATABASE_URL = _build_database_url()
