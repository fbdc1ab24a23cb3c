"""
Application configuration
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite:///./ocho_hair_lab.db"

    # Security
    SECRET_KEY: str = "local-development-secret-key-change-in-production"

    # Admin Panel
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin"

    # Application
    SALON_NAME: str = "Ocho Hair Lab"
    SITE_URL: str = "http://localhost:5173"

    # Booking Settings
    SLOT_STEP_MINUTES: int = 30
    BOOKING_DAYS_AHEAD: int = 30
    ANY_AVAILABLE_LABEL: str = "Any Available"

    # Development
    DEBUG: bool = True
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    class Config:
        # .env lives at the repository root
        env_file = Path(__file__).resolve().parent.parent.parent / ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Cached application settings"""
    return Settings()
