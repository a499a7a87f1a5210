"""
Application Configuration
Handles all environment variables and settings
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "SportNet Community API"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Database
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'sportnet.db'}"

    # JWT & Authentication
    JWT_SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    MAX_FAILED_LOGIN_ATTEMPTS: int = 5
    ACCOUNT_LOCK_MINUTES: int = 30

    # Initial admin (seeded on startup when both are set)
    ADMIN_EMAIL: str = ""
    ADMIN_PASSWORD: str = ""

    # CSRF (double-submit cookie)
    CSRF_ENABLED: bool = True
    CSRF_COOKIE_NAME: str = "csrf-token"
    CSRF_HEADER_NAME: str = "x-csrf-token"

    # File uploads
    UPLOAD_DIR: str = str(BASE_DIR / "uploads")
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024
    MAX_UPLOAD_FILES: int = 5
    ALLOWED_UPLOAD_TYPES: str = "image/jpeg,image/png"
    UPLOAD_TIMEOUT_SECONDS: float = 30.0

    # Reservations
    CHECK_IN_WINDOW_HOURS: int = 48

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    @property
    def allowed_upload_types_list(self) -> List[str]:
        return [mime.strip() for mime in self.ALLOWED_UPLOAD_TYPES.split(",") if mime.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = BASE_DIR / "src" / ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
