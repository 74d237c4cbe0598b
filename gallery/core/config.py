# File: gallery/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os


class Settings(BaseSettings):
    # ---------------------------
    # Meta / Pydantic settings
    # ---------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # Ignore unexpected env vars instead of erroring
    )

    # ---------------------------
    # Database (SQLite locally, PostgreSQL in production)
    # ---------------------------
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./gallery.db")
    AUTO_CREATE_TABLES: bool = os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true"

    # ---------------------------
    # Security / Guest tokens
    # ---------------------------
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me-in-production")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    GUEST_TOKEN_EXPIRE_DAYS: int = int(os.getenv("GUEST_TOKEN_EXPIRE_DAYS", "30"))

    # ---------------------------
    # API / Project
    # ---------------------------
    API_V1_STR: str = os.getenv("API_V1_STR", "/api/v1")
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Photo Gallery API")

    # ---------------------------
    # Environment / Logging
    # ---------------------------
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")  # development | staging | production
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "*")

    # ---------------------------
    # Photo storage
    # ---------------------------
    PHOTO_STORAGE_DIR: str = os.getenv("PHOTO_STORAGE_DIR", "./storage/photos")

    # ---------------------------
    # Feedback policy
    # ---------------------------
    # Edited comments have always been re-approved; flip to send edits
    # back through moderation on events that moderate comments.
    AUTO_APPROVE_EDITED_COMMENTS: bool = (
        os.getenv("AUTO_APPROVE_EDITED_COMMENTS", "true").lower() == "true"
    )
    # Accept the client IP as guest identity when no guest token is sent
    ALLOW_IP_GUEST_FALLBACK: bool = (
        os.getenv("ALLOW_IP_GUEST_FALLBACK", "false").lower() == "true"
    )

    # ---------------------------
    # Derived / Convenience
    # ---------------------------
    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def allowed_origins(self) -> List[str]:
        origins = [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]
        return origins or ["*"]


settings = Settings()
