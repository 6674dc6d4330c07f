"""Configuration settings for Hoaxify."""

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./hoaxify.db")

    # Uploads
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
    PROFILE_DIR: str = os.getenv("PROFILE_DIR", "profile")
    ATTACHMENT_DIR: str = os.getenv("ATTACHMENT_DIR", "attachment")
    MAX_ATTACHMENT_SIZE_MB: int = int(os.getenv("MAX_ATTACHMENT_SIZE_MB", "5"))
    MAX_PROFILE_IMAGE_SIZE_MB: int = int(os.getenv("MAX_PROFILE_IMAGE_SIZE_MB", "2"))
    MAX_REQUEST_BODY_MB: int = int(os.getenv("MAX_REQUEST_BODY_MB", "6"))

    # Tokens
    TOKEN_TTL_DAYS: int = int(os.getenv("TOKEN_TTL_DAYS", "7"))
    TOKEN_CLEANUP_INTERVAL_SECONDS: int = int(os.getenv("TOKEN_CLEANUP_INTERVAL_SECONDS", "3600"))
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Attachments sweep
    UNUSED_ATTACHMENT_TTL_HOURS: int = int(os.getenv("UNUSED_ATTACHMENT_TTL_HOURS", "24"))
    ATTACHMENT_CLEANUP_INTERVAL_SECONDS: int = int(os.getenv("ATTACHMENT_CLEANUP_INTERVAL_SECONDS", "86400"))
    SCHEDULER_ENABLED: bool = _env_bool("SCHEDULER_ENABLED", "true")

    # Mail
    SMTP_HOST: str = os.getenv("SMTP_HOST", "localhost")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "1025"))
    SMTP_USERNAME: str = os.getenv("SMTP_USERNAME", "")
    SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
    SMTP_USE_TLS: bool = _env_bool("SMTP_USE_TLS", "false")
    MAIL_FROM: str = os.getenv("MAIL_FROM", "Hoaxify <info@hoaxify.com>")
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:8080")

    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = _env_bool("DEBUG", "false")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))

    @property
    def profile_folder(self) -> Path:
        return Path(self.UPLOAD_DIR) / self.PROFILE_DIR

    @property
    def attachment_folder(self) -> Path:
        return Path(self.UPLOAD_DIR) / self.ATTACHMENT_DIR

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        errors = []
        if self.SMTP_USERNAME and not self.SMTP_USE_TLS:
            errors.append("SMTP credentials are configured but SMTP_USE_TLS is off - password is sent in clear text")
        if self.APP_ENV == "production" and self.DATABASE_URL.startswith("sqlite"):
            errors.append("DATABASE_URL points at SQLite in production")
        if self.MAX_REQUEST_BODY_MB <= self.MAX_ATTACHMENT_SIZE_MB:
            errors.append("MAX_REQUEST_BODY_MB should be above MAX_ATTACHMENT_SIZE_MB or uploads at the cap are rejected")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
