# File: app/core/config.py
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
    # Database
    # ---------------------------
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./event_feedback.db")

    # ---------------------------
    # Security / Auth
    # ---------------------------
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    # ---------------------------
    # API / Project
    # ---------------------------
    API_V1_STR: str = os.getenv("API_V1_STR", "/api/v1")
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Event Feedback API")

    # ---------------------------
    # Environment / Logging
    # ---------------------------
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")  # development | staging | production
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "")

    # ---------------------------
    # Feedback policy
    # ---------------------------
    # Reject non-anonymous submissions that carry no authenticated identity
    FEEDBACK_REQUIRE_IDENTITY: bool = os.getenv("FEEDBACK_REQUIRE_IDENTITY", "false").lower() == "true"
    FEEDBACK_COMMENT_MIN_LENGTH: int = int(os.getenv("FEEDBACK_COMMENT_MIN_LENGTH", "3"))
    FEEDBACK_COMMENT_MAX_LENGTH: int = int(os.getenv("FEEDBACK_COMMENT_MAX_LENGTH", "1000"))
    # Group rows without a submission_id by (event, timestamp, respondent)
    FEEDBACK_LEGACY_GROUPING: bool = os.getenv("FEEDBACK_LEGACY_GROUPING", "true").lower() == "true"

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
    def cors_origins(self) -> List[str]:
        """Explicit ALLOWED_ORIGINS list, or a wildcard when none are configured"""
        origins = [url.strip() for url in self.ALLOWED_ORIGINS.split(",") if url.strip()]
        return origins or ["*"]


settings = Settings()
