"""
MenuRelay Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; checked again during startup.

Cloud credentials are NOT configured here. The Google Cloud clients pick up
application-default credentials from the environment on their own.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development.
    Production deployments MUST set MENU_BUCKET.
    """

    # ── Server ────────────────────────────────────────────────────────────
    # PORT is the variable Cloud Run and most PaaS hosts inject
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Request Bodies ────────────────────────────────────────────────────
    # Base64 JSON payloads are ~4/3 the size of the raw image or PDF
    # Default: 10MB = 10 * 1024 * 1024 = 10485760
    max_body_size: int = Field(default=10_485_760, ge=1_024, le=104_857_600)

    # ── Menu Object Storage ───────────────────────────────────────────────
    # A single object in a single bucket; every upload overwrites it
    menu_bucket: str = Field(default="", description="GCS bucket holding the menu PDF")
    menu_object_name: str = Field(default="menu_current.pdf")
    menu_content_type: str = Field(default="application/pdf")

    # Lifetime of signed upload URLs in seconds (5 minutes)
    upload_url_ttl: int = Field(default=300, ge=1, le=604_800)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        Checks that critical settings are configured.

        Called during app startup (lifespan). Raises ValueError listing every
        missing value so the operator can fix them in one pass.
        """
        errors = []
        if not self.menu_bucket:
            errors.append(
                "MENU_BUCKET is not set. Menu upload, download and signed URLs will fail."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance — imported throughout the application
settings = Settings()
