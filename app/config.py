"""
Configuration management using Pydantic settings.
Handles Supabase credentials, mail transport and upload limits from environment variables.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import Optional, List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from the environment or a .env file."""

    # Application configuration
    app_name: str = "Estate Listing API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    testing: bool = False
    log_level: str = "INFO"

    # Supabase (database, auth and storage) - no defaults, startup fails without them
    supabase_url: str
    supabase_service_role_key: str

    # Optional auth identity promoted to admin on startup
    admin_user_id: Optional[str] = None

    # Mail transport configuration
    mail_host: str = "smtp.gmail.com"
    mail_port: int = 465
    mail_user: str = ""
    mail_pass: str = ""
    mail_from: Optional[str] = None
    mail_to: Optional[str] = None
    mail_timeout: float = 15.0

    # Object storage configuration
    property_bucket: str = "property-images"
    review_bucket: str = "review-images"
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    max_files_per_upload: int = 10

    # Error responses forward downstream error strings unless disabled
    expose_error_details: bool = True

    # Server configuration
    cors_origin: str = "http://localhost:3000"
    host: str = "0.0.0.0"
    port: int = 5001

    @field_validator("supabase_url")
    @classmethod
    def validate_supabase_url(cls, v):
        """Require an http(s) project URL and drop any trailing slash."""
        if not v or not v.startswith(("http://", "https://")):
            raise ValueError("SUPABASE_URL must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("supabase_service_role_key")
    @classmethod
    def validate_service_role_key(cls, v):
        if not v or not v.strip():
            raise ValueError("SUPABASE_SERVICE_ROLE_KEY is required")
        return v.strip()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("max_files_per_upload")
    @classmethod
    def validate_max_files(cls, v):
        if v < 1:
            raise ValueError("MAX_FILES_PER_UPLOAD must be at least 1")
        return v

    @property
    def cors_origins(self) -> List[str]:
        """Allowed CORS origins parsed from the comma-separated CORS_ORIGIN value."""
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    @property
    def sender_address(self) -> str:
        """Address used in the From header of outgoing mail."""
        return self.mail_from or self.mail_user

    @property
    def operator_inbox(self) -> str:
        """Inbox that receives a copy of every contact form submission."""
        return self.mail_to or self.mail_from or self.mail_user

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing" or self.testing

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Raises a pydantic ValidationError naming the missing variable when a
    required secret is absent, so the process refuses to start.
    """
    return Settings()


# Global settings instance
settings = get_settings()
