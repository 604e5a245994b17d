"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, upload dir, OTP policy, SMS creds)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="pickupdesk",
        description="MongoDB database name"
    )
    MONGODB_TIMEOUT_MS: int = Field(
        default=5000,
        description="Server selection timeout in milliseconds"
    )

    # Server
    PORT: int = Field(
        default=5000,
        description="Port the order API listens on"
    )

    # Uploads
    UPLOAD_DIR: str = Field(
        default="uploads",
        description="Directory where order photos are stored"
    )
    MAX_PHOTOS: int = Field(
        default=5,
        description="Maximum number of photos per order"
    )
    MAX_PHOTO_BYTES: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum size of a single order photo"
    )

    # OTP
    OTP_LENGTH: int = Field(
        default=4,
        description="Number of digits in a one-time code"
    )
    OTP_EXPIRY_MINUTES: int = Field(
        default=5,
        description="Minutes a one-time code stays valid"
    )
    EXPOSE_OTP: Optional[bool] = Field(
        default=None,
        description="Return the OTP in the send-otp response (defaults to on in development)"
    )

    # Twilio SMS (optional)
    TWILIO_ACCOUNT_SID: Optional[str] = Field(
        default=None,
        description="Twilio account SID for SMS delivery"
    )
    TWILIO_AUTH_TOKEN: Optional[str] = Field(
        default=None,
        description="Twilio auth token"
    )
    TWILIO_FROM_NUMBER: Optional[str] = Field(
        default=None,
        description="Twilio sender number (+14155238886)"
    )
    SMS_COUNTRY_CODE: str = Field(
        default="+91",
        description="Country code prepended to mobile numbers for SMS"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @validator("EXPOSE_OTP")
    def validate_expose_otp(cls, v, values):
        """Never hand out codes over HTTP in production."""
        if values.get("ENVIRONMENT") == "production" and v:
            raise ValueError("EXPOSE_OTP cannot be enabled in production environment")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def expose_otp(self) -> bool:
        """Whether send-otp responses carry the generated code."""
        if self.EXPOSE_OTP is None:
            return self.is_development
        return self.EXPOSE_OTP

    @property
    def sms_enabled(self) -> bool:
        """Whether all Twilio credentials are set."""
        return bool(
            self.TWILIO_ACCOUNT_SID
            and self.TWILIO_AUTH_TOKEN
            and self.TWILIO_FROM_NUMBER
        )

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()


def validate_settings(config: Settings = settings):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not config.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not config.UPLOAD_DIR:
        errors.append("UPLOAD_DIR is required")

    if config.MAX_PHOTOS < 1:
        errors.append("MAX_PHOTOS must be at least 1")

    if config.OTP_LENGTH < 4:
        errors.append("OTP_LENGTH must be at least 4")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
