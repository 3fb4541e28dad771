"""Configuration settings for the portfolio contact API.

This module manages environment variables and application settings.
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

load_dotenv()


class Settings:
    """Application settings.

    Attributes:
        API_PREFIX: API path prefix
        PROJECT_NAME: Name of the project
        DEBUG: Debug mode flag
        RESEND_API_KEY: API key for the Resend email API
        CONTACT_TO_EMAIL: Inbox that receives contact messages
        CONTACT_FROM_EMAIL: Verified sender address used for outgoing mail
    """
    def __init__(self):
        self.API_PREFIX = "/api"
        self.PROJECT_NAME = os.getenv("PROJECT_NAME", "Portfolio Contact API")
        self.DEBUG = os.getenv("DEBUG", "False").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

        self.CORS_ALLOW_ORIGINS = [
            origin.strip()
            for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
            if origin.strip()
        ]

        # Resend Settings
        self.RESEND_API_KEY = os.getenv("RESEND_API_KEY")
        self.RESEND_API_URL = os.getenv("RESEND_API_URL", "https://api.resend.com/emails")

        # Contact Settings
        self.CONTACT_TO_EMAIL = os.getenv("CONTACT_TO_EMAIL")
        self.CONTACT_FROM_EMAIL = os.getenv("CONTACT_FROM_EMAIL")
        self.SITE_NAME = os.getenv("SITE_NAME", "wyodeb portfolio")


class ContactConfig(BaseModel):
    """Everything the contact handler needs from the environment.

    Attributes:
        api_key: Resend API key
        to_address: Destination inbox for contact messages
        from_address: Sender address for outgoing mail
        site_name: Name shown in the email heading
    """
    api_key: Optional[str] = None
    to_address: Optional[str] = None
    from_address: Optional[str] = None
    site_name: str = "wyodeb portfolio"

    model_config = ConfigDict(frozen=True)

    @field_validator("api_key", "to_address", "from_address")
    @classmethod
    def blank_as_missing(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContactConfig":
        return cls(
            api_key=settings.RESEND_API_KEY,
            to_address=settings.CONTACT_TO_EMAIL,
            from_address=settings.CONTACT_FROM_EMAIL,
            site_name=settings.SITE_NAME,
        )

    def missing_message(self) -> Optional[str]:
        """Describe the first missing required value, or None when complete."""
        if not self.api_key:
            return "Server not configured: RESEND_API_KEY missing"
        if not self.to_address or not self.from_address:
            return "Server not configured: CONTACT_TO_EMAIL or CONTACT_FROM_EMAIL missing"
        return None


settings = Settings()
