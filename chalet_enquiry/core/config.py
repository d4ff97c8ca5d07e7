from functools import lru_cache
from typing import Literal
import re

from pydantic_settings import BaseSettings, SettingsConfigDict

"""
WORKER CONFIGURATION
"""


#Class to load and read the worker .env
class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    TO_EMAIL: str = "info@chalet-josephine.com"
    FROM_EMAIL: str = "noreply@chalet-josephine.com"
    FROM_NAME: str = "Chalet Josephine"

    ALLOWED_ORIGIN: str = "https://www.chalet-josephine.com"
    ALLOWED_ORIGIN_DOMAIN: str = "chalet-josephine.com"

    EMAIL_PROVIDER: Literal["resend", "mailchannels", "brevo"] = "resend"

    RESEND_API_KEY: str | None = None
    RESEND_API_URL: str = "https://api.resend.com/emails"

    BREVO_API_KEY: str | None = None

    MAILCHANNELS_API_URL: str = "https://api.mailchannels.net/tx/v1/send"

    EMAIL_TIMEOUT_SECONDS: float = 10

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()


#Form fields that must be present and non-blank, in reporting order
REQUIRED_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "arrival_date",
    "departure_date",
    "guests",
)

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

CONFIRMATION_SUBJECT = "Thank you for your enquiry — Chalet Josephine"

SUCCESS_MESSAGE = "Enquiry received. We will respond within 24 hours."
