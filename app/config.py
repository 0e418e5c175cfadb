from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings read from the environment and `.env`."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_title: str = "Room rental API"
    app_version: str = "0.1.0"

    database_url: str = "sqlite:///./data/rentals.db"

    access_token_secret: str = Field(
        default="change-me",
        description="Secret used to sign bearer tokens.",
    )
    access_token_algorithm: str = "HS256"
    # Tokens are intentionally long lived so hosts and guests are not
    # forced to log in again.
    access_token_expire_days: int = 365

    stripe_secret_key: str = ""
    payment_currency: str = "usd"

    transporter_email: str = ""
    transporter_pass: str = ""
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587

    cors_origins: List[str] = ["*"]
    port: int = 5000
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
