"""Library configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings."""

    # Currency
    DEFAULT_CURRENCY: str = "USD"
    CURRENCY_DATA_FILE: Optional[str] = None  # extra metadata, JSON list

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(
        env_prefix="SCALED_MONEY_",
        env_file=".env",
        extra="ignore",
        case_sensitive=True,
    )


settings = Settings()
