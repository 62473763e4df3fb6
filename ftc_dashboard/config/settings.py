import logging
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

FTCSCOUT_API_BASE_URL = "https://api.ftcscout.org/rest/v1"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # FTCScout API Configuration
    api_base_url: str = Field(
        FTCSCOUT_API_BASE_URL, description="Base URL of the FTCScout REST API."
    )
    request_timeout: float = Field(
        30.0, gt=0, description="Timeout in seconds for a single API request."
    )

    # Cache Configuration
    cache_ttl_ms: int = Field(
        300_000,
        ge=0,
        description="How long a cached API response stays fresh, in milliseconds.",
    )

    # Season Configuration
    current_season: int = Field(
        2024, ge=2000, description="Newest season offered for a team lookup."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )
    log_file: Optional[str] = Field(
        None, description="Optional path of a rotating log file."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Reads dashboard settings and normalizes the log level name."""
    try:
        settings = AppSettings()
    except ValidationError as e:
        logging.error(f"Invalid FTC dashboard configuration (check .env or environment): {e}")
        raise SystemExit("FTC dashboard settings are invalid. Exiting.") from e

    level = settings.log_level.upper()
    if level not in VALID_LOG_LEVELS:
        logging.warning(
            f"Unknown LOG_LEVEL '{settings.log_level}' for the FTC dashboard; falling back to INFO."
        )
        level = "INFO"
    settings.log_level = level
    return settings


settings: AppSettings = load_settings()
