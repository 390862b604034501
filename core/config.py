import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    SENSCRITIQUE_PROFILE_URL: Optional[str] = Field(
        default=None,
        description="Public Senscritique profile listing to scrape (films tab)"
    )
    SENSCRITIQUE_BASE_URL: str = "https://www.senscritique.com"
    OUTPUT_FILE: str = "letterboxd-import.csv"

    # Browser
    HEADLESS: bool = False
    MAX_PAGES: int = Field(default=50, ge=1)

    # Fixed pauses (seconds) standing in for readiness events
    PAGE_LOAD_WAIT: float = Field(default=2.0, ge=0)
    NEXT_PAGE_DELAY: float = Field(default=1.5, ge=0)
    SETTLE_WAIT: float = Field(default=2.0, ge=0)
    TIMEOUT_FALLBACK_WAIT: float = Field(default=3.0, ge=0)

    # Playwright wait_for_function timeouts (milliseconds)
    PAGINATION_TIMEOUT_MS: int = Field(default=15000, ge=0)
    CONTENT_TIMEOUT_MS: int = Field(default=10000, ge=0)

    # Total-count heuristic: pages x items per page
    ESTIMATED_TOTAL_PAGES: int = Field(default=30, ge=1)
    ITEMS_PER_PAGE: int = Field(default=18, ge=1)

    LOG_LEVEL: str = "INFO"

    @field_validator("SENSCRITIQUE_PROFILE_URL")
    @classmethod
    def validate_profile_url(cls, v: Optional[str]) -> Optional[str]:
        """Ensure the profile URL, when provided, is an absolute http(s) URL."""
        if v is None:
            return v
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                f"SENSCRITIQUE_PROFILE_URL must start with http:// or https://, got: {v}"
            )
        return v

    @field_validator("SENSCRITIQUE_BASE_URL")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure the base URL is properly formatted."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"SENSCRITIQUE_BASE_URL must start with http:// or https://, got: {v}")
        return v.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for command-line entrypoints."""
    logging.basicConfig(level=level or settings.LOG_LEVEL, format=LOG_FORMAT)


settings = Settings()
