"""Application configuration with environment variable validation."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env relative to the project root (2 levels up from this file)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

DEFAULT_DATASET_PATH = Path(__file__).resolve().parent.parent / "data" / "vehicles.json"

DATASET_SOURCES = ("static", "supabase", "http")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Dataset
    dataset_source: str = Field(default="static", validation_alias="DATASET_SOURCE")
    dataset_path: str = Field(
        default=str(DEFAULT_DATASET_PATH),
        validation_alias="DATASET_PATH",
    )
    dataset_url: str = Field(default="", validation_alias="DATASET_URL")
    dataset_load_timeout: float | None = Field(
        default=None,
        validation_alias="DATASET_LOAD_TIMEOUT",
    )

    # Supabase
    supabase_url: str = Field(default="", validation_alias="SUPABASE_URL")
    supabase_key: str = Field(default="", validation_alias="SUPABASE_KEY")
    vehicles_table: str = Field(default="vehicles", validation_alias="VEHICLES_TABLE")

    # Form behaviour
    submit_delay_ms: int = Field(default=500, validation_alias="SUBMIT_DELAY_MS")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # CORS
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000"],
        validation_alias="ALLOWED_ORIGINS",
    )

    @property
    def cors_origins(self) -> list[str]:
        """Parse ALLOWED_ORIGINS from comma-separated string or return list."""
        if isinstance(self.allowed_origins, str):
            return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        return self.allowed_origins


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


def validate_settings(settings: Settings | None = None) -> None:
    """Validate that the settings for the chosen dataset source are present."""
    settings = settings or get_settings()
    errors = []

    source = settings.dataset_source.lower()
    if source not in DATASET_SOURCES:
        errors.append(
            f"DATASET_SOURCE must be one of {', '.join(DATASET_SOURCES)} (got {source!r})"
        )
    if source == "supabase":
        if not settings.supabase_url:
            errors.append("SUPABASE_URL is required for the supabase dataset source")
        if not settings.supabase_key:
            errors.append("SUPABASE_KEY is required for the supabase dataset source")
    if source == "http" and not settings.dataset_url:
        errors.append("DATASET_URL is required for the http dataset source")
    if settings.submit_delay_ms < 0:
        errors.append("SUBMIT_DELAY_MS must not be negative")

    if errors:
        raise ValueError(f"Configuration errors: {'; '.join(errors)}")
