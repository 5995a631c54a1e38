from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables (prefix ``TINYPRESS_``)."""

    app_title: str = "tinypress"
    app_version: str = "0.1.0"
    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 8080

    # Article snapshot
    data_file: str = "data/articles.json"

    # Uploads & static assets
    upload_dir: str = "uploads"
    max_upload_size_mb: int = 10
    tinymce_dir: str = "tinymce"

    identifier_length: int = 8

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_store: str = "INFO"            # Snapshot load / save
    log_file: str = "logs/tinypress.log"     # Empty string disables the file handler
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_prefix="TINYPRESS_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
