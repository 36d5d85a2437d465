from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    log_file: str | None = None

    max_items_per_upload: int = Field(default=20, ge=1)
    history_capacity: int = Field(default=5, ge=1)

    enhance_images: bool = True
    contrast_level: float = 1.2

    csv_format: Literal["google", "plain"] = "google"
    output_dir: str = "exports"

    storage_backend: Literal["file", "postgres", "memory"] = "file"
    storage_path: str = ".omniextract/state.json"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "omniextract"
    db_username: str = "omniextract"
    db_password: str = "secret"

    ocr_provider: str = "gemini"
    ocr_api_key: str = ""
    ocr_model_name: str = "gemini-2.5-flash"
    ocr_base_url: str | None = None
    ocr_timeout_seconds: float | None = None
