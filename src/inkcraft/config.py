"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_pin: str = "1234"
    admin_secret: str = "change-this-secret"
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"
    public_dir: Path = Path("public")
    data_dir: Path = Path("data")
    session_max_age_days: int = 7
    max_upload_bytes: int = 10 * 1024 * 1024
    max_batch_size: int = 20
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    cloudinary_folder: str = "inkcraft"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def uploads_dir(self) -> Path:
        return self.public_dir / "uploads"

    @property
    def db_file(self) -> Path:
        return self.data_dir / "db.json"

    @property
    def use_cloud(self) -> bool:
        """Return True when every Cloudinary credential is configured."""
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
