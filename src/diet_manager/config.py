"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

FOODS_FILE = "foods.txt"
LOGS_FILE = "logs.txt"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_root: Path = Path("database")
    clear_redo_on_perform: bool = False
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def foods_path(self) -> Path:
        """Location of the food catalog file."""
        return self.storage_root / FOODS_FILE

    @property
    def logs_path(self) -> Path:
        """Location of the daily log file."""
        return self.storage_root / LOGS_FILE
