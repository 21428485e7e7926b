"""Runtime settings, read from the environment (``LOJASOCIAL_*``) or a .env file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LOJASOCIAL_",
        env_file=".env",
        extra="ignore",
    )

    # ===== STORAGE =====
    data_dir: Path = Field(default=Path("data"))

    # ===== BUSINESS RULES =====
    max_items_per_request: int = Field(default=10, ge=1)
    expiring_days_threshold: int = Field(default=3, ge=0)

    # ===== LOGGING =====
    log_level: str = Field(default="INFO")
    log_dir: Path | None = Field(default=None)
    event_log_file: Path | None = Field(default=None)

    # ===== API =====
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000)

    @field_validator("log_level", mode="after")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.strip().upper() or "INFO"

    @property
    def store_path(self) -> Path:
        return self.data_dir / "store.json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
