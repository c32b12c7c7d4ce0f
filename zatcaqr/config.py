"""Application configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="Enable JSON formatted logs")


class RenderConfig(BaseModel):
    error_correction: Literal["L", "M", "Q", "H"] = Field(default="M", description="QR error-correction level")
    size: int = Field(default=256, ge=21, le=4096, description="Output image edge in pixels")
    border: int = Field(default=4, ge=0, le=32, description="Quiet zone in modules")


class Settings(BaseSettings):
    """Central application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ZATCAQR_",
        env_nested_delimiter="__",
        env_file=(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="zatcaqr")
    environment: Literal["development", "staging", "production"] = Field(default="development")
    api_key: str = Field(default="dev-secret-key")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return memoized application settings."""

    return Settings()


settings = get_settings()
