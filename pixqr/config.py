"""Application configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PIX_KEY = "contato@deltasilkprint.com.br"


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="Enable JSON formatted logs")


class Settings(BaseSettings):
    """Central application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=(Path(__file__).resolve().parent.parent / ".env"), env_file_encoding="utf-8")

    app_name: str = Field(default="pixqr")
    environment: Literal["development", "staging", "production"] = Field(default="development")
    pix_key: str = Field(default=DEFAULT_PIX_KEY, min_length=1, max_length=77, validation_alias=AliasChoices("PIX_KEY", "MERCHANT_KEY"))
    merchant_name: str = Field(default="DELTA SILK PRINT", min_length=1, max_length=25)
    merchant_city: str = Field(default="SAO PAULO", min_length=1, max_length=15)
    country_code: str = Field(default="BR", min_length=2, max_length=2)
    render_cache_size: int = Field(default=100, ge=1)
    qr_width: int = Field(default=256, ge=64, le=2048)
    qr_margin: int = Field(default=1, ge=0, le=10)
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return memoized application settings."""

    return Settings()


settings = get_settings()
