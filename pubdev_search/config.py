"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pubdev_search.domain.models import PrimaryAction


class RegistrySettings(BaseModel):
    base_url: AnyHttpUrl = Field(
        default="https://pub.dev",
        description="Base URL of the package registry being searched.",
    )
    request_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        le=600,
        description="HTTP timeout; unset means a request waits until superseded.",
    )
    user_agent: str = Field(default="pubdev-search-bot", min_length=1)

    @field_validator("request_timeout_seconds", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def base(self) -> str:
        return str(self.base_url).rstrip("/")


class PaletteSettings(BaseModel):
    primary_action: PrimaryAction = "copy-install-command"
    package_manager: str = Field(default="flutter pub", min_length=1)
    open_package_page: bool = Field(
        default=False,
        description="Open the human-readable package page instead of the API URL.",
    )
    debounce_seconds: float = Field(default=0.0, ge=0, le=5)
    inline_cache_seconds: int = Field(default=30, ge=0, le=86_400)
    session_idle_seconds: int = Field(default=900, ge=30)


class BotSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PUBSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    telegram_token: SecretStr
    telegram_proxy: str | None = None
    admin_telegram_id: int | None = None
    default_language: str = "en"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    registry: RegistrySettings = Field(default_factory=RegistrySettings)
    palette: PaletteSettings = Field(default_factory=PaletteSettings)


@lru_cache
def get_settings() -> BotSettings:
    """Return cached settings instance."""

    return BotSettings()  # type: ignore[call-arg]


__all__ = [
    "BotSettings",
    "PaletteSettings",
    "RegistrySettings",
    "get_settings",
]
