"""Configuration management for fourleaf."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fourleaf.network import DEFAULT_PROBE_HOSTS

DEFAULT_API_BASE = "https://taipei-marathon-server.onrender.com"
DEFAULT_WELCOME_TEXT = "歡迎來到臺北馬拉松智慧客服！我是小幫手，隨時為您解答~ 有什麼問題可以為您解答的嗎?"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FOURLEAF_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Endpoint
    api_base: str = Field(default=DEFAULT_API_BASE, description="Base URL of the chat backend")
    chat_path: str = Field(default="/api/chat", description="Path of the chat endpoint")
    language: str = Field(default="繁體中文", description="Target-language hint sent with every request")

    # Turn behaviour
    retry_delay_seconds: float = Field(default=1.0, ge=0, description="Pause before a retried attempt")
    request_timeout_seconds: float = Field(default=30.0, gt=0, description="Transport timeout per attempt")
    probe_timeout_seconds: float = Field(default=2.0, gt=0, description="Timeout of the reachability probe")
    probe_hosts: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PROBE_HOSTS),
        description="host:port targets used to tell whether the client is online",
    )

    # Session
    home: Path = Field(default=Path.home() / ".fourleaf", description="Directory holding client state")
    client_id_file: str = Field(default="client_id", description="File name of the stored client identifier")
    welcome_text: str = Field(default=DEFAULT_WELCOME_TEXT, description="Greeting shown at session start")

    # Logging
    log_level: str = Field(default="WARNING", description="Log level")

    @property
    def client_id_path(self) -> Path:
        return self.home.expanduser() / self.client_id_file


def load_settings(**overrides: Any) -> Settings:
    """Load settings from the environment, applying non-empty overrides."""
    settings = Settings()
    updates = {key: value for key, value in overrides.items() if value is not None}
    if updates:
        settings = settings.model_copy(update=updates)
    return settings
