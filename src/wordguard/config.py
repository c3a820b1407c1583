"""WordGuard configuration, loaded from wordguard.yaml, .env and the environment."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Annotated, Any

import yaml
from dotenv import dotenv_values
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _load_yaml_config() -> dict[str, Any]:
    """Load wordguard.yaml from WORDGUARD_CONFIG_PATH or default locations."""
    config_path = os.getenv("WORDGUARD_CONFIG_PATH")
    search_paths = (
        [Path(config_path)]
        if config_path
        else [
            Path("/etc/wordguard/wordguard.yaml"),
            Path("wordguard.yaml"),
        ]
    )
    for path in search_paths:
        if path.exists():
            with open(path) as f:
                return yaml.safe_load(f) or {}
    return {}


def _env_overrides() -> set[str]:
    """Upper-cased names of variables set in the process environment or .env."""
    names = {name.upper() for name in os.environ}
    names.update(name.upper() for name in dotenv_values(".env"))
    return names


def _without_env_overrides(data: dict[str, Any], prefix: str, env: set[str]) -> dict[str, Any]:
    """Drop YAML keys whose environment variable is set, so env wins."""
    return {key: value for key, value in data.items() if f"{prefix}{key}".upper() not in env}


class TelegramConfig(BaseSettings):
    """Telegram Bot API access and webhook settings."""

    bot_token: str = Field(default="", description="Telegram bot token")
    api_base: str = Field(default="https://api.telegram.org", description="Bot API host")
    timeout_s: float = Field(default=10.0, gt=0, description="Per-request HTTP timeout")

    webhook_path: str = "/webhook"
    webhook_url: str | None = Field(
        default=None,
        description="Public URL registered with setWebhook on startup. Empty = leave as is",
    )
    webhook_secret: str | None = None

    model_config = SettingsConfigDict(env_prefix="WORDGUARD_TELEGRAM_", env_file=".env", extra="ignore")

    @property
    def endpoint(self) -> str:
        return f"{self.api_base.rstrip('/')}/bot{self.bot_token.strip()}"


class ModerationConfig(BaseSettings):
    """Forbidden word handling."""

    forbidden_words: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["aww"])
    ban_duration_s: int = Field(default=86_400, gt=0, description="Removal length in seconds")

    @field_validator("forbidden_words", mode="before")
    @classmethod
    def _parse_forbidden_words(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return []
            if text.startswith("["):
                try:
                    parsed = json.loads(text)
                except ValueError:
                    parsed = None
                if isinstance(parsed, list):
                    return [str(item).strip() for item in parsed if str(item).strip()]
            return [item.strip() for item in text.split(",") if item.strip()]
        if isinstance(value, (list, tuple, set)):
            return [str(item).strip() for item in value if str(item).strip()]
        return [str(value).strip()] if str(value).strip() else []

    model_config = SettingsConfigDict(env_prefix="WORDGUARD_MODERATION_", env_file=".env", extra="ignore")


class TelemetryConfig(BaseSettings):
    """Out-of-band error reporting."""

    endpoint: str = Field(default="", description="URL errors are POSTed to. Empty = log only")
    timeout_s: float = Field(default=5.0, gt=0)

    model_config = SettingsConfigDict(env_prefix="WORDGUARD_TELEMETRY_", env_file=".env", extra="ignore")


class WordGuardConfig(BaseSettings):
    """Root WordGuard configuration."""

    # Server
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=3000, ge=1, le=65535, description="Server bind port")

    # Sub-configs
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)
    moderation: ModerationConfig = Field(default_factory=ModerationConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json", description="'json' or 'console'")

    model_config = SettingsConfigDict(
        env_prefix="WORDGUARD_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    @classmethod
    def load(cls) -> WordGuardConfig:
        """Load config from YAML + env vars (env takes precedence)."""
        yaml_cfg = _load_yaml_config()
        env = _env_overrides()

        telegram_data = yaml_cfg.pop("telegram", None) or {}
        moderation_data = yaml_cfg.pop("moderation", None) or {}
        telemetry_data = yaml_cfg.pop("telemetry", None) or {}

        telegram_data = _without_env_overrides(telegram_data, "WORDGUARD_TELEGRAM_", env)
        moderation_data = _without_env_overrides(moderation_data, "WORDGUARD_MODERATION_", env)
        telemetry_data = _without_env_overrides(telemetry_data, "WORDGUARD_TELEMETRY_", env)

        # Only pass YAML sub-configs if they have data;
        # otherwise let pydantic-settings pick up env vars
        kwargs: dict[str, Any] = _without_env_overrides(yaml_cfg, "WORDGUARD_", env)
        if telegram_data:
            kwargs["telegram"] = TelegramConfig(**telegram_data)
        if moderation_data:
            kwargs["moderation"] = ModerationConfig(**moderation_data)
        if telemetry_data:
            kwargs["telemetry"] = TelemetryConfig(**telemetry_data)

        return cls(**kwargs)


# Singleton
_config: WordGuardConfig | None = None


def get_config() -> WordGuardConfig:
    """Get or create the global config."""
    global _config
    if _config is None:
        _config = WordGuardConfig.load()
    return _config
