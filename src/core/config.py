"""Pydantic settings loaded from YAML configuration and the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, SecretStr

_settings: Settings | None = None

_DEFAULT_CONFIG_PATH = Path("config/settings.yaml")

# Environment variables that override values from the YAML file.
ENV_WEBHOOK_URL = "TEAMS_INCOMING_WEBHOOK_URL"
ENV_MARKDOWN_ENABLED = "MARKDOWN_ENABLED"
ENV_LOG_LEVEL = "LOG_LEVEL"


class ServerConfig(BaseModel):
    """Inbound webhook server configuration."""

    host: str = "0.0.0.0"
    port: int = 2000
    path: str = "/alertmanager"
    # 0 disables the request body limit
    max_body_bytes: int = 0


class TeamsConfig(BaseModel):
    """Teams incoming webhook configuration."""

    webhook_url: SecretStr = SecretStr("")
    markdown_enabled: bool = False
    timeout_secs: float = 10.0


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"


class Settings(BaseModel):
    """Root settings container."""

    server: ServerConfig = ServerConfig()
    teams: TeamsConfig = TeamsConfig()
    logging: LoggingConfig = LoggingConfig()


def parse_markdown_toggle(value: str) -> bool:
    """Only the literal ``yes`` turns markdown rendering on."""
    return value.strip().lower() == "yes"


def _apply_env_overrides(data: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    teams = dict(data.get("teams") or {})
    log_cfg = dict(data.get("logging") or {})

    if ENV_WEBHOOK_URL in env:
        teams["webhook_url"] = env[ENV_WEBHOOK_URL]
    if ENV_MARKDOWN_ENABLED in env:
        teams["markdown_enabled"] = parse_markdown_toggle(env[ENV_MARKDOWN_ENABLED])
    if ENV_LOG_LEVEL in env:
        log_cfg["level"] = env[ENV_LOG_LEVEL]

    merged = dict(data)
    merged["teams"] = teams
    merged["logging"] = log_cfg
    return merged


def load_settings(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from a YAML file, apply env overrides, and cache globally.

    Args:
        path: Path to YAML config. Defaults to config/settings.yaml.
        env: Environment mapping. Defaults to ``os.environ``.

    Returns:
        Parsed Settings instance.
    """
    global _settings  # noqa: PLW0603

    config_path = Path(path) if path else _DEFAULT_CONFIG_PATH

    data: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f)
            if isinstance(raw, dict):
                data = raw

    data = _apply_env_overrides(data, os.environ if env is None else env)
    _settings = Settings(**data)
    return _settings


def get_settings() -> Settings:
    """Return the cached settings, loading defaults if not yet loaded."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Reset the cached settings (useful for testing)."""
    global _settings  # noqa: PLW0603
    _settings = None
