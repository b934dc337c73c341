"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class SMTPConfig:
    """Connection settings for the outgoing mail server."""

    host: str = ""
    port: int = 0
    username: str = ""
    password: str = ""


@dataclass
class Config:
    """All configuration for the application."""

    smtp: SMTPConfig = field(default_factory=SMTPConfig)


def get_config() -> Config:
    """Return the built-in application configuration."""
    return Config()


def _text(section: dict[str, Any], key: str) -> str:
    value = section.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"smtp.{key} must be a string")
    return value


def load_config(filename: str) -> Config:
    """Read a YAML file holding an ``smtp`` section."""
    with open(filename, encoding="utf-8") as handle:
        document = yaml.safe_load(handle)
    if document is None:
        raise ValueError(f"{filename}: configuration is empty")
    if not isinstance(document, dict):
        raise ValueError(f"{filename}: configuration must be a mapping")
    section = document.get("smtp") or {}
    if not isinstance(section, dict):
        raise ValueError(f"{filename}: smtp must be a mapping")
    port = section.get("port")
    if port is None:
        port = 0
    elif isinstance(port, bool) or not isinstance(port, int):
        raise ValueError("smtp.port must be an integer")
    return Config(
        smtp=SMTPConfig(
            host=_text(section, "host"),
            port=port,
            username=_text(section, "username"),
            password=_text(section, "password"),
        )
    )