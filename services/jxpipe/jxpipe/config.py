"""Configuration loader for the jxpipe service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is not None:
        value = value.strip()
        if value == "":
            return default
        return value
    return default


def _get_int(key: str, default: int) -> int:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer") from exc


def _get_float(key: str, default: float) -> float:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be a number") from exc


def _get_bool(key: str, default: bool) -> bool:
    value = _get_env(key)
    if value is None:
        return default
    value_lower = value.lower()
    if value_lower in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if value_lower in {"0", "false", "f", "no", "n", "off"}:
        return False
    raise ValueError(f"Environment variable {key} must be a boolean")


DEFAULT_USER_AGENT = "jxpipe/1.0"


@dataclass(slots=True)
class AppConfig:
    http_timeout: float = 30.0
    http_retries: int = 1
    http_user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"
    log_json: bool = True


def load_config() -> AppConfig:
    http_timeout = _get_float("HTTP_TIMEOUT_SECONDS", 30.0)
    if http_timeout <= 0:
        raise ValueError("Environment variable HTTP_TIMEOUT_SECONDS must be positive")
    http_retries = max(1, _get_int("HTTP_RETRIES", 1))

    return AppConfig(
        http_timeout=http_timeout,
        http_retries=http_retries,
        http_user_agent=_get_env("HTTP_USER_AGENT", DEFAULT_USER_AGENT),
        log_level=_get_env("LOG_LEVEL", "INFO").upper(),
        log_json=_get_bool("LOG_JSON", True),
    )
