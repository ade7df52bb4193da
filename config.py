"""Runtime settings for the dashboard, proxy and CLI."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_UPSTREAM = "http://localhost:8080"
API_SUFFIX = "/api"
LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def normalize_api_base(raw: Optional[str], default: str = DEFAULT_UPSTREAM) -> str:
    """
    Normalize an upstream base URL.

    - Missing or non-HTTP values fall back to the default
    - Trailing slash is stripped
    - The result always ends with /api
    """
    value = (raw or "").strip()
    if not value.startswith("http"):
        value = default
    value = value.rstrip("/")
    if not value.endswith(API_SUFFIX):
        value = f"{value}{API_SUFFIX}"
    return value


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def _env_log_level(env: Mapping[str, str]) -> str:
    level = env.get("LOG_LEVEL", "INFO").strip().upper()
    return level if level in LOG_LEVELS else "INFO"


@dataclass(frozen=True)
class Settings:
    """Settings resolved once at process start."""

    proxy_target: str = normalize_api_base(None)
    api_base: str = normalize_api_base(None)
    timeout: int = 10
    secret_key: str = "dev-secret-key-change-in-prod"
    host: str = "0.0.0.0"
    port: int = 5001
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (and a .env file when present)."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    proxy_target = normalize_api_base(
        environ.get("API_PROXY_TARGET") or environ.get("API_BASE_URL")
    )
    api_base = normalize_api_base(environ.get("API_BASE_URL"), default=proxy_target)

    return Settings(
        proxy_target=proxy_target,
        api_base=api_base,
        timeout=_env_int(environ, "API_TIMEOUT", 10),
        secret_key=environ.get("SECRET_KEY", "dev-secret-key-change-in-prod"),
        host=environ.get("APP_HOST", "0.0.0.0"),
        port=_env_int(environ, "APP_PORT", 5001),
        log_level=_env_log_level(environ),
    )
