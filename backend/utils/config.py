"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(name: str, default: int, *, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    app_name: str = "Hotel Room Management System"
    app_version: str = "1.0.0"
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"
    api_prefix: str = "/api/rooms"
    cors_origins: tuple[str, ...] = field(default=("http://localhost:3000",))
    rate_limit_window_seconds: int = 900
    rate_limit_max_requests: int = 100
    seed_sample_rooms: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process; call ``cache_clear`` to reload."""
    defaults = Settings()
    return Settings(
        app_name=_env_str("APP_NAME", defaults.app_name),
        app_version=_env_str("APP_VERSION", defaults.app_version),
        host=_env_str("HOST", defaults.host),
        port=_env_int("PORT", defaults.port),
        log_level=_env_str("LOG_LEVEL", defaults.log_level).upper(),
        cors_origins=_env_list("CORS_ORIGIN", defaults.cors_origins),
        rate_limit_window_seconds=_env_int(
            "RATE_LIMIT_WINDOW_SECONDS",
            defaults.rate_limit_window_seconds,
        ),
        rate_limit_max_requests=_env_int(
            "RATE_LIMIT_MAX_REQUESTS",
            defaults.rate_limit_max_requests,
        ),
        seed_sample_rooms=_env_bool("SEED_SAMPLE_ROOMS", defaults.seed_sample_rooms),
    )
