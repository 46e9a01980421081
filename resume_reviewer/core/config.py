from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float | None) -> float | None:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    app_env: str
    port: int
    log_level: str
    sentry_dsn: str | None
    client_dist_dir: str
    cors_allowed_origins: tuple[str, ...]
    rate_limit: str
    rate_limit_enabled: bool
    max_upload_bytes: int
    ocr_enabled: bool
    ocr_api_key: str | None
    ocr_api_url: str
    ocr_engine: int
    ocr_timeout_s: float

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


settings = Settings(
    app_env=(_get_env("APP_ENV", "development") or "development").strip().lower(),
    port=_get_env_int("PORT", 5000),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    client_dist_dir=_get_env("CLIENT_DIST_DIR", "client/dist") or "client/dist",
    cors_allowed_origins=_get_env_list("CORS_ALLOWED_ORIGINS", ["*"]),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 8 * 1024 * 1024),
    ocr_enabled=_get_env_bool("OCR_ENABLED", False),
    ocr_api_key=_get_env("OCR_API_KEY"),
    ocr_api_url=_get_env("OCR_API_URL", "https://api.ocr.space/parse/image") or "https://api.ocr.space/parse/image",
    ocr_engine=_get_env_int("OCR_ENGINE", 2),
    ocr_timeout_s=_get_env_float("OCR_TIMEOUT_S", 60.0) or 60.0,
)

if settings.ocr_enabled and not settings.ocr_api_key:
    raise RuntimeError("OCR_ENABLED requires OCR_API_KEY to be set.")
