"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .errors import ConfigError
from .logging import DEFAULT_LOG_LEVEL, parse_log_level

DEFAULT_BASE_URL = "http://localhost:9000"
DEFAULT_ALLOWED_EXTENSIONS = ("png", "jpg", "jpeg", "gif")
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class UploadLimits:
    max_upload_bytes: int
    allowed_extensions: Sequence[str]
    chunk_size_bytes: int

    @property
    def enforce_extensions(self) -> bool:
        return bool(self.allowed_extensions)


@dataclass(slots=True)
class AppConfig:
    jwt_secret: str
    base_url: str
    images_dir: Path
    upload_limits: UploadLimits
    cors_allowed_origins: Sequence[str]
    gc_require_auth: bool = True
    log_level: str = DEFAULT_LOG_LEVEL


def _parse_list(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def load_config() -> AppConfig:
    """Load configuration from environment.

    ``JWT_SECRET_KEY`` is mandatory: it must be the secret the backend signs
    its tokens with, and the service refuses to start without it.
    """
    jwt_secret = os.getenv("JWT_SECRET_KEY", "")
    if not jwt_secret:
        raise ConfigError(
            "JWT_SECRET_KEY is not set, must be the same as the one used in the backend api"
        )

    base_url = (os.getenv("URL") or DEFAULT_BASE_URL).rstrip("/")

    images_dir = Path(os.getenv("IMAGES_DIR", "images"))
    images_dir.mkdir(parents=True, exist_ok=True)

    upload_limits = UploadLimits(
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_MB", 100)) * 1024 * 1024,
        allowed_extensions=tuple(
            ext.lower().lstrip(".")
            for ext in _parse_list(
                os.getenv("ALLOWED_EXTENSIONS", ",".join(DEFAULT_ALLOWED_EXTENSIONS))
            )
        ),
        chunk_size_bytes=int(os.getenv("UPLOAD_CHUNK_SIZE_BYTES", 1024 * 1024)),
    )

    cors_allowed_origins = _parse_list(os.getenv("CORS_ALLOWED_ORIGINS", "")) or ("*",)
    gc_require_auth = os.getenv("GC_REQUIRE_AUTH", "true").strip().lower() in _TRUTHY

    log_level = (os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    parse_log_level(log_level)

    return AppConfig(
        jwt_secret=jwt_secret,
        base_url=base_url,
        images_dir=images_dir,
        upload_limits=upload_limits,
        cors_allowed_origins=cors_allowed_origins,
        gc_require_auth=gc_require_auth,
        log_level=log_level,
    )
