"""Shared helpers for minting tokens and inspecting the images directory."""

from __future__ import annotations

import atexit
import shutil
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import jwt

TEST_SECRET = "test-signing-secret-" + "0123456789abcdef" * 4


def build_token(
    secret: str | None = TEST_SECRET,
    *,
    algorithm: str = "HS256",
    expires_in: int = 3600,
    claims: dict[str, Any] | None = None,
) -> str:
    issued_at = datetime.now(timezone.utc)
    payload = {
        "sub": "backend",
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(seconds=expires_in)).timestamp()),
    }
    payload.update(claims or {})
    return jwt.encode(payload, secret, algorithm=algorithm)


def stored_files(directory: Path) -> set[str]:
    """Every entry in ``directory``, partial uploads included."""
    return {entry.name for entry in directory.iterdir()}


def scratch_images_dir() -> str:
    """Create a temporary images directory that is removed at interpreter exit."""
    path = tempfile.mkdtemp(prefix="image-vault-tests-")
    atexit.register(shutil.rmtree, path, ignore_errors=True)
    return path
