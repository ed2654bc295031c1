from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest

from tests.helpers import TEST_SECRET, build_token, scratch_images_dir

os.environ.setdefault("JWT_SECRET_KEY", TEST_SECRET)
if "IMAGES_DIR" not in os.environ:
    # backs the module-level app built on import of image_vault.main
    os.environ["IMAGES_DIR"] = scratch_images_dir()

from fastapi.testclient import TestClient  # noqa: E402

from image_vault.config import AppConfig, UploadLimits  # noqa: E402
from image_vault.main import create_app  # noqa: E402


@pytest.fixture()
def images_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "images"
    directory.mkdir()
    return directory


@pytest.fixture()
def upload_limits() -> UploadLimits:
    return UploadLimits(
        max_upload_bytes=1024,
        allowed_extensions=("png", "jpg", "jpeg", "gif"),
        chunk_size_bytes=256,
    )


@pytest.fixture()
def app_config(images_dir: Path, upload_limits: UploadLimits) -> AppConfig:
    return AppConfig(
        jwt_secret=TEST_SECRET,
        base_url="http://assets.test",
        images_dir=images_dir,
        upload_limits=upload_limits,
        cors_allowed_origins=("http://backend.test",),
    )


@pytest.fixture()
def client(app_config: AppConfig) -> TestClient:
    return TestClient(create_app(app_config))


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {build_token()}"}


@pytest.fixture()
def seed_images(images_dir: Path) -> Callable[..., None]:
    def _seed(*names: str) -> None:
        for name in names:
            (images_dir / name).write_bytes(f"bytes-of-{name}".encode("utf-8"))

    return _seed
