from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from image_vault.config import AppConfig
from image_vault.main import create_app
from tests.helpers import stored_files


@pytest.mark.integration
def test_delete_removes_image(client: TestClient, auth_headers, seed_images, images_dir: Path):
    seed_images("a.png", "b.png")

    response = client.delete("/images/a.png", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": 200, "message": "image deleted successfully"}
    assert stored_files(images_dir) == {"b.png"}


@pytest.mark.integration
def test_delete_twice_is_idempotent(client: TestClient, auth_headers, seed_images):
    seed_images("a.png")

    first = client.delete("/images/a.png", headers=auth_headers)
    second = client.delete("/images/a.png", headers=auth_headers)

    assert first.status_code == status.HTTP_200_OK
    assert second.status_code == status.HTTP_200_OK
    assert second.json()["message"] == "image already deleted"


@pytest.mark.integration
@pytest.mark.parametrize("name", ["..%5Csecret.png", ".hidden.png"])
def test_delete_rejects_non_bare_names(
    client: TestClient, auth_headers, tmp_path: Path, images_dir: Path, name: str
):
    (images_dir / ".hidden.png").write_bytes(b"hidden")

    response = client.delete(f"/images/{name}", headers=auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert (images_dir / ".hidden.png").exists()


@pytest.mark.integration
def test_garbage_collect_keeps_only_active(client: TestClient, auth_headers, seed_images, images_dir: Path):
    seed_images("a.png", "b.png")

    response = client.post(
        "/garbage-collect", json={"activeImages": ["a.png"]}, headers=auth_headers
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "status": 200,
        "message": "garbage collect complete",
        "removed": ["b.png"],
    }
    assert stored_files(images_dir) == {"a.png"}


@pytest.mark.integration
@pytest.mark.parametrize("body", [{"activeImages": []}, {}])
def test_garbage_collect_with_empty_active_set_is_noop(
    client: TestClient, auth_headers, seed_images, images_dir: Path, body
):
    seed_images("a.png", "b.png")

    response = client.post("/garbage-collect", json=body, headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "no active images"
    assert stored_files(images_dir) == {"a.png", "b.png"}


@pytest.mark.integration
def test_garbage_collect_with_all_active_changes_nothing(
    client: TestClient, auth_headers, seed_images, images_dir: Path
):
    seed_images("a.png", "b.png", "c.jpg")

    response = client.post(
        "/garbage-collect",
        json={"activeImages": ["a.png", "b.png", "c.jpg"]},
        headers=auth_headers,
    )

    assert response.json()["removed"] == []
    assert stored_files(images_dir) == {"a.png", "b.png", "c.jpg"}


@pytest.mark.integration
def test_garbage_collect_removes_exactly_one_orphan(
    client: TestClient, auth_headers, seed_images, images_dir: Path
):
    seed_images("a.png", "b.png", "c.jpg")

    response = client.post(
        "/garbage-collect",
        json={"activeImages": ["a.png", "c.jpg"]},
        headers=auth_headers,
    )

    assert response.json()["removed"] == ["b.png"]
    assert stored_files(images_dir) == {"a.png", "c.jpg"}


@pytest.mark.integration
def test_garbage_collect_rejects_malformed_body(client: TestClient, auth_headers, seed_images, images_dir: Path):
    seed_images("a.png")

    response = client.post(
        "/garbage-collect",
        content=b"not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert stored_files(images_dir) == {"a.png"}


@pytest.mark.integration
def test_garbage_collect_without_auth_when_disabled(app_config: AppConfig, seed_images, images_dir: Path):
    app_config.gc_require_auth = False
    client = TestClient(create_app(app_config))
    seed_images("a.png", "b.png")

    response = client.post("/garbage-collect", json={"activeImages": ["b.png"]})

    assert response.status_code == status.HTTP_200_OK
    assert stored_files(images_dir) == {"b.png"}


@pytest.mark.integration
def test_healthz_is_public(client: TestClient):
    response = client.get("/healthz")

    assert response.status_code == status.HTTP_200_OK
    assert response.text == "OK"


@pytest.mark.integration
def test_cors_preflight_allows_configured_origin(client: TestClient):
    response = client.options(
        "/upload",
        headers={
            "Origin": "http://backend.test",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["access-control-allow-origin"] == "http://backend.test"
