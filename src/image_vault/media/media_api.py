"""HTTP routes for deleting assets and collecting orphans."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ..auth.auth_dependencies import client_ip, require_gc_token, require_token
from .deletion import DeletionService
from .garbage_collector import GarbageCollector

router = APIRouter(tags=["media"])


class GarbageCollectRequest(BaseModel):
    active_images: list[str] = Field(default_factory=list, alias="activeImages")


def get_deletion_service(request: Request) -> DeletionService:
    try:
        return request.app.state.deletion_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - wiring error
        raise RuntimeError("DeletionService is not configured") from exc


def get_garbage_collector(request: Request) -> GarbageCollector:
    try:
        return request.app.state.garbage_collector  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - wiring error
        raise RuntimeError("GarbageCollector is not configured") from exc


@router.delete("/images/{image_name}", dependencies=[Depends(require_token)])
def delete_image(
    image_name: str,
    request: Request,
    service: DeletionService = Depends(get_deletion_service),
) -> dict[str, Any]:
    result = service.delete(image_name, client_ip=client_ip(request))
    message = "image deleted successfully" if result.existed else "image already deleted"
    return {"status": 200, "message": message}


@router.post("/garbage-collect", dependencies=[Depends(require_gc_token)])
def garbage_collect(
    payload: GarbageCollectRequest,
    request: Request,
    collector: GarbageCollector = Depends(get_garbage_collector),
) -> dict[str, Any]:
    report = collector.collect(payload.active_images, client_ip=client_ip(request))
    message = "no active images" if report.skipped else "garbage collect complete"
    return {"status": 200, "message": message, "removed": list(report.removed)}
