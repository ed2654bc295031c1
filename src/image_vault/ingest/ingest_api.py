"""HTTP routes for uploads."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, Request, UploadFile, status

from ..auth.auth_dependencies import client_ip, require_token
from .ingest_service import IngestService

router = APIRouter(tags=["ingest"])


def get_ingest_service(request: Request) -> IngestService:
    """Fetch ingest service from application state."""
    try:
        return request.app.state.ingest_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - wiring error
        raise RuntimeError("IngestService is not configured") from exc


@router.post(
    "/upload",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_token)],
)
async def upload_image(
    request: Request,
    image: UploadFile = File(...),
    service: IngestService = Depends(get_ingest_service),
) -> dict[str, Any]:
    """Store the ``image`` form field and return its public URL."""
    stored = await service.upload(image, client_ip=client_ip(request))
    return {"data": stored.to_payload()}
