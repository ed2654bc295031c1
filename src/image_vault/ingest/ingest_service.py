"""Domain service for uploads."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog
from fastapi import UploadFile

from ..media.asset_store import AssetStore
from ..media.naming import new_asset_name
from .ingest_models import StoredAsset
from .validation import UploadValidator, format_size

logger = structlog.get_logger(__name__)


def upload_headers(upload: UploadFile) -> dict[str, list[str]]:
    """Return the multipart part headers, one list of values per header."""
    headers: dict[str, list[str]] = {}
    for key, value in upload.headers.items():
        headers.setdefault(key, []).append(value)
    return headers


@dataclass(slots=True)
class IngestService:
    """Validate an upload, store it under a fresh name and describe it."""

    store: AssetStore
    validator: UploadValidator
    base_url: str
    log: structlog.stdlib.BoundLogger = field(default_factory=lambda: logger)

    def asset_url(self, name: str) -> str:
        return f"{self.base_url}/images/{name}"

    async def upload(self, upload: UploadFile, *, client_ip: str | None = None) -> StoredAsset:
        validated = await self.validator.validate(upload)
        name = new_asset_name(validated.extension)
        size = await self.store.persist_upload(name, upload)

        self.log.info(
            "media.upload.stored",
            client_ip=client_ip,
            name=name,
            original_filename=validated.filename,
            size=format_size(size),
        )
        return StoredAsset(
            name=name,
            url=self.asset_url(name),
            size_bytes=size,
            headers=upload_headers(upload),
        )


__all__ = ["IngestService", "upload_headers"]
