"""Upload validation utilities."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from fastapi import UploadFile

from ..config import UploadLimits
from ..errors import PayloadTooLargeError, StorageError, UnsupportedMediaTypeError
from ..media.naming import extract_extension
from .ingest_models import UploadValidationResult

logger = structlog.get_logger(__name__)


def format_size(size_bytes: int) -> str:
    """Render ``size_bytes`` as MB above one megabyte, KB otherwise."""
    size_mb = size_bytes / 1024 / 1024
    if size_mb > 1:
        return f"{size_mb:.2f} MB"
    return f"{size_mb * 1024:.2f} KB"


@dataclass(slots=True)
class UploadValidator:
    """Validate uploads against configured limits."""

    limits: UploadLimits

    async def validate(self, upload: UploadFile) -> UploadValidationResult:
        extension = extract_extension(upload.filename)
        if self.limits.enforce_extensions and extension not in self.limits.allowed_extensions:
            logger.warning(
                "ingest.upload.unsupported_media",
                filename=upload.filename,
                extension=extension,
            )
            raise UnsupportedMediaTypeError(
                "file type must be one of: " + ", ".join(self.limits.allowed_extensions)
            )

        cap = self.limits.max_upload_bytes
        size = 0
        try:
            while True:
                chunk = await upload.read(self.limits.chunk_size_bytes)
                if not chunk:
                    break
                size += len(chunk)
                if size > cap:
                    logger.warning(
                        "ingest.upload.payload_too_large",
                        filename=upload.filename,
                        size_bytes=size,
                        limit_bytes=cap,
                    )
                    raise PayloadTooLargeError(
                        f"file size is greater than {format_size(cap)}"
                    )
        except OSError as exc:
            logger.error("ingest.upload.read_failed", error=str(exc))
            raise StorageError("image upload error") from exc
        finally:
            await upload.seek(0)

        return UploadValidationResult(
            filename=upload.filename or "",
            extension=extension,
        )


__all__ = ["UploadValidator", "format_size"]
