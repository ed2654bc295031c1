"""Data structures for the upload pipeline."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class UploadValidationResult:
    """Outcome of validating an uploaded file."""

    filename: str
    extension: str


@dataclass(slots=True)
class StoredAsset:
    """Metadata returned to the client once an upload is persisted."""

    name: str
    url: str
    size_bytes: int
    headers: dict[str, list[str]] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {
            "imageName": self.name,
            "imageUrl": self.url,
            "header": self.headers,
            "size": self.size_bytes,
        }
