"""Explicit removal of a single asset."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from .asset_store import AssetStore

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class DeletionResult:
    name: str
    existed: bool


@dataclass(slots=True)
class DeletionService:
    """Remove assets by name; deleting an absent asset is a success."""

    store: AssetStore
    log: structlog.stdlib.BoundLogger = field(default_factory=lambda: logger)

    def delete(self, name: str, *, client_ip: str | None = None) -> DeletionResult:
        existed = self.store.remove(name)
        if existed:
            self.log.info("media.delete.removed", client_ip=client_ip, name=name)
        else:
            self.log.info("media.delete.already_absent", client_ip=client_ip, name=name)
        return DeletionResult(name=name, existed=existed)


__all__ = ["DeletionResult", "DeletionService"]
