"""Mark-and-sweep reconciliation of stored assets against the backend's view.

The backend reports every image name it still references; anything stored
but not reported is an orphan and gets removed. An empty report is treated
as "nothing known yet" and never wipes the store. Each sweep also drops
partial uploads abandoned longer than ``partial_max_age_seconds``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from ..errors import GarbageCollectionError, StorageError
from .asset_store import AssetStore

logger = structlog.get_logger(__name__)

PARTIAL_MAX_AGE_SECONDS = 60 * 60


def compute_orphans(stored: Iterable[str], active: Iterable[str]) -> set[str]:
    """Return the stored names absent from ``active``."""
    return set(stored) - set(active)


@dataclass(slots=True)
class CollectionReport:
    removed: tuple[str, ...] = ()
    skipped: bool = False
    partials_removed: tuple[str, ...] = ()

    @property
    def removed_count(self) -> int:
        return len(self.removed)


@dataclass(slots=True)
class GarbageCollector:
    """Remove every stored asset that the active set no longer names."""

    store: AssetStore
    partial_max_age_seconds: float = PARTIAL_MAX_AGE_SECONDS
    log: structlog.stdlib.BoundLogger = field(default_factory=lambda: logger)

    def plan(self, active: Iterable[str]) -> list[str]:
        """Return the orphans a collection would remove, without removing them."""
        active_names = set(active)
        if not active_names:
            return []
        return sorted(compute_orphans(self.store.list_names(), active_names))

    def collect(
        self, active: Iterable[str], *, client_ip: str | None = None
    ) -> CollectionReport:
        active_names = set(active)
        if not active_names:
            self.log.info("media.gc.skipped", client_ip=client_ip, reason="no_active_images")
            return CollectionReport(skipped=True)

        orphans = self.plan(active_names)
        self.log.info(
            "media.gc.started",
            client_ip=client_ip,
            active_count=len(active_names),
            orphan_count=len(orphans),
        )

        removed: list[str] = []
        for name in orphans:
            try:
                self.store.remove(name)
            except StorageError as exc:
                # no rollback: orphans removed so far stay removed
                self.log.error(
                    "media.gc.aborted",
                    client_ip=client_ip,
                    failed=name,
                    removed=removed,
                )
                raise GarbageCollectionError(removed=tuple(removed)) from exc
            removed.append(name)

        partials = self.store.prune_partials(self.partial_max_age_seconds)
        self.log.info(
            "media.gc.completed",
            client_ip=client_ip,
            removed=removed,
            partials_removed=partials,
        )
        return CollectionReport(removed=tuple(removed), partials_removed=tuple(partials))


__all__ = [
    "CollectionReport",
    "GarbageCollector",
    "PARTIAL_MAX_AGE_SECONDS",
    "compute_orphans",
]
