"""Filesystem storage for uploaded assets.

The images directory is the only source of truth: an asset exists exactly
when a regular file with its name exists there. Uploads are streamed to a
hidden ``.<name>.partial`` file and renamed into place once complete, so a
half-written file is never served nor listed.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from ..errors import InvalidAssetNameError, StorageError

PARTIAL_SUFFIX = ".partial"
CHUNK_SIZE = 1 * 1024 * 1024  # 1 MiB


@dataclass(slots=True)
class AssetStore:
    """Write, remove and list assets inside ``root``."""

    root: Path
    chunk_size_bytes: int = CHUNK_SIZE
    log: structlog.stdlib.BoundLogger = field(
        default_factory=lambda: structlog.get_logger(__name__)
    )

    @staticmethod
    def validate_name(name: str) -> str:
        """Accept only bare file names that resolve directly inside ``root``."""
        if (
            not name
            or name in {".", ".."}
            or name.startswith(".")
            or any(char in name for char in ("/", "\\", "\x00"))
        ):
            raise InvalidAssetNameError(f"invalid image name: {name!r}")
        return name

    def ensure_structure(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def path_for(self, name: str) -> Path:
        return self.root / self.validate_name(name)

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    async def persist_upload(self, name: str, upload: UploadFile) -> int:
        """Copy upload contents into the store and return the bytes written.

        Disk writes run in the threadpool so a large upload does not hold the
        event loop. The partial file is removed on any failure, cancellation
        included.
        """
        target = self.path_for(name)
        partial = self._partial_path(name)
        written = 0
        try:
            await run_in_threadpool(self.ensure_structure)
            sink = await run_in_threadpool(partial.open, "wb")
            try:
                while True:
                    chunk = await upload.read(self.chunk_size_bytes)
                    if not chunk:
                        break
                    await run_in_threadpool(sink.write, chunk)
                    written += len(chunk)
            finally:
                await run_in_threadpool(sink.close)
            await run_in_threadpool(os.replace, partial, target)
        except OSError as exc:
            partial.unlink(missing_ok=True)
            self.log.error("media.store.write_failed", name=name, error=str(exc))
            raise StorageError("image upload error") from exc
        except BaseException:
            partial.unlink(missing_ok=True)
            self.log.warning("media.store.write_aborted", name=name)
            raise
        finally:
            await upload.seek(0)
        return written

    def remove(self, name: str) -> bool:
        """Delete ``name``; return ``False`` when it was already absent."""
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            self.log.error("media.store.remove_failed", name=name, error=str(exc))
            raise StorageError("image delete error") from exc
        return True

    def list_names(self) -> set[str]:
        """Return the names of all complete assets currently stored."""
        try:
            entries = list(os.scandir(self.root))
        except OSError as exc:
            self.log.error("media.store.list_failed", root=str(self.root), error=str(exc))
            raise StorageError("image listing error") from exc
        return {
            entry.name
            for entry in entries
            if not entry.name.startswith(".") and entry.is_file()
        }

    def prune_partials(self, max_age_seconds: float, *, now: float | None = None) -> list[str]:
        """Delete partial uploads older than ``max_age_seconds``.

        A crash mid-write leaves a partial behind; younger ones may still be
        in flight and are kept.
        """
        cutoff = (time.time() if now is None else now) - max_age_seconds
        pruned: list[str] = []
        try:
            entries = list(os.scandir(self.root))
        except OSError as exc:
            raise StorageError("image listing error") from exc
        for entry in entries:
            if not (entry.name.startswith(".") and entry.name.endswith(PARTIAL_SUFFIX)):
                continue
            try:
                if entry.stat().st_mtime >= cutoff:
                    continue
                os.unlink(entry.path)
            except FileNotFoundError:
                continue
            except OSError as exc:
                self.log.error("media.store.prune_failed", name=entry.name, error=str(exc))
                raise StorageError("image delete error") from exc
            pruned.append(entry.name)
        return sorted(pruned)

    def _partial_path(self, name: str) -> Path:
        return self.root / f".{name}{PARTIAL_SUFFIX}"


__all__ = ["AssetStore", "CHUNK_SIZE", "PARTIAL_SUFFIX"]
