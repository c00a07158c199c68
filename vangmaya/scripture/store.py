"""Artifact storage for raw and normalized scripture documents."""

from __future__ import annotations

import asyncio
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

RAW_DIRNAME = "raw-data"
NORMALIZED_DIRNAME = "data"


class ArtifactStore(Protocol):
    """Persistence boundary used by the ingestion workflow."""

    async def write_raw(self, data: bytes, received_at: datetime) -> str:
        """Persist one raw artifact and return its location. Never overwrites."""

    async def write_normalized(self, data: bytes) -> str:
        """Replace the canonical normalized artifact and return its location."""

    async def read_normalized(self) -> bytes:
        """Return the canonical normalized artifact; raise FileNotFoundError if absent."""


def raw_artifact_name(received_at: datetime, slug: str) -> str:
    """Timestamp-qualified raw file name safe on every filesystem."""

    stamp = received_at.astimezone(UTC).isoformat(timespec="milliseconds")
    stamp = stamp.replace("+00:00", "Z").replace(":", "-")
    return f"{stamp}-{slug}-raw.json"


class FilesystemArtifactStore:
    """Store artifacts beneath ``base_dir``.

    Layout::

        <base_dir>/raw-data/<timestamp>-<slug>-raw.json   one per ingestion
        <base_dir>/data/normalized-<slug>.json             replaced each time
    """

    def __init__(self, base_dir: Path | str, slug: str = "bhagavad-gita") -> None:
        self.base_dir = Path(base_dir)
        self.slug = slug
        self.raw_dir = self.base_dir / RAW_DIRNAME
        self.normalized_path = self.base_dir / NORMALIZED_DIRNAME / f"normalized-{slug}.json"

    async def write_raw(self, data: bytes, received_at: datetime) -> str:
        path = self.raw_dir / raw_artifact_name(received_at, self.slug)
        await asyncio.to_thread(self._create_exclusive, path, data)
        return str(path)

    async def write_normalized(self, data: bytes) -> str:
        await asyncio.to_thread(self._replace_atomic, self.normalized_path, data)
        return str(self.normalized_path)

    async def read_normalized(self) -> bytes:
        return await asyncio.to_thread(self.normalized_path.read_bytes)

    @staticmethod
    def _create_exclusive(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # "xb" fails with FileExistsError rather than clobbering an earlier trail.
        with path.open("xb") as handle:
            handle.write(data)

    @staticmethod
    def _replace_atomic(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


__all__ = ["ArtifactStore", "FilesystemArtifactStore", "raw_artifact_name"]
