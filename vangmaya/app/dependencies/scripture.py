"""FastAPI dependencies for scripture storage, ingestion and reading."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, HTTPException

from ...scripture import (
    ArtifactStore,
    FilesystemArtifactStore,
    IngestionService,
    NormalizedScripture,
    ScriptureNotFoundError,
    load_normalized_scripture,
)
from ..config import settings
from ..services.scripture import ScriptureService


@lru_cache(maxsize=1)
def get_artifact_store() -> ArtifactStore:
    """Return the filesystem store rooted at ``SCRIPTURE_DATA_DIR``."""

    return FilesystemArtifactStore(settings.SCRIPTURE_DATA_DIR, slug=settings.SCRIPTURE_SLUG)


@lru_cache(maxsize=1)
def _ingestion_service_for(store: ArtifactStore) -> IngestionService:
    return IngestionService(store)


def get_ingestion_service(
    store: ArtifactStore = Depends(get_artifact_store),
) -> IngestionService:
    """One service per store so its writer lock is shared across requests."""

    return _ingestion_service_for(store)


async def get_normalized_scripture(
    store: ArtifactStore = Depends(get_artifact_store),
) -> NormalizedScripture:
    """Load the normalized artifact for the current request."""

    try:
        return await load_normalized_scripture(store)
    except ScriptureNotFoundError as exc:
        raise HTTPException(status_code=503, detail="scripture data not available") from exc


def get_scripture_service(
    document: NormalizedScripture = Depends(get_normalized_scripture),
) -> ScriptureService:
    """Dependency provider for ScriptureService."""
    return ScriptureService(document)
