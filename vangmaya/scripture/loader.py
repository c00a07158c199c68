"""Read access to the persisted normalized artifact."""

from __future__ import annotations

from pydantic import ValidationError

from .models import NormalizedScripture
from .store import ArtifactStore


class ScriptureNotFoundError(LookupError):
    """Raised when no usable normalized artifact has been persisted yet."""


async def load_normalized_scripture(store: ArtifactStore) -> NormalizedScripture:
    """Load and parse the canonical normalized document from ``store``."""

    try:
        data = await store.read_normalized()
    except FileNotFoundError as exc:
        raise ScriptureNotFoundError("normalized scripture has not been ingested") from exc
    except OSError as exc:
        raise ScriptureNotFoundError(f"normalized scripture is unreadable: {exc}") from exc
    try:
        return NormalizedScripture.model_validate_json(data)
    except ValidationError as exc:
        raise ScriptureNotFoundError(f"normalized scripture is unreadable: {exc}") from exc
