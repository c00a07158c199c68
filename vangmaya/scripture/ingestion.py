"""Ingestion workflow: validate, normalize, then persist both artifacts."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from .models import IngestSummary, ValidationIssue
from .normalizer import normalize, serialize_document
from .store import ArtifactStore
from .validator import validate

logger = logging.getLogger(__name__)


class IngestionState(str, Enum):
    RECEIVED = "received"
    VALIDATING = "validating"
    REJECTED = "rejected"
    NORMALIZING = "normalizing"
    PERSISTED = "persisted"


class PersistenceError(RuntimeError):
    """The artifact store failed before anything was persisted."""

    partial = False

    def __init__(self, message: str, *, raw_location: str | None = None) -> None:
        super().__init__(message)
        self.raw_location = raw_location


class PartialPersistenceError(PersistenceError):
    """The raw artifact was written but the normalized artifact was not."""

    partial = True


@dataclass(frozen=True)
class IngestionOutcome:
    """Terminal result of one ingestion call."""

    state: IngestionState
    trail: tuple[IngestionState, ...]
    errors: list[ValidationIssue] = field(default_factory=list)
    summary: IngestSummary | None = None
    raw_location: str | None = None
    normalized_location: str | None = None

    @property
    def ok(self) -> bool:
        return self.state is IngestionState.PERSISTED


def _utcnow() -> datetime:
    return datetime.now(UTC)


class IngestionService:
    """Run one ingestion at a time against an :class:`ArtifactStore`.

    Rejected payloads never reach the store. Accepted payloads are written raw
    first, then normalized; the two writes are sequential and not rolled back,
    so a failure between them leaves a raw trail without a refreshed normalized
    artifact and is reported as :class:`PartialPersistenceError`.
    """

    def __init__(
        self,
        store: ArtifactStore,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or _utcnow
        # Serializes writers within this process only.
        self._persist_lock = asyncio.Lock()

    @property
    def store(self) -> ArtifactStore:
        return self._store

    async def ingest(self, raw: Any, received_at: datetime | None = None) -> IngestionOutcome:
        """Ingest one payload; ``received_at`` defaults to the service clock."""

        received_at = received_at or self._clock()
        trail = [IngestionState.RECEIVED, IngestionState.VALIDATING]

        result = validate(raw)
        if not result.ok or result.value is None:
            trail.append(IngestionState.REJECTED)
            logger.info(
                "scripture_ingest_rejected",
                extra={"error_count": len(result.errors)},
            )
            return IngestionOutcome(
                state=IngestionState.REJECTED,
                trail=tuple(trail),
                errors=result.errors,
            )

        trail.append(IngestionState.NORMALIZING)
        normalized = normalize(result.value)
        summary = IngestSummary.of(normalized)
        raw_bytes = serialize_document(result.value)
        normalized_bytes = serialize_document(normalized)

        async with self._persist_lock:
            try:
                raw_location = await self._store.write_raw(raw_bytes, received_at)
            except Exception as exc:  # noqa: BLE001
                logger.error(
                    "scripture_ingest_persistence_failed",
                    extra={"stage": "raw", "error": str(exc)},
                )
                raise PersistenceError(str(exc)) from exc

            try:
                normalized_location = await self._store.write_normalized(normalized_bytes)
            except Exception as exc:  # noqa: BLE001
                logger.error(
                    "scripture_ingest_partial_persistence",
                    extra={"stage": "normalized", "raw_location": raw_location, "error": str(exc)},
                )
                raise PartialPersistenceError(str(exc), raw_location=raw_location) from exc

        trail.append(IngestionState.PERSISTED)
        logger.info(
            "scripture_ingest_persisted",
            extra={
                "chapters": summary.chapters,
                "verses": summary.verses,
                "raw_location": raw_location,
                "normalized_location": normalized_location,
            },
        )
        return IngestionOutcome(
            state=IngestionState.PERSISTED,
            trail=tuple(trail),
            summary=summary,
            raw_location=raw_location,
            normalized_location=normalized_location,
        )
