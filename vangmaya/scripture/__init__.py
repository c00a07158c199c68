"""Scripture document validation, normalization and ingestion."""

from .decoding import RawMapping, decode_payload, load_payload_file
from .ingestion import (
    IngestionOutcome,
    IngestionService,
    IngestionState,
    PartialPersistenceError,
    PersistenceError,
)
from .loader import ScriptureNotFoundError, load_normalized_scripture
from .models import (
    IngestSummary,
    NormalizedScripture,
    Shastra,
    ValidationIssue,
    ValidationResult,
)
from .navigation import VerseNavigation, chapter_keys, locate, verse_keys
from .normalizer import NormalizationError, normalize, serialize_document
from .store import ArtifactStore, FilesystemArtifactStore
from .validator import validate

__all__ = [
    "ArtifactStore",
    "FilesystemArtifactStore",
    "IngestSummary",
    "IngestionOutcome",
    "IngestionService",
    "IngestionState",
    "NormalizationError",
    "NormalizedScripture",
    "PartialPersistenceError",
    "PersistenceError",
    "RawMapping",
    "ScriptureNotFoundError",
    "Shastra",
    "ValidationIssue",
    "ValidationResult",
    "VerseNavigation",
    "chapter_keys",
    "decode_payload",
    "load_normalized_scripture",
    "load_payload_file",
    "locate",
    "normalize",
    "serialize_document",
    "validate",
    "verse_keys",
]
