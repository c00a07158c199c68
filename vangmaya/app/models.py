from typing import Literal

from pydantic import BaseModel, Field

from ..scripture.models import (
    ChapterTitle,
    Commentary,
    Location,
    NormalizedVerse,
)

# ============================================================================
# Reader Models - Chapter and verse responses
# ============================================================================


class ChapterSummary(BaseModel):
    """Chapter listing entry."""

    number: int
    title: ChapterTitle
    verse_count: int
    first_verse: int | None = None


class ChapterDetail(BaseModel):
    """Chapter with its verse numbers in reading order."""

    number: int
    title: ChapterTitle
    verse_numbers: list[int]


class VerseNavigationInfo(BaseModel):
    """Neighbouring verses for previous/next navigation."""

    previous: Location | None = None
    next: Location | None = None
    is_first: bool
    is_last: bool


class VerseDetail(BaseModel):
    """A verse together with its navigation context."""

    chapter_title: ChapterTitle
    verse: NormalizedVerse
    navigation: VerseNavigationInfo


class CommentaryList(BaseModel):
    """Commentaries attached to one verse."""

    location: Location
    commentaries: list[Commentary]


# ============================================================================
# Ingestion Models - Request and response schemas
# ============================================================================


class ValidationErrorItem(BaseModel):
    path: str
    reason: str


class IngestSummaryModel(BaseModel):
    chapters: int = Field(..., ge=0)
    verses: int = Field(..., ge=0)


class IngestResponse(BaseModel):
    """Successful ingestion report."""

    ok: Literal[True] = True
    message: str = "Ingest successful"
    summary: IngestSummaryModel
    raw_path: str
    normalized_path: str
    ephemeral_warning: str | None = None


class IngestFailure(BaseModel):
    """Failed ingestion report (validation, auth or persistence)."""

    ok: Literal[False] = False
    message: str
    errors: list[ValidationErrorItem] | None = None
    details: str | None = None
    partial: bool | None = None
