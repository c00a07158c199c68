"""Typed scripture documents and validation result containers."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

# ============================================================================
# Validated document (Shastra)
# ============================================================================


class ChapterTitle(BaseModel):
    """Chapter heading in Sanskrit and English, both optional."""

    sa: str | None = None
    en: str | None = None


class VerseText(BaseModel):
    """Verse payload for a single language."""

    text: str
    transliteration: str | None = None


class CommentaryText(BaseModel):
    """Commentary payload for a single language."""

    text: str


class Author(BaseModel):
    """Commentator identity."""

    id: str
    name: str
    tradition: str


class Commentary(BaseModel):
    """Per-verse, per-author annotation."""

    author: Author
    languages: dict[str, CommentaryText]


class Verse(BaseModel):
    """Verse as accepted from the author, keyed by its number."""

    number: int
    languages: dict[str, VerseText]
    commentaries: dict[str, Commentary] | None = None


class Chapter(BaseModel):
    """Chapter as accepted from the author."""

    number: int
    title: ChapterTitle = Field(default_factory=ChapterTitle)
    verses: dict[str, Verse]


class Shastra(BaseModel):
    """Validated scripture document; keys are canonical positive integers."""

    chapters: dict[str, Chapter]


# ============================================================================
# Normalized document
# ============================================================================


class Location(BaseModel):
    """Position of a verse derived from its container keys."""

    chapter: int
    verse: int


class NormalizedVerse(BaseModel):
    """Verse carrying its location stamp and an always-present commentary map."""

    number: int
    location: Location
    languages: dict[str, VerseText]
    commentaries: dict[str, Commentary] = Field(default_factory=dict)


class NormalizedChapter(BaseModel):
    number: int
    title: ChapterTitle = Field(default_factory=ChapterTitle)
    verses: dict[str, NormalizedVerse]


class NormalizedScripture(BaseModel):
    """Canonical persisted artifact read by the presentation layer."""

    chapters: dict[str, NormalizedChapter]

    def chapter_count(self) -> int:
        """Return the number of chapters."""

        return len(self.chapters)

    def verse_count(self) -> int:
        """Return the sum of verse-mapping sizes across all chapters."""

        return sum(len(chapter.verses) for chapter in self.chapters.values())


# ============================================================================
# Validation results
# ============================================================================


@dataclass(frozen=True)
class ValidationIssue:
    """A single structural problem located by its dotted field path."""

    path: str
    reason: str

    def as_dict(self) -> dict[str, str]:
        return {"path": self.path, "reason": self.reason}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a raw payload."""

    ok: bool
    value: Shastra | None = None
    errors: list[ValidationIssue] = field(default_factory=list)

    @classmethod
    def accepted(cls, value: Shastra) -> ValidationResult:
        return cls(ok=True, value=value)

    @classmethod
    def rejected(cls, errors: list[ValidationIssue]) -> ValidationResult:
        return cls(ok=False, errors=list(errors))


@dataclass(frozen=True)
class IngestSummary:
    """Counts reported after a successful ingestion."""

    chapters: int
    verses: int

    @classmethod
    def of(cls, document: NormalizedScripture) -> IngestSummary:
        return cls(chapters=document.chapter_count(), verses=document.verse_count())

    def as_dict(self) -> dict[str, int]:
        return {"chapters": self.chapters, "verses": self.verses}
