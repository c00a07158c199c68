"""Transformation of validated documents into the canonical persisted form."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from .models import (
    Chapter,
    Commentary,
    Location,
    NormalizedChapter,
    NormalizedScripture,
    NormalizedVerse,
    Shastra,
    Verse,
)
from .schema import is_canonical_number, is_positive_int


class NormalizationError(RuntimeError):
    """A document reached the normalizer while breaking a validated invariant."""


def canonical_key(key: Any) -> str:
    """Return the decimal string form of a positive-integer key."""

    if is_positive_int(key):
        return str(key)
    if is_canonical_number(key):
        return key
    raise NormalizationError(f"key {key!r} is not a positive integer")


def _numbered(entries: dict[Any, Any], container: str) -> list[tuple[int, Any]]:
    numbered: dict[int, Any] = {}
    for key, value in entries.items():
        number = int(canonical_key(key))
        if number in numbered:
            raise NormalizationError(f"{container} key {number} occurs twice")
        numbered[number] = value
    return sorted(numbered.items())


def _normalize_commentaries(
    commentaries: dict[str, Commentary] | None,
) -> dict[str, Commentary]:
    keyed: dict[str, Commentary] = {}
    for commentary in (commentaries or {}).values():
        author_id = commentary.author.id
        if author_id in keyed:
            raise NormalizationError(f"commentary author {author_id!r} occurs twice")
        keyed[author_id] = commentary.model_copy(deep=True)
    return keyed


def _normalize_verse(
    chapter_number: int, verse_number: int, verse: Verse | NormalizedVerse
) -> NormalizedVerse:
    return NormalizedVerse(
        number=verse_number,
        location=Location(chapter=chapter_number, verse=verse_number),
        languages={code: text.model_copy() for code, text in verse.languages.items()},
        commentaries=_normalize_commentaries(verse.commentaries),
    )


def _normalize_chapter(
    chapter_number: int, chapter: Chapter | NormalizedChapter
) -> NormalizedChapter:
    verses = {
        str(verse_number): _normalize_verse(chapter_number, verse_number, verse)
        for verse_number, verse in _numbered(chapter.verses, f"chapter {chapter_number} verse")
    }
    return NormalizedChapter(
        number=chapter_number,
        title=chapter.title.model_copy(),
        verses=verses,
    )


def normalize(document: Shastra | NormalizedScripture) -> NormalizedScripture:
    """Produce the canonical form of a validated document.

    Chapter and verse numbers, and every location stamp, are taken from the
    mapping keys rather than from the ``number`` fields inside the values.
    Chapters and verses come out in ascending numeric order, so equal inputs
    serialize to identical bytes. Normalizing a normalized document returns an
    equal document.
    """

    chapters = {
        str(chapter_number): _normalize_chapter(chapter_number, chapter)
        for chapter_number, chapter in _numbered(document.chapters, "chapter")
    }
    return NormalizedScripture(chapters=chapters)


def serialize_document(document: BaseModel) -> bytes:
    """Render a document as indented UTF-8 JSON; absent optional fields are omitted."""

    payload = document.model_dump(mode="json", exclude_none=True)
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")
