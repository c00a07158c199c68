"""Business logic for reading the normalized scripture."""

from __future__ import annotations

from ...scripture.models import Commentary, Location, NormalizedChapter, NormalizedScripture
from ...scripture.navigation import chapter_keys, locate, verse_keys
from ..models import (
    ChapterDetail,
    ChapterSummary,
    CommentaryList,
    VerseDetail,
    VerseNavigationInfo,
)


class ScriptureLookupError(LookupError):
    """Raised when a chapter, verse or commentary cannot be found."""


class ScriptureService:
    """Read-only queries over one normalized document."""

    def __init__(self, document: NormalizedScripture) -> None:
        self._document = document

    def list_chapters(self) -> list[ChapterSummary]:
        """Return chapters in numeric order with their verse counts."""
        summaries = []
        for key in chapter_keys(self._document):
            chapter = self._document.chapters[key]
            verses = verse_keys(chapter)
            summaries.append(
                ChapterSummary(
                    number=int(key),
                    title=chapter.title,
                    verse_count=len(verses),
                    first_verse=int(verses[0]) if verses else None,
                )
            )
        return summaries

    def get_chapter(self, chapter: int) -> ChapterDetail:
        """Return one chapter with its verse numbers sorted."""
        found = self._chapter(chapter)
        return ChapterDetail(
            number=chapter,
            title=found.title,
            verse_numbers=[int(key) for key in verse_keys(found)],
        )

    def get_verse(self, chapter: int, verse: int) -> VerseDetail:
        """Return a verse with previous/next locations across chapter boundaries."""
        found = self._chapter(chapter)
        if verse <= 0:
            raise ValueError("verse must be positive")
        entry = found.verses.get(str(verse))
        if entry is None:
            raise ScriptureLookupError(f"verse {chapter}.{verse}")
        navigation = locate(self._document, chapter, verse)
        return VerseDetail(
            chapter_title=found.title,
            verse=entry,
            navigation=VerseNavigationInfo(
                previous=navigation.previous,
                next=navigation.next,
                is_first=navigation.is_first,
                is_last=navigation.is_last,
            ),
        )

    def list_commentaries(self, chapter: int, verse: int) -> CommentaryList:
        """Return every commentary on a verse, in stored order."""
        entry = self.get_verse(chapter, verse).verse
        return CommentaryList(
            location=Location(chapter=chapter, verse=verse),
            commentaries=list(entry.commentaries.values()),
        )

    def get_commentary(self, chapter: int, verse: int, author_id: str) -> Commentary:
        """Return the commentary written by ``author_id``."""
        if not author_id:
            raise ValueError("author_id is required")
        entry = self.get_verse(chapter, verse).verse
        commentary = entry.commentaries.get(author_id)
        if commentary is None:
            raise ScriptureLookupError(f"commentary {chapter}.{verse}.{author_id}")
        return commentary

    def _chapter(self, chapter: int) -> NormalizedChapter:
        if chapter <= 0:
            raise ValueError("chapter must be positive")
        found = self._document.chapters.get(str(chapter))
        if found is None:
            raise ScriptureLookupError(f"chapter {chapter}")
        return found
