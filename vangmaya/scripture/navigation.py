"""Numeric ordering and previous/next lookups over a normalized document.

Chapter and verse numbers may have gaps, so neighbours are found by position in
the sorted key list rather than by adding or subtracting one.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import Location, NormalizedChapter, NormalizedScripture


def chapter_keys(document: NormalizedScripture) -> list[str]:
    return sorted(document.chapters, key=int)


def verse_keys(chapter: NormalizedChapter) -> list[str]:
    return sorted(chapter.verses, key=int)


@dataclass(frozen=True)
class VerseNavigation:
    """Neighbours of one verse in reading order."""

    previous: Location | None
    next: Location | None

    @property
    def is_first(self) -> bool:
        return self.previous is None

    @property
    def is_last(self) -> bool:
        return self.next is None


def locate(document: NormalizedScripture, chapter: int, verse: int) -> VerseNavigation:
    """Return the verses before and after ``chapter``:``verse``.

    Crossing a chapter boundary lands on the last verse of the preceding chapter
    or the first verse of the following one; empty chapters are skipped.
    Raises ``KeyError`` when the verse does not exist.
    """

    chapters = chapter_keys(document)
    chapter_key, verse_key = str(chapter), str(verse)
    current = document.chapters[chapter_key]
    if verse_key not in current.verses:
        raise KeyError(f"{chapter_key}.{verse_key}")
    verses = verse_keys(current)
    position = verses.index(verse_key)
    chapter_position = chapters.index(chapter_key)

    previous: Location | None = None
    if position > 0:
        previous = Location(chapter=chapter, verse=int(verses[position - 1]))
    else:
        for key in reversed(chapters[:chapter_position]):
            earlier = verse_keys(document.chapters[key])
            if earlier:
                previous = Location(chapter=int(key), verse=int(earlier[-1]))
                break

    following: Location | None = None
    if position < len(verses) - 1:
        following = Location(chapter=chapter, verse=int(verses[position + 1]))
    else:
        for key in chapters[chapter_position + 1 :]:
            later = verse_keys(document.chapters[key])
            if later:
                following = Location(chapter=int(key), verse=int(later[0]))
                break

    return VerseNavigation(previous=previous, next=following)
