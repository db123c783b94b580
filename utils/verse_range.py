# utils/verse_range.py
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional


@dataclass(frozen=True)
class VerseRange:
    """A contiguous, inclusive span of verses within one chapter of one book."""
    book_id: str
    chapter: int
    verse_start: int
    verse_count: int = 1

    @property
    def verse_end(self) -> int:
        return self.verse_start + self.verse_count - 1

    @property
    def reference(self) -> str:
        """Human readable reference, e.g. 'Genesis 1:1-5'."""
        ref = f"{self.book_id} {self.chapter}:{self.verse_start}"
        if self.verse_count > 1:
            ref += f"-{self.verse_end}"
        return ref

    @classmethod
    def from_entity(cls, entity: Any) -> "VerseRange":
        """Build a range from any object exposing the four range attributes."""
        return cls(
            book_id=entity.book_id,
            chapter=entity.chapter,
            verse_start=entity.verse_start,
            verse_count=entity.verse_count,
        )

    @classmethod
    def spanning(cls, book_id: str, chapter: int, verse_start: int, verse_end: Optional[int] = None) -> "VerseRange":
        end = verse_end or verse_start
        return cls(book_id=book_id, chapter=chapter, verse_start=verse_start, verse_count=end - verse_start + 1)

    def to_json(self):
        return {
            "bookId": self.book_id,
            "chapter": self.chapter,
            "verseStart": self.verse_start,
            "verseCount": self.verse_count,
            "verseEnd": self.verse_end,
        }


def overlaps(a: VerseRange, b: VerseRange) -> bool:
    """True when both ranges share at least one verse of the same book and chapter."""
    if a.book_id != b.book_id or a.chapter != b.chapter:
        return False

    a_end = a.verse_start + a.verse_count - 1
    b_end = b.verse_start + b.verse_count - 1
    return not (a_end < b.verse_start or a.verse_start > b_end)


def contains_verse(verse_range: VerseRange, book_id: str, chapter: int, verse_start: int, verse_end: Optional[int] = None) -> bool:
    """Check whether a stored range covers any verse of the queried verse or sub-range."""
    return overlaps(verse_range, VerseRange.spanning(book_id, chapter, verse_start, verse_end))


def _entity_range(candidate: Any) -> VerseRange:
    if isinstance(candidate, VerseRange):
        return candidate
    verse_range = getattr(candidate, 'verse_range', None)
    if isinstance(verse_range, VerseRange):
        return verse_range
    return VerseRange.from_entity(candidate)


def _created_at(candidate: Any):
    return getattr(candidate, 'created_at', None)


def find_overlapping(
    candidates: Iterable[Any],
    query: VerseRange,
    newest_first: bool = True,
    sort_key: Optional[Callable[[Any], Any]] = None,
) -> List[Any]:
    """
    Filter candidates down to those whose range overlaps the query.

    Results are ordered by creation time, newest first, unless newest_first is
    False, in which case the input order is kept. Python's sort is stable, so
    candidates with equal timestamps keep their original relative order.
    Candidates without a timestamp sort after those that have one.
    """
    matches = [c for c in candidates if overlaps(_entity_range(c), query)]
    if not newest_first:
        return matches

    key = sort_key or _created_at
    stamped = [c for c in matches if key(c) is not None]
    unstamped = [c for c in matches if key(c) is None]
    stamped.sort(key=key, reverse=True)
    # reverse=True keeps ties in input order as well
    return stamped + unstamped


def find_duplicate(candidates: Iterable[Any], query: VerseRange) -> Optional[Any]:
    """Return the first candidate with exactly the same range identity, if any."""
    for candidate in candidates:
        if _entity_range(candidate) == query:
            return candidate
    return None
