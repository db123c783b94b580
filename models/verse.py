# models/verse.py
from mongoengine import Document, EmbeddedDocument, StringField, IntField, DateTimeField, ReferenceField

from utils.verse_range import VerseRange, find_overlapping, find_duplicate
from .user import utcnow


class VerseReference(EmbeddedDocument):
    """A verse range stored inside another document (topic entries)."""
    book_id = StringField(db_field='bookId', required=True)
    chapter = IntField(required=True, min_value=1)
    verse_start = IntField(db_field='verseStart', required=True, min_value=1)
    verse_count = IntField(db_field='verseCount', required=True, min_value=1, default=1)

    @property
    def verse_range(self):
        return VerseRange.from_entity(self)

    @classmethod
    def from_range(cls, verse_range):
        return cls(
            book_id=verse_range.book_id,
            chapter=verse_range.chapter,
            verse_start=verse_range.verse_start,
            verse_count=verse_range.verse_count
        )

    def to_json(self):
        return self.verse_range.to_json()


class VerseRangeDocument(Document):
    """Base for per-user documents anchored to a verse range (bookmarks, notes, highlights)."""
    user = ReferenceField('User', db_field='userId', required=True)
    book_id = StringField(db_field='bookId', required=True)
    chapter = IntField(required=True, min_value=1)
    verse_start = IntField(db_field='verseStart', required=True, min_value=1)
    verse_count = IntField(db_field='verseCount', required=True, min_value=1, default=1)
    created_at = DateTimeField(db_field='createdAt', default=utcnow)
    updated_at = DateTimeField(db_field='updatedAt', default=utcnow)

    meta = {
        'abstract': True
    }

    def clean(self):
        if self.book_id:
            self.book_id = self.book_id.strip()

    def save(self, *args, **kwargs):
        self.updated_at = utcnow()
        return super(VerseRangeDocument, self).save(*args, **kwargs)

    @property
    def verse_range(self):
        return VerseRange.from_entity(self)

    @property
    def verse_end(self):
        return self.verse_range.verse_end

    @property
    def verse_reference(self):
        return self.verse_range.reference

    def apply_range(self, verse_range):
        self.book_id = verse_range.book_id
        self.chapter = verse_range.chapter
        self.verse_start = verse_range.verse_start
        self.verse_count = verse_range.verse_count

    @classmethod
    def for_chapter(cls, user, book_id, chapter):
        return cls.objects(user=user, book_id=book_id, chapter=chapter)

    @classmethod
    def find_by_verse_range(cls, user, book_id, chapter, verse_start, verse_end=None):
        """Entries of this user whose range overlaps the queried verses, newest first."""
        query = VerseRange.spanning(book_id, chapter, verse_start, verse_end)
        candidates = cls.for_chapter(user, book_id, chapter).order_by('-created_at')
        return find_overlapping(candidates, query)

    @classmethod
    def find_overlapping_range(cls, user, verse_range, exclude_id=None):
        candidates = [c for c in cls.for_chapter(user, verse_range.book_id, verse_range.chapter).order_by('-created_at')
                      if exclude_id is None or c.id != exclude_id]
        return find_overlapping(candidates, verse_range)

    @classmethod
    def find_same_range(cls, user, verse_range, exclude_id=None):
        candidates = [c for c in cls.for_chapter(user, verse_range.book_id, verse_range.chapter)
                      if exclude_id is None or c.id != exclude_id]
        return find_duplicate(candidates, verse_range)

    def range_json(self):
        return {
            "id": str(self.id),
            "userId": str(self.user.pk) if self.user else None,
            **self.verse_range.to_json(),
            "verseReference": self.verse_reference,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None
        }
