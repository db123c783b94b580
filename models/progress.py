# models/progress.py
from dataclasses import dataclass
from mongoengine import Document, ReferenceField, DictField, ListField, IntField, DateTimeField

from .user import utcnow


@dataclass(frozen=True)
class ChapterKey:
    """Composite (book, chapter) key, stored as the string '{bookId}:{chapter}'."""
    book_id: str
    chapter: int

    def encode(self):
        return f"{self.book_id}:{self.chapter}"

    @classmethod
    def decode(cls, raw):
        # Split on the last colon so book ids may themselves contain one
        book_id, _, chapter = raw.rpartition(':')
        return cls(book_id=book_id, chapter=int(chapter))


class Progress(Document):
    user = ReferenceField('User', db_field='userId', required=True, unique=True)
    chapters_read = DictField(ListField(IntField(min_value=1)), db_field='chaptersRead', default=dict)
    # Bumped on every write; updates are compare-and-set against it
    version = IntField(default=0)
    created_at = DateTimeField(db_field='createdAt', default=utcnow)
    updated_at = DateTimeField(db_field='updatedAt', default=utcnow)

    meta = {
        'collection': 'progress'
    }

    @property
    def total_chapters_read(self):
        # Sums verse sets, so this is a verse count despite the name
        return sum(len(set(verses)) for verses in self.chapters_read.values())

    def add_chapter_read(self, book_id, chapter, verse=None):
        """Add a verse to the chapter's set in memory. Returns True if anything changed."""
        key = ChapterKey(book_id, chapter).encode()
        changed = False
        if key not in self.chapters_read:
            self.chapters_read[key] = []
            changed = True
        if verse is not None:
            verses = self.chapters_read[key]
            if verse not in verses:
                self.chapters_read[key] = sorted(set(verses) | {verse})
                changed = True
        return changed

    def get_chapters_for_book(self, book_id):
        chapters = {}
        for raw_key, verses in self.chapters_read.items():
            key = ChapterKey.decode(raw_key)
            if key.book_id == book_id:
                chapters[key.chapter] = sorted(set(verses))
        return chapters

    def chapters_json(self):
        return {key: sorted(set(verses)) for key, verses in self.chapters_read.items()}

    def to_json(self):
        return {
            "userId": str(self.user.pk) if self.user else None,
            "chaptersRead": self.chapters_json(),
            "totalChaptersRead": self.total_chapters_read
        }
