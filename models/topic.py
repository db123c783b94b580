# models/topic.py
from mongoengine import Document, StringField, ListField, EmbeddedDocumentField, ReferenceField, DateTimeField

from utils.verse_range import contains_verse
from .user import utcnow
from .verse import VerseReference

MAX_TOPIC_VERSES = 1000


class Topic(Document):
    user = ReferenceField('User', db_field='userId', required=True)
    name = StringField(required=True, max_length=100)
    description = StringField(max_length=500)
    verses = ListField(EmbeddedDocumentField(VerseReference), default=list, max_length=MAX_TOPIC_VERSES)
    created_at = DateTimeField(db_field='createdAt', default=utcnow)
    updated_at = DateTimeField(db_field='updatedAt', default=utcnow)

    meta = {
        'collection': 'topics',
        'indexes': [
            {'fields': ['user', 'name'], 'unique': True},
            ('user', '-created_at')
        ]
    }

    def clean(self):
        if self.name:
            self.name = self.name.strip()

    def save(self, *args, **kwargs):
        self.updated_at = utcnow()
        return super(Topic, self).save(*args, **kwargs)

    @property
    def total_verses(self):
        return sum(v.verse_count for v in self.verses)

    @property
    def unique_books(self):
        return len({v.book_id for v in self.verses})

    def has_reference(self, verse_range):
        return any(v.verse_range == verse_range for v in self.verses)

    def add_verses(self, verse_ranges):
        """Append ranges not already present (exact match). Returns how many were added."""
        added = 0
        for verse_range in verse_ranges:
            if not self.has_reference(verse_range):
                self.verses.append(VerseReference.from_range(verse_range))
                added += 1
        return added

    def remove_verses(self, verse_ranges):
        """Drop exact matches of the given ranges. Returns how many were removed."""
        targets = set(verse_ranges)
        kept = [v for v in self.verses if v.verse_range not in targets]
        removed = len(self.verses) - len(kept)
        self.verses = kept
        return removed

    def contains_verse(self, book_id, chapter, verse_start, verse_end=None):
        return any(
            contains_verse(v.verse_range, book_id, chapter, verse_start, verse_end)
            for v in self.verses
        )

    @classmethod
    def find_by_verse(cls, user, book_id, chapter, verse_start, verse_end=None):
        # Narrow in the database, then apply the exact overlap test per entry
        candidates = cls.objects(user=user, verses__book_id=book_id).order_by('-created_at')
        return [t for t in candidates if t.contains_verse(book_id, chapter, verse_start, verse_end)]

    @classmethod
    def get_stats(cls, user):
        topics = list(cls.objects(user=user))
        total_topics = len(topics)
        total_verses = sum(t.total_verses for t in topics)
        book_counts = {}
        for topic in topics:
            for verse in topic.verses:
                book_counts[verse.book_id] = book_counts.get(verse.book_id, 0) + verse.verse_count
        most_used = sorted(book_counts.items(), key=lambda item: item[1], reverse=True)[:5]
        return {
            "totalTopics": total_topics,
            "totalVerses": total_verses,
            "averageVersesPerTopic": round(total_verses / total_topics, 2) if total_topics else 0,
            "mostUsedBooks": [{"bookId": book_id, "count": count} for book_id, count in most_used]
        }

    def to_json(self):
        return {
            "id": str(self.id),
            "userId": str(self.user.pk) if self.user else None,
            "name": self.name,
            "description": self.description,
            "verses": [v.to_json() for v in self.verses],
            "totalVerses": self.total_verses,
            "uniqueBooks": self.unique_books,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None
        }
