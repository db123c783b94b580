# models/bookmark.py
from .verse import VerseRangeDocument


class Bookmark(VerseRangeDocument):
    meta = {
        'collection': 'bookmarks',
        'indexes': [
            ('user', 'book_id'),
            ('user', 'book_id', 'chapter'),
            ('user', '-created_at')
        ]
    }

    def to_json(self):
        return self.range_json()

    def __repr__(self):
        return f'<Bookmark {self.id} User: {self.user.pk if self.user else None} - {self.verse_reference}>'
