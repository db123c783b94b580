# models/highlight.py
from mongoengine import StringField
from .verse import VerseRangeDocument

HIGHLIGHT_COLORS = ('yellow', 'green', 'blue', 'pink', 'purple', 'orange', 'red')


class Highlight(VerseRangeDocument):
    color = StringField(required=True, choices=HIGHLIGHT_COLORS, default='yellow')

    meta = {
        'collection': 'highlights',
        'indexes': [
            ('user', 'book_id'),
            ('user', 'book_id', 'chapter'),
            ('user', 'color'),
            ('user', '-created_at')
        ]
    }

    @classmethod
    def get_stats(cls, user):
        """Per-color highlight counts and verse totals, most used color first."""
        stats = {}
        for highlight in cls.objects(user=user).only('color', 'verse_count'):
            entry = stats.setdefault(highlight.color, {"color": highlight.color, "count": 0, "totalVerses": 0})
            entry["count"] += 1
            entry["totalVerses"] += highlight.verse_count
        return sorted(stats.values(), key=lambda s: s["count"], reverse=True)

    def to_json(self):
        data = self.range_json()
        data["color"] = self.color
        return data

    def __repr__(self):
        return f'<Highlight {self.verse_reference} {self.color}>'
