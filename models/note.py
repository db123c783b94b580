from mongoengine import StringField
from .verse import VerseRangeDocument

NOTE_VISIBILITY = ('private', 'public')


class Note(VerseRangeDocument):
    content = StringField(required=True, max_length=10000)
    visibility = StringField(choices=NOTE_VISIBILITY, default='private')

    meta = {
        'collection': 'notes',
        'indexes': [
            ('user', 'book_id'),
            ('user', 'book_id', 'chapter'),
            ('user', '-created_at')
        ]
    }

    def clean(self):
        super(Note, self).clean()
        if self.content:
            self.content = self.content.strip()

    @classmethod
    def search_by_content(cls, user, term):
        """Case-insensitive substring search over the user's notes, newest first."""
        return cls.objects(user=user, content__icontains=term).order_by('-created_at')

    def to_json(self):
        data = self.range_json()
        data.update({
            "content": self.content,
            "visibility": self.visibility
        })
        return data
