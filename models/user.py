from mongoengine import Document, EmbeddedDocument, StringField, EmailField, IntField, BooleanField, DateTimeField, EmbeddedDocumentField
from datetime import datetime, timezone
import bcrypt

from utils.streak import StreakState, to_calendar_date


def utcnow():
    return datetime.now(timezone.utc)


class UserSettings(EmbeddedDocument):
    theme = StringField(choices=['light', 'dark'], default='light')
    font_size = IntField(db_field='fontSize', default=16, min_value=12, max_value=24)

    def to_json(self):
        return {
            "theme": self.theme,
            "fontSize": self.font_size
        }


class StreakRecord(EmbeddedDocument):
    current = IntField(default=0, min_value=0)
    longest = IntField(default=0, min_value=0)
    last_date = DateTimeField(db_field='lastDate', null=True, default=None)

    def to_state(self):
        return StreakState(
            current=self.current or 0,
            longest=self.longest or 0,
            last_date=to_calendar_date(self.last_date)
        )

    @classmethod
    def from_state(cls, state):
        last_date = None
        if state.last_date is not None:
            # Stored as midnight UTC; MongoDB has no date-only type
            last_date = datetime(state.last_date.year, state.last_date.month, state.last_date.day)
        return cls(current=state.current, longest=state.longest, last_date=last_date)


class User(Document):
    name = StringField(required=True, max_length=50)
    email = EmailField(required=True, unique=True)
    password_hash = StringField(required=True)
    is_email_verified = BooleanField(db_field='isEmailVerified', default=False)
    settings = EmbeddedDocumentField(UserSettings, default=UserSettings)
    streak = EmbeddedDocumentField(StreakRecord, default=StreakRecord)
    created_at = DateTimeField(db_field='createdAt', default=utcnow)
    updated_at = DateTimeField(db_field='updatedAt', default=utcnow)

    meta = {
        'collection': 'users'
    }

    def clean(self):
        if self.email:
            self.email = self.email.strip().lower()
        if self.name:
            self.name = self.name.strip()

    def save(self, *args, **kwargs):
        self.updated_at = utcnow()
        return super(User, self).save(*args, **kwargs)

    def set_password(self, password):
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        self.password_hash = hashed.decode('utf-8')

    def check_password(self, password):
        if not self.password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    def get_streak(self):
        if self.streak is None:
            return StreakState()
        return self.streak.to_state()

    def to_json(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "isEmailVerified": self.is_email_verified,
            "settings": self.settings.to_json() if self.settings else None,
            "streak": self.get_streak().to_json(),
            "createdAt": self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<User {self.email} (ID: {self.id})>'
