# This file makes the models directory a Python package 
from .user import User, UserSettings, StreakRecord
from .verse import VerseReference
from .bookmark import Bookmark
from .highlight import Highlight, HIGHLIGHT_COLORS
from .note import Note, NOTE_VISIBILITY
from .topic import Topic, MAX_TOPIC_VERSES
from .progress import Progress, ChapterKey

__all__ = [
    'User',
    'UserSettings',
    'StreakRecord',
    'VerseReference',
    'Bookmark',
    'Highlight',
    'HIGHLIGHT_COLORS',
    'Note',
    'NOTE_VISIBILITY',
    'Topic',
    'MAX_TOPIC_VERSES',
    'Progress',
    'ChapterKey',
]
