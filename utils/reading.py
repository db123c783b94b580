# utils/reading.py
"""
Reading progress and streak bookkeeping.

Logging a reading event touches two documents: the user's Progress document
(which verses of which chapters have been read) and the streak embedded in the
User document. Progress writes are compare-and-set on Progress.version so two
near-simultaneous submissions from the same user cannot drop each other's
verses; the streak is written with a single $set (last write wins, and both
writers compute the same value for the same day anyway).
"""
import logging
from mongoengine.errors import NotUniqueError

from models.progress import Progress
from models.user import User, StreakRecord, utcnow
from .errors import NotFoundError, ConcurrentUpdateError
from .streak import StreakState, advance

logger = logging.getLogger(__name__)

DEFAULT_WRITE_ATTEMPTS = 3


def _user_id(user):
    return getattr(user, 'pk', user)


def _find_progress(user):
    return Progress.objects(user=user).first()


def record_read(user, book_id, chapter, verse=None, attempts=DEFAULT_WRITE_ATTEMPTS):
    """
    Idempotently mark `verse` of `book_id` `chapter` as read for the user.

    Creates the Progress document and the chapter entry on first use. Without
    a verse only the chapter entry is created.
    """
    for attempt in range(1, attempts + 1):
        progress = _find_progress(user)

        if progress is None:
            progress = Progress(user=user)
            progress.add_chapter_read(book_id, chapter, verse)
            try:
                progress.save(force_insert=True)
                return progress
            except NotUniqueError:
                logger.info(f"Progress for user {_user_id(user)} created concurrently, retrying (attempt {attempt})")
                continue

        if not progress.add_chapter_read(book_id, chapter, verse):
            return progress

        updated = Progress.objects(id=progress.id, version=progress.version).update_one(
            set__chapters_read=progress.chapters_read,
            set__updated_at=utcnow(),
            inc__version=1
        )
        if updated:
            progress.version += 1
            return progress

        logger.warning(f"Lost progress update race for user {_user_id(user)} (attempt {attempt}/{attempts})")

    raise ConcurrentUpdateError("Reading progress was updated concurrently, please retry")


def get_chapters_for_book(user, book_id):
    progress = _find_progress(user)
    if progress is None:
        return {}
    return progress.get_chapters_for_book(book_id)


def get_total_read(user):
    progress = _find_progress(user)
    if progress is None:
        return 0
    return progress.total_chapters_read


def get_progress(user):
    progress = _find_progress(user)
    if progress is None:
        return {
            "userId": str(_user_id(user)),
            "chaptersRead": {},
            "totalChaptersRead": 0
        }
    return progress.to_json()


def get_book_progress(user, book_id):
    chapters = get_chapters_for_book(user, book_id)
    return {
        "bookId": book_id,
        "chaptersRead": {str(chapter): verses for chapter, verses in sorted(chapters.items())},
        "totalChaptersRead": sum(len(verses) for verses in chapters.values())
    }


def get_streak(user):
    """Stored streak state, or the zero state for an unknown user."""
    if not isinstance(user, User):
        user = User.objects(id=user).only('streak').first()
    if user is None:
        return StreakState()
    return user.get_streak()


def update_streak(user, today=None):
    # Re-read so a stale in-memory user document cannot roll the streak back
    state = advance(get_streak(_user_id(user)), today)
    User.objects(id=_user_id(user)).update_one(set__streak=StreakRecord.from_state(state))
    if isinstance(user, User):
        user.streak = StreakRecord.from_state(state)
    return state


def log_reading(user, book_id, chapter, verse=None, today=None, attempts=DEFAULT_WRITE_ATTEMPTS):
    """Record a reading event and advance the streak. Returns {progress, streak}."""
    if not isinstance(user, User):
        found = User.objects(id=user).first()
        if found is None:
            raise NotFoundError("User not found")
        user = found

    progress = record_read(user, book_id, chapter, verse, attempts=attempts)
    streak = update_streak(user, today)
    logger.info(f"Logged reading {book_id} {chapter} for user {user.pk}; streak {streak.current}/{streak.longest}")

    return {
        "progress": progress.to_json(),
        "streak": streak.to_json()
    }
