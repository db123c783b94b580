# utils/streak.py
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Optional


class StreakStatus(str, Enum):
    NO_PRIOR_READ = "no_prior_read"
    READ_TODAY = "read_today"
    READ_YESTERDAY = "read_yesterday"
    LAPSED = "lapsed"


@dataclass(frozen=True)
class StreakState:
    current: int = 0
    longest: int = 0
    last_date: Optional[date] = None

    def to_json(self):
        return {
            "current": self.current,
            "longest": self.longest,
            "lastDate": self.last_date.isoformat() if self.last_date else None,
        }


def utc_today() -> date:
    """Streak days are calendar days in UTC."""
    return datetime.now(timezone.utc).date()


def to_calendar_date(value) -> Optional[date]:
    """Strip the time of day from a stored datetime (naive values are taken as UTC)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def classify(state: StreakState, today: date) -> StreakStatus:
    last_date = to_calendar_date(state.last_date)
    if last_date is None:
        return StreakStatus.NO_PRIOR_READ
    if last_date == today:
        return StreakStatus.READ_TODAY
    if last_date == today - timedelta(days=1):
        return StreakStatus.READ_YESTERDAY
    # Anything else, including a last date in the future, counts as lapsed
    return StreakStatus.LAPSED


def advance(state: StreakState, today: Optional[date] = None) -> StreakState:
    """Apply one reading event on `today` and return the new streak state."""
    today = today or utc_today()
    status = classify(state, today)

    if status is StreakStatus.READ_TODAY:
        current, longest = state.current, state.longest
    elif status is StreakStatus.READ_YESTERDAY:
        current = state.current + 1
        longest = max(state.longest, current)
    else:
        current = 1
        longest = max(state.longest, 1)

    return replace(state, current=current, longest=longest, last_date=today)


def effective_current(state: StreakState, today: Optional[date] = None) -> int:
    """
    The streak as it would read right now.

    A lapsed streak is reported as 0 without touching the stored state; the
    stored value is only reset by the next reading event.
    """
    today = today or utc_today()
    if classify(state, today) in (StreakStatus.READ_TODAY, StreakStatus.READ_YESTERDAY):
        return state.current
    return 0
