from datetime import date, datetime, timedelta, timezone

from utils.streak import StreakState, StreakStatus, advance, classify, effective_current, to_calendar_date

TODAY = date(2024, 6, 15)
YESTERDAY = TODAY - timedelta(days=1)


class TestClassify:
    def test_states(self):
        assert classify(StreakState(), TODAY) is StreakStatus.NO_PRIOR_READ
        assert classify(StreakState(1, 1, TODAY), TODAY) is StreakStatus.READ_TODAY
        assert classify(StreakState(1, 1, YESTERDAY), TODAY) is StreakStatus.READ_YESTERDAY
        assert classify(StreakState(1, 1, TODAY - timedelta(days=2)), TODAY) is StreakStatus.LAPSED

    def test_future_last_date_is_lapsed(self):
        assert classify(StreakState(3, 3, TODAY + timedelta(days=1)), TODAY) is StreakStatus.LAPSED


class TestAdvance:
    def test_first_read_starts_streak(self):
        assert advance(StreakState(), TODAY) == StreakState(current=1, longest=1, last_date=TODAY)

    def test_read_yesterday_increments(self):
        state = StreakState(current=4, longest=6, last_date=YESTERDAY)
        assert advance(state, TODAY) == StreakState(current=5, longest=6, last_date=TODAY)

    def test_second_read_same_day_is_idempotent(self):
        state = StreakState(current=5, longest=6, last_date=TODAY)
        assert advance(state, TODAY) == state
        assert advance(advance(state, TODAY), TODAY) == state

    def test_lapsed_streak_resets_but_keeps_longest(self):
        state = StreakState(current=7, longest=7, last_date=TODAY - timedelta(days=10))
        assert advance(state, TODAY) == StreakState(current=1, longest=7, last_date=TODAY)

    def test_increment_raises_longest(self):
        state = StreakState(current=6, longest=6, last_date=YESTERDAY)
        assert advance(state, TODAY) == StreakState(current=7, longest=7, last_date=TODAY)

    def test_future_last_date_resets(self):
        state = StreakState(current=3, longest=9, last_date=TODAY + timedelta(days=3))
        assert advance(state, TODAY) == StreakState(current=1, longest=9, last_date=TODAY)

    def test_longest_never_below_current_over_a_month(self):
        state = StreakState()
        day = TODAY
        for offset in [1, 1, 1, 0, 3, 1, 1, 1, 1, 5, 1, 0, 1]:
            day = day + timedelta(days=offset)
            state = advance(state, day)
            assert state.longest >= state.current >= 1
        assert state.longest == 5

    def test_accepts_stored_datetime(self):
        state = StreakState(current=2, longest=2, last_date=datetime(2024, 6, 14, 23, 0))
        assert advance(state, TODAY).current == 3


def test_effective_current_reports_lapsed_as_zero():
    assert effective_current(StreakState(4, 4, YESTERDAY), TODAY) == 4
    assert effective_current(StreakState(4, 4, TODAY), TODAY) == 4
    assert effective_current(StreakState(4, 4, TODAY - timedelta(days=2)), TODAY) == 0
    assert effective_current(StreakState(), TODAY) == 0


def test_to_calendar_date_converts_aware_values_to_utc():
    aware = datetime(2024, 6, 15, 1, 30, tzinfo=timezone(timedelta(hours=5)))
    assert to_calendar_date(aware) == date(2024, 6, 14)
    assert to_calendar_date(None) is None


def test_to_json_formats_date():
    assert StreakState(1, 2, TODAY).to_json() == {'current': 1, 'longest': 2, 'lastDate': '2024-06-15'}
    assert StreakState().to_json() == {'current': 0, 'longest': 0, 'lastDate': None}
