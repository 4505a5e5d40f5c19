"""Tests for workout streaks.

Tests cover:
- Current streak counts only when the newest day is today or yesterday
- Longest streak across gaps
- Invalid and unmarked dates are ignored
- Marking a day returns a new record
- The 14-day calendar frame
"""

from datetime import date, timedelta

from trainify.streaks import CALENDAR_DAYS, calculate_streaks, completed_dates, last_14_days, mark_workout_done


TODAY = date(2025, 3, 15)


def record_for(*offsets: int) -> dict:
    return {(TODAY - timedelta(days=offset)).isoformat(): True for offset in offsets}


def test_empty_record():
    assert calculate_streaks({}, TODAY) == (0, 0)


def test_streak_ending_today():
    stats = calculate_streaks(record_for(0, 1, 2), TODAY)
    assert stats.current == 3
    assert stats.longest == 3


def test_streak_ending_yesterday_still_counts():
    assert calculate_streaks(record_for(1, 2), TODAY).current == 2


def test_streak_is_broken_after_a_missed_day():
    stats = calculate_streaks(record_for(2, 3, 4), TODAY)
    assert stats.current == 0
    assert stats.longest == 3


def test_longest_run_across_gaps():
    stats = calculate_streaks(record_for(0, 1, 5, 6, 7, 8), TODAY)
    assert stats.current == 2
    assert stats.longest == 4


def test_invalid_and_unmarked_entries_are_ignored():
    record = {**record_for(0), "not-a-date": True, (TODAY - timedelta(days=1)).isoformat(): False}
    assert completed_dates(record) == [TODAY]
    assert calculate_streaks(record, TODAY) == (1, 1)


def test_mark_workout_done_returns_copy():
    record = record_for(1)
    updated = mark_workout_done(record, TODAY)

    assert updated[TODAY.isoformat()] is True
    assert TODAY.isoformat() not in record
    assert calculate_streaks(updated, TODAY).current == 2


def test_calendar_frame():
    frame = last_14_days(record_for(0, 3), TODAY)

    assert len(frame) == CALENDAR_DAYS
    assert list(frame.columns) == ["date", "day_name", "day_num", "is_today", "has_streak"]
    assert frame.iloc[0]["date"] == "2025-03-02"
    assert frame.iloc[-1]["date"] == "2025-03-15"
    assert frame.iloc[-1]["is_today"]
    assert frame.iloc[-1]["day_name"] == "Sat"
    assert frame["has_streak"].sum() == 2
    assert frame["is_today"].sum() == 1
