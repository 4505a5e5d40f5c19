# trainify/streaks.py

"""
Workout streak tracking.

A streak record maps ISO dates ("2025-01-31") to True for every day the user
marked a workout as done. Records only ever grow: days are set, never removed.
"""

from datetime import date, timedelta
from typing import Dict, List, NamedTuple, Optional

import pandas as pd
from dateutil import parser as date_parser
from loguru import logger


StreakRecord = Dict[str, bool]

CALENDAR_DAYS = 14


class StreakStats(NamedTuple):
    current: int
    longest: int


def completed_dates(record: StreakRecord) -> List[date]:
    """Returns the marked dates, newest first. Unparseable keys are skipped."""
    dates = set()
    for key, done in record.items():
        if not done:
            continue
        try:
            dates.add(date_parser.isoparse(key).date())
        except (ValueError, OverflowError):
            logger.warning(f"Ignoring invalid streak date: {key!r}")
    return sorted(dates, reverse=True)


def calculate_streaks(record: StreakRecord, today: Optional[date] = None) -> StreakStats:
    """
    Computes the current and longest streaks.

    The current streak only counts when the newest marked day is today or
    yesterday; it is the run of consecutive days ending there. The longest
    streak is the longest run of consecutive days anywhere in the record.
    """
    dates = completed_dates(record)
    if not dates:
        return StreakStats(current=0, longest=0)

    today = today or date.today()
    current = 0
    if dates[0] in (today, today - timedelta(days=1)):
        expected = dates[0]
        for day in dates:
            if day != expected:
                break
            current += 1
            expected -= timedelta(days=1)

    longest = run = 1
    for newer, older in zip(dates, dates[1:]):
        if (newer - older).days == 1:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    longest = max(longest, run)

    return StreakStats(current=current, longest=longest)


def mark_workout_done(record: StreakRecord, day: Optional[date] = None) -> StreakRecord:
    """Returns a copy of `record` with `day` (default today) marked as done."""
    day = day or date.today()
    updated = dict(record)
    updated[day.isoformat()] = True
    logger.info(f"Workout marked done for {day.isoformat()}")
    return updated


def last_14_days(record: StreakRecord, today: Optional[date] = None) -> pd.DataFrame:
    """Builds the calendar grid for the last two weeks, oldest day first."""
    today = today or date.today()
    marked = set(completed_dates(record))
    rows = []
    for offset in range(CALENDAR_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        rows.append({
            "date": day.isoformat(),
            "day_name": day.strftime("%a"),
            "day_num": day.day,
            "is_today": offset == 0,
            "has_streak": day in marked,
        })
    return pd.DataFrame(rows, columns=["date", "day_name", "day_num", "is_today", "has_streak"])
