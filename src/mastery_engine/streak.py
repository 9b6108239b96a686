"""Daily practice streaks."""
from datetime import date, datetime, timedelta
from typing import Iterable, Optional


def day_key(timestamp_ms: int) -> date:
    """Local calendar day of an epoch-millisecond timestamp."""
    return datetime.fromtimestamp(timestamp_ms / 1000).date()


def compute_streak(activity_timestamps: Iterable[int], today: Optional[date] = None) -> int:
    """Count consecutive active days ending today or yesterday.

    A learner active yesterday but not yet today keeps their streak until
    the day is over. Anything older than yesterday is a broken streak.
    """
    today = today or date.today()
    days = sorted({day_key(ts) for ts in activity_timestamps}, reverse=True)
    if not days:
        return 0
    latest = days[0]
    if latest not in (today, today - timedelta(days=1)):
        return 0

    active = set(days)
    streak = 1
    check = latest - timedelta(days=1)
    while check in active:
        streak += 1
        check -= timedelta(days=1)
    return streak


def update_streak(streak: int, last_activity_ms: int, now_ms: int) -> int:
    """Advance a cached streak counter for one new attempt.

    Assumes attempts arrive in chronological order; a stale cache is
    repaired with compute_streak over the full log.
    """
    if not last_activity_ms:
        return 1
    last_day = day_key(last_activity_ms)
    this_day = day_key(now_ms)
    if this_day <= last_day:
        return max(streak, 1)
    if this_day - last_day == timedelta(days=1):
        return streak + 1
    return 1


def current_streak(streak: int, last_activity_ms: int, today: Optional[date] = None) -> int:
    """Streak to display from a cached counter, zero once it has lapsed."""
    if not last_activity_ms:
        return 0
    today = today or date.today()
    if day_key(last_activity_ms) < today - timedelta(days=1):
        return 0
    return streak
