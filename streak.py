# Consecutive-day streak ending today.
from datetime import datetime, timedelta

from dates import get_today_start, is_same_day, normalize_to_start_of_day, to_canonical_date


def calculate_streak(entries, today: datetime | None = None) -> int:
    """Count consecutive days with an entry, walking back from today.

    The walk stops at the first position whose entry is not on the expected
    day, so a missing entry today gives 0 and same-day duplicates end the
    walk instead of being counted twice.
    """
    if not entries:
        return 0
    today = normalize_to_start_of_day(today) if today is not None else get_today_start()
    ordered = sorted(entries, key=lambda e: to_canonical_date(e.date), reverse=True)
    streak = 0
    for i, entry in enumerate(ordered):
        if not is_same_day(entry.date, today - timedelta(days=i)):
            break
        streak += 1
    return streak
