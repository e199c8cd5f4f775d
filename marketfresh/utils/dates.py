# marketfresh/utils/dates.py
from datetime import date, datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def freshness_days(freshness_date: date, now: datetime) -> int:
    """
    Whole days elapsed since the harvest/cut date, counted from UTC midnight.
    Not clamped: a date in the future gives a negative age.
    """
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return (now.date() - freshness_date).days
