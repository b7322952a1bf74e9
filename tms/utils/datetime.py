# /tms/utils/datetime.py

"""
Datetime helpers. All timestamps are handled in UTC; SQLite hands back naive
datetimes, which are taken to be UTC.
"""

import math
from datetime import datetime, timezone
from typing import Optional


def as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Attaches UTC to a naive datetime, converts an aware one to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def start_of_month(now: datetime) -> datetime:
    """First instant of the calendar month containing `now`."""
    return as_utc(now).replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def whole_days_since(then: datetime, now: datetime) -> int:
    """Full days elapsed from `then` to `now`, never negative."""
    elapsed = (as_utc(now) - as_utc(then)).total_seconds()
    return max(0, math.floor(elapsed / 86400))
