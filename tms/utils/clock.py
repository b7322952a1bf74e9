# /tms/utils/clock.py

"""
Source of "now" for the dashboards: month boundaries for income, streak
lengths and the cut-off for upcoming events all read it. Tests inject a
frozen clock.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """The current instant, timezone-aware in UTC."""


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(tz=timezone.utc)
