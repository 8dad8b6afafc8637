"""
clock.py
--------
One place for "now" and weekday arithmetic.

Working-hour templates are stored with 0=Sunday .. 6=Saturday; every lookup
goes through day_of_week() so the query path and the store agree.
Tests pass a FrozenClock to pin the current instant.
"""

from datetime import date, datetime

from django.utils import timezone


def day_of_week(day: date) -> int:
    """Weekday of `day` with 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


class Clock:
    def now(self) -> datetime:
        raise NotImplementedError

    def today(self, tz=None) -> date:
        return timezone.localdate(self.now(), tz)


class SystemClock(Clock):
    def now(self) -> datetime:
        return timezone.now()


class FrozenClock(Clock):
    """A clock stuck at one aware instant."""

    def __init__(self, instant: datetime):
        if timezone.is_naive(instant):
            raise ValueError("FrozenClock needs an aware datetime")
        self.instant = instant

    def now(self) -> datetime:
        return self.instant
