"""
slot_utils.py
-------------
Helpers to turn a calendar date plus working hours into a timezone-aware
window, and to lay candidate appointment slots over that window.

Slots sit on a fixed grid anchored at the window's opening instant: a window
opening at 09:15 yields 09:15, 09:45, 10:15, ... and never snaps to :00/:30.
"""

from dataclasses import dataclass
from datetime import date as date_cls, datetime, time, timedelta, timezone as dt_timezone, tzinfo

from django.utils import timezone
from django.utils.dateparse import parse_date

DEFAULT_SLOT_INCREMENT_MINUTES = 30


@dataclass(frozen=True, order=True)
class TimeWindow:
    """Half-open interval [start, end) of aware datetimes."""

    start: datetime
    end: datetime

    @property
    def minutes(self) -> int:
        # Elapsed time, so a DST change inside the window is counted
        elapsed = self.end.astimezone(dt_timezone.utc) - self.start.astimezone(dt_timezone.utc)
        return int(elapsed.total_seconds() // 60)

    def contains(self, other: "TimeWindow") -> bool:
        return self.start <= other.start and other.end <= self.end


def parse_hhmm(value) -> time:
    """
    Accept 'HH:MM' strings (or time objects, returned unchanged).
    Raises ValueError on anything else.
    """
    if isinstance(value, time):
        return value
    h, m = str(value).strip().split(":")
    return time(int(h), int(m))


def _make_aware(dt_naive: datetime, tz: tzinfo | None = None):
    """
    Convert a naive datetime to an aware one in `tz` (Django's current
    timezone when omitted). Aware datetimes are returned unchanged.
    """
    if timezone.is_aware(dt_naive):
        return dt_naive
    return timezone.make_aware(dt_naive, tz or timezone.get_current_timezone())


def date_to_range(day: date_cls, tz: tzinfo | None = None) -> TimeWindow:
    """
    Convert a date into a timezone-aware day window [start, end).
    """
    day_start = _make_aware(datetime(day.year, day.month, day.day), tz)
    next_day = day + timedelta(days=1)
    day_end = _make_aware(datetime(next_day.year, next_day.month, next_day.day), tz)
    return TimeWindow(day_start, day_end)


def window_for_day(day: date_cls, open_time, close_time, tz: tzinfo | None = None) -> TimeWindow:
    """
    Working window for `day` between open and close (wall-clock times in `tz`).
    """
    open_time = parse_hhmm(open_time)
    close_time = parse_hhmm(close_time)
    start = _make_aware(datetime.combine(day, open_time), tz)
    end = _make_aware(datetime.combine(day, close_time), tz)
    return TimeWindow(start, end)


class SlotGrid:
    """
    Lazy, finite and restartable sequence of candidate slots over a window.

    Iterating yields TimeWindow(start, start + duration) for every start on
    the grid whose slot still ends inside the window. Each new iteration
    starts again from the window opening.

    Stepping happens in UTC so every slot lasts exactly `duration_minutes`
    of elapsed time, DST transitions included. Slots come out in UTC.
    """

    def __init__(self, window: TimeWindow, duration_minutes: int,
                 increment_minutes: int = DEFAULT_SLOT_INCREMENT_MINUTES):
        if duration_minutes <= 0:
            raise ValueError("duration_minutes must be positive")
        if increment_minutes <= 0:
            raise ValueError("increment_minutes must be positive")
        self.window = window
        self._start = window.start.astimezone(dt_timezone.utc)
        self._end = window.end.astimezone(dt_timezone.utc)
        self.duration = timedelta(minutes=duration_minutes)
        self.increment = timedelta(minutes=increment_minutes)

    def __iter__(self):
        current = self._start
        while current + self.duration <= self._end:
            yield TimeWindow(current, current + self.duration)
            current += self.increment

    def __len__(self):
        spare = self._end - self._start - self.duration
        if spare < timedelta(0):
            return 0
        return spare // self.increment + 1


def generate_slots(window: TimeWindow, duration_minutes: int,
                   increment_minutes: int = DEFAULT_SLOT_INCREMENT_MINUTES) -> SlotGrid:
    """
    Candidate slots for one working window.

    An empty grid (service longer than the window) is a normal outcome.
    """
    return SlotGrid(window, duration_minutes, increment_minutes)


def coerce_date(value) -> date_cls:
    """
    Accept a date, a datetime (date part is used) or 'YYYY-MM-DD'.
    Also accepts inputs that include a time; we trim to the date part.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date_cls):
        return value
    raw = (value or "").strip()
    if "T" in raw:
        raw = raw.split("T", 1)[0].strip()
    elif " " in raw:
        raw = raw.split(" ", 1)[0].strip()
    parsed = parse_date(raw)
    if parsed is None:
        raise ValueError(f"Invalid date {value!r}. Use YYYY-MM-DD.")
    return parsed
