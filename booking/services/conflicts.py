"""
conflicts.py
------------
Busy-interval normalization and overlap checks.

Internal bookings, external calendar events and resource bookings all reduce
to BusyInterval before checking. Overlap is half-open:

    a.start < b.end AND b.start < a.end

so a booking ending at 10:00 does not block a slot starting at 10:00.
"""

from dataclasses import dataclass
from datetime import datetime

from django.utils import timezone


@dataclass(frozen=True, order=True)
class BusyInterval:
    start: datetime
    end: datetime


def overlaps(a, b) -> bool:
    """True when two [start, end) intervals share any instant."""
    return a.start < b.end and b.start < a.end


def _field(row, *names):
    for name in names:
        if isinstance(row, dict):
            if name in row:
                return row[name]
        elif hasattr(row, name):
            return getattr(row, name)
    raise KeyError(f"no {' / '.join(names)} on {row!r}")


def _aware(value, row):
    if not isinstance(value, datetime) or timezone.is_naive(value):
        raise ValueError(f"expected an aware datetime, got {value!r} in {row!r}")
    return value


def to_busy_interval(row) -> BusyInterval:
    """
    Accept a BusyInterval, a dict or an object exposing start_time/end_time
    (or start/end) and return a BusyInterval.

    Both bounds must be timezone-aware datetimes; anything else (naive
    values, ISO strings) raises ValueError.
    """
    if isinstance(row, BusyInterval):
        return row
    return BusyInterval(
        start=_aware(_field(row, "start_time", "start"), row),
        end=_aware(_field(row, "end_time", "end"), row),
    )


def to_busy_intervals(rows) -> list[BusyInterval]:
    return [to_busy_interval(r) for r in rows]


def is_available(slot, busy_intervals) -> bool:
    """
    False if `slot` overlaps any busy interval, True otherwise
    (including for an empty list).
    """
    return not any(overlaps(slot, busy) for busy in busy_intervals)
