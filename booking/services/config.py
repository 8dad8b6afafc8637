"""
config.py
---------
Typed options for the availability engine.

Read from the optional AVAILABILITY dict in Django settings, e.g.

    AVAILABILITY = {
        "slot_increment_minutes": 30,
        "calendar_timeout_seconds": 5.0,
    }

Unknown keys and non-positive numbers raise ImproperlyConfigured at
construction time rather than surfacing later inside a query.
"""

from dataclasses import dataclass, field, fields
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULT_BLOCKING_STATUSES = ("PENDING", "PENDING_DEPOSIT", "CONFIRMED", "IN_PROGRESS")


@dataclass(frozen=True)
class AvailabilityConfig:
    # Grid step for candidate slots; fixed platform-wide, not per service
    slot_increment_minutes: int = 30
    # Budget for one external calendar lookup, counted from when it starts running
    calendar_timeout_seconds: float = 5.0
    max_calendar_workers: int = 8
    recommendation_limit: int = 5
    blocking_statuses: tuple = DEFAULT_BLOCKING_STATUSES
    # Zone used to read working hours and dates; None means settings.TIME_ZONE
    time_zone: str | None = None

    def __post_init__(self):
        for name in ("slot_increment_minutes", "max_calendar_workers", "recommendation_limit"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ImproperlyConfigured(f"AVAILABILITY[{name!r}] must be a positive integer, got {value!r}")
        if self.calendar_timeout_seconds <= 0:
            raise ImproperlyConfigured("AVAILABILITY['calendar_timeout_seconds'] must be positive")
        if not self.blocking_statuses:
            raise ImproperlyConfigured("AVAILABILITY['blocking_statuses'] cannot be empty")
        object.__setattr__(self, "blocking_statuses", tuple(self.blocking_statuses))
        if self.time_zone is not None:
            try:
                ZoneInfo(self.time_zone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ImproperlyConfigured(f"Unknown time zone {self.time_zone!r}") from e

    @property
    def tzinfo(self):
        return ZoneInfo(self.time_zone or settings.TIME_ZONE)

    @classmethod
    def from_settings(cls, overrides=None) -> "AvailabilityConfig":
        raw = dict(getattr(settings, "AVAILABILITY", None) or {})
        raw.update(overrides or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ImproperlyConfigured(f"Unknown AVAILABILITY option(s): {', '.join(unknown)}")
        return cls(**raw)
