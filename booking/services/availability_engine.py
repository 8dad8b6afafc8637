"""
availability_engine.py
----------------------
Computes bookable slots for a service on one date by checking candidate
slots from each staff member's working hours against:
1) the staff member's existing bookings (blocking statuses only),
2) busy time on their connected external calendars, and
3) bookings of the requested physical resource, when one is given.

Sources are unioned: a conflict with any of them makes the slot unavailable.

Rules:
- Staff without working hours that weekday, marked off, or on time off
  that date contribute no slots at all.
- A slot must fit entirely inside the working window; it is never truncated.
- Slots starting at or before "now" are dropped.
- Output is sorted by start time, then staff name (case-sensitive), then
  staff id, so identical inputs always give identical ordering.

"Unknown service" and "nothing available" both come back as [].
Repository errors propagate; calendar errors and timeouts do not (see
calendar_source.CalendarFetcher).
"""

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone as dt_timezone

from django.utils import timezone

from .calendar_source import CalendarFetcher, NullCalendarSource
from .clock import SystemClock, day_of_week
from .config import AvailabilityConfig
from .conflicts import is_available
from .repository import DjangoAvailabilityRepository
from .slot_utils import coerce_date, generate_slots, window_for_day

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateSlot:
    staff_id: int
    staff_name: str
    start_time: datetime
    end_time: datetime
    available: bool

    @property
    def display(self) -> str:
        # Wall-clock start in the zone the slot was generated in
        return self.start_time.strftime("%H:%M")

    def as_dict(self) -> dict:
        data = asdict(self)
        data["start_time"] = self.start_time.isoformat()
        data["end_time"] = self.end_time.isoformat()
        data["display"] = self.display
        return data


def slot_sort_key(slot: CandidateSlot):
    # UTC instant, since repeated wall times on a fall-back day compare equal
    return (slot.start_time.astimezone(dt_timezone.utc), slot.staff_name, slot.staff_id)


class AvailabilityEngine:
    def __init__(self, repository=None, calendar_source=None, clock=None, config=None):
        self.config = config or AvailabilityConfig.from_settings()
        self.repository = repository or DjangoAvailabilityRepository()
        self.clock = clock or SystemClock()
        self.calendar = CalendarFetcher(
            calendar_source or NullCalendarSource(),
            timeout_seconds=self.config.calendar_timeout_seconds,
            max_workers=self.config.max_calendar_workers,
        )

    def _eligible_staff(self, business_id, staff_id, location_id):
        staff_list = self.repository.get_active_staff(business_id, staff_id)
        if location_id is not None and staff_list:
            assigned = self.repository.get_staff_ids_for_location(location_id)
            staff_list = [s for s in staff_list if s.id in assigned]
        return staff_list

    def _working_window(self, staff, day, weekday, tz):
        """
        Working window for this staff member on `day`, or None when they
        are off (no template, is_off, or time off covering the date).
        """
        wh = self.repository.get_working_hours(staff.id, weekday)
        if wh is None or wh.is_off:
            logger.debug("Staff %s has no working hours on weekday %s", staff.id, weekday)
            return None
        if self.repository.get_time_off(staff.id, day):
            logger.debug("Staff %s is on time off on %s", staff.id, day)
            return None
        return window_for_day(day, wh.start_time, wh.end_time, tz)

    def get_available_slots(self, business_id, date, service_id,
                            staff_id=None, location_id=None, resource_id=None):
        """
        Every candidate slot for `date` across eligible staff, each flagged
        available or not, merged and sorted.

        Args:
            business_id: tenant the query is scoped to
            date: date, datetime or 'YYYY-MM-DD'
            service_id: decides the slot length
            staff_id: restrict to one staff member (still must be active)
            location_id: restrict to staff assigned to this location
            resource_id: also block slots that clash with this resource's bookings

        Returns:
            list[CandidateSlot], possibly empty
        """
        day = coerce_date(date)

        service = self.repository.get_service(business_id, service_id)
        if service is None:
            return []

        staff_list = self._eligible_staff(business_id, staff_id, location_id)
        if not staff_list:
            return []

        tz = self.config.tzinfo
        weekday = day_of_week(day)
        working = []
        for staff in staff_list:
            window = self._working_window(staff, day, weekday, tz)
            if window is not None:
                working.append((staff, window))
        if not working:
            return []

        statuses = self.config.blocking_statuses

        # Fetched once and folded into every staff member's check
        resource_busy = []
        if resource_id is not None:
            resource_busy = self.repository.get_resource_bookings(
                business_id, resource_id, day, statuses, tz
            )

        external = self.calendar.fetch_all([staff.id for staff, _ in working], day)

        now = self.clock.now()
        slots = []
        for staff, window in working:
            busy = list(self.repository.get_staff_bookings(business_id, staff.id, day, statuses, tz))
            busy.extend(external.get(staff.id, []))
            busy.extend(resource_busy)

            for candidate in generate_slots(window, service.duration_minutes,
                                            self.config.slot_increment_minutes):
                if candidate.start <= now:
                    continue
                slots.append(CandidateSlot(
                    staff_id=staff.id,
                    staff_name=staff.name,
                    start_time=timezone.localtime(candidate.start, tz),
                    end_time=timezone.localtime(candidate.end, tz),
                    available=is_available(candidate, busy),
                ))

        slots.sort(key=slot_sort_key)
        logger.debug(
            "Availability for business %s service %s on %s: %d slots across %d staff",
            business_id, service_id, day, len(slots), len(working),
        )
        return slots
