"""
repository.py
-------------
Read-side queries the availability engine depends on.

AvailabilityRepository is the narrow contract; DjangoAvailabilityRepository
answers it from the ORM. Every query here is already scoped to a single
business by its caller, and none of them writes.

Database errors are not caught: availability computed from partial data
would be worse than a failed request.
"""

from dataclasses import dataclass
from datetime import date

from django.db.models import Count
from staff.models import StaffLocation, TimeOff, WorkingHours

from ..models import Booking, Service, Staff
from .conflicts import to_busy_intervals
from .slot_utils import date_to_range


@dataclass(frozen=True)
class ServiceInfo:
    id: int
    duration_minutes: int


@dataclass(frozen=True)
class StaffInfo:
    id: int
    name: str


@dataclass(frozen=True)
class WorkingHoursInfo:
    start_time: object  # datetime.time
    end_time: object
    is_off: bool


@dataclass(frozen=True)
class TimeOffInfo:
    start_date: date
    end_date: date


class AvailabilityRepository:
    """Interface consumed by AvailabilityEngine and RecommendationRanker."""

    def get_service(self, business_id, service_id) -> ServiceInfo | None:
        raise NotImplementedError

    def get_active_staff(self, business_id, staff_id=None) -> list[StaffInfo]:
        raise NotImplementedError

    def get_staff_ids_for_location(self, location_id) -> set:
        raise NotImplementedError

    def get_working_hours(self, staff_id, day_of_week: int) -> WorkingHoursInfo | None:
        raise NotImplementedError

    def get_time_off(self, staff_id, day: date) -> list[TimeOffInfo]:
        raise NotImplementedError

    def get_staff_bookings(self, business_id, staff_id, day: date, statuses, tz=None):
        raise NotImplementedError

    def get_resource_bookings(self, business_id, resource_id, day: date, statuses, tz=None):
        raise NotImplementedError

    def count_staff_bookings(self, business_id, day: date, statuses,
                             exclude_booking_id=None, tz=None) -> dict:
        raise NotImplementedError


class DjangoAvailabilityRepository(AvailabilityRepository):

    def get_service(self, business_id, service_id):
        svc = (
            Service.objects
            .filter(business_id=business_id, pk=service_id)
            .only("id", "duration_minutes")
            .first()
        )
        if svc is None:
            return None
        return ServiceInfo(id=svc.id, duration_minutes=svc.duration_minutes)

    def get_active_staff(self, business_id, staff_id=None):
        qs = Staff.objects.filter(business_id=business_id, is_active=True)
        if staff_id is not None:
            qs = qs.filter(pk=staff_id)
        return [StaffInfo(id=s["id"], name=s["name"]) for s in qs.order_by("id").values("id", "name")]

    def get_staff_ids_for_location(self, location_id):
        return set(
            StaffLocation.objects.filter(location_id=location_id).values_list("staff_id", flat=True)
        )

    def get_working_hours(self, staff_id, day_of_week):
        wh = WorkingHours.objects.filter(staff_id=staff_id, day_of_week=day_of_week).first()
        if wh is None:
            return None
        return WorkingHoursInfo(start_time=wh.start_time, end_time=wh.end_time, is_off=wh.is_off)

    def get_time_off(self, staff_id, day):
        rows = TimeOff.objects.filter(
            staff_id=staff_id, start_date__lte=day, end_date__gte=day
        ).values("start_date", "end_date")
        return [TimeOffInfo(**r) for r in rows]

    def _day_bookings(self, business_id, day, statuses, tz):
        # Any booking overlapping the day blocks, including ones that start
        # the previous evening or run past midnight.
        window = date_to_range(day, tz)
        return Booking.objects.filter(
            business_id=business_id,
            status__in=list(statuses),
            start_time__lt=window.end,
            end_time__gt=window.start,
        )

    def get_staff_bookings(self, business_id, staff_id, day, statuses, tz=None):
        qs = self._day_bookings(business_id, day, statuses, tz).filter(staff_id=staff_id)
        return to_busy_intervals(qs.values("start_time", "end_time"))

    def get_resource_bookings(self, business_id, resource_id, day, statuses, tz=None):
        qs = self._day_bookings(business_id, day, statuses, tz).filter(resource_id=resource_id)
        return to_busy_intervals(qs.values("start_time", "end_time"))

    def count_staff_bookings(self, business_id, day, statuses, exclude_booking_id=None, tz=None):
        qs = self._day_bookings(business_id, day, statuses, tz).filter(staff__isnull=False)
        if exclude_booking_id is not None:
            qs = qs.exclude(pk=exclude_booking_id)
        rows = qs.values("staff_id").annotate(n=Count("id"))
        return {r["staff_id"]: r["n"] for r in rows}
