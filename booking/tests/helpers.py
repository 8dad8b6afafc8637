from datetime import date, datetime, time, timezone as dt_timezone
from decimal import Decimal

from booking.models import Booking, Business, Location, Resource, Service, Staff
from booking.services.clock import FrozenClock
from booking.services.config import AvailabilityConfig
from staff.models import StaffLocation, TimeOff, WorkingHours

# Monday; stored weekday number 1
MONDAY = date(2030, 1, 7)
UTC = dt_timezone.utc


def at(hour, minute=0, day=MONDAY):
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=UTC)


def frozen(hour=0, minute=0, day=date(2030, 1, 6)):
    """Clock frozen the day before MONDAY unless told otherwise."""
    return FrozenClock(at(hour, minute, day))


def utc_config(**overrides):
    return AvailabilityConfig(**{"time_zone": "UTC", **overrides})


class ScheduleFixtures:
    """setUp helpers shared by the ORM-backed tests."""

    def make_business(self, name="Downtown Clinic"):
        return Business.objects.create(name=name)

    def make_service(self, business, duration=30, name="Consultation"):
        return Service.objects.create(
            business=business,
            name=name,
            duration_minutes=duration,
            price=Decimal("50.00"),
        )

    def make_staff(self, business, name, start="09:00", end="11:00", day_of_week=1, is_off=False, **kwargs):
        staff = Staff.objects.create(business=business, name=name, **kwargs)
        if start is not None:
            WorkingHours.objects.create(
                staff=staff,
                day_of_week=day_of_week,
                start_time=time.fromisoformat(start),
                end_time=time.fromisoformat(end),
                is_off=is_off,
            )
        return staff

    def make_booking(self, business, service, start, end, staff=None, resource=None,
                     status=Booking.Status.CONFIRMED):
        return Booking.objects.create(
            business=business,
            service=service,
            staff=staff,
            resource=resource,
            start_time=start,
            end_time=end,
            status=status,
        )

    def make_time_off(self, staff, start_date, end_date, reason="Vacation"):
        return TimeOff.objects.create(staff=staff, start_date=start_date, end_date=end_date, reason=reason)

    def make_location(self, business, name="Main St", staff=()):
        location = Location.objects.create(business=business, name=name)
        for s in staff:
            StaffLocation.objects.create(staff=s, location=location)
        return location

    def make_resource(self, business, name="Room 1"):
        return Resource.objects.create(business=business, name=name)
