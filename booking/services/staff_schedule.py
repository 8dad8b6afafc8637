"""
staff_schedule.py
-----------------
Maintains the schedule data the availability engine reads: weekly
working-hours templates and time-off records.

Every operation is scoped to one business. A staff member or time-off
record belonging to another business is treated exactly like a missing one.

Errors:
- rest_framework.exceptions.ValidationError for bad input
- Staff.DoesNotExist / TimeOff.DoesNotExist for unknown (or foreign) ids
"""

from django.db import transaction

from staff.models import TimeOff, WorkingHours
from staff.serializers import TimeOffSerializer, WorkingHoursSerializer

from ..models import Staff
from .clock import SystemClock
from .slot_utils import coerce_date


class StaffScheduleService:
    def __init__(self, clock=None):
        self.clock = clock or SystemClock()

    def _get_staff(self, business_id, staff_id) -> Staff:
        return Staff.objects.get(pk=staff_id, business_id=business_id)

    def _belongs(self, business_id, staff_id) -> bool:
        return Staff.objects.filter(pk=staff_id, business_id=business_id).exists()

    def get_staff_working_hours(self, business_id, staff_id):
        """Weekly templates ordered by weekday; [] for unknown staff."""
        if not self._belongs(business_id, staff_id):
            return []
        return list(WorkingHours.objects.filter(staff_id=staff_id).order_by("day_of_week"))

    @transaction.atomic
    def set_staff_working_hours(self, business_id, staff_id, hours):
        """
        Upsert one template per weekday given in `hours`.

        Args:
            hours: iterable of dicts with day_of_week (0=Sunday..6),
                start_time / end_time ('HH:MM') and is_off

        Weekdays not mentioned are left as they are.
        """
        staff = self._get_staff(business_id, staff_id)

        serializer = WorkingHoursSerializer(data=list(hours), many=True)
        serializer.is_valid(raise_exception=True)

        for item in serializer.validated_data:
            WorkingHours.objects.update_or_create(
                staff=staff,
                day_of_week=item["day_of_week"],
                defaults={
                    "start_time": item["start_time"],
                    "end_time": item["end_time"],
                    "is_off": item.get("is_off", False),
                },
            )
        return self.get_staff_working_hours(business_id, staff_id)

    def get_staff_time_off(self, business_id, staff_id):
        """Current and upcoming time off (ends today or later)."""
        if not self._belongs(business_id, staff_id):
            return []
        today = self.clock.today()
        return list(
            TimeOff.objects.filter(staff_id=staff_id, end_date__gte=today).order_by("start_date")
        )

    def add_time_off(self, business_id, staff_id, data) -> TimeOff:
        staff = self._get_staff(business_id, staff_id)
        serializer = TimeOffSerializer(data=data)
        serializer.is_valid(raise_exception=True)
        return serializer.save(staff=staff)

    def remove_time_off(self, business_id, time_off_id) -> bool:
        entry = TimeOff.objects.get(pk=time_off_id, staff__business_id=business_id)
        entry.delete()
        return True

    def get_calendar_context(self, business_id, staff_ids, date_from, date_to) -> dict:
        """
        Working-hours templates and overlapping time off for several staff
        members at once, keyed by staff id. Ids outside the business are
        left out.
        """
        date_from = coerce_date(date_from)
        date_to = coerce_date(date_to)

        valid_ids = list(
            Staff.objects.filter(pk__in=list(staff_ids), business_id=business_id)
            .order_by("id")
            .values_list("id", flat=True)
        )
        context = {sid: {"working_hours": [], "time_off": []} for sid in valid_ids}

        hours = WorkingHours.objects.filter(staff_id__in=valid_ids).order_by("day_of_week")
        for wh in hours:
            context[wh.staff_id]["working_hours"].append(dict(WorkingHoursSerializer(wh).data))

        time_off = TimeOff.objects.filter(
            staff_id__in=valid_ids,
            start_date__lte=date_to,
            end_date__gte=date_from,
        ).order_by("start_date")
        for entry in time_off:
            context[entry.staff_id]["time_off"].append(dict(TimeOffSerializer(entry).data))

        return context
