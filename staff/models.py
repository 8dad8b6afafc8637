# staff/models.py
#
# Per-staff scheduling data. Every model points to booking.Staff to avoid
# having two Staff models.
#
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator
from django.db import models

# Weekday numbering used by stored templates: 0=Sunday .. 6=Saturday
DAY_OF_WEEK_CHOICES = [
    (0, "Sunday"),
    (1, "Monday"),
    (2, "Tuesday"),
    (3, "Wednesday"),
    (4, "Thursday"),
    (5, "Friday"),
    (6, "Saturday"),
]


class WorkingHours(models.Model):
    """
    Weekly working-hours template for one staff member and one weekday.
    A missing row, or is_off=True, means no availability that weekday.
    """
    staff = models.ForeignKey(
        "booking.Staff",                 # ← reference booking app model
        on_delete=models.CASCADE,
        related_name="working_hours",
    )
    day_of_week = models.PositiveSmallIntegerField(
        choices=DAY_OF_WEEK_CHOICES,
        validators=[MaxValueValidator(6)],
    )
    start_time = models.TimeField()
    end_time = models.TimeField()
    is_off = models.BooleanField(default=False)

    class Meta:
        ordering = ["staff_id", "day_of_week"]
        constraints = [
            models.UniqueConstraint(
                fields=["staff", "day_of_week"], name="uniq_working_hours_staff_day"
            ),
        ]
        verbose_name_plural = "working hours"

    def __str__(self):
        day = self.get_day_of_week_display()
        if self.is_off:
            return f"{self.staff.name}: {day} off"
        return f"{self.staff.name}: {day} {self.start_time:%H:%M}-{self.end_time:%H:%M}"


class TimeOff(models.Model):
    """
    Whole-day absence; start_date and end_date are both inclusive.
    """
    staff = models.ForeignKey(
        "booking.Staff",
        on_delete=models.CASCADE,
        related_name="time_off",
    )
    start_date = models.DateField()
    end_date = models.DateField()
    reason = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        ordering = ["staff_id", "start_date"]
        verbose_name_plural = "time off"

    def __str__(self):
        return f"{self.staff.name}: off {self.start_date} - {self.end_date}"

    def clean(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError("Time off cannot end before it starts.")


class StaffLocation(models.Model):
    """
    Which locations a staff member works at.
    """
    staff = models.ForeignKey(
        "booking.Staff",
        on_delete=models.CASCADE,
        related_name="location_assignments",
    )
    location = models.ForeignKey(
        "booking.Location",
        on_delete=models.CASCADE,
        related_name="staff_assignments",
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["staff", "location"], name="uniq_staff_location"
            ),
        ]

    def __str__(self):
        return f"{self.staff.name} @ {self.location.name}"
