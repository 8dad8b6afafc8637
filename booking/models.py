# booking/models.py
#
# Purpose:
# - Core domain models for the multi-tenant booking backend.
#
# Design highlights:
# - Business: the tenant. Every other row hangs off one business.
# - Location / Resource: where a booking happens and which physical
#   resource (room, bay, chair) it occupies.
# - Service: validates price and duration; "active" flag controls visibility.
# - Staff: people who can be assigned to bookings; "is_active" controls
#   whether they show up in availability at all.
# - Booking:
#   • Records service, staff (optional), resource (optional), start/end time
#   • status is uppercase, see Booking.Status
#   • BLOCKING_STATUSES lists the statuses that occupy a staff/resource slot
#
# Notes for developers:
# - Tenant scoping is the caller's job: repositories always filter by
#   business_id, nothing here enforces it at the database level.
# - Weekly working hours, time off and location assignments live in the
#   staff app (staff/models.py) and point back at booking.Staff.
#

from django.db import models
from django.core.validators import MinValueValidator
from django.core.exceptions import ValidationError


# -------------------------
# Tenant
# -------------------------
class Business(models.Model):
    """
    A tenant of the platform (clinic, dealership, service shop).
    """
    name = models.CharField(max_length=200)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "businesses"

    def __str__(self):
        return self.name


# -------------------------
# Where bookings happen
# -------------------------
class Location(models.Model):
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="locations")
    name = models.CharField(max_length=200)

    def __str__(self):
        return self.name


class Resource(models.Model):
    """
    A physical resource that can only be used by one booking at a time
    (treatment room, service bay, chair).
    """
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="resources")
    name = models.CharField(max_length=200)

    def __str__(self):
        return self.name


# -------------------------
# Service catalog item
# -------------------------
class Service(models.Model):
    """
    A service offered by the business.

    Rules:
    - price must be > 0
    - duration_minutes must be > 0 (it decides the slot length)
    - active controls visibility and bookability
    """
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="services")
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    duration_minutes = models.PositiveIntegerField(
        validators=[MinValueValidator(1)]  # duration must be >= 1 minute
    )
    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(0.01)],  # price must be > 0
    )
    active = models.BooleanField(default=True)

    def __str__(self):
        return f"{self.name} ({self.duration_minutes} min)"


# -------------------------
# Staff member
# -------------------------
class Staff(models.Model):
    """
    A staff member who can be assigned to bookings.
    Inactive staff never appear in availability results.
    """
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="staff")
    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    role = models.CharField(max_length=100, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name_plural = "staff"

    def __str__(self):
        return self.name


# -------------------------
# Booking record
# -------------------------
class Booking(models.Model):
    """
    Appointment booking.

    Only bookings in BLOCKING_STATUSES occupy their staff member and
    resource; completed, cancelled and no-show bookings free the slot.
    """

    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        PENDING_DEPOSIT = "PENDING_DEPOSIT", "Pending deposit"
        CONFIRMED = "CONFIRMED", "Confirmed"
        IN_PROGRESS = "IN_PROGRESS", "In progress"
        COMPLETED = "COMPLETED", "Completed"
        CANCELLED = "CANCELLED", "Cancelled"
        NO_SHOW = "NO_SHOW", "No show"

    BLOCKING_STATUSES = (
        Status.PENDING,
        Status.PENDING_DEPOSIT,
        Status.CONFIRMED,
        Status.IN_PROGRESS,
    )

    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="bookings")
    service = models.ForeignKey(Service, on_delete=models.CASCADE)
    staff = models.ForeignKey(Staff, on_delete=models.SET_NULL, null=True, blank=True)
    resource = models.ForeignKey(Resource, on_delete=models.SET_NULL, null=True, blank=True)
    location = models.ForeignKey(Location, on_delete=models.SET_NULL, null=True, blank=True)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.CONFIRMED,
        help_text="Booking lifecycle status",
    )
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["business", "staff", "start_time"], name="booking_staff_day_idx"),
            models.Index(fields=["business", "resource", "start_time"], name="booking_resource_day_idx"),
        ]

    def __str__(self):
        return f"{self.service.name} on {self.start_time} ({self.status})"

    def clean(self):
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValidationError("Booking end time must be after its start time.")
