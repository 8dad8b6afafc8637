# staff/admin.py
from django.contrib import admin
from .models import StaffLocation, TimeOff, WorkingHours

@admin.register(WorkingHours)
class WorkingHoursAdmin(admin.ModelAdmin):
    list_display = ("staff", "day_of_week", "start_time", "end_time", "is_off")
    list_filter = ("staff", "day_of_week", "is_off")
    search_fields = ("staff__name",)

@admin.register(TimeOff)
class TimeOffAdmin(admin.ModelAdmin):
    list_display = ("staff", "start_date", "end_date", "reason")
    list_filter = ("staff",)
    search_fields = ("staff__name", "reason")

@admin.register(StaffLocation)
class StaffLocationAdmin(admin.ModelAdmin):
    list_display = ("staff", "location")
    list_filter = ("location",)
