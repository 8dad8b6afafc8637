from django.contrib import admin
from .models import Business, Location, Resource, Service, Staff, Booking

@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "created_at")
    search_fields = ("name",)

@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "business")
    list_filter = ("business",)

@admin.register(Resource)
class ResourceAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "business")
    list_filter = ("business",)

@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "business", "price", "duration_minutes", "active")
    list_filter = ("active", "business")
    search_fields = ("name",)

@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "business", "role", "is_active")
    list_filter = ("is_active", "business")
    search_fields = ("name", "email")

@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("id", "business", "service", "staff", "resource", "start_time", "end_time", "status")
    list_filter = ("status", "business")
    search_fields = ("staff__name", "service__name")
