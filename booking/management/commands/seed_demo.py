"""
seed_demo.py
------------
Seeds (creates or updates) a demo business with services, staff and weekly
working hours so availability can be tried end to end. Safe to run any
time; it will upsert by name.

Usage:
    python manage.py seed_demo
    python manage.py seed_demo --business "Northside Auto"
"""

from datetime import time
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from booking.models import Business, Location, Service, Staff
from staff.models import StaffLocation, WorkingHours


CATALOG = [
    {"name": "Initial consultation", "duration_minutes": 30, "price": Decimal("40.00")},
    {"name": "Follow-up visit",      "duration_minutes": 45, "price": Decimal("55.00")},
    {"name": "Extended session",     "duration_minutes": 90, "price": Decimal("120.00")},
]

# name -> (start, end) for Monday..Friday; weekends off
TEAM = {
    "Avery Brooks": (time(9, 0), time(17, 0)),
    "Jordan Lee":   (time(8, 30), time(16, 30)),
    "Sam Patel":    (time(12, 0), time(20, 0)),
}


class Command(BaseCommand):
    help = "Seed or update a demo business with services, staff and working hours."

    def add_arguments(self, parser):
        parser.add_argument("--business", default="Demo Clinic", help="Business name to create or update.")

    @transaction.atomic
    def handle(self, *args, **options):
        business, _ = Business.objects.get_or_create(name=options["business"])
        location, _ = Location.objects.get_or_create(business=business, name="Main office")

        created = 0
        updated = 0

        for item in CATALOG:
            svc, is_created = Service.objects.update_or_create(
                business=business,
                name=item["name"],
                defaults={
                    "duration_minutes": item["duration_minutes"],
                    "price": item["price"],
                    "active": True,
                },
            )
            if is_created:
                created += 1
            else:
                updated += 1

        for name, (start, end) in TEAM.items():
            member, is_created = Staff.objects.get_or_create(
                business=business, name=name, defaults={"is_active": True}
            )
            created += int(is_created)
            StaffLocation.objects.get_or_create(staff=member, location=location)
            # 0=Sunday .. 6=Saturday
            for day in range(7):
                WorkingHours.objects.update_or_create(
                    staff=member,
                    day_of_week=day,
                    defaults={"start_time": start, "end_time": end, "is_off": day in (0, 6)},
                )

        self.stdout.write(self.style.SUCCESS(
            f"Seed complete for '{business.name}' (id={business.id}). Created={created}, Updated={updated}"
        ))
