import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("booking", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="WorkingHours",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("day_of_week", models.PositiveSmallIntegerField(
                    choices=[
                        (0, "Sunday"),
                        (1, "Monday"),
                        (2, "Tuesday"),
                        (3, "Wednesday"),
                        (4, "Thursday"),
                        (5, "Friday"),
                        (6, "Saturday"),
                    ],
                    validators=[django.core.validators.MaxValueValidator(6)],
                )),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("is_off", models.BooleanField(default=False)),
                ("staff", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="working_hours", to="booking.staff")),
            ],
            options={
                "ordering": ["staff_id", "day_of_week"],
                "verbose_name_plural": "working hours",
                "constraints": [
                    models.UniqueConstraint(fields=("staff", "day_of_week"), name="uniq_working_hours_staff_day"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TimeOff",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("reason", models.CharField(blank=True, max_length=255, null=True)),
                ("staff", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="time_off", to="booking.staff")),
            ],
            options={
                "ordering": ["staff_id", "start_date"],
                "verbose_name_plural": "time off",
            },
        ),
        migrations.CreateModel(
            name="StaffLocation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("location", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="staff_assignments", to="booking.location")),
                ("staff", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="location_assignments", to="booking.staff")),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("staff", "location"), name="uniq_staff_location"),
                ],
            },
        ),
    ]
