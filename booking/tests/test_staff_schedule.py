from datetime import date, time

from django.test import TestCase
from rest_framework.exceptions import ValidationError

from booking.models import Staff
from booking.services.staff_schedule import StaffScheduleService
from staff.models import TimeOff, WorkingHours

from .helpers import MONDAY, ScheduleFixtures, frozen


class StaffScheduleServiceTests(ScheduleFixtures, TestCase):
    def setUp(self):
        self.business = self.make_business()
        self.other_business = self.make_business("Elsewhere")
        self.alice = self.make_staff(self.business, "Alice", start=None)
        self.outsider = self.make_staff(self.other_business, "Olga", start=None)
        # "today" is Monday 2030-01-07
        self.service = StaffScheduleService(clock=frozen(12, 0, day=MONDAY))

    # --- working hours ---

    def test_set_and_get_working_hours(self):
        result = self.service.set_staff_working_hours(self.business.id, self.alice.id, [
            {"day_of_week": 3, "start_time": "10:00", "end_time": "18:00", "is_off": False},
            {"day_of_week": 1, "start_time": "09:00", "end_time": "17:00"},
            {"day_of_week": 0, "start_time": "00:00", "end_time": "00:00", "is_off": True},
        ])
        self.assertEqual([wh.day_of_week for wh in result], [0, 1, 3])
        self.assertTrue(result[0].is_off)
        self.assertEqual(result[1].start_time, time(9, 0))

    def test_set_working_hours_upserts(self):
        self.service.set_staff_working_hours(self.business.id, self.alice.id, [
            {"day_of_week": 1, "start_time": "09:00", "end_time": "17:00"},
        ])
        self.service.set_staff_working_hours(self.business.id, self.alice.id, [
            {"day_of_week": 1, "start_time": "12:00", "end_time": "20:00"},
        ])
        rows = WorkingHours.objects.filter(staff=self.alice)
        self.assertEqual(rows.count(), 1)
        self.assertEqual(rows.get().start_time, time(12, 0))

    def test_set_working_hours_validates(self):
        bad_inputs = [
            {"day_of_week": 7, "start_time": "09:00", "end_time": "17:00"},
            {"day_of_week": 1, "start_time": "9am", "end_time": "17:00"},
            {"day_of_week": 1, "start_time": "17:00", "end_time": "09:00"},
        ]
        for entry in bad_inputs:
            with self.subTest(entry=entry):
                with self.assertRaises(ValidationError):
                    self.service.set_staff_working_hours(self.business.id, self.alice.id, [entry])
        self.assertFalse(WorkingHours.objects.exists())

    def test_invalid_entry_rolls_back_whole_batch(self):
        with self.assertRaises(ValidationError):
            self.service.set_staff_working_hours(self.business.id, self.alice.id, [
                {"day_of_week": 1, "start_time": "09:00", "end_time": "17:00"},
                {"day_of_week": 2, "start_time": "18:00", "end_time": "17:00"},
            ])
        self.assertFalse(WorkingHours.objects.exists())

    def test_other_business_staff(self):
        self.assertEqual(self.service.get_staff_working_hours(self.business.id, self.outsider.id), [])
        with self.assertRaises(Staff.DoesNotExist):
            self.service.set_staff_working_hours(self.business.id, self.outsider.id, [])

    # --- time off ---

    def test_add_and_list_time_off(self):
        self.service.add_time_off(self.business.id, self.alice.id, {
            "start_date": "2030-02-01", "end_date": "2030-02-03", "reason": "Conference",
        })
        self.make_time_off(self.alice, date(2030, 1, 1), date(2030, 1, 6))   # already over
        self.make_time_off(self.alice, date(2030, 1, 5), date(2030, 1, 7))   # ends today

        upcoming = self.service.get_staff_time_off(self.business.id, self.alice.id)

        self.assertEqual(
            [(t.start_date, t.end_date) for t in upcoming],
            [(date(2030, 1, 5), date(2030, 1, 7)), (date(2030, 2, 1), date(2030, 2, 3))],
        )

    def test_add_time_off_validates_range(self):
        with self.assertRaises(ValidationError):
            self.service.add_time_off(self.business.id, self.alice.id, {
                "start_date": "2030-02-03", "end_date": "2030-02-01",
            })
        with self.assertRaises(Staff.DoesNotExist):
            self.service.add_time_off(self.business.id, self.outsider.id, {
                "start_date": "2030-02-01", "end_date": "2030-02-01",
            })

    def test_remove_time_off(self):
        mine = self.make_time_off(self.alice, date(2030, 2, 1), date(2030, 2, 2))
        theirs = self.make_time_off(self.outsider, date(2030, 2, 1), date(2030, 2, 2))

        self.assertTrue(self.service.remove_time_off(self.business.id, mine.id))
        with self.assertRaises(TimeOff.DoesNotExist):
            self.service.remove_time_off(self.business.id, theirs.id)
        self.assertEqual(list(TimeOff.objects.values_list("id", flat=True)), [theirs.id])

    # --- batched context ---

    def test_calendar_context(self):
        bob = self.make_staff(self.business, "Bob", "09:00", "17:00", day_of_week=1)
        self.service.set_staff_working_hours(self.business.id, self.alice.id, [
            {"day_of_week": 2, "start_time": "08:00", "end_time": "12:00"},
        ])
        self.make_time_off(bob, date(2030, 1, 10), date(2030, 1, 12), reason="Trip")
        self.make_time_off(bob, date(2030, 3, 1), date(2030, 3, 2))  # outside range

        context = self.service.get_calendar_context(
            self.business.id, [self.alice.id, bob.id, self.outsider.id], "2030-01-07", "2030-01-13"
        )

        self.assertEqual(set(context), {self.alice.id, bob.id})
        self.assertEqual(context[self.alice.id]["working_hours"][0]["start_time"], "08:00")
        self.assertEqual(context[self.alice.id]["time_off"], [])
        self.assertEqual(context[bob.id]["working_hours"][0]["day_of_week"], 1)
        self.assertEqual(len(context[bob.id]["time_off"]), 1)
        self.assertEqual(context[bob.id]["time_off"][0]["reason"], "Trip")
        self.assertEqual(context[bob.id]["time_off"][0]["start_date"], "2030-01-10")
