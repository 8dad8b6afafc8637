from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase

from booking.services.slot_utils import (
    TimeWindow,
    coerce_date,
    date_to_range,
    generate_slots,
    parse_hhmm,
    window_for_day,
)

from .helpers import MONDAY, UTC, at


def starts(grid):
    return [slot.start.strftime("%H:%M") for slot in grid]


class GenerateSlotsTests(SimpleTestCase):
    def test_two_hour_window_thirty_minute_service(self):
        grid = generate_slots(TimeWindow(at(9), at(11)), 30)
        self.assertEqual(starts(grid), ["09:00", "09:30", "10:00", "10:30"])
        for slot in grid:
            self.assertEqual(slot.end - slot.start, timedelta(minutes=30))

    def test_non_aligned_window_keeps_its_own_grid(self):
        grid = generate_slots(TimeWindow(at(9, 15), at(10, 45)), 30)
        # 10:45 would end at 11:15, past the window
        self.assertEqual(starts(grid), ["09:15", "09:45", "10:15"])

    def test_service_longer_than_window_gives_nothing(self):
        grid = generate_slots(TimeWindow(at(9), at(9, 30)), 60)
        self.assertEqual(list(grid), [])
        self.assertEqual(len(grid), 0)

    def test_window_exactly_one_service_long(self):
        grid = list(generate_slots(TimeWindow(at(9), at(10)), 60))
        self.assertEqual(len(grid), 1)
        self.assertEqual(grid[0], TimeWindow(at(9), at(10)))

    def test_duration_not_a_multiple_of_increment(self):
        grid = generate_slots(TimeWindow(at(9), at(11)), 45)
        self.assertEqual(starts(grid), ["09:00", "09:30", "10:00"])
        self.assertTrue(all(TimeWindow(at(9), at(11)).contains(s) for s in grid))

    def test_count_matches_formula(self):
        window = TimeWindow(at(8), at(17, 10))
        for duration in (15, 30, 45, 60, 90, 120, 550, 551):
            with self.subTest(duration=duration):
                grid = generate_slots(window, duration)
                spare = window.minutes - duration
                expected = spare // 30 + 1 if spare >= 0 else 0
                self.assertEqual(len(list(grid)), expected)
                self.assertEqual(len(grid), expected)

    def test_sequence_is_restartable(self):
        grid = generate_slots(TimeWindow(at(9), at(11)), 30)
        self.assertEqual(list(grid), list(grid))

    def test_custom_increment(self):
        grid = generate_slots(TimeWindow(at(9), at(10)), 30, increment_minutes=15)
        self.assertEqual(starts(grid), ["09:00", "09:15", "09:30"])

    def test_rejects_non_positive_duration(self):
        with self.assertRaises(ValueError):
            generate_slots(TimeWindow(at(9), at(10)), 0)


class DaylightSavingSlotsTests(SimpleTestCase):
    NEW_YORK = ZoneInfo("America/New_York")

    def test_fall_back_slots_keep_their_length(self):
        # Clocks go from 02:00 EDT back to 01:00 EST on 2030-11-03
        window = window_for_day(date(2030, 11, 3), "00:30", "03:00", self.NEW_YORK)
        grid = list(generate_slots(window, 60))

        self.assertEqual(window.minutes, 210)
        self.assertEqual(len(grid), 6)
        for slot in grid:
            self.assertEqual(slot.end.astimezone(UTC) - slot.start.astimezone(UTC), timedelta(minutes=60))
            self.assertTrue(window.contains(slot))
        self.assertEqual(grid[0].start, datetime(2030, 11, 3, 4, 30, tzinfo=UTC))
        self.assertEqual(grid[-1].end, datetime(2030, 11, 3, 8, 0, tzinfo=UTC))

    def test_spring_forward_has_no_duplicate_starts(self):
        # Clocks jump from 02:00 EST to 03:00 EDT on 2030-03-10
        window = window_for_day(date(2030, 3, 10), "01:00", "04:00", self.NEW_YORK)
        grid = list(generate_slots(window, 60))

        self.assertEqual([s.start.astimezone(UTC).strftime("%H:%M") for s in grid], ["06:00", "06:30", "07:00"])
        self.assertEqual(len({s.start for s in grid}), len(grid))
        for slot in grid:
            self.assertEqual(slot.end - slot.start, timedelta(minutes=60))


class WindowHelpersTests(SimpleTestCase):
    def test_parse_hhmm(self):
        self.assertEqual(parse_hhmm("09:15"), time(9, 15))
        self.assertEqual(parse_hhmm(time(7, 0)), time(7, 0))
        with self.assertRaises(ValueError):
            parse_hhmm("nine")

    def test_window_for_day_in_utc(self):
        window = window_for_day(MONDAY, "09:00", "17:00", UTC)
        self.assertEqual(window, TimeWindow(at(9), at(17)))
        self.assertEqual(window.minutes, 480)

    def test_window_for_day_uses_local_wall_clock(self):
        tz = ZoneInfo("America/New_York")
        window = window_for_day(MONDAY, time(9, 0), time(10, 0), tz)
        # EST is UTC-5 in January
        self.assertEqual(window.start, at(14))
        self.assertEqual(window.end, at(15))

    def test_date_to_range_spans_one_day(self):
        window = date_to_range(MONDAY, UTC)
        self.assertEqual(window.start, at(0))
        self.assertEqual(window.end - window.start, timedelta(days=1))

    def test_coerce_date(self):
        self.assertEqual(coerce_date("2030-01-07"), MONDAY)
        self.assertEqual(coerce_date("2030-01-07T10:00:00Z"), MONDAY)
        self.assertEqual(coerce_date(at(15)), MONDAY)
        self.assertEqual(coerce_date(date(2030, 1, 7)), MONDAY)
        with self.assertRaises(ValueError):
            coerce_date("07/01/2030")
