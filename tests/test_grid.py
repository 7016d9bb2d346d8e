import calendar
import unittest
from datetime import date, datetime

from almanac.grid import (
    day_id,
    days_between,
    end_of_week,
    month_days,
    normalize_month,
    start_of_week,
    week_rows,
    weekday_labels,
)

SUNDAY = calendar.SUNDAY
MONDAY = calendar.MONDAY


class TestDayId(unittest.TestCase):
    def test_time_of_day_is_ignored(self) -> None:
        self.assertEqual(day_id(datetime(2024, 9, 10, 0, 0)), day_id(datetime(2024, 9, 10, 23, 59)))

    def test_date_passes_through(self) -> None:
        self.assertEqual(day_id(date(2024, 9, 10)), date(2024, 9, 10))

    def test_days_between_is_inclusive(self) -> None:
        days = days_between(datetime(2024, 9, 30, 18), datetime(2024, 10, 2, 8))
        self.assertEqual(days, [date(2024, 9, 30), date(2024, 10, 1), date(2024, 10, 2)])

    def test_days_between_same_day(self) -> None:
        self.assertEqual(days_between(datetime(2024, 9, 3, 9), datetime(2024, 9, 3, 10)), [date(2024, 9, 3)])

    def test_days_between_reversed_is_empty(self) -> None:
        self.assertEqual(days_between(date(2024, 9, 5), date(2024, 9, 4)), [])


class TestWeekBounds(unittest.TestCase):
    def test_sunday_start(self) -> None:
        wednesday = date(2024, 9, 11)
        self.assertEqual(start_of_week(wednesday, SUNDAY), date(2024, 9, 8))
        self.assertEqual(end_of_week(wednesday, SUNDAY), date(2024, 9, 14))

    def test_monday_start(self) -> None:
        sunday = date(2024, 9, 8)
        self.assertEqual(start_of_week(sunday, MONDAY), date(2024, 9, 2))
        self.assertEqual(end_of_week(sunday, MONDAY), date(2024, 9, 8))

    def test_weekday_labels_follow_week_start(self) -> None:
        self.assertEqual(weekday_labels(SUNDAY)[0], calendar.day_abbr[SUNDAY])
        self.assertEqual(weekday_labels(MONDAY)[-1], calendar.day_abbr[SUNDAY])
        self.assertEqual(len(weekday_labels(SUNDAY)), 7)


class TestNormalizeMonth(unittest.TestCase):
    def test_carry_over(self) -> None:
        self.assertEqual(normalize_month(12, 2024), (0, 2025))
        self.assertEqual(normalize_month(25, 2024), (1, 2026))

    def test_carry_under(self) -> None:
        self.assertEqual(normalize_month(-1, 2024), (11, 2023))
        self.assertEqual(normalize_month(-13, 2024), (11, 2022))

    def test_in_range_untouched(self) -> None:
        self.assertEqual(normalize_month(8, 2024), (8, 2024))


class TestMonthDays(unittest.TestCase):
    def test_september_2024(self) -> None:
        days = month_days(8, 2024, SUNDAY)
        self.assertEqual(days[0], date(2024, 9, 1))
        self.assertEqual(days[-1], date(2024, 10, 5))
        self.assertEqual(len(days), 35)

    def test_exact_four_weeks(self) -> None:
        # February 2015 starts on a Sunday and ends on a Saturday
        days = month_days(1, 2015, SUNDAY)
        self.assertEqual(len(days), 28)
        self.assertEqual(days[0], date(2015, 2, 1))

    def test_monday_start_pads_from_previous_month(self) -> None:
        days = month_days(8, 2024, MONDAY)
        self.assertEqual(days[0], date(2024, 8, 26))
        self.assertEqual(days[-1], date(2024, 10, 6))

    def test_normalized_month(self) -> None:
        self.assertEqual(month_days(12, 2024, SUNDAY), month_days(0, 2025, SUNDAY))
        self.assertEqual(month_days(-1, 2024, SUNDAY), month_days(11, 2023, SUNDAY))

    def test_every_month_is_whole_weeks_without_gaps(self) -> None:
        for week_start in (MONDAY, SUNDAY):
            for year in range(2020, 2027):
                for month in range(12):
                    days = month_days(month, year, week_start)
                    self.assertEqual(len(days) % 7, 0)
                    self.assertEqual(days[0].weekday(), week_start)
                    self.assertLessEqual(days[0], date(year, month + 1, 1))
                    last = calendar.monthrange(year, month + 1)[1]
                    self.assertGreaterEqual(days[-1], date(year, month + 1, last))
                    for a, b in zip(days, days[1:]):
                        self.assertEqual((b - a).days, 1)

    def test_week_rows(self) -> None:
        rows = week_rows(month_days(8, 2024, SUNDAY))
        self.assertEqual(len(rows), 5)
        self.assertTrue(all(len(row) == 7 for row in rows))
        self.assertEqual(rows[1][0], date(2024, 9, 8))


if __name__ == "__main__":
    unittest.main(verbosity=2)
