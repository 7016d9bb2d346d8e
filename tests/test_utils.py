import unittest
from datetime import datetime

from dateutil import tz

from almanac.utils import css_color_to_hex, fmt_time, parse_month_range

UTC = tz.tzutc()


class TestParseMonthRange(unittest.TestCase):
    def test_single_month(self) -> None:
        self.assertEqual(parse_month_range("2024-09", UTC), [(8, 2024)])

    def test_explicit_range_across_years(self) -> None:
        expected = [(10, 2024), (11, 2024), (0, 2025), (1, 2025)]
        self.assertEqual(parse_month_range("2024-11:2025-02", UTC), expected)
        self.assertEqual(parse_month_range("2024-11/2025-02", UTC), expected)
        self.assertEqual(parse_month_range("2024-11 to 2025-02", UTC), expected)

    def test_relative(self) -> None:
        now = datetime.now(tz=UTC)
        months = parse_month_range("3 months", UTC)
        self.assertEqual(len(months), 3)
        self.assertEqual(months[0], (now.month - 1, now.year))
        self.assertEqual(parse_month_range("this month", UTC), months[:1])
        self.assertEqual(parse_month_range("next month", UTC), months[1:2])

    def test_quoted(self) -> None:
        self.assertEqual(parse_month_range('"2024-09"', UTC), [(8, 2024)])

    def test_invalid(self) -> None:
        for raw in ("2025-01:2024-11", "0 months", "september", "2024-13"):
            with self.subTest(raw=raw), self.assertRaises(ValueError):
                parse_month_range(raw, UTC)


class TestColors(unittest.TestCase):
    def test_hex_passthrough(self) -> None:
        self.assertEqual(css_color_to_hex("#123456"), "#123456")

    def test_gray_scales(self) -> None:
        self.assertEqual(css_color_to_hex("gray0"), "#000000")
        self.assertEqual(css_color_to_hex("gray15"), "#FFFFFF")
        self.assertEqual(css_color_to_hex("gray(50%)"), "#808080")

    def test_named(self) -> None:
        self.assertEqual(css_color_to_hex("red").lower(), "#ff0000")


class TestFmtTime(unittest.TestCase):
    def test_24h_default(self) -> None:
        self.assertEqual(fmt_time(datetime(2024, 9, 10, 9, 5)), "09:05")


if __name__ == "__main__":
    unittest.main(verbosity=2)
