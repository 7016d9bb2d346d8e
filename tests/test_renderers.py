import tempfile
import unittest
from datetime import datetime, timedelta
from pathlib import Path

from almanac.event_processing import layout_month
from almanac.fonts import init_fonts
from almanac.models import CalendarEvent
from almanac.renderers import render_month_pdf


class TestRenderMonthPdf(unittest.TestCase):
    def test_renders_crowded_month(self) -> None:
        events = [
            CalendarEvent(f"Trip {i}", datetime(2024, 9, 3 + i), datetime(2024, 9, 12 + i), full_day=True, type="travel")
            for i in range(6)
        ]
        events += [
            CalendarEvent(f"Meeting {h}", datetime(2024, 9, 17, h), datetime(2024, 9, 17, h) + timedelta(hours=1))
            for h in range(8, 18)
        ]
        events.append(CalendarEvent("Overnight", datetime(2024, 9, 28), datetime(2024, 10, 1), full_day=True))
        month = layout_month(events, 8, 2024, 6)

        with tempfile.TemporaryDirectory() as tmp:
            faces = init_fonts(Path(tmp))
            out = Path(tmp) / "month.pdf"
            render_month_pdf(month, str(out), faces, {"travel": "#336699"})
            self.assertTrue(out.read_bytes().startswith(b"%PDF"))

    def test_fonts_fall_back_to_builtin(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            faces = init_fonts(Path(tmp))
        self.assertEqual(set(faces), {"regular", "semibold", "bold", "light"})


if __name__ == "__main__":
    unittest.main(verbosity=2)
