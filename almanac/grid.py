import calendar
from datetime import date, datetime, timedelta

import almanac.settings as settings


def day_id(value) -> date:
    """
    Civil day of a date or datetime. The datetime's own wall-clock fields are
    used as-is, so 00:00 and 23:59 on the same day map to the same key.
    """
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start, end) -> list[date]:
    """Every day from start to end, inclusive. Empty when end falls before start."""
    first, last = day_id(start), day_id(end)
    return [first + timedelta(days=i) for i in range((last - first).days + 1)]


def start_of_week(d: date, week_start: int = None) -> date:
    if week_start is None:
        week_start = settings.WEEK_START
    offset = (d.weekday() - week_start) % 7
    return d - timedelta(days=offset)


def end_of_week(d: date, week_start: int = None) -> date:
    return start_of_week(d, week_start) + timedelta(days=6)


def normalize_month(month: int, year: int) -> tuple[int, int]:
    """
    Carry a zero-based month into the year: (12, 2024) -> (0, 2025),
    (-1, 2024) -> (11, 2023).
    """
    carry, month = divmod(month, 12)
    return month, year + carry


def month_days(month: int, year: int, week_start: int = None) -> list[date]:
    """
    Days shown for a zero-based month: from the week start on/before the 1st
    through the week end on/after the last day. Always a multiple of 7.
    """
    if week_start is None:
        week_start = settings.WEEK_START
    month, year = normalize_month(month, year)
    first = date(year, month + 1, 1)
    last = first.replace(day=calendar.monthrange(year, month + 1)[1])
    return days_between(start_of_week(first, week_start), end_of_week(last, week_start))


def week_rows(days: list[date]) -> list[list[date]]:
    return [days[i:i + 7] for i in range(0, len(days), 7)]


def weekday_labels(week_start: int = None) -> list[str]:
    if week_start is None:
        week_start = settings.WEEK_START
    return [calendar.day_abbr[(week_start + i) % 7] for i in range(7)]
