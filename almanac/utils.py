from datetime import datetime, date
import re
from loguru import logger
import webcolors
from dateutil.relativedelta import relativedelta

from almanac.settings import USE_24H


def css_color_to_hex(name_or_hex: str) -> str:
    """
    Convert a CSS color name, functional gray(%), or hex code to a 6-digit hex code.

    - Leaves valid hex codes unchanged.
    - Parses CSS4 gray(%) syntax.
    - Custom mapping for grayscale class names gray0–gray15, with aliases for black and white.
    - Falls back to standard CSS color names via webcolors.
    """

    if name_or_hex.startswith("#"):
        return name_or_hex

    lower = name_or_hex.lower().strip()

    m_pct = re.fullmatch(r'gray\(\s*([0-9]+(?:\.[0-9]+)?)%\s*\)', lower)
    if m_pct:
        pct = float(m_pct.group(1))
        level = round(255 * pct / 100)
        return f"#{level:02X}{level:02X}{level:02X}"

    if lower in ('black', 'gray0'):
        return '#000000'
    if lower in ('white', 'gray15'):
        return '#FFFFFF'

    m = re.fullmatch(r'gray([0-9]|1[0-5])', lower)
    if m:
        n = int(m.group(1))
        level = n * 17
        return f"#{level:02X}{level:02X}{level:02X}"

    try:
        return webcolors.name_to_hex(name_or_hex)
    except ValueError:
        logger.error("Unknown CSS color '{}', passing through.", name_or_hex)
        return name_or_hex


def fmt_time(dt):
    """
    Return a HH:MM or h:MM AM/PM string based on USE_24H.
    """
    if USE_24H:
        return dt.strftime("%H:%M")
    else:
        return dt.strftime("%-I:%M %p")


def _parse_month(s: str) -> date:
    return datetime.strptime(s.strip(), "%Y-%m").date()


def parse_month_range(s: str, tzinfo) -> list[tuple[int, int]]:
    """
    Turn a month range expression into (zero-based month, year) pairs.

    Accepts "this month", "next month", "N months", "YYYY-MM",
    "YYYY-MM:YYYY-MM", "YYYY-MM/YYYY-MM" and "YYYY-MM to YYYY-MM".
    """
    s     = s.strip().strip('"').strip("'").lower()
    first = datetime.now(tz=tzinfo).date().replace(day=1)

    if s in ("month", "this month", "today"):
        start = end = first
    elif s == "next month":
        start = end = first + relativedelta(months=1)

    # —— aligned “N months” ——
    elif (m := re.fullmatch(r'(?P<num>\d+)\s*months?', s)):
        num = int(m.group("num"))
        if num < 1:
            raise ValueError(f"Month count must be positive: '{s}'")
        start = first
        end   = first + relativedelta(months=num - 1)

    elif re.search(r"[:/]", s):
        sep   = ":" if ":" in s else "/"
        a, b  = s.split(sep, 1)
        start = _parse_month(a)
        end   = _parse_month(b)
    elif " to " in s:
        a, b  = re.split(r"\s+to\s+", s)
        start = _parse_month(a)
        end   = _parse_month(b)
    else:
        start = end = _parse_month(s)

    if start > end:
        raise ValueError(f"Start month {start:%Y-%m} after end month {end:%Y-%m}")

    months = []
    current = start
    while current <= end:
        months.append((current.month - 1, current.year))
        current += relativedelta(months=1)
    return months
