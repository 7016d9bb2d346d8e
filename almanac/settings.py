import os
import calendar
from dateutil import tz
from pathlib import Path
from loguru import logger

_WEEKDAY_NAMES = {
    name.lower(): idx for idx, name in enumerate(calendar.day_name)
}


def _parse_week_start(raw: str) -> int:
    """
    Parse a week-start setting into a calendar weekday (0=Monday … 6=Sunday).
      - Accepts full or abbreviated English day names ("sunday", "sun", "Mon").
      - Accepts a bare integer 0–6 using the same convention as the calendar module.
    """
    s = raw.strip().lower()
    if not s:
        logger.error("Empty week start setting.")
        raise ValueError("Empty week start")
    if s.isdigit():
        day = int(s)
        if not (0 <= day < 7):
            logger.error("Week start out of range [0–6]: {!r}", raw)
            raise ValueError(f"Week start out of range: '{raw}'")
        return day
    for name, idx in _WEEKDAY_NAMES.items():
        if name == s or (len(s) >= 2 and name.startswith(s)):
            return idx
    logger.error("Cannot parse week start from {!r}", raw)
    raise ValueError(f"Invalid week start: '{raw}'")


# Project root
BASE_DIR = Path(__file__).resolve().parent.parent

# File paths
CONFIG_PATH  = Path(os.getenv("APP_CONFIG_PATH", str(BASE_DIR / "config.yaml")))
OUTPUT_PDF   = os.getenv("APP_OUTPUT_PDF_PATH", "output/almanac.pdf")
OUTPUT_PNG   = os.getenv("APP_OUTPUT_PNG_DIR", "output/png")
FONTS_DIR = BASE_DIR / "fonts"

TIMEZONE = os.getenv("TZ", "UTC")
MONTH_RANGE = os.getenv("TIME_MONTH_RANGE", "this month")
TIME_FORMAT    = os.getenv("TIME_FORMAT", "24")
USE_24H        = TIME_FORMAT == "24"

_raw_week_start = os.getenv("TIME_WEEK_START", "sunday")

# Only used to decide what "this month" means; events are never converted.
TZ_LOCAL = tz.gettz(TIMEZONE) or tz.tzutc()
WEEK_START = _parse_week_start(_raw_week_start)

FORMAT       = os.getenv("APP_OUTPUT_FORMAT", "pdf").lower()

# Color defaults
EVENT_FILL      = os.getenv("DOC_EVENT_FILL_COLOR", "gray14")
EVENT_STROKE    = os.getenv("DOC_EVENT_BORDER_COLOR", "gray(20%)")
GRIDLINE_COLOR  = os.getenv("DOC_GRID_LINE_COLOR", "gray(20%)")
PADDING_DAY_COLOR = os.getenv("DOC_PADDING_DAY_COLOR", "gray(60%)")
FOOTER_COLOR    = os.getenv("DOC_FOOTER_COLOR", "gray(60%)")
DEFAULT_TYPE_COLOR = os.getenv("DOC_DEFAULT_TYPE_COLOR", "gray8")

# Page layout
PDF_MARGIN_LEFT   = float(os.getenv("DOC_MARGIN_LEFT", 12))
PDF_MARGIN_RIGHT  = float(os.getenv("DOC_MARGIN_RIGHT", 12))
PDF_MARGIN_TOP    = float(os.getenv("DOC_MARGIN_TOP", 12))
PDF_MARGIN_BOTTOM = float(os.getenv("DOC_MARGIN_BOTTOM", 9))
PDF_PAGE_SIZE = os.getenv("DOC_PAGE_DIMENSIONS", "1872x1404")  # reMarkable 2, landscape
PDF_DPI = float(os.getenv("DOC_PAGE_DPI", "226"))
LANE_HEIGHT = float(os.getenv("DOC_LANE_HEIGHT", 9))
MAX_LANES = int(os.getenv("DOC_MAX_LANES", 4))
FOOTER = os.getenv("DOC_FOOTER_TEXT", "A L M A N A C")
