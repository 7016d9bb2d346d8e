import re
from datetime import date, datetime, time

import yaml
from dateutil import parser as date_parser
from loguru import logger

from almanac.models import CalendarEvent
from almanac.utils import css_color_to_hex

_DATE_ONLY = re.compile(r"\d{4}-\d{2}-\d{2}")


def _to_datetime(raw, field: str, name: str) -> tuple[datetime, bool]:
    """
    Coerce a YAML value to a naive datetime. Returns (value, date_only).
    YAML already turns unquoted timestamps into date/datetime objects;
    strings are read as ISO-8601. An offset is dropped and the wall-clock
    time kept, so every event compares against every other.
    """
    if isinstance(raw, datetime):
        return raw.replace(tzinfo=None), False
    if isinstance(raw, date):
        return datetime.combine(raw, time.min), True
    if isinstance(raw, str):
        s = raw.strip()
        try:
            parsed = date_parser.isoparse(s)
        except ValueError:
            logger.error("Event {!r}: cannot parse {} from {!r}", name, field, raw)
            raise ValueError(f"Invalid {field} for event '{name}': '{raw}'")
        return parsed.replace(tzinfo=None), bool(_DATE_ONLY.fullmatch(s))
    logger.error("Event {!r}: missing or unsupported {} value {!r}", name, field, raw)
    raise ValueError(f"Invalid {field} for event '{name}': {raw!r}")


def parse_event(entry: dict) -> CalendarEvent:
    """Validate one `events:` entry. Date-only starts default to full-day events."""
    name = str(entry.get("name") or "").strip()
    if not name:
        logger.error("Event without a name: {!r}", entry)
        raise ValueError("Event name must not be empty")

    start, date_only = _to_datetime(entry.get("start"), "start", name)
    if entry.get("end") is None:
        end = start
    else:
        end, _ = _to_datetime(entry["end"], "end", name)

    if end < start:
        logger.error("Event {!r} ends ({}) before it starts ({})", name, end, start)
        raise ValueError(f"Event '{name}' ends before it starts")

    full_day = entry.get("full_day", date_only)
    if not isinstance(full_day, bool):
        logger.error("Event {!r}: full_day must be true or false, got {!r}", name, full_day)
        raise ValueError(f"Invalid full_day for event '{name}': {full_day!r}")

    return CalendarEvent(
        name=name,
        start=start,
        end=end,
        full_day=full_day,
        type=entry.get("type"),
    )


def load_config(path: str = "config.yaml") -> dict:
    """Load events and type colors, validating events and normalizing colors."""
    with open(path, 'r', encoding='utf-8') as f:
        logger.debug("Loading configuration from {}", path)
        config = yaml.safe_load(f) or {}

    types = {
        str(tag): css_color_to_hex(str(color))
        for tag, color in (config.get("types") or {}).items()
    }
    events = [parse_event(entry) for entry in config.get("events") or []]
    logger.debug("Loaded {} events, {} event types", len(events), len(types))
    return {"events": events, "types": types}
