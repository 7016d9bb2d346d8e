"""Data passed between the day index, the lane engine and the renderer."""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


# eq=False keeps identity hashing: two events with the same fields are
# still two lane holders.
@dataclass(frozen=True, eq=False)
class CalendarEvent:
    """An event as supplied by the caller. `end` is inclusive of its day."""
    name: str
    start: datetime
    end: datetime
    full_day: bool = False
    type: Optional[str] = None


@dataclass
class EventRun:
    """One visible appearance of a full-day event inside a single week row."""
    event: CalendarEvent
    lane: int
    span: int
    overflow_left: bool
    overflow_right: bool
    start_day: date
    end_day: date


@dataclass
class TimedEntry:
    event: CalendarEvent
    time_label: str


@dataclass
class DayCell:
    day: date
    in_month: bool
    runs: list[EventRun] = field(default_factory=list)
    timed: list[TimedEntry] = field(default_factory=list)
    lane_events: list[CalendarEvent] = field(default_factory=list)
    depth: int = 0


@dataclass
class MonthLayout:
    month: int  # zero-based
    year: int
    weekdays: list[str]
    weeks: list[list[DayCell]]

    def cells(self):
        for week in self.weeks:
            yield from week
