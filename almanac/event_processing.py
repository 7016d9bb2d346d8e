from datetime import date
from collections import defaultdict

from loguru import logger

import almanac.settings as settings
from almanac.grid import (
    day_id,
    days_between,
    month_days,
    normalize_month,
    week_rows,
    weekday_labels,
)
from almanac.logger import EVENTS
from almanac.models import CalendarEvent, DayCell, EventRun, MonthLayout, TimedEntry
from almanac.utils import fmt_time


def build_day_index(events: list[CalendarEvent]) -> dict[date, list[CalendarEvent]]:
    """
    Map every civil day to the events occupying it, earliest start first.

    Sorting happens before indexing so each per-day list is already in
    chronological order; ties keep their input order. The input list is
    left untouched.
    """
    index = defaultdict(list)
    for event in sorted(events, key=lambda e: e.start):
        days = days_between(event.start, event.end)
        if not days:
            logger.log(EVENTS, "Event '{}' ends before it starts, not indexed.", event.name)
        for day in days:
            index[day].append(event)
    logger.log(EVENTS, "Indexed {} events over {} days.", len(events), len(index))
    return dict(index)


def events_for_day(index: dict[date, list[CalendarEvent]], day: date) -> list[CalendarEvent]:
    return index.get(day, [])


def available_lane(lanes: dict[CalendarEvent, int]) -> int:
    """
    Lowest lane not held in `lanes`. Below the highest held lane the first gap
    wins; with no gap the next lane above it is opened.
    """
    if not lanes:
        return 0
    taken = set(lanes.values())
    highest = max(taken)
    for lane in range(highest):
        if lane not in taken:
            return lane
    return highest + 1


def starts_run(event: CalendarEvent, day: date, week: list[date]) -> bool:
    """A full-day bar is drawn from its own start day, and again from the first day of every later row it reaches."""
    return event.full_day and (day == day_id(event.start) or day == week[0])


def compute_run(event: CalendarEvent, day: date, week: list[date], lane: int) -> EventRun:
    """Span and clipping of the bar that begins on `day` within `week`."""
    start_day = day_id(event.start)
    end_day = day_id(event.end)
    effective_end = min(end_day, week[-1])
    return EventRun(
        event=event,
        lane=lane,
        span=(effective_end - day).days + 1,
        overflow_left=day == week[0] and day != start_day,
        overflow_right=effective_end != end_day,
        start_day=day,
        end_day=effective_end,
    )


def layout_week(
    week: list[date],
    index: dict[date, list[CalendarEvent]],
    month: int = None,
) -> list[DayCell]:
    """
    Lay out one week row, left to right.

    Lanes live only for this row. An event ending today keeps its lane until
    every event of today has been placed, so a bar starting on the same day
    never lands on top of it.
    """
    lanes = {}
    cells = []
    for day in week:
        cell = DayCell(day=day, in_month=month is None or day.month == month + 1)
        finished = []
        for event in events_for_day(index, day):
            if not event.full_day:
                cell.timed.append(TimedEntry(event=event, time_label=fmt_time(event.start)))
                continue
            if starts_run(event, day, week):
                lane = available_lane(lanes)
                lanes[event] = lane
                run = compute_run(event, day, week, lane)
                cell.runs.append(run)
                logger.log(
                    EVENTS,
                    "{}: '{}' -> lane {} (span {}, overflow {}/{})",
                    day, event.name, lane, run.span, run.overflow_left, run.overflow_right,
                )
            cell.lane_events.append(event)
            if day == day_id(event.end):
                finished.append(event)

        cell.depth = max(lanes.values()) + 1 if lanes else 0

        for event in finished:
            lanes.pop(event, None)
            logger.log(EVENTS, "{}: released lane of '{}'", day, event.name)
        cells.append(cell)
    return cells


def layout_month(
    events: list[CalendarEvent],
    month: int,
    year: int,
    week_start: int = None,
) -> MonthLayout:
    """
    Full layout pass for a zero-based month. Everything is rebuilt from the
    event list on every call, so repeating a call yields the same result.
    """
    if week_start is None:
        week_start = settings.WEEK_START
    month, year = normalize_month(month, year)
    index = build_day_index(events)
    weeks = [
        layout_week(week, index, month)
        for week in week_rows(month_days(month, year, week_start))
    ]
    logger.debug("Laid out {}-{:02d}: {} weeks, {} events", year, month + 1, len(weeks), len(events))
    return MonthLayout(
        month=month,
        year=year,
        weekdays=weekday_labels(week_start),
        weeks=weeks,
    )
