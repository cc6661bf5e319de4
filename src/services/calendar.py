"""
Month grid projection and day bucketing for the calendar view.
"""

import calendar
from datetime import date, datetime

from core.config import WEEK_START
from models.events import CalendarCell, CalendarEvent

# Grids and month navigation reach one month and one week past the reference
MIN_YEAR = 2
MAX_YEAR = 9998


def parse_month(month_str: str | None) -> date:
    """
    Parse 'YYYY-MM' into the first day of that month.

    Returns the current month if month_str is None. Raises ValueError for
    years whose grid would fall outside the date range.
    """
    if not month_str:
        return date.today().replace(day=1)
    reference = datetime.strptime(month_str, "%Y-%m").date()
    if not MIN_YEAR <= reference.year <= MAX_YEAR:
        raise ValueError(f"Year {reference.year} is outside {MIN_YEAR}-{MAX_YEAR}")
    return reference


def shift_month(reference: date, delta: int) -> date:
    """First day of the month `delta` months away from reference."""
    index = reference.year * 12 + (reference.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def month_title(reference: date) -> str:
    """Format month as 'March 2025'."""
    return reference.strftime("%B %Y")


def grid_dates(reference: date, week_start: int = WEEK_START) -> list[date]:
    """
    Every date shown for the reference month, padded to whole weeks.

    Starts on the week-start boundary on or before the 1st and ends on the
    week-end boundary on or after the last day of the month.
    """
    weeks = calendar.Calendar(firstweekday=week_start).monthdatescalendar(
        reference.year, reference.month
    )
    return [day for week in weeks for day in week]


def events_on(day: date, events: list[CalendarEvent]) -> list[CalendarEvent]:
    """All events starting on day, in collection order."""
    return [event for event in events if event.start.date() == day]


def project_month(
    reference: date,
    events: list[CalendarEvent],
    today: date | None = None,
    week_start: int = WEEK_START,
) -> list[CalendarCell]:
    """
    Build the calendar grid for the month containing reference.

    Does not modify events; calling again with the same inputs gives an
    identical grid.
    """
    today = today or date.today()
    days = grid_dates(reference, week_start)

    buckets: dict[date, list[CalendarEvent]] = {day: [] for day in days}
    for event in events:
        bucket = buckets.get(event.start.date())
        if bucket is not None:
            bucket.append(event)

    return [
        CalendarCell(
            day=day,
            in_month=day.month == reference.month and day.year == reference.year,
            is_today=day == today,
            events=buckets[day],
        )
        for day in days
    ]


def month_events(reference: date, events: list[CalendarEvent]) -> list[CalendarEvent]:
    """Events starting within the reference month, in collection order."""
    return [
        event
        for event in events
        if event.start.year == reference.year and event.start.month == reference.month
    ]
