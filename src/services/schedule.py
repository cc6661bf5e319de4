"""
Schedule seed generator.

Builds the initial set of recurring and fixed facility events for a year from
hardcoded rules. Recurring events are materialized once here; nothing is
re-evaluated later.
"""

from collections import Counter
from datetime import date, datetime, time, timedelta

from core.config import DEFAULT_START_HOUR
from core.ids import IdGenerator
from models.events import CalendarEvent, Category


# =============================================================================
# RULES
# =============================================================================

SEMIANNUAL_INSPECTION = {
    "title": "Backflow Inspection",
    "category": Category.MAINTENANCE,
    "floor": 1,
    "room": "Garage/Main Line",
    "description": "Semiannual backflow preventer test on the main water line.",
    "dates": [(1, 15), (7, 15)],
    "hours": 2,
}

MONTHLY_MAINTENANCE = [
    {
        "title": "Fire Extinguisher Check",
        "category": Category.MAINTENANCE,
        "floor": 1,
        "room": "All Stairwells",
        "description": "Monthly visual inspection and tag of every extinguisher.",
        "day": 1,
        "hours": 2,
    },
    {
        "title": "Emergency Generator Test",
        "category": Category.MAINTENANCE,
        "floor": 1,
        "room": "Generator Room",
        "description": "Monthly load test of the emergency generator.",
        "day": 10,
        "hours": 1,
    },
]

WEEKLY_INSPECTION = {
    "title": "Elevator Safety Inspection",
    "category": Category.MAINTENANCE,
    "floor": 1,
    "room": "Elevator Bank",
    "description": "Weekly walkthrough of cabs, doors and machine room.",
    "weeks": 52,
    "hours": 1,
}

QUARTERLY_MAINTENANCE = {
    "title": "HVAC Filter Replacement",
    "category": Category.MAINTENANCE,
    "floor": 6,
    "room": "Mechanical Penthouse",
    "description": "Replace air handler filters on all units.",
    "months": [1, 4, 7, 10],
    "day": 5,
    "hours": 4,
}

# Floor rotates through the building month by month
MONTHLY_CLEANING = {
    "title": "Carpet Deep Clean",
    "category": Category.CLEANING,
    "room": "Common Areas",
    "description": "Hot-water extraction of hallway and lounge carpets.",
    "day": 20,
    "hours": 3,
}

# (month, day, hour, hours, title, category, floor, room)
ANNUAL_EVENTS = [
    (1, 2, 8, 4, "New Year Post-Event Cleanup", Category.CLEANING, 1, "Lobby"),
    (2, 14, 18, 3, "Valentine's Community Dinner", Category.EVENT, 2, "Ballroom"),
    (3, 20, 8, 6, "Spring Window Washing", Category.CLEANING, 6, "Exterior Facade"),
    (4, 15, 18, 4, "Spring Gala", Category.EVENT, 2, "Ballroom"),
    (5, 25, 9, 3, "Memorial Day Grounds Prep", Category.MAINTENANCE, 1, "Courtyard"),
    (7, 3, 17, 4, "Independence Day Rooftop Party", Category.EVENT, 6, "Rooftop Terrace"),
    (7, 5, 8, 3, "Post-Holiday Rooftop Cleanup", Category.CLEANING, 6, "Rooftop Terrace"),
    (9, 1, 9, 4, "Sprinkler System Annual Test", Category.MAINTENANCE, 1, "Garage/Main Line"),
    (10, 1, 7, 3, "Boiler Startup for Heating Season", Category.MAINTENANCE, 1, "Mechanical Room"),
    (10, 31, 16, 4, "Fall Festival", Category.EVENT, 3, "Community Hall"),
    (11, 26, 8, 5, "Thanksgiving Kitchen Deep Clean", Category.CLEANING, 3, "Kitchen"),
    (12, 15, 18, 4, "Holiday Party", Category.EVENT, 2, "Ballroom"),
]


# =============================================================================
# GENERATION
# =============================================================================


def _make_event(
    id_generator: IdGenerator,
    day: date,
    hour: int,
    hours: int,
    title: str,
    category: Category,
    floor: int,
    room: str,
    description: str | None = None,
) -> CalendarEvent:
    start = datetime.combine(day, time(hour=hour))
    return CalendarEvent(
        id=id_generator.new_id(),
        title=title,
        start=start,
        end=start + timedelta(hours=hours),
        category=category,
        floor=floor,
        room=room,
        description=description,
    )


def _from_rule(id_generator: IdGenerator, rule: dict, day: date, hour: int, **overrides) -> CalendarEvent:
    fields = {
        "title": rule["title"],
        "category": rule["category"],
        "floor": rule.get("floor"),
        "room": rule["room"],
        "description": rule.get("description"),
        **overrides,
    }
    return _make_event(id_generator, day, hour, rule["hours"], **fields)


def weekly_dates(year: int, weeks: int = WEEKLY_INSPECTION["weeks"]) -> list[date]:
    """
    Dates for the weekly inspection: year start + i weeks.

    Each date is an independent offset from January 1st.
    """
    year_start = date(year, 1, 1)
    return [year_start + timedelta(weeks=i) for i in range(weeks)]


def generate_seed_events(
    year: int, id_generator: IdGenerator, start_hour: int = DEFAULT_START_HOUR
) -> list[CalendarEvent]:
    """
    Generate the seeded facility schedule for a year.

    Order: semiannual, monthly maintenance, weekly, quarterly,
    monthly cleaning, annual one-offs.
    """
    events = []

    for month, day in SEMIANNUAL_INSPECTION["dates"]:
        events.append(
            _from_rule(id_generator, SEMIANNUAL_INSPECTION, date(year, month, day), start_hour)
        )

    for rule in MONTHLY_MAINTENANCE:
        for month in range(1, 13):
            events.append(_from_rule(id_generator, rule, date(year, month, rule["day"]), start_hour))

    for day in weekly_dates(year):
        events.append(_from_rule(id_generator, WEEKLY_INSPECTION, day, start_hour))

    for month in QUARTERLY_MAINTENANCE["months"]:
        events.append(
            _from_rule(
                id_generator,
                QUARTERLY_MAINTENANCE,
                date(year, month, QUARTERLY_MAINTENANCE["day"]),
                start_hour,
            )
        )

    for month in range(1, 13):
        events.append(
            _from_rule(
                id_generator,
                MONTHLY_CLEANING,
                date(year, month, MONTHLY_CLEANING["day"]),
                start_hour,
                floor=(month - 1) % 6 + 1,
            )
        )

    for month, day, hour, hours, title, category, floor, room in ANNUAL_EVENTS:
        events.append(
            _make_event(id_generator, date(year, month, day), hour, hours, title, category, floor, room)
        )

    return events


def count_by_category(events: list[CalendarEvent]) -> dict[str, int]:
    """Count events per category, in category declaration order."""
    counts = Counter(event.category for event in events)
    return {category.value: counts.get(category, 0) for category in Category}
