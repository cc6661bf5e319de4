"""
Calendar visibility filters.
"""

from models.events import CalendarEvent, Category, FilterState


def category_enabled(category: Category, filters: FilterState) -> bool:
    """Check the show-flag that corresponds to a category."""
    flags = {
        Category.MAINTENANCE: filters.show_maintenance,
        Category.CLEANING: filters.show_cleaning,
        Category.EVENT: filters.show_events,
    }
    return flags[Category(category)]


def is_visible(event: CalendarEvent, filters: FilterState) -> bool:
    """Event is visible if its category is shown and it is on the filtered floor (if any)."""
    if not category_enabled(event.category, filters):
        return False
    return filters.floor is None or event.floor == filters.floor


def apply_filters(events: list[CalendarEvent], filters: FilterState) -> list[CalendarEvent]:
    """Visible events, keeping their relative order."""
    return [event for event in events if is_visible(event, filters)]
