"""
Event and request validation.
"""

from datetime import datetime

from core.config import CATEGORIES, FLOORS


def validate_floor(floor) -> list[str]:
    """Check floor is one of the building's floors."""
    if floor not in FLOORS:
        return [f"Floor must be between {FLOORS[0]} and {FLOORS[-1]}, got {floor!r}"]
    return []


def validate_category(category) -> list[str]:
    value = getattr(category, "value", category)
    if value not in CATEGORIES:
        return [f"Invalid category '{value}'"]
    return []


def validate_event_fields(
    title: str, start: datetime, end: datetime, category, floor: int, room: str
) -> list[str]:
    """
    Validate calendar event fields and return a list of error messages.

    Checks:
    1. Title and room are present
    2. Category and floor are valid
    3. Start is not after end
    """
    errors = []

    if not title or not title.strip():
        errors.append("Missing title")
    if not room or not room.strip():
        errors.append("Missing room")

    errors.extend(validate_category(category))
    errors.extend(validate_floor(floor))

    if start > end:
        errors.append(f"Start {start.isoformat()} is after end {end.isoformat()}")

    return errors


def validate_request_fields(title: str, category, floor: int, room: str) -> list[str]:
    """Validate guest request fields and return a list of error messages."""
    errors = []
    if not title or not title.strip():
        errors.append("Missing title")
    if not room or not room.strip():
        errors.append("Missing room")
    errors.extend(validate_category(category))
    errors.extend(validate_floor(floor))
    return errors


def raise_if_errors(errors: list[str]) -> None:
    """Raise ValueError with one message per line when any errors are present."""
    if errors:
        raise ValueError("\n".join(errors))
