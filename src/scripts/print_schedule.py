#!/usr/bin/env python3
"""
Print the seeded facility schedule for a month.

Builds the seed schedule for the month's year, applies the filters, and
prints the calendar grid followed by the visible events.

Usage:
    uv run python src/scripts/print_schedule.py --month 2025-03 --floor 3
    uv run python src/scripts/print_schedule.py --month 2025-07 --hide-cleaning --export
"""

import argparse
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import FLOORS, WEEK_START
from core.ids import SequentialIdGenerator
from models.events import CalendarCell, FilterState
from services.calendar import month_events, month_title, parse_month, project_month
from services.filters import apply_filters
from services.reports import save_schedule_workbook
from services.schedule import count_by_category, generate_seed_events

CELL_WIDTH = 6
WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def format_cell(cell: CalendarCell) -> str:
    """Day number, '*' for today, and event count: '15*(3)'."""
    if not cell.in_month:
        return "".rjust(CELL_WIDTH)
    label = f"{cell.day.day}{'*' if cell.is_today else ''}"
    if cell.events:
        label += f"({len(cell.events)})"
    return label.rjust(CELL_WIDTH)


def format_grid(cells: list[CalendarCell], week_start: int = WEEK_START) -> list[str]:
    """Render grid cells as text lines, one per week."""
    headers = [WEEKDAY_NAMES[(week_start + i) % 7].rjust(CELL_WIDTH) for i in range(7)]
    lines = ["".join(headers)]
    for row in range(0, len(cells), 7):
        lines.append("".join(format_cell(cell) for cell in cells[row:row + 7]))
    return lines


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the seeded facility schedule for a month")
    parser.add_argument("--month", help="Month to print (YYYY-MM); defaults to the current month")
    parser.add_argument("--floor", type=int, choices=FLOORS, help="Only show one floor")
    parser.add_argument("--hide-maintenance", action="store_true", help="Hide maintenance tasks")
    parser.add_argument("--hide-cleaning", action="store_true", help="Hide cleaning tasks")
    parser.add_argument("--hide-events", action="store_true", help="Hide community events")
    parser.add_argument("--export", action="store_true", help="Also save the month as an Excel workbook")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        reference = parse_month(args.month)
    except ValueError:
        print(f"Invalid month '{args.month}', expected YYYY-MM")
        sys.exit(1)

    filters = FilterState(
        show_maintenance=not args.hide_maintenance,
        show_cleaning=not args.hide_cleaning,
        show_events=not args.hide_events,
        floor=args.floor,
    )

    events = generate_seed_events(reference.year, SequentialIdGenerator())
    visible = apply_filters(events, filters)
    cells = project_month(reference, visible, today=date.today())

    print(month_title(reference))
    print("=" * (CELL_WIDTH * 7))
    for line in format_grid(cells):
        print(line)
    print()

    in_month = month_events(reference, visible)
    for event in sorted(in_month, key=lambda e: e.start):
        print(
            f"  {event.start:%a %d %H:%M}  {event.category.value:<11}  "
            f"Floor {event.floor}  {event.room:<20}  {event.title}"
        )
    if not in_month:
        print("  No events match the current filters.")

    print()
    counts = count_by_category(in_month)
    print("  " + ", ".join(f"{name}: {count}" for name, count in counts.items()))

    if args.export:
        save_schedule_workbook(in_month, reference)


if __name__ == "__main__":
    main()
