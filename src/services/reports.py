"""
Monthly schedule export to Excel.
"""

from datetime import date, datetime
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from core.config import FLOORS, OUTPUT_DIR
from models.events import CalendarEvent, Category

SCHEDULE_HEADERS = ["Date", "Start", "End", "Title", "Category", "Floor", "Room", "Description"]
SCHEDULE_COLUMN_WIDTHS = [12, 8, 8, 36, 14, 7, 22, 50]


def format_date_display(d: date) -> str:
    """Format date as M/D/YYYY (platform-safe, no zero-padding)."""
    return f"{d.month}/{d.day}/{d.year}"


def format_time_display(dt: datetime) -> str:
    """Format time as HH:MM."""
    return dt.strftime("%H:%M")


def write_schedule_sheet(ws, events: list[CalendarEvent]):
    """
    Write one row per event, ordered by start time.

    Headers: Date, Start, End, Title, Category, Floor, Room, Description
    """
    for col_idx, header in enumerate(SCHEDULE_HEADERS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    for col_idx, width in enumerate(SCHEDULE_COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width

    for row_idx, event in enumerate(sorted(events, key=lambda e: e.start), start=2):
        row_data = [
            format_date_display(event.start.date()),
            format_time_display(event.start),
            format_time_display(event.end),
            event.title,
            Category(event.category).value,
            event.floor,
            event.room,
            event.description or "",
        ]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)


def write_summary_sheet(ws, events: list[CalendarEvent]):
    """
    Write a category x floor count matrix with totals.

    Row 1: Headers - Category | Floor 1 ... Floor 6 | Total
    Rows 2-4: one per category, Total = SUM across floors
    Row 5: Total row, SUM down each column
    """
    headers = ["Category"] + [f"Floor {floor}" for floor in FLOORS] + ["Total"]
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    first_floor_col = get_column_letter(2)
    last_floor_col = get_column_letter(len(FLOORS) + 1)
    total_col = len(FLOORS) + 2

    categories = list(Category)
    for row_idx, category in enumerate(categories, start=2):
        ws.cell(row=row_idx, column=1, value=category.value)
        for floor_idx, floor in enumerate(FLOORS, start=2):
            count = sum(1 for e in events if Category(e.category) == category and e.floor == floor)
            ws.cell(row=row_idx, column=floor_idx, value=count)
        ws.cell(
            row=row_idx,
            column=total_col,
            value=f"=SUM({first_floor_col}{row_idx}:{last_floor_col}{row_idx})",
        )

    total_row = len(categories) + 2
    first_data_row = 2
    last_data_row = total_row - 1
    label = ws.cell(row=total_row, column=1, value="Total")
    label.font = Font(bold=True)
    for col_idx in range(2, total_col + 1):
        col_letter = get_column_letter(col_idx)
        ws.cell(
            row=total_row,
            column=col_idx,
            value=f"=SUM({col_letter}{first_data_row}:{col_letter}{last_data_row})",
        )


def create_schedule_workbook(events: list[CalendarEvent], month: date) -> Workbook:
    """
    Create the monthly schedule workbook.

    Sheet 1: "Schedule" - one row per event
    Sheet 2: "Summary" - counts by category and floor
    """
    wb = Workbook()

    ws_schedule = wb.active
    ws_schedule.title = "Schedule"
    write_schedule_sheet(ws_schedule, events)

    ws_summary = wb.create_sheet(title="Summary")
    write_summary_sheet(ws_summary, events)

    wb.properties.title = f"Facility Schedule {month.strftime('%B %Y')}"
    return wb


def schedule_filename(month: date) -> str:
    return f"facility_schedule_{month.strftime('%Y_%m')}.xlsx"


def schedule_workbook_to_bytes(events: list[CalendarEvent], month: date) -> tuple[bytes, str]:
    """Build the workbook in memory. Returns (xlsx bytes, filename)."""
    wb = create_schedule_workbook(events, month)
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue(), schedule_filename(month)


def save_schedule_workbook(events: list[CalendarEvent], month: date, output_dir: Path = OUTPUT_DIR) -> Path:
    """Write the workbook to output_dir and return its path."""
    output_path = output_dir / schedule_filename(month)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    create_schedule_workbook(events, month).save(str(output_path))
    print(f"Saved schedule workbook to: {output_path}")
    return output_path
