"""Calendar grid, day and export endpoints."""

import asyncio
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import Response

from api.dependencies import get_filters, get_store
from api.models.responses import (
    CalendarCellResponse,
    CalendarResponse,
    DayResponse,
    ErrorCodes,
    EventResponse,
)
from models.events import FilterState
from services.calendar import (
    events_on,
    month_events,
    month_title,
    parse_month,
    project_month,
    shift_month,
)
from services.filters import apply_filters
from services.reports import schedule_workbook_to_bytes
from services.store import FacilityStore

router = APIRouter(prefix="/v1/calendar")

MonthParam = Annotated[str | None, Query(description="Month to show (YYYY-MM); defaults to the current month")]


def parse_month_param(month: str | None) -> date:
    """Parse the month query parameter to the first day of that month."""
    try:
        return parse_month(month)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid month format",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": ["Expected format: YYYY-MM with a year from 0002 to 9998"],
            },
        )


@router.get("", response_model=CalendarResponse)
async def get_calendar(
    request: Request,
    month: MonthParam = None,
    filters: FilterState = Depends(get_filters),
    store: FacilityStore = Depends(get_store),
):
    """
    Month grid with filtered events bucketed per day.

    Each cell shows at most four events plus a count of the rest;
    use /v1/calendar/day/{date} for the full list.
    """
    reference = parse_month_param(month)
    visible = apply_filters(store.list_events(), filters)
    cells = project_month(reference, visible)

    request.state.request_log.result_count = sum(len(cell.events) for cell in cells)

    return CalendarResponse(
        month=reference.strftime("%Y-%m"),
        title=month_title(reference),
        previous_month=shift_month(reference, -1).strftime("%Y-%m"),
        next_month=shift_month(reference, 1).strftime("%Y-%m"),
        cells=[
            CalendarCellResponse(
                date=cell.day,
                in_month=cell.in_month,
                is_today=cell.is_today,
                events=[EventResponse.model_validate(e) for e in cell.visible_events],
                more_count=cell.overflow_count,
            )
            for cell in cells
        ],
    )


@router.get("/day/{day}", response_model=DayResponse)
async def get_day(
    request: Request,
    day: date,
    filters: FilterState = Depends(get_filters),
    store: FacilityStore = Depends(get_store),
):
    """Every filtered event starting on a day, untruncated."""
    events = events_on(day, apply_filters(store.list_events(), filters))
    request.state.request_log.result_count = len(events)
    return DayResponse(date=day, events=[EventResponse.model_validate(e) for e in events])


@router.get("/export")
async def export_calendar(
    request: Request,
    month: MonthParam = None,
    filters: FilterState = Depends(get_filters),
    store: FacilityStore = Depends(get_store),
):
    """Download the month's filtered schedule as an Excel workbook."""
    reference = parse_month_param(month)
    events = month_events(reference, apply_filters(store.list_events(), filters))
    request.state.request_log.result_count = len(events)

    # Build workbook in thread pool; events is already a private list
    excel_bytes, filename = await asyncio.to_thread(schedule_workbook_to_bytes, events, reference)
    return Response(
        content=excel_bytes,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
