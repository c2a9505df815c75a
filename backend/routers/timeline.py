from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Path, Query

import calendar_projector
import session_log
import settings_store
from timeline import resolve_timeline

from .. import schemas

router = APIRouter(tags=["timeline"])


@router.get("/timeline", response_model=schemas.TimelineOut)
def get_timeline(day: Optional[date] = Query(None, alias="date")):
    timeline = resolve_timeline(settings_store.get_start_date(), day)
    timeline["paused"] = bool(settings_store.get_setting("is_paused", False))
    return timeline


@router.get("/calendar/day/{day}", response_model=schemas.DayStatusOut)
def get_day_status(day: date, today: Optional[date] = None):
    return calendar_projector.classify_day(
        settings_store.get_start_date(),
        session_log.load_session_logs(),
        day,
        today,
    )


@router.get("/calendar/{year}/{month}", response_model=schemas.MonthCalendarOut)
def get_month_calendar(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    today: Optional[date] = None,
):
    logs = calendar_projector.index_logs_by_day(session_log.load_session_logs())
    return calendar_projector.build_month_calendar(
        settings_store.get_start_date(), logs, year, month, today
    )
