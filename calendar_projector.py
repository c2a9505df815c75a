from __future__ import annotations

import calendar
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from loguru import logger

from protocol_config import MONTH_NAMES
from timeline import DateLike, local_day, resolve_phase_state, session_type_for_day, session_zones


class DayClass(str, Enum):
    PRE_OPERATION = "PRE_OPERATION"
    SESSION_COMPLETED = "SESSION_COMPLETED"
    SESSION_MISSED = "SESSION_MISSED"
    SESSION_UPCOMING = "SESSION_UPCOMING"
    EXTRA_CREDIT = "EXTRA_CREDIT"
    REST = "REST"


LogIndex = Dict[date, Dict[str, Any]]
LogsInput = Union[Iterable[Dict[str, Any]], Mapping[date, Dict[str, Any]]]


def _log_day(raw: Any) -> Optional[date]:
    if isinstance(raw, (date, datetime)):
        return local_day(raw)
    if not isinstance(raw, str) or not raw.strip():
        return None
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return local_day(datetime.fromisoformat(text))
    except ValueError:
        return None


def index_logs_by_day(logs: Iterable[Dict[str, Any]]) -> LogIndex:
    """
    Map each local calendar day to the first log recorded for it.

    Later logs on an already-seen day are ignored, matching a plain
    first-match lookup over the same sequence.
    """
    index: LogIndex = {}
    for log in logs:
        day = _log_day(log.get("date"))
        if day is None:
            logger.debug(f"Skipping session log with unusable date: {log.get('id')!r}")
            continue
        index.setdefault(day, log)
    return index


def _as_index(logs: LogsInput) -> Mapping[date, Dict[str, Any]]:
    if isinstance(logs, Mapping):
        return logs
    return index_logs_by_day(logs)


def _classify(
    session_type: Optional[str],
    log: Optional[Dict[str, Any]],
    target_day: date,
    today: date,
) -> DayClass:
    if session_type is None:
        return DayClass.EXTRA_CREDIT if log else DayClass.REST
    if log:
        return DayClass.SESSION_COMPLETED
    if target_day < today:
        return DayClass.SESSION_MISSED
    return DayClass.SESSION_UPCOMING


def classify_day(
    start: DateLike,
    logs: LogsInput,
    target: DateLike,
    today: Optional[DateLike] = None,
) -> Dict[str, Any]:
    """
    Calendar-cell status for an arbitrary day.

    ``logs`` is either a sequence of session log dicts or an index built by
    ``index_logs_by_day``. ``today`` defaults to the current local date and
    only drives the missed/upcoming split.
    """
    today_day = local_day(today if today is not None else datetime.now())
    state = resolve_phase_state(start, target)
    target_day = state["date"]
    log = _as_index(logs).get(target_day)

    if state["week_index"] is None:
        session_type = None
        classification = DayClass.PRE_OPERATION
    else:
        session_type = session_type_for_day(target_day) if state["is_active_week"] else None
        classification = _classify(session_type, log, target_day, today_day)

    return {
        "date": target_day,
        "phase": state["phase"],
        "week_index": state["week_index"],
        "is_active_week": state["is_active_week"],
        "is_shoulder_week": state["is_shoulder_week"],
        "status_message": state["status_message"],
        "session_type": session_type,
        "zones": session_zones(session_type, state["is_shoulder_week"]) if session_type else [],
        "log": log,
        "classification": classification,
        "is_today": target_day == today_day,
        "is_past": target_day < today_day,
    }


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move ``delta`` months from (year, month); month is 1-12."""
    offset = year * 12 + (month - 1) + delta
    return offset // 12, offset % 12 + 1


def build_month_calendar(
    start: DateLike,
    logs: LogsInput,
    year: int,
    month: int,
    today: Optional[DateLike] = None,
) -> Dict[str, Any]:
    """
    Classify every day of a month for a Monday-first grid.

    ``leading_blanks`` is the number of empty cells before the 1st, using
    ``date.weekday()`` (Monday=0), not the protocol's Sunday=0 numbering.
    """
    index = _as_index(logs)
    today_day = local_day(today if today is not None else datetime.now())
    days_in_month = calendar.monthrange(year, month)[1]
    days = [
        classify_day(start, index, date(year, month, day_number), today_day)
        for day_number in range(1, days_in_month + 1)
    ]
    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)
    return {
        "year": year,
        "month": month,
        "month_name": MONTH_NAMES[month - 1],
        "leading_blanks": date(year, month, 1).weekday(),
        "days": days,
        "previous_month": {"year": prev_year, "month": prev_month},
        "next_month": {"year": next_year, "month": next_month},
    }
