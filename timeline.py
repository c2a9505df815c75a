from __future__ import annotations

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from protocol_config import (
    ATTACK_SHOULDER_EVERY,
    AUGUST,
    LABEL_TODAY_MONDAY,
    LABEL_TODAY_SUNDAY,
    MAINTENANCE_ACTIVE_DAYS,
    MAINTENANCE_START_WEEK,
    MONDAY,
    SESSION_LEGS,
    SESSION_STANDBY,
    SESSION_TORSO,
    SESSION_UPCOMING_TORSO,
    STATUS_AUGUST_HOLIDAY,
    STATUS_MAINTENANCE_STANDBY,
    STATUS_OPERATIONAL,
    STATUS_PRE_OPERATION,
    STATUS_REST_WEEK,
    SUNDAY,
    TRANSITION_START_WEEK,
    ZONES,
)

DateLike = Union[date, datetime]


class Phase(str, Enum):
    ATTACK = "ATTACK"
    TRANSITION = "TRANSITION"
    MAINTENANCE = "MAINTENANCE"


def local_day(value: DateLike) -> date:
    """
    Truncate a date or datetime to its local calendar day.

    Aware datetimes are converted to local time first; naive ones are taken
    as already local.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def protocol_day_of_week(day: date) -> int:
    """Weekday in the protocol's numbering: 0=Sunday, 1=Monday ... 6=Saturday.

    Calendar grids use Python's Monday-first ``date.weekday()`` instead; keep
    the two apart.
    """
    return (day.weekday() + 1) % 7


def phase_for_week(week_index: int) -> Phase:
    if week_index < TRANSITION_START_WEEK:
        return Phase.ATTACK
    if week_index < MAINTENANCE_START_WEEK:
        return Phase.TRANSITION
    return Phase.MAINTENANCE


def resolve_phase_state(start: DateLike, target: DateLike) -> Dict[str, Any]:
    """
    Phase and weekly activation for ``target`` given the operation start.

    Returns a dictionary with keys:
        - date (target calendar day)
        - elapsed_days (may be negative)
        - week_index (None before the start date)
        - phase (Phase)
        - is_active_week
        - is_shoulder_week
        - status_message
    """
    start_day = local_day(start)
    target_day = local_day(target)
    elapsed_days = (target_day - start_day).days

    if elapsed_days < 0:
        return {
            "date": target_day,
            "elapsed_days": elapsed_days,
            "week_index": None,
            "phase": Phase.ATTACK,
            "is_active_week": False,
            "is_shoulder_week": False,
            "status_message": STATUS_PRE_OPERATION,
        }

    week_index = elapsed_days // 7
    phase = phase_for_week(week_index)
    is_active_week = True
    is_shoulder_week = False
    status_message = STATUS_OPERATIONAL

    if phase is Phase.ATTACK:
        is_shoulder_week = week_index % ATTACK_SHOULDER_EVERY == 0
    elif phase is Phase.TRANSITION:
        # Parity counts absolute weeks since start: week 12 rests, week 13 fires.
        is_active_week = week_index % 2 != 0
        is_shoulder_week = is_active_week
        if not is_active_week:
            status_message = STATUS_REST_WEEK
    elif target_day.month == AUGUST:
        is_active_week = False
        status_message = STATUS_AUGUST_HOLIDAY
    else:
        is_active_week = target_day.day <= MAINTENANCE_ACTIVE_DAYS
        if not is_active_week:
            status_message = STATUS_MAINTENANCE_STANDBY

    return {
        "date": target_day,
        "elapsed_days": elapsed_days,
        "week_index": week_index,
        "phase": phase,
        "is_active_week": is_active_week,
        "is_shoulder_week": is_shoulder_week,
        "status_message": status_message,
    }


def session_zones(session_type: str, is_shoulder_week: bool) -> List[str]:
    """Fresh zone list for a concrete session type."""
    if session_type == SESSION_LEGS:
        return list(ZONES["LOWER"])
    zones = list(ZONES["UPPER"])
    if is_shoulder_week:
        zones.extend(ZONES["SHOULDER_ADDON"])
    return zones


def session_type_for_day(day: date) -> Optional[str]:
    day_of_week = protocol_day_of_week(day)
    if day_of_week == SUNDAY:
        return SESSION_TORSO
    if day_of_week == MONDAY:
        return SESSION_LEGS
    return None


def waiting_recommendation(status_message: str) -> Dict[str, Any]:
    return {"label": status_message, "zones": [], "type": SESSION_STANDBY}


def _recommend_session(state: Dict[str, Any]) -> Dict[str, Any]:
    if not state["is_active_week"]:
        return waiting_recommendation(state["status_message"])

    day = state["date"]
    session_type = session_type_for_day(day)
    if session_type == SESSION_TORSO:
        return {
            "label": LABEL_TODAY_SUNDAY,
            "zones": session_zones(SESSION_TORSO, state["is_shoulder_week"]),
            "type": SESSION_TORSO,
        }
    if session_type == SESSION_LEGS:
        return {
            "label": LABEL_TODAY_MONDAY,
            "zones": session_zones(SESSION_LEGS, False),
            "type": SESSION_LEGS,
        }

    # Advisory only: it does not say next Sunday is itself an active day.
    days_until_sunday = (7 - protocol_day_of_week(day)) % 7
    next_sunday = day + timedelta(days=days_until_sunday)
    return {
        "label": f"SUNDAY {next_sunday.day}",
        "zones": list(ZONES["UPPER"]),
        "type": SESSION_UPCOMING_TORSO,
        "date": next_sunday.isoformat(),
    }


def resolve_timeline(start: DateLike, now: Optional[DateLike] = None) -> Dict[str, Any]:
    """
    Compute today's protocol status.

    ``now`` defaults to the current local time. The result is the phase state
    from ``resolve_phase_state`` plus a ``session_recommendation`` dict with
    ``label``, ``zones`` and ``type``.
    """
    if now is None:
        now = datetime.now()
    state = resolve_phase_state(start, now)
    state["session_recommendation"] = _recommend_session(state)
    return state
