from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
from loguru import logger

from config import DATA_DIR

LOG_PATH = DATA_DIR / "raw" / "session_log.csv"
COLUMNS = ["id", "date", "duration_seconds", "zones", "completed", "notes", "uv_index"]
ZONE_SEPARATOR = "|"


def load_session_log() -> pd.DataFrame:
    """
    Load the session log as a pandas DataFrame with the expected columns.
    """
    if not LOG_PATH.exists():
        return pd.DataFrame(columns=COLUMNS)

    df = pd.read_csv(LOG_PATH, dtype={"id": str, "zones": str, "notes": str})
    for col in COLUMNS:
        if col not in df.columns:
            df[col] = ""
    return df[COLUMNS]


def _split_zones(raw: Any) -> List[str]:
    if raw is None or (isinstance(raw, float) and pd.isna(raw)):
        return []
    return [z for z in str(raw).split(ZONE_SEPARATOR) if z]


def _to_bool(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in {"true", "1", "yes"}
    if raw is None or pd.isna(raw):
        return False
    return bool(raw)


def _to_float_or_none(raw: Any) -> Optional[float]:
    if raw is None or raw == "" or pd.isna(raw):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def _row_to_log(row: Dict[str, Any]) -> Dict[str, Any]:
    duration = _to_float_or_none(row.get("duration_seconds"))
    notes = row.get("notes")
    return {
        "id": str(row.get("id")),
        "date": str(row.get("date")),
        "duration_seconds": int(duration) if duration is not None else 0,
        "zones": _split_zones(row.get("zones")),
        "completed": _to_bool(row.get("completed")),
        "notes": "" if notes is None or pd.isna(notes) else str(notes),
        "uv_index": _to_float_or_none(row.get("uv_index")),
    }


def load_session_logs() -> List[Dict[str, Any]]:
    """
    Session logs as dicts, newest first.

    The calendar keeps the first log it sees for a day, so on a day with
    several entries the most recent one is surfaced.
    """
    df = load_session_log()
    logs = [_row_to_log(row) for row in df.to_dict(orient="records")]
    logs.reverse()
    return logs


def append_session_log(row: Dict[str, Any]) -> None:
    """
    Append a single row to the session log CSV.
    """
    LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    df = load_session_log()
    normalized = {col: row.get(col, "") for col in COLUMNS}
    zones = normalized["zones"]
    if isinstance(zones, (list, tuple)):
        normalized["zones"] = ZONE_SEPARATOR.join(zones)
    new_df = pd.DataFrame([normalized])
    if df.empty:
        combined = new_df
    else:
        combined = pd.concat([df, new_df], ignore_index=True)
    combined.to_csv(LOG_PATH, index=False)


def record_session(
    duration_seconds: int,
    zones: Sequence[str],
    when: Optional[datetime] = None,
    notes: str = "",
    uv_index: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Record a completed session and return the stored log entry.
    """
    if duration_seconds < 0:
        raise ValueError("duration_seconds must be non-negative")
    if not zones:
        raise ValueError("a session needs at least one zone")

    when = when or datetime.now()
    log = {
        "id": str(int(when.timestamp() * 1000)),
        "date": when.isoformat(),
        "duration_seconds": int(duration_seconds),
        "zones": list(zones),
        "completed": True,
        "notes": notes,
        "uv_index": uv_index,
    }
    append_session_log(log)
    logger.info(f"Recorded session {log['id']} ({len(log['zones'])} zones, {duration_seconds}s)")
    return log
