from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List

import pandas as pd

from config import DATA_DIR
from protocol_config import SESSION_LEGS, SESSION_TORSO, ZONES
from session_log import ZONE_SEPARATOR, load_session_log
from settings_store import load_settings

HISTORY_PATH = DATA_DIR / "processed" / "session_history.json"
RECENT_SESSIONS_LIMIT = 5


def _session_type(zones_raw: Any) -> str:
    if zones_raw is None or (isinstance(zones_raw, float) and pd.isna(zones_raw)):
        return SESSION_TORSO
    zones = str(zones_raw).split(ZONE_SEPARATOR)
    if any(z in ZONES["LOWER"] for z in zones):
        return SESSION_LEGS
    return SESSION_TORSO


def _empty_summary(settings: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "total_sessions": 0,
        "total_duration_seconds": 0,
        "sessions_by_type": {SESSION_TORSO: 0, SESSION_LEGS: 0},
        "estimated_savings": 0,
        "machine_cost": settings.get("machine_cost"),
        "break_even_reached": False,
        "last_session_date": None,
        "recent_sessions": [],
    }


def summarise_sessions(log_df: pd.DataFrame, settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    Totals for the logged sessions.

    A session counts as LEGS when any of its zones is a lower-body zone,
    otherwise as TORSO; savings add the configured market value per type.
    """
    summary: Dict[str, Any] = {
        "summary_generated_at": datetime.now(timezone.utc).isoformat(),
        **_empty_summary(settings),
    }

    if log_df is None or log_df.empty or "date" not in log_df.columns:
        return summary

    df = log_df.copy()
    df["date_dt"] = pd.to_datetime(df["date"], errors="coerce", utc=True, format="ISO8601")
    df = df.dropna(subset=["date_dt"])
    if df.empty:
        return summary

    df["duration_seconds"] = pd.to_numeric(df["duration_seconds"], errors="coerce").fillna(0)
    df["session_type"] = df["zones"].map(_session_type)

    counts = df["session_type"].value_counts()
    legs = int(counts.get(SESSION_LEGS, 0))
    torso = int(counts.get(SESSION_TORSO, 0))
    savings = legs * (settings.get("session_value_legs") or 0) + torso * (
        settings.get("session_value_torso") or 0
    )
    machine_cost = settings.get("machine_cost") or 0

    recent: List[Dict[str, Any]] = []
    for _, row in df.sort_values("date_dt", ascending=False).head(RECENT_SESSIONS_LIMIT).iterrows():
        recent.append(
            {
                "id": str(row["id"]),
                "date": str(row["date"]),
                "type": row["session_type"],
                "duration_seconds": int(row["duration_seconds"]),
            }
        )

    summary.update(
        {
            "total_sessions": int(len(df)),
            "total_duration_seconds": int(df["duration_seconds"].sum()),
            "sessions_by_type": {SESSION_TORSO: torso, SESSION_LEGS: legs},
            "estimated_savings": savings,
            "break_even_reached": savings >= machine_cost,
            "last_session_date": df["date_dt"].max().date().isoformat(),
            "recent_sessions": recent,
        }
    )
    return summary


def main() -> None:
    history = summarise_sessions(load_session_log(), load_settings())

    HISTORY_PATH.parent.mkdir(parents=True, exist_ok=True)
    with HISTORY_PATH.open("w", encoding="utf-8") as f:
        json.dump(history, f, indent=2)

    print(f"Wrote session history for {history['total_sessions']} sessions to {HISTORY_PATH}")


if __name__ == "__main__":
    main()
