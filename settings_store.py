import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

from config import DATA_DIR
from protocol_config import INITIAL_START_DATE

SETTINGS_PATH = DATA_DIR / "config" / "settings.json"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "schema_version": 1,
    "start_date": INITIAL_START_DATE,
    "machine_cost": 349,
    "session_value_legs": 60,
    "session_value_torso": 50,
    "is_paused": False,
}


def parse_start_date(value: Union[str, date, datetime]) -> datetime:
    """
    Parse an ISO-8601 start date (date or instant, trailing 'Z' allowed).

    Raises ValueError when the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Start date must be an ISO-8601 string, got {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"Invalid start date {value!r}") from exc


def _ensure_keys(settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge whatever is on disk with DEFAULT_SETTINGS.
    Disk values win for existing keys; defaults fill the gaps.
    """
    merged = {**DEFAULT_SETTINGS, **settings}
    if not isinstance(merged.get("schema_version"), int):
        merged["schema_version"] = DEFAULT_SETTINGS["schema_version"]
    return merged


def load_settings() -> Dict[str, Any]:
    """
    Load settings from disk, creating the file with defaults if needed.
    Always returns a dict with every expected key.
    """
    if not SETTINGS_PATH.exists():
        settings = dict(DEFAULT_SETTINGS)
        save_settings(settings)
        return settings

    try:
        with SETTINGS_PATH.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError("settings.json is not a JSON object")
    except (OSError, ValueError) as exc:
        logger.warning(f"Unreadable settings at {SETTINGS_PATH}, using defaults: {exc}")
        raw = {}

    return _ensure_keys(raw)


def save_settings(settings: Dict[str, Any]) -> None:
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2, ensure_ascii=False)


def get_setting(key: str, default: Optional[Any] = None) -> Any:
    """Convenience getter that reads from disk each time."""
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Dict[str, Any]:
    """Set a single value, write to disk, and return the updated settings."""
    if key == "start_date":
        value = parse_start_date(value).isoformat()

    settings = load_settings()
    settings[key] = value
    save_settings(settings)
    logger.info(f"Setting {key!r} updated")
    return settings


def get_start_date() -> datetime:
    """
    Stored start date as a datetime.

    An invalid stored value falls back to the default start with a warning,
    so callers always get something the resolver can use.
    """
    raw = get_setting("start_date", INITIAL_START_DATE)
    try:
        return parse_start_date(raw)
    except ValueError:
        logger.warning(f"Stored start_date {raw!r} is invalid, using {INITIAL_START_DATE}")
        return parse_start_date(INITIAL_START_DATE)


def set_start_date(value: Union[str, date, datetime]) -> Dict[str, Any]:
    return set_setting("start_date", value)
