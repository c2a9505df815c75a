from __future__ import annotations

from typing import Any, Dict, Optional

import requests
from loguru import logger

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

_session = requests.Session()


def fetch_weather(
    latitude: float,
    longitude: float,
    session: Optional[requests.Session] = None,
) -> Optional[Dict[str, Any]]:
    """
    Today's max UV index plus current temperature and weather code.

    Returns None when the request fails or the payload is missing fields.
    """
    http = session or _session
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current": "temperature_2m,weather_code",
        "daily": "uv_index_max",
        "timezone": "auto",
        "forecast_days": 1,
    }
    try:
        resp = http.get(FORECAST_URL, params=params, timeout=10)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning(f"Weather lookup failed: {exc}")
        return None

    try:
        return {
            "uv_index": float(data["daily"]["uv_index_max"][0]),
            "temperature": float(data["current"]["temperature_2m"]),
            "code": int(data["current"]["weather_code"]),
        }
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        logger.warning(f"Unexpected weather payload: {exc}")
        return None
