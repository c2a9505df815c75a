from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()


def _float_or_none(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        return None


DATA_DIR = Path(os.getenv("IPL_DATA_DIR", "data"))
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
LATITUDE = _float_or_none(os.getenv("IPL_LATITUDE"))
LONGITUDE = _float_or_none(os.getenv("IPL_LONGITUDE"))
LOG_LEVEL = os.getenv("IPL_LOG_LEVEL", "INFO")


def setup_logger(level: str = LOG_LEVEL) -> None:
    """Replace loguru's default handler with a coloured stderr sink."""
    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level=level,
        colorize=True,
    )
