from __future__ import annotations

import argparse
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

import config
from briefing_service import (
    chat_with_intel_officer,
    get_context_aware_briefing,
    get_mission_briefing,
)
from calendar_projector import DayClass, build_month_calendar, index_logs_by_day, shift_month
from protocol_config import PHASE_LABELS
from session_log import load_session_logs, record_session
from settings_store import get_start_date, load_settings, parse_start_date, set_start_date
from timeline import protocol_day_of_week, resolve_timeline
from weather_client import fetch_weather

DAY_MARKERS = {
    DayClass.PRE_OPERATION: "-",
    DayClass.SESSION_COMPLETED: "#",
    DayClass.SESSION_MISSED: "x",
    DayClass.SESSION_UPCOMING: "o",
    DayClass.EXTRA_CREDIT: "+",
    DayClass.REST: ".",
}

WEEK_HEADER = ["MO", "TU", "WE", "TH", "FR", "SA", "SU"]


def get_daily_brief(
    target_date: Optional[date] = None, with_weather: bool = False
) -> Dict[str, Any]:
    """
    Compute the brief for the given date using saved settings.

    Returns a dictionary with keys:
        - date (YYYY-MM-DD string)
        - weekday (lowercase weekday name)
        - paused (manual pause flag from settings; informational only)
        - timeline (resolve_timeline output)
        - weather (dict or None)
        - briefing (AI mission briefing when weather and an API key are
          available, canned context-aware text otherwise)
    """
    target_date = target_date or datetime.now().date()
    settings = load_settings()
    timeline = resolve_timeline(get_start_date(), target_date)

    weather = None
    if with_weather and config.LATITUDE is not None and config.LONGITUDE is not None:
        weather = fetch_weather(config.LATITUDE, config.LONGITUDE)
    uv_index = weather["uv_index"] if weather else 0

    if weather and config.OPENAI_API_KEY:
        briefing = get_mission_briefing(
            timeline["phase"], uv_index, timeline["session_recommendation"]["type"]
        )
    else:
        briefing = get_context_aware_briefing(
            timeline["phase"], protocol_day_of_week(target_date), uv_index
        )

    return {
        "date": target_date.isoformat(),
        "weekday": target_date.strftime("%A").lower(),
        "paused": bool(settings.get("is_paused")),
        "timeline": timeline,
        "weather": weather,
        "briefing": briefing,
    }


def print_daily_brief(brief: Dict[str, Any]) -> None:
    timeline = brief["timeline"]
    print("=" * 50)
    print(f" STATUS REPORT FOR {brief['weekday'].upper()} {brief['date']}")
    print("=" * 50)

    if brief.get("paused"):
        print("\n  ** OPERATION PAUSED BY OPERATOR **")

    print("\n[Timeline]")
    print(f"  Phase: {PHASE_LABELS[timeline['phase'].value]}")
    week_index = timeline.get("week_index")
    if week_index is not None:
        print(f"  Week: {week_index + 1}")
    print(f"  Status: {timeline['status_message']}")

    print("\n[Session]")
    rec = timeline["session_recommendation"]
    print(f"  {rec['label']}: {rec['type']}")
    if rec["zones"]:
        for zone in rec["zones"]:
            print(f"   - {zone}")
    else:
        print("  (No zones scheduled.)")

    weather = brief.get("weather")
    if weather:
        print("\n[Weather]")
        print(f"  UV index: {weather['uv_index']}  Temperature: {weather['temperature']}")

    print("\n[Briefing]")
    print(f"  {brief['briefing']}")
    print()


def format_month_calendar(month_view: Dict[str, Any]) -> List[str]:
    lines = [
        f"{month_view['month_name']} {month_view['year']}",
        " ".join(h.ljust(3) for h in WEEK_HEADER).rstrip(),
    ]
    cells = ["  "] * month_view["leading_blanks"]
    for day in month_view["days"]:
        marker = "*" if day["is_today"] else DAY_MARKERS[day["classification"]]
        cells.append(f"{day['date'].day:>2}{marker}")
    for start in range(0, len(cells), 7):
        lines.append(" ".join(cell.ljust(3) for cell in cells[start:start + 7]).rstrip())
    legend = "  ".join(f"{marker} {cls.value.lower()}" for cls, marker in DAY_MARKERS.items())
    lines.append(f"Legend: {legend}  * today")
    return lines


def _parse_month(raw: Optional[str]) -> Tuple[int, int]:
    if not raw:
        today = datetime.now().date()
        return today.year, today.month
    parsed = datetime.strptime(raw, "%Y-%m")
    return parsed.year, parsed.month


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sunday/Monday IPL protocol tracker")
    parser.add_argument("--date", help="Show a specific day (YYYY-MM-DD) instead of today")
    parser.add_argument("--weather", action="store_true", help="Include the UV lookup")
    sub = parser.add_subparsers(dest="command")

    cal = sub.add_parser("calendar", help="Print a month grid")
    cal.add_argument("--month", help="Month to show (YYYY-MM)")
    cal.add_argument(
        "--offset", type=int, default=0, help="Months to move from --month (or this month)"
    )

    log = sub.add_parser("log", help="Record a completed session")
    log.add_argument("--duration", type=int, required=True, help="Duration in seconds")
    log.add_argument("--zones", nargs="+", required=True)
    log.add_argument("--notes", default="")

    start = sub.add_parser("set-start", help="Change the operation start date")
    start.add_argument("start_date")

    chat = sub.add_parser("chat", help="Ask the intel officer a question")
    chat.add_argument("message")
    chat.add_argument(
        "--history", nargs="*", default=[], help='Earlier lines, e.g. "User: ..." "Model: ..."'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "calendar":
        try:
            year, month = shift_month(*_parse_month(args.month), args.offset)
        except ValueError:
            logger.error(f"Invalid month {args.month!r}, expected YYYY-MM")
            return 2
        logs = index_logs_by_day(load_session_logs())
        for line in format_month_calendar(build_month_calendar(get_start_date(), logs, year, month)):
            print(line)
        return 0

    if args.command == "log":
        try:
            entry = record_session(args.duration, args.zones, notes=args.notes)
        except ValueError as exc:
            logger.error(str(exc))
            return 2
        print(f"Logged session {entry['id']} at {entry['date']}")
        return 0

    if args.command == "chat":
        print(chat_with_intel_officer(args.message, args.history))
        return 0

    if args.command == "set-start":
        try:
            set_start_date(args.start_date)
        except ValueError as exc:
            logger.error(str(exc))
            return 2
        print(f"Operation start set to {parse_start_date(args.start_date).date().isoformat()}")
        return 0

    target = None
    if args.date:
        try:
            target = date.fromisoformat(args.date)
        except ValueError:
            logger.error(f"Invalid date {args.date!r}, expected YYYY-MM-DD")
            return 2
    print_daily_brief(get_daily_brief(target, with_weather=args.weather))
    return 0


def run() -> None:
    """Console-script entry point: configure logging once, then dispatch."""
    config.setup_logger()
    raise SystemExit(main())


if __name__ == "__main__":
    run()
