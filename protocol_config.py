"""
Static configuration for the Sunday upper-body / Monday lower-body protocol.

Zone groups are tuples so nothing handed out by the resolver can alias them.
"""

from __future__ import annotations

from typing import Dict, Tuple

INITIAL_START_DATE = "2025-12-28T00:00:00"

ZONES: Dict[str, Tuple[str, ...]] = {
    "LOWER": ("Thighs", "Knees", "Glutes"),  # Monday: brute force
    "UPPER": ("Chest", "Abdomen"),  # Sunday: precision
    "SHOULDER_ADDON": ("Shoulders", "Arms (fade)"),
}

# Week indices (zero-based) at which each later phase begins.
TRANSITION_START_WEEK = 12
MAINTENANCE_START_WEEK = 24

ATTACK_SHOULDER_EVERY = 3
MAINTENANCE_ACTIVE_DAYS = 7
AUGUST = 8

SUNDAY = 0
MONDAY = 1

STATUS_OPERATIONAL = "OPERATIONAL"
STATUS_PRE_OPERATION = "PRE-OPERATION"
STATUS_REST_WEEK = "REST WEEK"
STATUS_AUGUST_HOLIDAY = "AUGUST HOLIDAY"
STATUS_MAINTENANCE_STANDBY = "STANDBY — AWAITING FIRST WEEK OF MONTH"

SESSION_TORSO = "TORSO"
SESSION_LEGS = "LEGS"
SESSION_UPCOMING_TORSO = "UPCOMING: TORSO"
SESSION_STANDBY = "STANDBY"

LABEL_TODAY_SUNDAY = "TODAY (SUNDAY)"
LABEL_TODAY_MONDAY = "TODAY (MONDAY)"

PHASE_LABELS = {
    "ATTACK": "ATTACK (WEEKLY)",
    "TRANSITION": "TRANSITION (FORTNIGHTLY)",
    "MAINTENANCE": "MAINTENANCE (MONTHLY)",
}

MONTH_NAMES = (
    "JANUARY",
    "FEBRUARY",
    "MARCH",
    "APRIL",
    "MAY",
    "JUNE",
    "JULY",
    "AUGUST",
    "SEPTEMBER",
    "OCTOBER",
    "NOVEMBER",
    "DECEMBER",
)
