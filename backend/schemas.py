from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from calendar_projector import DayClass
from timeline import Phase


class SessionRecommendationOut(BaseModel):
    label: str
    zones: List[str]
    type: str
    date: Optional[str] = None


class TimelineOut(BaseModel):
    date: dt.date
    elapsed_days: int
    week_index: Optional[int]
    phase: Phase
    is_active_week: bool
    is_shoulder_week: bool
    status_message: str
    session_recommendation: SessionRecommendationOut
    paused: bool = False


class SessionCreate(BaseModel):
    duration_seconds: int = Field(ge=0)
    zones: List[str] = Field(min_length=1)
    notes: str = ""
    uv_index: Optional[float] = None


class SessionLogOut(BaseModel):
    id: str
    date: str
    duration_seconds: int
    zones: List[str]
    completed: bool
    notes: str = ""
    uv_index: Optional[float] = None


class DayStatusOut(BaseModel):
    date: dt.date
    phase: Phase
    week_index: Optional[int]
    is_active_week: bool
    is_shoulder_week: bool
    status_message: str
    session_type: Optional[str]
    zones: List[str]
    log: Optional[SessionLogOut]
    classification: DayClass
    is_today: bool
    is_past: bool


class MonthRefOut(BaseModel):
    year: int
    month: int


class MonthCalendarOut(BaseModel):
    year: int
    month: int
    month_name: str
    leading_blanks: int
    days: List[DayStatusOut]
    previous_month: MonthRefOut
    next_month: MonthRefOut


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)
    history: List[str] = Field(default_factory=list)


class ChatOut(BaseModel):
    reply: str
