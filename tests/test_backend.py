from datetime import datetime
from types import SimpleNamespace

from fastapi.testclient import TestClient

import briefing_service
import config
from backend.main import app
from briefing_service import OFFLINE_MESSAGE
from session_log import record_session

client = TestClient(app)


def test_health():
    assert client.get("/health").json() == {"status": "ok"}


def test_timeline_for_date():
    resp = client.get("/timeline", params={"date": "2026-03-29"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["phase"] == "TRANSITION"
    assert body["week_index"] == 13
    assert body["paused"] is False
    assert body["session_recommendation"]["type"] == "TORSO"
    assert len(body["session_recommendation"]["zones"]) == 4


def test_timeline_pre_operation():
    body = client.get("/timeline", params={"date": "2025-12-01"}).json()

    assert body["week_index"] is None
    assert body["status_message"] == "PRE-OPERATION"
    assert body["session_recommendation"]["zones"] == []


def test_timeline_rejects_bad_date():
    assert client.get("/timeline", params={"date": "someday"}).status_code == 422


def test_day_status_missed_then_completed():
    url = "/calendar/day/2026-03-29"
    params = {"today": "2026-03-30"}

    assert client.get(url, params=params).json()["classification"] == "SESSION_MISSED"

    record_session(1300, ["Chest", "Abdomen"], when=datetime(2026, 3, 29, 20, 0))
    body = client.get(url, params=params).json()
    assert body["classification"] == "SESSION_COMPLETED"
    assert body["log"]["duration_seconds"] == 1300


def test_month_calendar():
    body = client.get("/calendar/2026/3", params={"today": "2026-03-30"}).json()

    assert body["month_name"] == "MARCH"
    assert body["leading_blanks"] == 6
    assert len(body["days"]) == 31
    assert body["days"][21]["classification"] == "REST"


def test_month_calendar_rejects_bad_month():
    assert client.get("/calendar/2026/13").status_code == 422


def test_create_and_list_sessions():
    resp = client.post("/sessions", json={"duration_seconds": 600, "zones": ["Thighs"], "uv_index": 1.5})

    assert resp.status_code == 201
    created = resp.json()
    assert created["completed"] is True

    listed = client.get("/sessions").json()
    assert [s["id"] for s in listed] == [created["id"]]
    assert listed[0]["uv_index"] == 1.5


def test_create_session_validation():
    assert client.post("/sessions", json={"duration_seconds": 600, "zones": []}).status_code == 422
    assert client.post("/sessions", json={"duration_seconds": -5, "zones": ["Chest"]}).status_code == 422


def test_session_summary():
    record_session(2400, ["Thighs", "Knees"], when=datetime(2026, 3, 30, 19, 0))

    body = client.get("/sessions/summary").json()
    assert body["total_sessions"] == 1
    assert body["sessions_by_type"] == {"TORSO": 0, "LEGS": 1}
    assert body["estimated_savings"] == 60


def test_month_calendar_navigation_links():
    body = client.get("/calendar/2026/1", params={"today": "2026-03-30"}).json()

    assert body["previous_month"] == {"year": 2025, "month": 12}
    assert body["next_month"] == {"year": 2026, "month": 2}


def test_chat_offline():
    resp = client.post("/chat", json={"message": "Status?"})

    assert resp.status_code == 200
    assert resp.json() == {"reply": OFFLINE_MESSAGE}


def test_chat_with_history(monkeypatch):
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        message = SimpleNamespace(content="Proceed with TORSO ops.")
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    fake = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    monkeypatch.setattr(briefing_service, "_client", fake)
    monkeypatch.setattr(config, "OPENAI_API_KEY", "test-key")

    resp = client.post("/chat", json={"message": "Orders?", "history": ["User: Hi", "Model: Ready."]})

    assert resp.json() == {"reply": "Proceed with TORSO ops."}
    assert [m["role"] for m in calls[0]["messages"]] == ["system", "user", "assistant", "user"]


def test_chat_rejects_empty_message():
    assert client.post("/chat", json={"message": ""}).status_code == 422


def test_logging_is_configured_at_startup_only(monkeypatch):
    calls = []
    monkeypatch.setattr(config, "setup_logger", lambda *args, **kwargs: calls.append(args))

    client.get("/health")
    assert calls == []

    with TestClient(app) as started:
        assert started.get("/health").status_code == 200
    assert len(calls) == 1
