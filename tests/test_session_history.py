from datetime import datetime

import session_history
from session_history import main, summarise_sessions
from session_log import load_session_log, record_session
from settings_store import DEFAULT_SETTINGS


def test_empty_log_summary():
    summary = summarise_sessions(load_session_log(), DEFAULT_SETTINGS)

    assert summary["total_sessions"] == 0
    assert summary["estimated_savings"] == 0
    assert summary["break_even_reached"] is False
    assert summary["last_session_date"] is None

def test_summary_counts_types_and_savings():
    record_session(1500, ["Chest", "Abdomen"], when=datetime(2026, 3, 29, 20, 0))
    record_session(2400, ["Thighs", "Knees", "Glutes"], when=datetime(2026, 3, 30, 19, 0))
    record_session(1200, ["Chest", "Abdomen"], when=datetime(2026, 4, 12, 10, 0))

    summary = summarise_sessions(load_session_log(), DEFAULT_SETTINGS)

    assert summary["total_sessions"] == 3
    assert summary["total_duration_seconds"] == 5100
    assert summary["sessions_by_type"] == {"TORSO": 2, "LEGS": 1}
    assert summary["estimated_savings"] == 160
    assert summary["machine_cost"] == 349
    assert summary["break_even_reached"] is False
    assert summary["last_session_date"] == "2026-04-12"
    assert [s["type"] for s in summary["recent_sessions"]] == ["TORSO", "LEGS", "TORSO"]

def test_break_even():
    record_session(1500, ["Thighs"], when=datetime(2026, 3, 30, 19, 0))
    settings = {**DEFAULT_SETTINGS, "machine_cost": 60}

    assert summarise_sessions(load_session_log(), settings)["break_even_reached"] is True

def test_main_writes_history(capsys):
    record_session(900, ["Chest"], when=datetime(2026, 3, 29, 20, 0))
    main()

    assert session_history.HISTORY_PATH.exists()
    assert "1 sessions" in capsys.readouterr().out
