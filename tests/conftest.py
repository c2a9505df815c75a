"""Shared fixtures: every test gets its own data directory."""

import pytest

import briefing_service
import session_history
import session_log
import settings_store


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Point settings, session log and history files at a temporary directory."""
    monkeypatch.setattr(settings_store, "SETTINGS_PATH", tmp_path / "config" / "settings.json")
    monkeypatch.setattr(session_log, "LOG_PATH", tmp_path / "raw" / "session_log.csv")
    monkeypatch.setattr(session_history, "HISTORY_PATH", tmp_path / "processed" / "session_history.json")
    monkeypatch.setattr(briefing_service, "_client", None)
    monkeypatch.setattr(briefing_service.config, "OPENAI_API_KEY", None)
    return tmp_path
