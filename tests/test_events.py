import json
import logging

from sarthi.events import log_event
from sarthi.settings import settings


def test_event_is_logged(caplog):
    caplog.set_level(logging.INFO, logger="sarthi.events")
    log_event("chat_send", {"locale": "hi", "input_length": 5})
    assert any("chat_send" in r.getMessage() for r in caplog.records)


def test_event_appended_as_json_lines(tmp_path, monkeypatch):
    path = tmp_path / "events" / "log.jsonl"
    monkeypatch.setattr(settings, "event_log_path", str(path))
    log_event("page_view", {"page": "chat", "locale": "hi"})
    log_event("chat_send", {"locale": "en", "input_length": 3})

    rows = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [r["name"] for r in rows] == ["page_view", "chat_send"]
    assert rows[0]["locale"] == "hi"
    assert "ts" in rows[1]


def test_unwritable_sink_never_raises(tmp_path, monkeypatch):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    monkeypatch.setattr(settings, "event_log_path", str(blocker / "nested" / "log.jsonl"))
    log_event("page_view")


def test_event_file_follows_setting_changes(tmp_path, monkeypatch):
    first, second = tmp_path / "a.jsonl", tmp_path / "b.jsonl"
    monkeypatch.setattr(settings, "event_log_path", str(first))
    log_event("page_view", {"locale": "hi"})
    monkeypatch.setattr(settings, "event_log_path", str(second))
    log_event("chat_send", {"locale": "hi"})

    assert json.loads(first.read_text(encoding="utf-8"))["name"] == "page_view"
    assert json.loads(second.read_text(encoding="utf-8"))["name"] == "chat_send"
