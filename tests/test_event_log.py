"""Tests for event_log.writer — EventLog write/read, observer use, graceful degradation."""

from __future__ import annotations

from quiz_integrity.checker import run_check
from quiz_integrity.config import Settings
from quiz_integrity.corpus.loader import snapshot_from_items
from quiz_integrity.event_log.writer import EventLog


class TestEventLogWriteRead:
    def test_write_and_read_roundtrip(self, tmp_path):
        log = EventLog(tmp_path, "test-run")
        log.emit(EventLog.make_event(kind="source_checked", payload={"records": 4}))
        events = log.read_all()
        assert len(events) == 1
        assert events[0]["kind"] == "source_checked"
        assert events[0]["payload"]["records"] == 4

    def test_append_semantics(self, tmp_path):
        log = EventLog(tmp_path, "test-run")
        for kind in ("pass_started", "duplicate", "check_complete"):
            log.emit(EventLog.make_event(kind=kind))
        assert [e["kind"] for e in log.read_all()] == ["pass_started", "duplicate", "check_complete"]

    def test_empty_read(self, tmp_path):
        assert EventLog(tmp_path, "test-run").read_all() == []

    def test_directory_auto_creation(self, tmp_path):
        log = EventLog(tmp_path / "deep" / "nested", "test-run")
        assert log.path.parent.is_dir()

    def test_corrupt_lines_skipped(self, tmp_path):
        log = EventLog(tmp_path, "test-run")
        log.emit(EventLog.make_event(kind="a"))
        with log.path.open("a", encoding="utf-8") as f:
            f.write("{broken\n\n")
        log.emit(EventLog.make_event(kind="b"))
        assert [e["kind"] for e in log.read_all()] == ["a", "b"]

    def test_make_event_has_timestamp(self):
        event = EventLog.make_event(kind="x")
        assert event["ts"]
        assert event["payload"] == {}


class TestEventLogAsObserver:
    def test_records_pipeline_events(self, tmp_path, math_items):
        log = EventLog(tmp_path, "test-run")
        run_check(
            snapshot_from_items({"math-data.json": math_items}),
            Settings(check_all_sources=False, similarity_workers=1),
            observers=[log],
        )
        events = log.read_all()
        kinds = [e["kind"] for e in events]
        assert "duplicate" in kinds
        assert kinds[-1] == "check_complete"
        dup = next(e for e in events if e["kind"] == "duplicate")
        assert dup["payload"]["finding"]["original"]["identifier"] == "m1"

    def test_unicode_preserved(self, tmp_path):
        log = EventLog(tmp_path, "test-run")
        log({"kind": "record_skipped", "source": "ดาราศาสตร์-data.json"})
        assert "ดาราศาสตร์" in log.path.read_text(encoding="utf-8")
