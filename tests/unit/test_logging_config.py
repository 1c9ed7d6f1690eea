import threading
from pathlib import Path

from recruitportal.utils.logging_config import (
    LogFiles,
    Logger,
    clear_trace_id,
    get_trace_id,
    set_trace_id,
)


def test_log_files_resolve_from_yaml():
    assert LogFiles.ADMIN == "admin/admin.log"
    assert LogFiles.ERROR == "errors/error.log"
    assert LogFiles.get("reports") == "reports/reports.log"


def test_logger_writes_trace_id_and_respects_level(tmp_path: Path):
    Logger.init(level="INFO", base_dir=str(tmp_path))
    try:
        set_trace_id("req-test")
        Logger.debug("hidden", file=LogFiles.STORE)
        Logger.info("visible", file=LogFiles.STORE)
    finally:
        clear_trace_id()
        Logger.init()

    text = (tmp_path / "store" / "store.log").read_text(encoding="utf-8")
    assert "hidden" not in text
    assert "[INFO] [req-test]" in text
    assert "test_logging_config.py" in text


def test_trace_id_generation_and_truncation():
    try:
        assert set_trace_id(None).startswith("req-")
        assert len(set_trace_id("x" * 100)) == 64
        assert get_trace_id() == "x" * 64
    finally:
        clear_trace_id()
    assert get_trace_id() is None


def test_concurrent_writes_survive_rotation(tmp_path: Path):
    Logger.init(level="INFO", base_dir=str(tmp_path), max_bytes=200, backup_count=2)
    errors = []

    def worker():
        for _ in range(200):
            try:
                Logger.info("x" * 60, file="rotation/rotation.log")
            except Exception as exc:  # collected for the assertion below
                errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    try:
        for t in threads:
            t.start()
        for t in threads:
            t.join()
    finally:
        Logger.init()

    assert errors == []
    assert (tmp_path / "rotation" / "rotation.log").exists()
    assert (tmp_path / "rotation" / "rotation.log.1").exists()
