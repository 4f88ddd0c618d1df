from __future__ import annotations

import logging

from infra import logging_config
from infra.operational_support import (
    TraceIdLogFilter,
    bind_request_context,
    bind_trace_id,
    current_request_context,
    current_trace_id,
)


def test_bind_trace_id_generates_and_resets():
    assert current_trace_id() is None
    with bind_trace_id(None) as trace_id:
        assert trace_id.startswith("inc-")
        assert current_trace_id() == trace_id
    assert current_trace_id() is None


def test_bind_trace_id_keeps_given_value():
    with bind_trace_id("  req-42 ") as trace_id:
        assert trace_id == "req-42"


def test_trace_filter_stamps_records():
    record = logging.LogRecord("budget", logging.INFO, __file__, 1, "msg", None, None)
    with bind_trace_id("req-7"):
        TraceIdLogFilter().filter(record)
    assert record.trace_id == "req-7"

    TraceIdLogFilter().filter(record)
    assert record.trace_id == "-"


def test_setup_logging_writes_to_given_directory(tmp_path, monkeypatch):
    monkeypatch.setenv("BUDGET_LOG_LEVEL", "debug")
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        log_file = logging_config.setup_logging(tmp_path)
        assert root.level == logging.DEBUG
        with bind_trace_id("req-9"):
            logging.getLogger("core.services.budget").info("budget created")
        for handler in root.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "trace=req-9" in text
        assert "budget created" in text
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("BUDGET_LOG_LEVEL", "chatty")
    assert logging_config.resolve_log_level() == logging.INFO


def test_request_context_carries_actor():
    record = logging.LogRecord("budget", logging.INFO, __file__, 1, "msg", None, None)
    with bind_request_context("req-11", actor_id="cfo") as ctx:
        assert current_request_context() == ctx
        TraceIdLogFilter().filter(record)
    assert (record.trace_id, record.actor_id) == ("req-11", "cfo")
    assert current_request_context() is None


def test_data_dir_override_places_database_and_logs(tmp_path, monkeypatch):
    from infra import path

    monkeypatch.setenv("BUDGET_DATA_DIR", str(tmp_path / "budget-data"))

    assert path.default_db_path() == tmp_path / "budget-data" / "budget_engine.db"
    assert path.default_log_dir() == tmp_path / "budget-data" / "logs"
    assert (tmp_path / "budget-data").is_dir()
