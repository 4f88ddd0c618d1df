# infra/logging_config.py
from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.path import default_log_dir
from infra.operational_support import TraceIdLogFilter

LOG_FILENAME = "budget_engine.log"
FILE_FORMAT = "%(asctime)s [%(levelname)s] trace=%(trace_id)s actor=%(actor_id)s %(name)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s [trace=%(trace_id)s]: %(message)s"
MAX_LOG_BYTES = 1_000_000
LOG_BACKUPS = 5


def resolve_log_level() -> int:
    raw = (os.getenv("BUDGET_LOG_LEVEL") or "").strip().upper()
    level = logging.getLevelName(raw) if raw else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def _with_format(handler: logging.Handler, fmt: str, trace_filter: logging.Filter) -> logging.Handler:
    handler.addFilter(trace_filter)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(log_dir: Path | None = None) -> Path:
    """Route root logging to a rotating file plus the console.

    Calling it again replaces the handlers installed by the previous call.
    """
    target_dir = log_dir or default_log_dir()
    target_dir.mkdir(parents=True, exist_ok=True)
    log_file = target_dir / LOG_FILENAME

    root = logging.getLogger()
    root.setLevel(resolve_log_level())
    root.handlers.clear()

    trace_filter = TraceIdLogFilter()
    rotating = RotatingFileHandler(log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    root.addHandler(_with_format(rotating, FILE_FORMAT, trace_filter))
    root.addHandler(_with_format(logging.StreamHandler(), CONSOLE_FORMAT, trace_filter))

    root.info("Logging initialized. Log file at %s", log_file)
    return log_file
