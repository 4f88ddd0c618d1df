from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator


@dataclass(frozen=True)
class RequestContext:
    trace_id: str
    actor_id: str | None = None


_REQUEST_CTX: ContextVar[RequestContext | None] = ContextVar("budget_request_context", default=None)


def create_incident_id() -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"inc-{stamp}-{uuid.uuid4().hex[:8]}"


def current_request_context() -> RequestContext | None:
    return _REQUEST_CTX.get()


def current_trace_id() -> str | None:
    ctx = _REQUEST_CTX.get()
    return ctx.trace_id if ctx is not None else None


@contextmanager
def bind_request_context(trace_id: str | None = None, actor_id: str | None = None) -> Iterator[RequestContext]:
    """Bind a trace id (generated when blank) and the acting user to log records in the block."""
    ctx = RequestContext(
        trace_id=(trace_id or "").strip() or create_incident_id(),
        actor_id=(actor_id or "").strip() or None,
    )
    token = _REQUEST_CTX.set(ctx)
    try:
        yield ctx
    finally:
        _REQUEST_CTX.reset(token)


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    with bind_request_context(trace_id) as ctx:
        yield ctx.trace_id


class TraceIdLogFilter(logging.Filter):
    """Stamps ``trace_id`` and ``actor_id`` on every record ("-" when unbound)."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _REQUEST_CTX.get()
        record.trace_id = ctx.trace_id if ctx is not None else "-"
        record.actor_id = (ctx.actor_id if ctx is not None else None) or "-"
        return True


__all__ = [
    "RequestContext",
    "create_incident_id",
    "current_request_context",
    "current_trace_id",
    "bind_request_context",
    "bind_trace_id",
    "TraceIdLogFilter",
]
