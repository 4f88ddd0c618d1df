from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from core.domain.identifiers import generate_id

DEFAULT_AUDIT_LIMIT = 200


@dataclass(frozen=True)
class AuditLogEntry:
    """Append-only record of a budget mutation with before/after snapshots."""
    id: str
    occurred_at: datetime
    action: str
    entity_type: str
    entity_id: str
    actor_user_id: Optional[str] = None
    old_value: Mapping[str, Any] = field(default_factory=dict)
    new_value: Mapping[str, Any] = field(default_factory=dict)
    reason: Optional[str] = None

    @classmethod
    def create(cls, action: str, entity_type: str, entity_id: str, *, occurred_at: datetime, **details) -> "AuditLogEntry":
        details["old_value"] = dict(details.get("old_value") or {})
        details["new_value"] = dict(details.get("new_value") or {})
        return cls(
            id=generate_id(),
            occurred_at=occurred_at,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            **details,
        )


@dataclass(frozen=True)
class AuditQuery:
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    action: Optional[str] = None
    limit: int = DEFAULT_AUDIT_LIMIT

    def bounded_limit(self) -> int:
        return max(1, int(self.limit))


__all__ = ["AuditLogEntry", "AuditQuery", "DEFAULT_AUDIT_LIMIT"]
