from __future__ import annotations

from typing import Any, List

from sqlalchemy.orm import Session

from core.interfaces import AuditLogRepository
from core.models import DEFAULT_AUDIT_LIMIT, AuditLogEntry, AuditQuery, Clock, SystemClock


class AuditService:
    """Builds timestamped audit entries and reads them back.

    Entries are only staged here. The budget service that owns the change
    commits them in the same transaction, so there is no update or delete path.
    """

    def __init__(
        self,
        session: Session,
        audit_repo: AuditLogRepository,
        clock: Clock | None = None,
    ):
        self._session = session
        self._audit_repo = audit_repo
        self._clock = clock or SystemClock()

    def build_entry(self, *, action: str, entity_type: str, entity_id: str, **details: Any) -> AuditLogEntry:
        return AuditLogEntry.create(
            action,
            entity_type,
            entity_id,
            occurred_at=self._clock.now(),
            **details,
        )

    def record(self, *, commit: bool = False, **fields: Any) -> AuditLogEntry:
        entry = self.build_entry(**fields)
        self._audit_repo.add(entry)
        if commit:
            self._session.commit()
        return entry

    def list_recent(
        self,
        limit: int = DEFAULT_AUDIT_LIMIT,
        *,
        entity_type: str | None = None,
        entity_id: str | None = None,
        action: str | None = None,
    ) -> List[AuditLogEntry]:
        query = AuditQuery(entity_type=entity_type, entity_id=entity_id, action=action, limit=limit)
        return self._audit_repo.search(query)


__all__ = ["AuditService"]
