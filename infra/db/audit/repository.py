from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.interfaces import AuditLogRepository
from core.models import AuditLogEntry, AuditQuery
from infra.db.audit.mapper import audit_from_orm, audit_to_orm
from infra.db.models import AuditLogORM


class SqlAlchemyAuditLogRepository(AuditLogRepository):
    """Insert-only store; rows are never updated or deleted."""

    def __init__(self, session: Session):
        self.session = session

    def add(self, entry: AuditLogEntry) -> None:
        self.session.add(audit_to_orm(entry))

    def search(self, query: AuditQuery) -> List[AuditLogEntry]:
        criteria = [
            column == value
            for column, value in (
                (AuditLogORM.entity_type, query.entity_type),
                (AuditLogORM.entity_id, query.entity_id),
                (AuditLogORM.action, query.action),
            )
            if value is not None
        ]
        stmt = (
            select(AuditLogORM)
            .where(*criteria)
            .order_by(AuditLogORM.occurred_at.desc(), AuditLogORM.action)
            .limit(query.bounded_limit())
        )
        return [audit_from_orm(row) for row in self.session.scalars(stmt)]


__all__ = ["SqlAlchemyAuditLogRepository"]
