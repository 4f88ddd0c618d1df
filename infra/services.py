from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from sqlalchemy.orm import Session

from core.models import Clock, SystemClock
from core.services.audit import AuditService
from core.services.budget import BudgetService
from infra.db.audit.repository import SqlAlchemyAuditLogRepository
from infra.db.budget.repository import SqlAlchemyBudgetLedger, SqlAlchemyBudgetRepository
from infra.db.expense.repository import SqlAlchemyExpenseRepository
from infra.db.reference.repository import SqlAlchemyReferenceDirectory


@dataclass(frozen=True)
class ServiceGraph:
    """Services wired to one session and one clock."""
    session: Session
    clock: Clock
    audit_service: AuditService
    budget_service: BudgetService

    def as_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def build_service_graph(session: Session, clock: Clock | None = None) -> ServiceGraph:
    clock = clock or SystemClock()
    audit_service = AuditService(session, SqlAlchemyAuditLogRepository(session), clock=clock)
    budget_service = BudgetService(
        session,
        SqlAlchemyBudgetRepository(session),
        SqlAlchemyBudgetLedger(session),
        SqlAlchemyExpenseRepository(session),
        reference_directory=SqlAlchemyReferenceDirectory(session),
        audit_service=audit_service,
        clock=clock,
    )
    return ServiceGraph(session, clock, audit_service, budget_service)


def build_service_dict(session: Session, clock: Clock | None = None) -> dict[str, Any]:
    return build_service_graph(session, clock=clock).as_dict()
