from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.interfaces import BudgetLedger, BudgetRepository
from core.models import Budget, BudgetType, LedgerMove, scope_for
from core.services.budget.models import BudgetFilter
from infra.db.audit.mapper import audit_to_orm
from infra.db.budget.mapper import budget_from_orm, budget_to_orm, budget_values, scope_column
from infra.db.models import BudgetORM
from infra.db.optimistic import VersionedWrite, apply_versioned_writes, update_with_version_check


class SqlAlchemyBudgetRepository(BudgetRepository):
    def __init__(self, session: Session):
        self.session = session

    def get(self, budget_id: str) -> Optional[Budget]:
        obj = self.session.get(BudgetORM, budget_id, populate_existing=True)
        return budget_from_orm(obj) if obj else None

    def list(self, budget_filter: BudgetFilter | None = None) -> List[Budget]:
        budget_filter = budget_filter or BudgetFilter(active_only=False)
        stmt = select(BudgetORM)
        if budget_filter.active_only:
            stmt = stmt.where(BudgetORM.is_active.is_(True))
        if budget_filter.type is not None:
            stmt = stmt.where(BudgetORM.type == budget_filter.type)
        if budget_filter.period_type is not None:
            stmt = stmt.where(BudgetORM.period == budget_filter.period_type)
        if budget_filter.currency is not None:
            stmt = stmt.where(BudgetORM.currency == budget_filter.currency)
        if budget_filter.type is not None and budget_filter.scope_id:
            column = getattr(BudgetORM, scope_column(scope_for(budget_filter.type, budget_filter.scope_id)))
            stmt = stmt.where(column == budget_filter.scope_id)
        if budget_filter.window_start is not None:
            stmt = stmt.where(BudgetORM.start_date >= budget_filter.window_start)
        if budget_filter.window_end is not None:
            stmt = stmt.where(BudgetORM.end_date <= budget_filter.window_end)
        stmt = stmt.order_by(BudgetORM.name, BudgetORM.id).execution_options(populate_existing=True)
        rows = self.session.execute(stmt).scalars().all()
        return [budget_from_orm(row) for row in rows]

    def find_first_applicable(
        self,
        budget_type: BudgetType,
        scope_id: str,
        at: datetime,
    ) -> Optional[Budget]:
        column = getattr(BudgetORM, scope_column(scope_for(budget_type, scope_id)))
        stmt = (
            select(BudgetORM)
            .where(
                BudgetORM.type == budget_type,
                column == scope_id,
                BudgetORM.is_active.is_(True),
                BudgetORM.start_date <= at,
                BudgetORM.end_date >= at,
            )
            .order_by(BudgetORM.start_date, BudgetORM.id)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        obj = self.session.execute(stmt).scalars().first()
        return budget_from_orm(obj) if obj else None

    def add(self, budget: Budget) -> None:
        self.session.add(budget_to_orm(budget))

    def update(self, budget: Budget) -> int:
        budget.version = update_with_version_check(
            self.session,
            BudgetORM,
            VersionedWrite(budget.id, budget.version, budget_values(budget)),
            label="Budget",
        )
        return budget.version


class SqlAlchemyBudgetLedger(BudgetLedger):
    """Stages a transfer's balance writes and audit rows in the caller's transaction."""

    def __init__(self, session: Session):
        self.session = session

    def apply(self, move: LedgerMove) -> None:
        apply_versioned_writes(
            self.session,
            BudgetORM,
            [
                VersionedWrite(change.budget_id, change.expected_version, {"total_amount": change.new_amount})
                for change in (move.debit, move.credit)
            ],
            label="Budget",
        )
        for entry in move.audit_entries:
            self.session.add(audit_to_orm(entry))
        self.session.flush()


__all__ = ["SqlAlchemyBudgetRepository", "SqlAlchemyBudgetLedger"]
