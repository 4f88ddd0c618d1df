from __future__ import annotations

from typing import List

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from core.interfaces import ExpenseRepository
from core.models import (
    CategoryScope,
    CostCenterScope,
    DepartmentScope,
    EmployeeScope,
    ExpenseAmount,
    ExpenseFilter,
    ProjectScope,
)
from infra.db.expense.mapper import expense_amount_from_row
from infra.db.models import ExpenseORM, UserORM


def _scope_clause(expense_filter: ExpenseFilter):
    scope = expense_filter.scope
    if scope is None:
        return None
    if isinstance(scope, DepartmentScope):
        submitter_in_department = select(UserORM.id).where(UserORM.department_id == scope.id)
        return or_(
            ExpenseORM.department_id == scope.id,
            ExpenseORM.submitter_id.in_(submitter_in_department),
        )
    if isinstance(scope, ProjectScope):
        return ExpenseORM.project_id == scope.id
    if isinstance(scope, CostCenterScope):
        return ExpenseORM.cost_center_id == scope.id
    if isinstance(scope, CategoryScope):
        return ExpenseORM.category_id == scope.id
    if isinstance(scope, EmployeeScope):
        return ExpenseORM.submitter_id == scope.id
    raise TypeError(f"Unsupported budget scope: {scope!r}")


class SqlAlchemyExpenseRepository(ExpenseRepository):
    """Read-only view of expenses for budget aggregation."""

    def __init__(self, session: Session):
        self.session = session

    def list_amounts(self, expense_filter: ExpenseFilter) -> List[ExpenseAmount]:
        tagged = ExpenseORM.budget_id == expense_filter.budget_id
        scope_clause = _scope_clause(expense_filter)
        match = tagged if scope_clause is None else or_(scope_clause, tagged)
        stmt = (
            select(ExpenseORM.id, ExpenseORM.status, ExpenseORM.amount_in_base)
            .where(
                match,
                ExpenseORM.expense_date >= expense_filter.date_from,
                ExpenseORM.expense_date <= expense_filter.date_to,
                ExpenseORM.status.not_in(list(expense_filter.excluded_statuses)),
            )
            .order_by(ExpenseORM.expense_date, ExpenseORM.id)
        )
        return [expense_amount_from_row(row) for row in self.session.execute(stmt).all()]


__all__ = ["SqlAlchemyExpenseRepository"]
