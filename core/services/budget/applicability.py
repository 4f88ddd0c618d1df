from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from core.interfaces import BudgetRepository
from core.models import Budget, BudgetType, Clock, normalize_ref
from core.services.budget.models import ExpenseContext

# Order in which expense attributes are matched against budget scopes.
SCOPE_LOOKUP_ORDER = (
    (BudgetType.DEPARTMENT, "department_id"),
    (BudgetType.PROJECT, "project_id"),
    (BudgetType.COST_CENTER, "cost_center_id"),
    (BudgetType.CATEGORY, "category_id"),
    (BudgetType.EMPLOYEE, "employee_id"),
)


class BudgetApplicabilityMixin:
    _budget_repo: BudgetRepository
    _clock: Clock

    def find_applicable_budgets(self, context: ExpenseContext) -> List[Budget]:
        at = context.expense_date or self._clock.now()
        found: List[Budget] = []
        seen: set[str] = set()

        def _collect(budget: Optional[Budget]) -> None:
            if budget is not None and budget.id not in seen:
                seen.add(budget.id)
                found.append(budget)

        explicit_id = normalize_ref(context.budget_id)
        if explicit_id:
            _collect(self._explicit_budget(explicit_id, at))

        for budget_type, attr in SCOPE_LOOKUP_ORDER:
            ref_id = normalize_ref(getattr(context, attr))
            if ref_id:
                _collect(self._budget_repo.find_first_applicable(budget_type, ref_id, at))
        return found

    def _explicit_budget(self, budget_id: str, at: datetime) -> Optional[Budget]:
        budget = self._budget_repo.get(budget_id)
        if budget is None or not budget.is_active:
            return None
        if not budget.start_date <= at <= budget.end_date:
            return None
        return budget


__all__ = ["BudgetApplicabilityMixin", "SCOPE_LOOKUP_ORDER"]
