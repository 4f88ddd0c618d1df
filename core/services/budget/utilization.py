from __future__ import annotations

from typing import FrozenSet

from core.interfaces import BudgetRepository, ExpenseRepository
from core.models import Budget, Clock, ExpenseStatus, ZERO, percentage
from core.services.budget.aggregation import aggregate_expenses
from core.services.budget.lifecycle_status import get_budget_status
from core.services.budget.models import UtilizationResult

COMMITTED_STATUSES: FrozenSet[ExpenseStatus] = frozenset(
    {
        ExpenseStatus.SUBMITTED,
        ExpenseStatus.PENDING_APPROVAL,
        ExpenseStatus.CLARIFICATION_REQUESTED,
        ExpenseStatus.RESUBMITTED,
    }
)
SPENT_STATUSES: FrozenSet[ExpenseStatus] = frozenset({ExpenseStatus.APPROVED, ExpenseStatus.PAID})


class BudgetUtilizationMixin:
    _budget_repo: BudgetRepository
    _expense_repo: ExpenseRepository
    _clock: Clock

    def calculate_utilization(self, budget: Budget) -> UtilizationResult:
        committed = ZERO
        spent = ZERO
        expense_count = 0
        pending_count = 0
        for expense in aggregate_expenses(self._expense_repo, budget):
            expense_count += 1
            if expense.status in COMMITTED_STATUSES:
                committed += expense.amount
                pending_count += 1
            elif expense.status in SPENT_STATUSES:
                spent += expense.amount

        allocated = budget.total_amount
        available = allocated - committed - spent
        utilization = percentage(committed + spent, allocated)
        return UtilizationResult(
            budget_id=budget.id,
            budget_name=budget.name,
            type=budget.type,
            period=budget.period,
            currency=budget.currency,
            enforcement=budget.enforcement,
            start_date=budget.start_date,
            end_date=budget.end_date,
            warning_threshold=budget.warning_threshold,
            allocated=allocated,
            committed=committed,
            spent=spent,
            available=available,
            utilization_percentage=utilization,
            is_over_budget=available < ZERO,
            is_at_warning_threshold=utilization >= budget.warning_threshold,
            expense_count=expense_count,
            pending_count=pending_count,
            status=get_budget_status(budget, self._clock.now()),
        )

    def get_utilization(self, budget_id: str) -> UtilizationResult:
        return self.calculate_utilization(self._require_budget(budget_id))


__all__ = ["BudgetUtilizationMixin", "COMMITTED_STATUSES", "SPENT_STATUSES"]
