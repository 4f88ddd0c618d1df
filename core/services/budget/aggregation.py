from __future__ import annotations

from typing import List

from core.interfaces import ExpenseRepository
from core.models import Budget, ExpenseAmount, ExpenseFilter


def build_expense_filter(budget: Budget) -> ExpenseFilter:
    """Expenses counted against a budget: in scope or tagged with it, in window, not draft/rejected."""
    return ExpenseFilter(
        budget_id=budget.id,
        scope=budget.scope,
        date_from=budget.start_date,
        date_to=budget.end_date,
    )


def aggregate_expenses(expense_repo: ExpenseRepository, budget: Budget) -> List[ExpenseAmount]:
    return expense_repo.list_amounts(build_expense_filter(budget))


__all__ = ["build_expense_filter", "aggregate_expenses"]
