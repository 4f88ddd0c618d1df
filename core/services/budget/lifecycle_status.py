from __future__ import annotations

from datetime import datetime

from core.models import Budget, BudgetStatus


def derive_budget_status(
    is_active: bool,
    start_date: datetime,
    end_date: datetime,
    now: datetime,
) -> BudgetStatus:
    if not is_active:
        return BudgetStatus.ARCHIVED if end_date < now else BudgetStatus.CLOSED
    if start_date > now:
        return BudgetStatus.DRAFT
    return BudgetStatus.ACTIVE


def get_budget_status(budget: Budget, now: datetime) -> BudgetStatus:
    return derive_budget_status(budget.is_active, budget.start_date, budget.end_date, now)


__all__ = ["derive_budget_status", "get_budget_status"]
