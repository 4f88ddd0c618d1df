from __future__ import annotations

from typing import List

from core.exceptions import ValidationError
from core.interfaces import BudgetRepository
from core.models import (
    Budget,
    BudgetPeriod,
    BudgetStatus,
    Clock,
    DepartmentScope,
    ProjectScope,
    ZERO,
    normalize_ref,
    percentage,
)
from core.services.budget.models import (
    BudgetFilter,
    BudgetSummary,
    BudgetSummaryTotals,
    SummaryQuery,
    UtilizationResult,
)
from core.services.budget.period import compute_period_dates


def summarize_utilizations(utilizations: List[UtilizationResult]) -> BudgetSummaryTotals:
    currencies = {u.currency for u in utilizations}
    if len(currencies) > 1:
        raise ValidationError(
            "Budget summary spans multiple currencies "
            f"({', '.join(sorted(currencies))}); filter by currency.",
            code="SUMMARY_MIXED_CURRENCIES",
        )
    allocated = sum((u.allocated for u in utilizations), ZERO)
    committed = sum((u.committed for u in utilizations), ZERO)
    spent = sum((u.spent for u in utilizations), ZERO)
    return BudgetSummaryTotals(
        total_budgets=len(utilizations),
        total_allocated=allocated,
        total_committed=committed,
        total_spent=spent,
        total_available=allocated - committed - spent,
        overall_utilization=percentage(committed + spent, allocated),
        budgets_over_threshold=sum(1 for u in utilizations if u.is_at_warning_threshold),
        budgets_exceeded=sum(1 for u in utilizations if u.is_over_budget),
        active_budgets=sum(1 for u in utilizations if u.status == BudgetStatus.ACTIVE),
        currency=next(iter(currencies), None),
    )


class BudgetSummaryMixin:
    _budget_repo: BudgetRepository
    _clock: Clock

    def _summary_filter(self, query: SummaryQuery) -> BudgetFilter:
        window_start = window_end = None
        if query.fiscal_year is not None:
            if query.quarter is not None:
                window = compute_period_dates(BudgetPeriod.QUARTERLY, query.fiscal_year, quarter=query.quarter)
            else:
                window = compute_period_dates(BudgetPeriod.ANNUAL, query.fiscal_year)
            window_start, window_end = window.start_date, window.end_date
        currency = (query.currency or "").strip().upper() or None
        return BudgetFilter(
            type=query.type,
            period_type=query.period_type,
            currency=currency,
            active_only=query.active_only,
            window_start=window_start,
            window_end=window_end,
        )

    @staticmethod
    def _matches_scope_filters(budget: Budget, query: SummaryQuery) -> bool:
        department_id = normalize_ref(query.department_id)
        project_id = normalize_ref(query.project_id)
        if department_id and budget.scope != DepartmentScope(department_id):
            return False
        if project_id and budget.scope != ProjectScope(project_id):
            return False
        return True

    def get_budget_summary(self, query: SummaryQuery | None = None) -> BudgetSummary:
        query = query or SummaryQuery()
        budgets = [
            budget
            for budget in self._budget_repo.list(self._summary_filter(query))
            if self._matches_scope_filters(budget, query)
        ]
        budgets.sort(key=lambda b: (b.name.lower(), b.id))
        utilizations = [self.calculate_utilization(budget) for budget in budgets]
        return BudgetSummary(
            generated_at=self._clock.now(),
            totals=summarize_utilizations(utilizations),
            budgets=utilizations,
        )


__all__ = ["BudgetSummaryMixin", "summarize_utilizations"]
