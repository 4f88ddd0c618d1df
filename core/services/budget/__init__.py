from .enforcement import combine_budget_checks
from .lifecycle_status import derive_budget_status, get_budget_status
from .models import (
    BudgetCheckResult,
    BudgetFilter,
    BudgetSummary,
    BudgetSummaryTotals,
    CurrentPeriod,
    ExpenseCheckResult,
    ExpenseContext,
    PeriodDates,
    SummaryQuery,
    TransferResult,
    UtilizationResult,
)
from .period import compute_period_dates, current_period
from .service import BudgetService

__all__ = [
    "BudgetService",
    "compute_period_dates",
    "current_period",
    "derive_budget_status",
    "get_budget_status",
    "combine_budget_checks",
    "PeriodDates",
    "CurrentPeriod",
    "BudgetFilter",
    "UtilizationResult",
    "BudgetCheckResult",
    "ExpenseContext",
    "ExpenseCheckResult",
    "TransferResult",
    "SummaryQuery",
    "BudgetSummaryTotals",
    "BudgetSummary",
]
