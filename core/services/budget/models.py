from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from core.models import (
    BudgetEnforcement,
    BudgetPeriod,
    BudgetStatus,
    BudgetType,
    EnforcementAction,
)


@dataclass(frozen=True)
class PeriodDates:
    start_date: datetime
    end_date: datetime


@dataclass(frozen=True)
class CurrentPeriod:
    year: int
    quarter: Optional[int] = None
    month: Optional[int] = None


@dataclass(frozen=True)
class BudgetFilter:
    type: Optional[BudgetType] = None
    period_type: Optional[BudgetPeriod] = None
    scope_id: Optional[str] = None
    currency: Optional[str] = None
    active_only: bool = True
    window_start: Optional[datetime] = None
    window_end: Optional[datetime] = None


@dataclass(frozen=True)
class UtilizationResult:
    budget_id: str
    budget_name: str
    type: BudgetType
    period: BudgetPeriod
    currency: str
    enforcement: BudgetEnforcement
    start_date: datetime
    end_date: datetime
    warning_threshold: Decimal
    allocated: Decimal
    committed: Decimal
    spent: Decimal
    available: Decimal
    utilization_percentage: Decimal
    is_over_budget: bool
    is_at_warning_threshold: bool
    expense_count: int
    pending_count: int
    status: BudgetStatus


@dataclass(frozen=True)
class BudgetCheckResult:
    budget_id: str
    budget_name: str
    can_proceed: bool
    would_exceed: bool
    would_trigger_warning: bool
    enforcement_action: EnforcementAction
    current_utilization: Decimal
    projected_utilization: Decimal
    expense_amount: Decimal
    available_before: Decimal
    available_after: Decimal
    message: Optional[str] = None


@dataclass(frozen=True)
class ExpenseContext:
    amount: Decimal
    expense_date: Optional[datetime] = None
    budget_id: Optional[str] = None
    department_id: Optional[str] = None
    project_id: Optional[str] = None
    cost_center_id: Optional[str] = None
    category_id: Optional[str] = None
    employee_id: Optional[str] = None


@dataclass(frozen=True)
class ExpenseCheckResult:
    allowed: bool
    has_warnings: bool
    requires_escalation: bool
    message: str
    budget_results: List[BudgetCheckResult] = field(default_factory=list)


@dataclass(frozen=True)
class TransferResult:
    success: bool
    message: str
    from_budget_id: str
    to_budget_id: str
    amount: Decimal
    from_budget_new_total: Decimal
    to_budget_new_total: Decimal


@dataclass(frozen=True)
class SummaryQuery:
    type: Optional[BudgetType] = None
    period_type: Optional[BudgetPeriod] = None
    department_id: Optional[str] = None
    project_id: Optional[str] = None
    fiscal_year: Optional[int] = None
    quarter: Optional[int] = None
    currency: Optional[str] = None
    active_only: bool = True


@dataclass(frozen=True)
class BudgetSummaryTotals:
    total_budgets: int
    total_allocated: Decimal
    total_committed: Decimal
    total_spent: Decimal
    total_available: Decimal
    overall_utilization: Decimal
    budgets_over_threshold: int
    budgets_exceeded: int
    active_budgets: int
    currency: Optional[str] = None


@dataclass(frozen=True)
class BudgetSummary:
    generated_at: datetime
    totals: BudgetSummaryTotals
    budgets: List[UtilizationResult] = field(default_factory=list)


__all__ = [
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
