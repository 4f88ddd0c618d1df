from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import FrozenSet, Optional

from core.domain.enums import ExpenseStatus
from core.domain.scope import BudgetScope

# Statuses that never reserve or consume budget.
EXCLUDED_STATUSES: FrozenSet[ExpenseStatus] = frozenset(
    {ExpenseStatus.DRAFT, ExpenseStatus.REJECTED}
)


@dataclass(frozen=True)
class ExpenseAmount:
    """Read-only projection of an expense as seen by budget aggregation."""
    id: str
    status: ExpenseStatus
    amount: Decimal


@dataclass(frozen=True)
class ExpenseFilter:
    budget_id: str
    scope: Optional[BudgetScope]
    date_from: datetime
    date_to: datetime
    excluded_statuses: FrozenSet[ExpenseStatus] = field(default=EXCLUDED_STATUSES)


__all__ = ["ExpenseAmount", "ExpenseFilter", "EXCLUDED_STATUSES"]
