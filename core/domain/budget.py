from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.domain.enums import BudgetEnforcement, BudgetPeriod, BudgetType
from core.domain.identifiers import generate_id
from core.domain.money import ZERO
from core.domain.scope import BudgetScope

DEFAULT_WARNING_THRESHOLD = Decimal("80")


@dataclass
class Budget:
    id: str
    name: str
    type: BudgetType
    period: BudgetPeriod
    total_amount: Decimal
    start_date: datetime
    end_date: datetime
    currency: str
    warning_threshold: Decimal = DEFAULT_WARNING_THRESHOLD
    enforcement: BudgetEnforcement = BudgetEnforcement.SOFT_WARNING
    is_active: bool = True
    scope: Optional[BudgetScope] = None
    owner_id: Optional[str] = None
    used_amount: Decimal = ZERO
    version: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def scope_id(self) -> Optional[str]:
        return self.scope.id if self.scope is not None else None

    @staticmethod
    def create(
        name: str,
        type: BudgetType,
        period: BudgetPeriod,
        total_amount: Decimal,
        start_date: datetime,
        end_date: datetime,
        currency: str,
        **extra,
    ) -> "Budget":
        return Budget(
            id=generate_id(),
            name=name,
            type=type,
            period=period,
            total_amount=total_amount,
            start_date=start_date,
            end_date=end_date,
            currency=currency,
            **extra,
        )


__all__ = ["Budget", "DEFAULT_WARNING_THRESHOLD"]
