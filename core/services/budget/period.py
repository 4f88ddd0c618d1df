from __future__ import annotations

import math
from datetime import datetime, timedelta

from core.exceptions import ValidationError
from core.models import BudgetPeriod
from core.services.budget.models import CurrentPeriod, PeriodDates

_ONE_SECOND = timedelta(seconds=1)


def _month_start(year: int, month: int) -> datetime:
    return datetime(year, month, 1)


def _month_after(year: int, month: int) -> datetime:
    if month == 12:
        return datetime(year + 1, 1, 1)
    return datetime(year, month + 1, 1)


def _require_quarter(quarter: int | None) -> int:
    if quarter is None or not 1 <= int(quarter) <= 4:
        raise ValidationError(
            "Quarter must be between 1 and 4 for quarterly budgets.",
            code="BUDGET_QUARTER_INVALID",
        )
    return int(quarter)


def _require_month(month: int | None) -> int:
    if month is None or not 1 <= int(month) <= 12:
        raise ValidationError(
            "Month must be between 1 and 12 for monthly budgets.",
            code="BUDGET_MONTH_INVALID",
        )
    return int(month)


def compute_period_dates(
    period_type: BudgetPeriod,
    fiscal_year: int,
    quarter: int | None = None,
    month: int | None = None,
) -> PeriodDates:
    """Start and end instants of a budget period.

    End dates are the last second of the period: the first instant of the
    following month minus one second.
    """
    period_type = BudgetPeriod(period_type)
    year = int(fiscal_year)

    if period_type == BudgetPeriod.ANNUAL:
        return PeriodDates(_month_start(year, 1), _month_after(year, 12) - _ONE_SECOND)

    if period_type == BudgetPeriod.QUARTERLY:
        q = _require_quarter(quarter)
        first_month = (q - 1) * 3 + 1
        last_month = first_month + 2
        return PeriodDates(
            _month_start(year, first_month),
            _month_after(year, last_month) - _ONE_SECOND,
        )

    if period_type == BudgetPeriod.MONTHLY:
        m = _require_month(month)
        return PeriodDates(_month_start(year, m), _month_after(year, m) - _ONE_SECOND)

    raise ValidationError(
        "Project-based budgets require explicit start and end dates.",
        code="BUDGET_PERIOD_DATES_REQUIRED",
    )


def current_period(period_type: BudgetPeriod, now: datetime) -> CurrentPeriod:
    period_type = BudgetPeriod(period_type)
    if period_type == BudgetPeriod.QUARTERLY:
        return CurrentPeriod(year=now.year, quarter=math.ceil(now.month / 3))
    if period_type == BudgetPeriod.MONTHLY:
        return CurrentPeriod(year=now.year, month=now.month)
    return CurrentPeriod(year=now.year)


class BudgetPeriodMixin:
    def compute_period_dates(
        self,
        period_type: BudgetPeriod,
        fiscal_year: int,
        quarter: int | None = None,
        month: int | None = None,
    ) -> PeriodDates:
        return compute_period_dates(period_type, fiscal_year, quarter=quarter, month=month)

    def current_period(self, period_type: BudgetPeriod) -> CurrentPeriod:
        return current_period(period_type, self._clock.now())


__all__ = ["compute_period_dates", "current_period", "BudgetPeriodMixin"]
