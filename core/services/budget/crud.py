from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List

from sqlalchemy.orm import Session

from core.exceptions import ConcurrencyError, ValidationError
from core.interfaces import BudgetRepository
from core.models import (
    DEFAULT_WARNING_THRESHOLD,
    Budget,
    BudgetEnforcement,
    BudgetPeriod,
    BudgetType,
    Clock,
    normalize_ref,
    scope_for,
)
from core.services.audit.helpers import budget_snapshot, record_audit
from core.services.budget.models import BudgetFilter
from core.services.budget.period import compute_period_dates, current_period

logger = logging.getLogger(__name__)


class BudgetCrudMixin:
    _session: Session
    _budget_repo: BudgetRepository
    _clock: Clock

    def create_budget(
        self,
        name: str,
        type: BudgetType,
        period: BudgetPeriod,
        total_amount: Any,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        *,
        fiscal_year: int | None = None,
        quarter: int | None = None,
        month: int | None = None,
        warning_threshold: Any = DEFAULT_WARNING_THRESHOLD,
        enforcement: BudgetEnforcement = BudgetEnforcement.SOFT_WARNING,
        currency: str | None = None,
        scope_id: str | None = None,
        owner_id: str | None = None,
        actor_id: str | None = None,
    ) -> Budget:
        budget_type = BudgetType(type)
        period_type = BudgetPeriod(period)
        cleaned_name = self._clean_name(name)
        amount = self._clean_amount(total_amount)
        threshold = self._clean_threshold(warning_threshold)
        resolved_currency = self._clean_currency(currency)

        if start_date is None or end_date is None:
            if period_type == BudgetPeriod.PROJECT_BASED:
                raise ValidationError(
                    "Project-based budgets require explicit start and end dates.",
                    code="BUDGET_PERIOD_DATES_REQUIRED",
                )
            derived = compute_period_dates(
                period_type,
                fiscal_year or self._clock.now().year,
                quarter=quarter,
                month=month,
            )
            start_date = start_date or derived.start_date
            end_date = end_date or derived.end_date
        self._validate_window(start_date, end_date)

        scope = scope_for(budget_type, normalize_ref(scope_id))
        self._validate_scope_reference(scope)

        now = self._clock.now()
        budget = Budget.create(
            name=cleaned_name,
            type=budget_type,
            period=period_type,
            total_amount=amount,
            start_date=start_date,
            end_date=end_date,
            currency=resolved_currency,
            warning_threshold=threshold,
            enforcement=BudgetEnforcement(enforcement),
            scope=scope,
            owner_id=normalize_ref(owner_id),
            created_at=now,
            updated_at=now,
        )

        try:
            self._budget_repo.add(budget)
            record_audit(
                self,
                action="budget.create",
                entity_type="budget",
                entity_id=budget.id,
                actor_user_id=actor_id,
                new_value=budget_snapshot(budget),
            )
            self._session.commit()
            logger.info("Created budget %s - %s", budget.id, budget.name)
            return budget
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating budget: %s", e)
            raise

    def list_budgets(self, type: BudgetType | None = None, active_only: bool = True) -> List[Budget]:
        budget_filter = BudgetFilter(
            type=BudgetType(type) if type is not None else None,
            active_only=active_only,
        )
        return sorted(self._budget_repo.list(budget_filter), key=lambda b: (b.name.lower(), b.id))

    def get_budget(self, budget_id: str) -> Budget:
        return self._require_budget(budget_id)

    def update_budget(
        self,
        budget_id: str,
        *,
        name: str | None = None,
        period: BudgetPeriod | None = None,
        total_amount: Any = None,
        warning_threshold: Any = None,
        enforcement: BudgetEnforcement | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        currency: str | None = None,
        expected_version: int | None = None,
        actor_id: str | None = None,
    ) -> Budget:
        budget = self._require_budget(budget_id)
        if expected_version is not None and budget.version != expected_version:
            raise ConcurrencyError(
                "Budget changed since you opened it. Refresh and try again.",
                code="STALE_WRITE",
            )

        old_value = budget_snapshot(budget)
        if name is not None:
            budget.name = self._clean_name(name)
        if period is not None and BudgetPeriod(period) != budget.period:
            budget.period = BudgetPeriod(period)
            if budget.period != BudgetPeriod.PROJECT_BASED:
                # Snap to the calendar period containing the current start date.
                anchor = current_period(budget.period, budget.start_date)
                derived = compute_period_dates(budget.period, anchor.year, quarter=anchor.quarter, month=anchor.month)
                budget.start_date, budget.end_date = derived.start_date, derived.end_date
        if total_amount is not None:
            budget.total_amount = self._clean_amount(total_amount)
        if warning_threshold is not None:
            budget.warning_threshold = self._clean_threshold(warning_threshold)
        if enforcement is not None:
            budget.enforcement = BudgetEnforcement(enforcement)
        if start_date is not None:
            budget.start_date = start_date
        if end_date is not None:
            budget.end_date = end_date
        if currency is not None:
            budget.currency = self._clean_currency(currency)
        self._validate_window(budget.start_date, budget.end_date)
        budget.updated_at = self._clock.now()

        try:
            budget.version = self._budget_repo.update(budget)
            record_audit(
                self,
                action="budget.update",
                entity_type="budget",
                entity_id=budget.id,
                actor_user_id=actor_id,
                old_value=old_value,
                new_value=budget_snapshot(budget),
            )
            self._session.commit()
            logger.info("Updated budget %s - %s", budget.id, budget.name)
            return budget
        except Exception as e:
            self._session.rollback()
            logger.error("Error updating budget %s: %s", budget.id, e)
            raise

    def remove_budget(self, budget_id: str, actor_id: str | None = None) -> Budget:
        budget = self._require_budget(budget_id)
        old_value = budget_snapshot(budget)
        budget.is_active = False
        budget.updated_at = self._clock.now()

        try:
            budget.version = self._budget_repo.update(budget)
            record_audit(
                self,
                action="budget.remove",
                entity_type="budget",
                entity_id=budget.id,
                actor_user_id=actor_id,
                old_value=old_value,
                new_value=budget_snapshot(budget),
            )
            self._session.commit()
            logger.info("Removed budget %s - %s", budget.id, budget.name)
            return budget
        except Exception as e:
            self._session.rollback()
            logger.error("Error removing budget %s: %s", budget.id, e)
            raise


__all__ = ["BudgetCrudMixin"]
