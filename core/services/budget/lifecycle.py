from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from core.exceptions import LifecycleStateError
from core.interfaces import BudgetRepository
from core.models import Budget, BudgetStatus, Clock
from core.services.audit.helpers import budget_snapshot, record_audit
from core.services.budget.lifecycle_status import derive_budget_status, get_budget_status

logger = logging.getLogger(__name__)


class BudgetLifecycleMixin:
    _session: Session
    _budget_repo: BudgetRepository
    _clock: Clock

    def get_budget_status(self, budget: Budget, now: datetime | None = None) -> BudgetStatus:
        return get_budget_status(budget, now or self._clock.now())

    def activate_budget(self, budget_id: str, actor_id: str | None = None) -> Budget:
        budget = self._require_budget(budget_id)
        if budget.is_active:
            raise LifecycleStateError("Budget is already active", code="BUDGET_ALREADY_ACTIVE")
        if budget.end_date < self._clock.now():
            raise LifecycleStateError(
                "Cannot activate a budget whose period has ended (end date is in the past)",
                code="BUDGET_PERIOD_ENDED",
            )

        old_value = budget_snapshot(budget)
        budget.is_active = True
        return self._persist_transition(budget, "budget.activate", actor_id, old_value)

    def close_budget(self, budget_id: str, actor_id: str | None = None) -> Budget:
        budget = self._require_budget(budget_id)
        if not budget.is_active:
            raise LifecycleStateError("Budget is already inactive", code="BUDGET_ALREADY_INACTIVE")

        utilization = self.calculate_utilization(budget)
        old_value = budget_snapshot(budget)
        budget.used_amount = utilization.committed + utilization.spent
        budget.is_active = False
        return self._persist_transition(budget, "budget.close", actor_id, old_value)

    def archive_budget(self, budget_id: str, actor_id: str | None = None) -> Budget:
        budget = self._require_budget(budget_id)
        now = self._clock.now()
        if budget.is_active:
            raise LifecycleStateError(
                "Budget must be closed before archiving",
                code="BUDGET_NOT_CLOSED",
            )
        if budget.end_date > now:
            raise LifecycleStateError(
                "Cannot archive a budget before its end date",
                code="BUDGET_PERIOD_NOT_ENDED",
            )

        snapshot = budget_snapshot(budget)
        try:
            record_audit(
                self,
                action="budget.archive",
                entity_type="budget",
                entity_id=budget.id,
                actor_user_id=actor_id,
                old_value=snapshot,
                new_value={
                    **snapshot,
                    "status": derive_budget_status(False, budget.start_date, budget.end_date, now).value,
                },
            )
            self._session.commit()
            logger.info("Archived budget %s - %s", budget.id, budget.name)
            return budget
        except Exception as e:
            self._session.rollback()
            logger.error("Error archiving budget %s: %s", budget.id, e)
            raise

    def _persist_transition(
        self,
        budget: Budget,
        action: str,
        actor_id: str | None,
        old_value: dict,
    ) -> Budget:
        budget.updated_at = self._clock.now()
        try:
            budget.version = self._budget_repo.update(budget)
            record_audit(
                self,
                action=action,
                entity_type="budget",
                entity_id=budget.id,
                actor_user_id=actor_id,
                old_value=old_value,
                new_value=budget_snapshot(budget),
            )
            self._session.commit()
            logger.info("%s applied to budget %s - %s", action, budget.id, budget.name)
            return budget
        except Exception as e:
            self._session.rollback()
            logger.error("Error applying %s to budget %s: %s", action, budget.id, e)
            raise


__all__ = ["BudgetLifecycleMixin"]
