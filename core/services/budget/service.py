from __future__ import annotations

from sqlalchemy.orm import Session

from core.interfaces import (
    AuditLogRepository,
    BudgetLedger,
    BudgetRepository,
    ExpenseRepository,
    ReferenceDirectory,
)
from core.models import Clock, SystemClock
from core.services.audit.service import AuditService
from core.services.budget.applicability import BudgetApplicabilityMixin
from core.services.budget.crud import BudgetCrudMixin
from core.services.budget.enforcement import BudgetEnforcementMixin
from core.services.budget.lifecycle import BudgetLifecycleMixin
from core.services.budget.period import BudgetPeriodMixin
from core.services.budget.summary import BudgetSummaryMixin
from core.services.budget.transfer import BudgetTransferMixin
from core.services.budget.utilization import BudgetUtilizationMixin
from core.services.budget.validation import BudgetValidationMixin


class BudgetService(
    BudgetCrudMixin,
    BudgetLifecycleMixin,
    BudgetTransferMixin,
    BudgetEnforcementMixin,
    BudgetApplicabilityMixin,
    BudgetSummaryMixin,
    BudgetUtilizationMixin,
    BudgetPeriodMixin,
    BudgetValidationMixin,
):
    """Budget service orchestrator: wiring repositories + composing mixins."""

    def __init__(
        self,
        session: Session,
        budget_repo: BudgetRepository,
        budget_ledger: BudgetLedger,
        expense_repo: ExpenseRepository,
        reference_directory: ReferenceDirectory | None = None,
        audit_service: AuditService | None = None,
        audit_repo: AuditLogRepository | None = None,
        clock: Clock | None = None,
    ):
        self._session: Session = session
        self._budget_repo: BudgetRepository = budget_repo
        self._budget_ledger: BudgetLedger = budget_ledger
        self._expense_repo: ExpenseRepository = expense_repo
        self._reference_directory: ReferenceDirectory | None = reference_directory
        self._clock: Clock = clock or SystemClock()
        if audit_service is None:
            if audit_repo is None:
                raise ValueError("BudgetService needs an audit_service or an audit_repo")
            audit_service = AuditService(session, audit_repo, clock=self._clock)
        self._audit_service: AuditService = audit_service


__all__ = ["BudgetService"]
