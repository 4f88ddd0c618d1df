from __future__ import annotations

from decimal import Decimal
from typing import Any, List

from core.exceptions import ValidationError
from core.models import (
    ZERO,
    Budget,
    BudgetEnforcement,
    EnforcementAction,
    has_cent_precision,
    percentage,
    to_decimal,
)
from core.services.budget.models import BudgetCheckResult, ExpenseCheckResult, ExpenseContext

_ACTION_BY_MODE = {
    BudgetEnforcement.HARD_BLOCK: EnforcementAction.HARD_BLOCK,
    BudgetEnforcement.SOFT_WARNING: EnforcementAction.SOFT_WARNING,
    BudgetEnforcement.AUTO_ESCALATE: EnforcementAction.ESCALATE,
}


def _fmt(value: Decimal) -> str:
    return f"{value:,.2f}"


def _fmt_pct(value: Decimal) -> str:
    return format(value.normalize(), "f")


def _check_message(
    budget: Budget,
    action: EnforcementAction,
    would_trigger_warning: bool,
    projected: Decimal,
    available: Decimal,
    amount: Decimal,
) -> str | None:
    if action == EnforcementAction.HARD_BLOCK:
        return (
            f"Cannot submit: expense of {budget.currency} {_fmt(amount)} would exceed budget "
            f"'{budget.name}'. Available: {budget.currency} {_fmt(available)}"
        )
    if action == EnforcementAction.SOFT_WARNING:
        return (
            f"Warning: this expense will exceed budget '{budget.name}' "
            f"({_fmt_pct(projected)}% projected utilization)"
        )
    if action == EnforcementAction.ESCALATE:
        return (
            f"Expense exceeds budget '{budget.name}' and requires additional approval "
            f"({_fmt_pct(projected)}% projected utilization)"
        )
    if would_trigger_warning:
        return f"Budget '{budget.name}' will reach {_fmt_pct(projected)}% utilization with this expense"
    return None


def combine_budget_checks(results: List[BudgetCheckResult]) -> ExpenseCheckResult:
    """Most restrictive result wins across all applicable budgets."""
    if not results:
        return ExpenseCheckResult(
            allowed=True,
            has_warnings=False,
            requires_escalation=False,
            message="No applicable budgets found for this expense",
            budget_results=[],
        )

    allowed = all(result.can_proceed for result in results)
    has_warnings = any(result.would_trigger_warning for result in results)
    requires_escalation = any(
        result.enforcement_action == EnforcementAction.ESCALATE for result in results
    )

    if not allowed:
        blocking = ", ".join(
            result.budget_name
            for result in results
            if result.enforcement_action == EnforcementAction.HARD_BLOCK
        )
        message = f"Expense blocked by budget(s): {blocking}"
    elif requires_escalation:
        message = "Expense exceeds budget and requires escalation for additional approval"
    elif has_warnings:
        message = "; ".join(result.message for result in results if result.message)
    else:
        message = "Expense is within all applicable budgets"

    return ExpenseCheckResult(
        allowed=allowed,
        has_warnings=has_warnings,
        requires_escalation=requires_escalation,
        message=message,
        budget_results=list(results),
    )


class BudgetEnforcementMixin:
    @staticmethod
    def _clean_expense_amount(amount: Any) -> Decimal:
        try:
            value = to_decimal(amount)
        except ValueError as exc:
            raise ValidationError(str(exc), code="EXPENSE_AMOUNT_INVALID") from exc
        if not value.is_finite() or value < ZERO:
            raise ValidationError("Expense amount cannot be negative.", code="EXPENSE_AMOUNT_NEGATIVE")
        if not has_cent_precision(value):
            raise ValidationError(
                "Expense amount cannot have more than two decimal places.",
                code="EXPENSE_AMOUNT_PRECISION",
            )
        return value

    def check_budget_for_expense(self, budget: Budget | str, amount: Any) -> BudgetCheckResult:
        expense_amount = self._clean_expense_amount(amount)
        if not isinstance(budget, Budget):
            budget = self._require_budget(budget)

        utilization = self.calculate_utilization(budget)
        new_total = utilization.committed + utilization.spent + expense_amount
        projected = percentage(new_total, utilization.allocated)
        would_exceed = new_total > utilization.allocated
        would_trigger_warning = projected >= budget.warning_threshold

        action = EnforcementAction.NONE
        if would_exceed:
            action = _ACTION_BY_MODE[BudgetEnforcement(budget.enforcement)]

        return BudgetCheckResult(
            budget_id=budget.id,
            budget_name=budget.name,
            can_proceed=action != EnforcementAction.HARD_BLOCK,
            would_exceed=would_exceed,
            would_trigger_warning=would_trigger_warning,
            enforcement_action=action,
            current_utilization=utilization.utilization_percentage,
            projected_utilization=projected,
            expense_amount=expense_amount,
            available_before=utilization.available,
            available_after=utilization.available - expense_amount,
            message=_check_message(
                budget,
                action,
                would_trigger_warning,
                projected,
                utilization.available,
                expense_amount,
            ),
        )

    def check_expense_against_budgets(self, context: ExpenseContext) -> ExpenseCheckResult:
        amount = self._clean_expense_amount(context.amount)
        results = [
            self.check_budget_for_expense(budget, amount)
            for budget in self.find_applicable_budgets(context)
        ]
        return combine_budget_checks(results)


__all__ = ["BudgetEnforcementMixin", "combine_budget_checks"]
