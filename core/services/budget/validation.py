from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from core.exceptions import NotFoundError, ValidationError
from core.interfaces import BudgetRepository, ReferenceDirectory
from core.models import (
    HUNDRED,
    ZERO,
    Budget,
    BudgetScope,
    has_cent_precision,
    scope_label,
    scope_type,
    to_decimal,
)
from core.services.budget.defaults import default_currency

MAX_NAME_LENGTH = 200


class BudgetValidationMixin:
    _budget_repo: BudgetRepository
    _reference_directory: ReferenceDirectory | None

    def _require_budget(self, budget_id: str) -> Budget:
        budget = self._budget_repo.get(budget_id)
        if budget is None:
            raise NotFoundError(f"Budget with ID {budget_id} not found", code="BUDGET_NOT_FOUND")
        return budget

    @staticmethod
    def _clean_name(name: str | None) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("Budget name cannot be empty.", code="BUDGET_NAME_EMPTY")
        if len(cleaned) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Budget name must be at most {MAX_NAME_LENGTH} characters.",
                code="BUDGET_NAME_TOO_LONG",
            )
        return cleaned

    @staticmethod
    def _clean_amount(value: Any, *, label: str = "Total amount") -> Decimal:
        try:
            amount = to_decimal(value)
        except ValueError as exc:
            raise ValidationError(str(exc), code="BUDGET_AMOUNT_INVALID") from exc
        if not amount.is_finite() or amount < ZERO:
            raise ValidationError(f"{label} cannot be negative.", code="BUDGET_AMOUNT_NEGATIVE")
        if not has_cent_precision(amount):
            raise ValidationError(
                f"{label} cannot have more than two decimal places.",
                code="BUDGET_AMOUNT_PRECISION",
            )
        return amount

    @staticmethod
    def _clean_threshold(value: Any) -> Decimal:
        try:
            threshold = to_decimal(value)
        except ValueError as exc:
            raise ValidationError(str(exc), code="BUDGET_THRESHOLD_INVALID") from exc
        if not threshold.is_finite() or threshold < ZERO or threshold > HUNDRED:
            raise ValidationError(
                "Warning threshold must be between 0 and 100.",
                code="BUDGET_THRESHOLD_INVALID",
            )
        return threshold

    @staticmethod
    def _clean_currency(currency: str | None) -> str:
        cleaned = (currency or "").strip().upper() or default_currency()
        if len(cleaned) != 3 or not cleaned.isalpha():
            raise ValidationError(
                f"Currency must be a 3-letter code, got {cleaned!r}.",
                code="BUDGET_CURRENCY_INVALID",
            )
        return cleaned

    @staticmethod
    def _validate_window(start_date: datetime, end_date: datetime) -> None:
        if end_date <= start_date:
            raise ValidationError("End date must be after start date", code="BUDGET_DATES_INVALID")

    def _validate_scope_reference(self, scope: BudgetScope | None) -> None:
        if scope is None or self._reference_directory is None:
            return
        if not self._reference_directory.exists(scope_type(scope), scope.id):
            raise NotFoundError(
                f"{scope_label(scope)} with ID {scope.id} not found",
                code="BUDGET_SCOPE_NOT_FOUND",
            )


__all__ = ["BudgetValidationMixin", "MAX_NAME_LENGTH"]
