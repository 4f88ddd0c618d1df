from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from core.exceptions import TransferError, ValidationError
from core.interfaces import BudgetLedger
from core.models import BalanceChange, LedgerMove
from core.services.budget.models import TransferResult

logger = logging.getLogger(__name__)

MIN_TRANSFER_AMOUNT = Decimal("0.01")
MAX_REASON_LENGTH = 500
MAX_NOTES_LENGTH = 1000


class BudgetTransferMixin:
    _session: Session
    _budget_ledger: BudgetLedger

    def _validate_transfer_request(
        self,
        from_budget_id: str,
        to_budget_id: str,
        amount: Any,
        reason: str,
        notes: str | None,
    ):
        value = self._clean_amount(amount, label="Transfer amount")
        if value < MIN_TRANSFER_AMOUNT:
            raise ValidationError(
                f"Transfer amount must be at least {MIN_TRANSFER_AMOUNT}.",
                code="TRANSFER_AMOUNT_INVALID",
            )
        if from_budget_id == to_budget_id:
            raise ValidationError("Cannot transfer a budget to itself.", code="TRANSFER_SAME_BUDGET")
        cleaned_reason = (reason or "").strip()
        if not cleaned_reason:
            raise ValidationError("Transfer reason is required.", code="TRANSFER_REASON_REQUIRED")
        if len(cleaned_reason) > MAX_REASON_LENGTH:
            raise ValidationError(
                f"Transfer reason must be at most {MAX_REASON_LENGTH} characters.",
                code="TRANSFER_REASON_TOO_LONG",
            )
        cleaned_notes = (notes or "").strip() or None
        if cleaned_notes and len(cleaned_notes) > MAX_NOTES_LENGTH:
            raise ValidationError(
                f"Transfer notes must be at most {MAX_NOTES_LENGTH} characters.",
                code="TRANSFER_NOTES_TOO_LONG",
            )
        return value, cleaned_reason, cleaned_notes

    def transfer_budget(
        self,
        from_budget_id: str,
        to_budget_id: str,
        amount: Any,
        reason: str,
        actor_id: str | None = None,
        notes: str | None = None,
    ) -> TransferResult:
        value, reason, notes = self._validate_transfer_request(
            from_budget_id, to_budget_id, amount, reason, notes
        )
        source = self._require_budget(from_budget_id)
        target = self._require_budget(to_budget_id)

        if source.currency != target.currency:
            raise TransferError(
                "Cannot transfer between budgets with different currencies "
                f"({source.currency} → {target.currency})",
                code="TRANSFER_CURRENCY_MISMATCH",
            )
        if not source.is_active or not target.is_active:
            raise TransferError("Both budgets must be active to transfer funds", code="TRANSFER_INACTIVE_BUDGET")

        available = self.calculate_utilization(source).available
        if available < value:
            raise TransferError(
                f"Insufficient available budget. Available: {available}, Requested: {value}",
                code="TRANSFER_INSUFFICIENT_FUNDS",
            )

        debit = BalanceChange(
            budget_id=source.id,
            expected_version=source.version,
            old_amount=source.total_amount,
            new_amount=source.total_amount - value,
        )
        credit = BalanceChange(
            budget_id=target.id,
            expected_version=target.version,
            old_amount=target.total_amount,
            new_amount=target.total_amount + value,
        )
        move = LedgerMove(
            debit=debit,
            credit=credit,
            audit_entries=self._transfer_audit_entries(debit, credit, value, reason, notes, actor_id),
        )

        try:
            self._budget_ledger.apply(move)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error transferring %s from budget %s to %s: %s", value, source.id, target.id, e)
            raise

        logger.info("Transferred %s %s from budget %s to %s", value, source.currency, source.id, target.id)
        return TransferResult(
            success=True,
            message=(
                f"Transferred {source.currency} {value} from '{source.name}' to '{target.name}'"
            ),
            from_budget_id=source.id,
            to_budget_id=target.id,
            amount=value,
            from_budget_new_total=debit.new_amount,
            to_budget_new_total=credit.new_amount,
        )

    def _transfer_audit_entries(
        self,
        debit: BalanceChange,
        credit: BalanceChange,
        amount,
        reason: str,
        notes: str | None,
        actor_id: str | None,
    ):
        entries = []
        for action, change, counterpart in (
            ("budget.transfer_out", debit, credit.budget_id),
            ("budget.transfer_in", credit, debit.budget_id),
        ):
            entries.append(
                self._audit_service.build_entry(
                    action=action,
                    entity_type="budget",
                    entity_id=change.budget_id,
                    actor_user_id=actor_id,
                    old_value={"total_amount": str(change.old_amount)},
                    new_value={
                        "total_amount": str(change.new_amount),
                        "amount": str(amount),
                        "counterpart_budget_id": counterpart,
                        "notes": notes,
                    },
                    reason=reason,
                )
            )
        return tuple(entries)


__all__ = ["BudgetTransferMixin", "MAX_REASON_LENGTH", "MAX_NOTES_LENGTH"]
