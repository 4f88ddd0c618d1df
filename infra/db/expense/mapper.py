from __future__ import annotations

from sqlalchemy.engine import Row

from core.models import ExpenseAmount, ExpenseStatus, to_decimal


def expense_amount_from_row(row: Row) -> ExpenseAmount:
    return ExpenseAmount(
        id=row.id,
        status=ExpenseStatus(row.status),
        amount=to_decimal(row.amount_in_base),
    )


__all__ = ["expense_amount_from_row"]
