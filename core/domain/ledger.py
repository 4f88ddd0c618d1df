from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from core.domain.audit import AuditLogEntry


@dataclass(frozen=True)
class BalanceChange:
    budget_id: str
    expected_version: int
    old_amount: Decimal
    new_amount: Decimal


@dataclass(frozen=True)
class LedgerMove:
    """Two balance changes and their audit entries, persisted together or not at all."""
    debit: BalanceChange
    credit: BalanceChange
    audit_entries: Tuple[AuditLogEntry, ...] = ()


__all__ = ["BalanceChange", "LedgerMove"]
