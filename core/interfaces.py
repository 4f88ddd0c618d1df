from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Optional

from core.models import (
    AuditLogEntry,
    AuditQuery,
    Budget,
    BudgetType,
    ExpenseAmount,
    ExpenseFilter,
    LedgerMove,
)


class BudgetRepository(ABC):
    @abstractmethod
    def get(self, budget_id: str) -> Optional[Budget]: ...

    @abstractmethod
    def list(self, budget_filter: Any = None) -> List[Budget]: ...

    @abstractmethod
    def find_first_applicable(
        self,
        budget_type: BudgetType,
        scope_id: str,
        at: datetime,
    ) -> Optional[Budget]: ...

    @abstractmethod
    def add(self, budget: Budget) -> None: ...

    @abstractmethod
    def update(self, budget: Budget) -> int:
        """Version-checked write; returns the new version."""


class BudgetLedger(ABC):
    @abstractmethod
    def apply(self, move: LedgerMove) -> None:
        """Stage both balance changes and audit entries without committing."""


class ExpenseRepository(ABC):
    @abstractmethod
    def list_amounts(self, expense_filter: ExpenseFilter) -> List[ExpenseAmount]: ...


class ReferenceDirectory(ABC):
    @abstractmethod
    def exists(self, budget_type: BudgetType, ref_id: str) -> bool: ...


class AuditLogRepository(ABC):
    @abstractmethod
    def add(self, entry: AuditLogEntry) -> None: ...

    @abstractmethod
    def search(self, query: AuditQuery) -> List[AuditLogEntry]:
        """Newest first, bounded by ``query.limit``."""


__all__ = [
    "BudgetRepository",
    "BudgetLedger",
    "ExpenseRepository",
    "ReferenceDirectory",
    "AuditLogRepository",
]
