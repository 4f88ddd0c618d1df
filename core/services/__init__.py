from .audit import AuditService
from .budget import BudgetService

__all__ = [
    "AuditService",
    "BudgetService",
]
