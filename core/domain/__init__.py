from core.domain.audit import DEFAULT_AUDIT_LIMIT, AuditLogEntry, AuditQuery
from core.domain.budget import DEFAULT_WARNING_THRESHOLD, Budget
from core.domain.clock import Clock, FixedClock, SystemClock
from core.domain.enums import (
    BudgetEnforcement,
    BudgetPeriod,
    BudgetStatus,
    BudgetType,
    EnforcementAction,
    ExpenseStatus,
)
from core.domain.expense import EXCLUDED_STATUSES, ExpenseAmount, ExpenseFilter
from core.domain.identifiers import generate_id, normalize_ref
from core.domain.ledger import BalanceChange, LedgerMove
from core.domain.money import HUNDRED, ZERO, has_cent_precision, percentage, round2, to_decimal
from core.domain.scope import (
    BudgetScope,
    CategoryScope,
    CostCenterScope,
    DepartmentScope,
    EmployeeScope,
    ProjectScope,
    scope_for,
    scope_label,
    scope_type,
)

__all__ = [
    "generate_id",
    "normalize_ref",
    "BudgetType",
    "BudgetPeriod",
    "BudgetEnforcement",
    "BudgetStatus",
    "EnforcementAction",
    "ExpenseStatus",
    "Budget",
    "DEFAULT_WARNING_THRESHOLD",
    "BudgetScope",
    "DepartmentScope",
    "ProjectScope",
    "CostCenterScope",
    "CategoryScope",
    "EmployeeScope",
    "scope_for",
    "scope_type",
    "scope_label",
    "ExpenseAmount",
    "ExpenseFilter",
    "EXCLUDED_STATUSES",
    "AuditLogEntry",
    "AuditQuery",
    "DEFAULT_AUDIT_LIMIT",
    "BalanceChange",
    "LedgerMove",
    "Clock",
    "SystemClock",
    "FixedClock",
    "ZERO",
    "HUNDRED",
    "to_decimal",
    "round2",
    "has_cent_precision",
    "percentage",
]
