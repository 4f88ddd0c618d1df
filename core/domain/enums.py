from __future__ import annotations

from enum import Enum


class BudgetType(str, Enum):
    DEPARTMENT = "DEPARTMENT"
    PROJECT = "PROJECT"
    COST_CENTER = "COST_CENTER"
    CATEGORY = "CATEGORY"
    EMPLOYEE = "EMPLOYEE"


class BudgetPeriod(str, Enum):
    ANNUAL = "ANNUAL"
    QUARTERLY = "QUARTERLY"
    MONTHLY = "MONTHLY"
    PROJECT_BASED = "PROJECT_BASED"


class BudgetEnforcement(str, Enum):
    HARD_BLOCK = "HARD_BLOCK"
    SOFT_WARNING = "SOFT_WARNING"
    AUTO_ESCALATE = "AUTO_ESCALATE"


class BudgetStatus(str, Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"
    ARCHIVED = "ARCHIVED"


class EnforcementAction(str, Enum):
    HARD_BLOCK = "HARD_BLOCK"
    SOFT_WARNING = "SOFT_WARNING"
    ESCALATE = "ESCALATE"
    NONE = "NONE"


class ExpenseStatus(str, Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    CLARIFICATION_REQUESTED = "CLARIFICATION_REQUESTED"
    RESUBMITTED = "RESUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    PAID = "PAID"


__all__ = [
    "BudgetType",
    "BudgetPeriod",
    "BudgetEnforcement",
    "BudgetStatus",
    "EnforcementAction",
    "ExpenseStatus",
]
