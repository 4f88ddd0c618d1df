from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from core.domain.enums import BudgetType


@dataclass(frozen=True)
class DepartmentScope:
    id: str


@dataclass(frozen=True)
class ProjectScope:
    id: str


@dataclass(frozen=True)
class CostCenterScope:
    id: str


@dataclass(frozen=True)
class CategoryScope:
    id: str


@dataclass(frozen=True)
class EmployeeScope:
    id: str


BudgetScope = Union[DepartmentScope, ProjectScope, CostCenterScope, CategoryScope, EmployeeScope]

_SCOPE_BY_TYPE: dict[BudgetType, type] = {
    BudgetType.DEPARTMENT: DepartmentScope,
    BudgetType.PROJECT: ProjectScope,
    BudgetType.COST_CENTER: CostCenterScope,
    BudgetType.CATEGORY: CategoryScope,
    BudgetType.EMPLOYEE: EmployeeScope,
}

# Human-readable names used in "not found" messages.
SCOPE_LABELS: dict[type, str] = {
    DepartmentScope: "Department",
    ProjectScope: "Project",
    CostCenterScope: "Cost Center",
    CategoryScope: "Category",
    EmployeeScope: "Employee",
}


def scope_for(budget_type: BudgetType, scope_id: str | None) -> Optional[BudgetScope]:
    if not scope_id:
        return None
    scope_cls = _SCOPE_BY_TYPE.get(BudgetType(budget_type))
    if scope_cls is None:
        raise TypeError(f"Unsupported budget type: {budget_type!r}")
    return scope_cls(scope_id)


def scope_type(scope: BudgetScope) -> BudgetType:
    for budget_type, scope_cls in _SCOPE_BY_TYPE.items():
        if isinstance(scope, scope_cls):
            return budget_type
    raise TypeError(f"Unsupported budget scope: {scope!r}")


def scope_label(scope: BudgetScope) -> str:
    label = SCOPE_LABELS.get(type(scope))
    if label is None:
        raise TypeError(f"Unsupported budget scope: {scope!r}")
    return label


__all__ = [
    "DepartmentScope",
    "ProjectScope",
    "CostCenterScope",
    "CategoryScope",
    "EmployeeScope",
    "BudgetScope",
    "SCOPE_LABELS",
    "scope_for",
    "scope_type",
    "scope_label",
]
