from __future__ import annotations

from typing import Any

from core.models import (
    Budget,
    BudgetScope,
    CategoryScope,
    CostCenterScope,
    DepartmentScope,
    EmployeeScope,
    ProjectScope,
    ZERO,
    scope_for,
)
from infra.db.models import BudgetORM

SCOPE_COLUMNS = ("department_id", "project_id", "cost_center_id", "category_id", "employee_id")


def scope_column(scope: BudgetScope) -> str:
    if isinstance(scope, DepartmentScope):
        return "department_id"
    if isinstance(scope, ProjectScope):
        return "project_id"
    if isinstance(scope, CostCenterScope):
        return "cost_center_id"
    if isinstance(scope, CategoryScope):
        return "category_id"
    if isinstance(scope, EmployeeScope):
        return "employee_id"
    raise TypeError(f"Unsupported budget scope: {scope!r}")


def scope_values(scope: BudgetScope | None) -> dict[str, Any]:
    values: dict[str, Any] = {column: None for column in SCOPE_COLUMNS}
    if scope is not None:
        values[scope_column(scope)] = scope.id
    return values


def budget_to_orm(budget: Budget) -> BudgetORM:
    return BudgetORM(
        id=budget.id,
        name=budget.name,
        type=budget.type,
        period=budget.period,
        total_amount=budget.total_amount,
        used_amount=budget.used_amount,
        warning_threshold=budget.warning_threshold,
        enforcement=budget.enforcement,
        start_date=budget.start_date,
        end_date=budget.end_date,
        currency=budget.currency,
        is_active=budget.is_active,
        owner_id=budget.owner_id,
        version=budget.version,
        created_at=budget.created_at,
        updated_at=budget.updated_at,
        **scope_values(budget.scope),
    )


def budget_values(budget: Budget) -> dict[str, Any]:
    """Mutable columns for a version-checked update."""
    return {
        "name": budget.name,
        "period": budget.period,
        "total_amount": budget.total_amount,
        "used_amount": budget.used_amount,
        "warning_threshold": budget.warning_threshold,
        "enforcement": budget.enforcement,
        "start_date": budget.start_date,
        "end_date": budget.end_date,
        "currency": budget.currency,
        "is_active": budget.is_active,
        "owner_id": budget.owner_id,
        "updated_at": budget.updated_at,
    }


def budget_from_orm(obj: BudgetORM) -> Budget:
    scope_id = None
    for column in SCOPE_COLUMNS:
        value = getattr(obj, column)
        if value:
            scope_id = value
            break
    return Budget(
        id=obj.id,
        name=obj.name,
        type=obj.type,
        period=obj.period,
        total_amount=obj.total_amount,
        start_date=obj.start_date,
        end_date=obj.end_date,
        currency=obj.currency,
        warning_threshold=obj.warning_threshold,
        enforcement=obj.enforcement,
        is_active=obj.is_active,
        scope=scope_for(obj.type, scope_id),
        owner_id=obj.owner_id,
        used_amount=obj.used_amount if obj.used_amount is not None else ZERO,
        version=obj.version,
        created_at=obj.created_at,
        updated_at=obj.updated_at,
    )


__all__ = ["budget_to_orm", "budget_from_orm", "budget_values", "scope_column", "scope_values", "SCOPE_COLUMNS"]
