# infra/db/models.py
from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base
from core.models import (
    BudgetEnforcement,
    BudgetPeriod,
    BudgetType,
    ExpenseStatus,
)


class DepartmentORM(Base):
    __tablename__ = "departments"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)


class CostCenterORM(Base):
    __tablename__ = "cost_centers"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)


class CategoryORM(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)


class UserORM(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    department_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True
    )


class BudgetORM(Base):
    __tablename__ = "budgets"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[BudgetType] = mapped_column(SAEnum(BudgetType), nullable=False)
    period: Mapped[BudgetPeriod] = mapped_column(SAEnum(BudgetPeriod), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    used_amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False, default=Decimal("0"))
    warning_threshold: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False, default=Decimal("80"))
    enforcement: Mapped[BudgetEnforcement] = mapped_column(
        SAEnum(BudgetEnforcement), nullable=False, default=BudgetEnforcement.SOFT_WARNING
    )
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="PKR")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    owner_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # Exactly one scope column is set, matching ``type``; none for ad-hoc budgets.
    department_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True
    )
    project_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True
    )
    cost_center_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("cost_centers.id", ondelete="SET NULL"), nullable=True
    )
    category_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )
    employee_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    __table_args__ = (
        Index("idx_budgets_type_active", "type", "is_active"),
        Index("idx_budgets_window", "start_date", "end_date"),
    )


class ExpenseORM(Base):
    __tablename__ = "expenses"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    status: Mapped[ExpenseStatus] = mapped_column(SAEnum(ExpenseStatus), nullable=False)
    amount_in_base: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2), nullable=True)
    expense_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    submitter_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False)
    department_id: Mapped[Optional[str]] = mapped_column(String, ForeignKey("departments.id"), nullable=True)
    project_id: Mapped[Optional[str]] = mapped_column(String, ForeignKey("projects.id"), nullable=True)
    cost_center_id: Mapped[Optional[str]] = mapped_column(String, ForeignKey("cost_centers.id"), nullable=True)
    category_id: Mapped[Optional[str]] = mapped_column(String, ForeignKey("categories.id"), nullable=True)
    budget_id: Mapped[Optional[str]] = mapped_column(String, ForeignKey("budgets.id"), nullable=True)

    __table_args__ = (
        Index("idx_expenses_date_status", "expense_date", "status"),
        Index("idx_expenses_budget", "budget_id"),
    )


class AuditLogORM(Base):
    __tablename__ = "audit_logs"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    occurred_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    actor_user_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    action: Mapped[str] = mapped_column(String, nullable=False)
    entity_type: Mapped[str] = mapped_column(String, nullable=False)
    entity_id: Mapped[str] = mapped_column(String, nullable=False)
    old_value_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    new_value_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    reason: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        Index("idx_audit_logs_entity", "entity_type", "entity_id"),
        Index("idx_audit_logs_occurred_at", "occurred_at"),
    )
