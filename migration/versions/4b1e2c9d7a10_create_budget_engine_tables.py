"""create budget engine tables

Revision ID: 4b1e2c9d7a10
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


revision = "4b1e2c9d7a10"
down_revision = None
branch_labels = None
depends_on = None

_BUDGET_TYPES = ("DEPARTMENT", "PROJECT", "COST_CENTER", "CATEGORY", "EMPLOYEE")
_BUDGET_PERIODS = ("ANNUAL", "QUARTERLY", "MONTHLY", "PROJECT_BASED")
_ENFORCEMENTS = ("HARD_BLOCK", "SOFT_WARNING", "AUTO_ESCALATE")
_EXPENSE_STATUSES = (
    "DRAFT",
    "SUBMITTED",
    "PENDING_APPROVAL",
    "CLARIFICATION_REQUESTED",
    "RESUBMITTED",
    "APPROVED",
    "REJECTED",
    "PAID",
)


def _reference_table(name: str) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def upgrade() -> None:
    _reference_table("departments")
    _reference_table("projects")
    _reference_table("cost_centers")
    _reference_table("categories")
    op.create_table(
        "users",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("department_id", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "budgets",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("type", sa.Enum(*_BUDGET_TYPES, name="budgettype"), nullable=False),
        sa.Column("period", sa.Enum(*_BUDGET_PERIODS, name="budgetperiod"), nullable=False),
        sa.Column("total_amount", sa.Numeric(15, 2), nullable=False),
        sa.Column("used_amount", sa.Numeric(15, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("warning_threshold", sa.Numeric(5, 2), nullable=False, server_default=sa.text("80")),
        sa.Column(
            "enforcement",
            sa.Enum(*_ENFORCEMENTS, name="budgetenforcement"),
            nullable=False,
            server_default=sa.text("'SOFT_WARNING'"),
        ),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default=sa.text("'PKR'")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("owner_id", sa.String(), nullable=True),
        sa.Column("department_id", sa.String(), nullable=True),
        sa.Column("project_id", sa.String(), nullable=True),
        sa.Column("cost_center_id", sa.String(), nullable=True),
        sa.Column("category_id", sa.String(), nullable=True),
        sa.Column("employee_id", sa.String(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["cost_center_id"], ["cost_centers.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["employee_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_budgets_type_active", "budgets", ["type", "is_active"], unique=False)
    op.create_index("idx_budgets_window", "budgets", ["start_date", "end_date"], unique=False)

    op.create_table(
        "expenses",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("status", sa.Enum(*_EXPENSE_STATUSES, name="expensestatus"), nullable=False),
        sa.Column("amount_in_base", sa.Numeric(15, 2), nullable=True),
        sa.Column("expense_date", sa.DateTime(), nullable=False),
        sa.Column("submitter_id", sa.String(), nullable=False),
        sa.Column("department_id", sa.String(), nullable=True),
        sa.Column("project_id", sa.String(), nullable=True),
        sa.Column("cost_center_id", sa.String(), nullable=True),
        sa.Column("category_id", sa.String(), nullable=True),
        sa.Column("budget_id", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["submitter_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"]),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["cost_center_id"], ["cost_centers.id"]),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.ForeignKeyConstraint(["budget_id"], ["budgets.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_expenses_date_status", "expenses", ["expense_date", "status"], unique=False)
    op.create_index("idx_expenses_budget", "expenses", ["budget_id"], unique=False)

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("occurred_at", sa.DateTime(), nullable=False),
        sa.Column("actor_user_id", sa.String(), nullable=True),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("entity_type", sa.String(), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        sa.Column("old_value_json", sa.Text(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column("new_value_json", sa.Text(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column("reason", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_audit_logs_entity",
        "audit_logs",
        ["entity_type", "entity_id"],
        unique=False,
    )
    op.create_index("idx_audit_logs_occurred_at", "audit_logs", ["occurred_at"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_audit_logs_occurred_at", table_name="audit_logs")
    op.drop_index("idx_audit_logs_entity", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_index("idx_expenses_budget", table_name="expenses")
    op.drop_index("idx_expenses_date_status", table_name="expenses")
    op.drop_table("expenses")
    op.drop_index("idx_budgets_window", table_name="budgets")
    op.drop_index("idx_budgets_type_active", table_name="budgets")
    op.drop_table("budgets")
    op.drop_table("users")
    op.drop_table("categories")
    op.drop_table("cost_centers")
    op.drop_table("projects")
    op.drop_table("departments")
