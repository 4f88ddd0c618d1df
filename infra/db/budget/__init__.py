from infra.db.budget.mapper import budget_from_orm, budget_to_orm
from infra.db.budget.repository import SqlAlchemyBudgetLedger, SqlAlchemyBudgetRepository

__all__ = [
    "budget_to_orm",
    "budget_from_orm",
    "SqlAlchemyBudgetRepository",
    "SqlAlchemyBudgetLedger",
]
