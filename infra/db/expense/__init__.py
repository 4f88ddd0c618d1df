from infra.db.expense.repository import SqlAlchemyExpenseRepository

__all__ = ["SqlAlchemyExpenseRepository"]
