from __future__ import annotations

from sqlalchemy.orm import Session

from core.interfaces import ReferenceDirectory
from core.models import BudgetType
from infra.db.models import CategoryORM, CostCenterORM, DepartmentORM, ProjectORM, UserORM

_ORM_BY_TYPE = {
    BudgetType.DEPARTMENT: DepartmentORM,
    BudgetType.PROJECT: ProjectORM,
    BudgetType.COST_CENTER: CostCenterORM,
    BudgetType.CATEGORY: CategoryORM,
    BudgetType.EMPLOYEE: UserORM,
}


class SqlAlchemyReferenceDirectory(ReferenceDirectory):
    def __init__(self, session: Session):
        self.session = session

    def exists(self, budget_type: BudgetType, ref_id: str) -> bool:
        orm_type = _ORM_BY_TYPE.get(BudgetType(budget_type))
        if orm_type is None:
            raise TypeError(f"Unsupported budget type: {budget_type!r}")
        return self.session.get(orm_type, ref_id) is not None


__all__ = ["SqlAlchemyReferenceDirectory"]
