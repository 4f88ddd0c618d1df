# tests/conftest.py
from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.models import ExpenseStatus, FixedClock, generate_id
from infra.db.base import Base
from infra.db.models import (
    CategoryORM,
    CostCenterORM,
    DepartmentORM,
    ExpenseORM,
    ProjectORM,
    UserORM,
)
from infra.services import build_service_dict


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 5, 15, 12, 0, 0))


@pytest.fixture
def services(session, clock):
    return build_service_dict(session, clock=clock)


class Seed:
    """Writes reference rows and expenses straight through the ORM."""

    def __init__(self, session):
        self.session = session

    def _add(self, obj):
        self.session.add(obj)
        self.session.commit()
        return obj.id

    def department(self, dept_id: str | None = None, name: str = "Engineering") -> str:
        return self._add(DepartmentORM(id=dept_id or generate_id(), name=name))

    def project(self, project_id: str | None = None, name: str = "Apollo") -> str:
        return self._add(ProjectORM(id=project_id or generate_id(), name=name))

    def cost_center(self, cc_id: str | None = None, name: str = "CC-100") -> str:
        return self._add(CostCenterORM(id=cc_id or generate_id(), name=name))

    def category(self, category_id: str | None = None, name: str = "Travel") -> str:
        return self._add(CategoryORM(id=category_id or generate_id(), name=name))

    def user(self, user_id: str | None = None, name: str = "Ayesha", department_id: str | None = None) -> str:
        return self._add(UserORM(id=user_id or generate_id(), name=name, department_id=department_id))

    def expense(
        self,
        amount,
        status: ExpenseStatus,
        *,
        submitter_id: str,
        expense_date: datetime = datetime(2024, 5, 10, 9, 0, 0),
        department_id: str | None = None,
        project_id: str | None = None,
        cost_center_id: str | None = None,
        category_id: str | None = None,
        budget_id: str | None = None,
    ) -> str:
        return self._add(
            ExpenseORM(
                id=generate_id(),
                status=status,
                amount_in_base=None if amount is None else Decimal(str(amount)),
                expense_date=expense_date,
                submitter_id=submitter_id,
                department_id=department_id,
                project_id=project_id,
                cost_center_id=cost_center_id,
                category_id=category_id,
                budget_id=budget_id,
            )
        )


@pytest.fixture
def seed(session):
    return Seed(session)
