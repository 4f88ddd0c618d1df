from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from core.exceptions import NotFoundError, ValidationError
from core.models import BudgetEnforcement, BudgetPeriod, BudgetType, DepartmentScope


def test_create_derives_dates_from_period(services, seed):
    dept = seed.department()

    budget = services["budget_service"].create_budget(
        "Q2 Engineering", BudgetType.DEPARTMENT, BudgetPeriod.QUARTERLY, "250000.50",
        fiscal_year=2024, quarter=2, scope_id=dept,
    )

    assert budget.start_date == datetime(2024, 4, 1)
    assert budget.end_date == datetime(2024, 6, 30, 23, 59, 59)
    assert budget.total_amount == Decimal("250000.50")
    assert budget.scope == DepartmentScope(dept)
    assert budget.currency == "PKR"
    assert budget.warning_threshold == Decimal("80")
    assert budget.enforcement == BudgetEnforcement.SOFT_WARNING
    assert budget.is_active is True
    assert budget.version == 1


def test_fiscal_year_defaults_to_clock_year(services, seed):
    budget = services["budget_service"].create_budget(
        "Monthly travel", BudgetType.CATEGORY, BudgetPeriod.MONTHLY, 100,
        month=3, scope_id=seed.category(),
    )

    assert budget.start_date == datetime(2024, 3, 1)


def test_default_currency_comes_from_environment(services, seed, monkeypatch):
    monkeypatch.setenv("BUDGET_DEFAULT_CURRENCY", "gbp")

    budget = services["budget_service"].create_budget(
        "London", BudgetType.PROJECT, BudgetPeriod.ANNUAL, 100, scope_id=seed.project(),
    )

    assert budget.currency == "GBP"


def test_project_based_requires_explicit_dates(services, seed):
    bs = services["budget_service"]
    project = seed.project()

    with pytest.raises(ValidationError):
        bs.create_budget("Launch", BudgetType.PROJECT, BudgetPeriod.PROJECT_BASED, 100, scope_id=project)

    budget = bs.create_budget(
        "Launch", BudgetType.PROJECT, BudgetPeriod.PROJECT_BASED, 100,
        datetime(2024, 3, 1), datetime(2024, 9, 30), scope_id=project,
    )
    assert budget.end_date == datetime(2024, 9, 30)


def test_end_before_start_is_rejected(services, seed):
    with pytest.raises(ValidationError, match="End date must be after start date"):
        services["budget_service"].create_budget(
            "Backwards", BudgetType.PROJECT, BudgetPeriod.PROJECT_BASED, 100,
            datetime(2024, 9, 30), datetime(2024, 3, 1), scope_id=seed.project(),
        )


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "  "},
        {"name": "x" * 201},
        {"total_amount": -1},
        {"total_amount": "abc"},
        {"total_amount": "100.005"},
        {"warning_threshold": 101},
        {"warning_threshold": -1},
        {"currency": "EURO"},
    ],
)
def test_invalid_input_is_rejected_before_persisting(services, seed, kwargs):
    bs = services["budget_service"]
    params = {
        "name": "Valid",
        "type": BudgetType.PROJECT,
        "period": BudgetPeriod.ANNUAL,
        "total_amount": 100,
        "scope_id": seed.project(),
    }
    params.update(kwargs)

    with pytest.raises(ValidationError):
        bs.create_budget(**params)
    assert bs.list_budgets(active_only=False) == []


@pytest.mark.parametrize(
    "budget_type, label",
    [
        (BudgetType.DEPARTMENT, "Department"),
        (BudgetType.PROJECT, "Project"),
        (BudgetType.COST_CENTER, "Cost Center"),
        (BudgetType.CATEGORY, "Category"),
        (BudgetType.EMPLOYEE, "Employee"),
    ],
)
def test_missing_scope_reference_names_entity(services, budget_type, label):
    with pytest.raises(NotFoundError) as excinfo:
        services["budget_service"].create_budget(
            "Orphan", budget_type, BudgetPeriod.ANNUAL, 100, scope_id="ghost-1",
        )

    assert label in excinfo.value.message
    assert "ghost-1" in excinfo.value.message


def test_list_filters_by_type_and_activity(services, seed):
    bs = services["budget_service"]
    bs.create_budget("Zeta", BudgetType.PROJECT, BudgetPeriod.ANNUAL, 100, scope_id=seed.project())
    alpha = bs.create_budget("Alpha", BudgetType.PROJECT, BudgetPeriod.ANNUAL, 100, scope_id=seed.project())
    bs.create_budget("Dept", BudgetType.DEPARTMENT, BudgetPeriod.ANNUAL, 100, scope_id=seed.department())
    bs.remove_budget(alpha.id, actor_id="admin")

    assert [b.name for b in bs.list_budgets(BudgetType.PROJECT)] == ["Zeta"]
    assert [b.name for b in bs.list_budgets(BudgetType.PROJECT, active_only=False)] == ["Alpha", "Zeta"]
    assert len(bs.list_budgets()) == 2


def test_remove_is_a_soft_delete(services, seed):
    bs = services["budget_service"]
    budget = bs.create_budget("Temp", BudgetType.PROJECT, BudgetPeriod.ANNUAL, 100, scope_id=seed.project())

    bs.remove_budget(budget.id)

    assert bs.get_budget(budget.id).is_active is False


def test_get_missing_budget_raises(services):
    with pytest.raises(NotFoundError):
        services["budget_service"].get_budget("nope")


def test_update_applies_partial_changes(services, seed):
    bs = services["budget_service"]
    budget = bs.create_budget("Ops", BudgetType.PROJECT, BudgetPeriod.ANNUAL, 100, scope_id=seed.project())

    updated = bs.update_budget(
        budget.id,
        name="Ops 2024",
        total_amount=Decimal("250.25"),
        enforcement=BudgetEnforcement.HARD_BLOCK,
    )

    assert updated.version == 2
    reloaded = bs.get_budget(budget.id)
    assert reloaded.name == "Ops 2024"
    assert reloaded.total_amount == Decimal("250.25")
    assert reloaded.enforcement == BudgetEnforcement.HARD_BLOCK
    assert reloaded.scope == budget.scope
    assert reloaded.warning_threshold == Decimal("80")


def test_update_validates_merged_window(services, seed):
    bs = services["budget_service"]
    budget = bs.create_budget("Ops", BudgetType.PROJECT, BudgetPeriod.ANNUAL, 100, scope_id=seed.project())

    with pytest.raises(ValidationError):
        bs.update_budget(budget.id, end_date=datetime(2023, 1, 1))
    assert bs.get_budget(budget.id).end_date == budget.end_date


def test_update_rejects_sub_cent_amount(services, seed):
    bs = services["budget_service"]
    budget = bs.create_budget("Cents", BudgetType.PROJECT, BudgetPeriod.ANNUAL, "100.50", scope_id=seed.project())

    with pytest.raises(ValidationError, match="two decimal places"):
        bs.update_budget(budget.id, total_amount="100.505")

    assert bs.get_budget(budget.id).total_amount == Decimal("100.50")


def test_changing_period_snaps_dates_to_that_period(services, seed):
    bs = services["budget_service"]
    budget = bs.create_budget(
        "Ops", BudgetType.PROJECT, BudgetPeriod.MONTHLY, 100, fiscal_year=2024, month=5, scope_id=seed.project(),
    )

    quarterly = bs.update_budget(budget.id, period=BudgetPeriod.QUARTERLY)
    assert (quarterly.start_date, quarterly.end_date) == (datetime(2024, 4, 1), datetime(2024, 6, 30, 23, 59, 59))

    annual = bs.update_budget(budget.id, period=BudgetPeriod.ANNUAL)
    reloaded = bs.get_budget(budget.id)
    assert reloaded.period == BudgetPeriod.ANNUAL
    assert (reloaded.start_date, reloaded.end_date) == (annual.start_date, annual.end_date)
    assert reloaded.end_date == datetime(2024, 12, 31, 23, 59, 59)


def test_period_change_keeps_explicit_dates(services, seed):
    bs = services["budget_service"]
    budget = bs.create_budget("Ops", BudgetType.PROJECT, BudgetPeriod.ANNUAL, 100, fiscal_year=2024, scope_id=seed.project())

    updated = bs.update_budget(
        budget.id,
        period=BudgetPeriod.PROJECT_BASED,
        end_date=datetime(2025, 3, 31),
    )

    assert updated.start_date == datetime(2024, 1, 1)
    assert updated.end_date == datetime(2025, 3, 31)
