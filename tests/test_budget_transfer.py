from __future__ import annotations

from decimal import Decimal

import pytest

from core.exceptions import ConcurrencyError, NotFoundError, TransferError, ValidationError
from core.models import BudgetPeriod, BudgetType, ExpenseStatus


def _pair(services, seed, source_total=100000, target_total=50000, target_currency=None):
    bs = services["budget_service"]
    source = bs.create_budget(
        "Marketing", BudgetType.DEPARTMENT, BudgetPeriod.ANNUAL, source_total,
        fiscal_year=2024, scope_id=seed.department(name="Marketing"),
    )
    target = bs.create_budget(
        "Research", BudgetType.DEPARTMENT, BudgetPeriod.ANNUAL, target_total,
        fiscal_year=2024, scope_id=seed.department(name="Research"), currency=target_currency,
    )
    return source, target


def test_transfer_moves_full_available_amount(services, seed):
    bs = services["budget_service"]
    source, target = _pair(services, seed)

    result = bs.transfer_budget(source.id, target.id, 100000, "Reallocation", actor_id="cfo")

    assert result.success is True
    assert result.from_budget_new_total == Decimal("0")
    assert result.to_budget_new_total == Decimal("150000")
    assert bs.get_budget(source.id).total_amount == Decimal("0")
    assert bs.get_budget(target.id).total_amount == Decimal("150000")


def test_insufficient_funds_leaves_balances_untouched(services, seed):
    bs = services["budget_service"]
    source, target = _pair(services, seed)
    user = seed.user()
    seed.expense(60000, ExpenseStatus.APPROVED, submitter_id=user, budget_id=source.id)

    with pytest.raises(TransferError) as excinfo:
        bs.transfer_budget(source.id, target.id, 50000, "Too much")

    assert "40000" in excinfo.value.message
    assert "50000" in excinfo.value.message
    assert bs.get_budget(source.id).total_amount == Decimal("100000")
    assert bs.get_budget(target.id).total_amount == Decimal("50000")


def test_round_trip_restores_original_totals(services, seed):
    bs = services["budget_service"]
    source, target = _pair(services, seed)

    bs.transfer_budget(source.id, target.id, Decimal("12345.67"), "Out")
    bs.transfer_budget(target.id, source.id, Decimal("12345.67"), "Back")

    assert bs.get_budget(source.id).total_amount == Decimal("100000")
    assert bs.get_budget(target.id).total_amount == Decimal("50000")


def test_currency_mismatch_is_rejected(services, seed):
    source, target = _pair(services, seed, target_currency="usd")

    with pytest.raises(TransferError, match="different currencies"):
        services["budget_service"].transfer_budget(source.id, target.id, 10, "FX")


def test_inactive_budget_is_rejected(services, seed):
    bs = services["budget_service"]
    source, target = _pair(services, seed)
    bs.close_budget(target.id)

    with pytest.raises(TransferError, match="Both budgets must be active"):
        bs.transfer_budget(source.id, target.id, 10, "Closed target")


@pytest.mark.parametrize("amount", [0, -5])
def test_non_positive_amount_is_rejected(services, seed, amount):
    source, target = _pair(services, seed)

    with pytest.raises(ValidationError):
        services["budget_service"].transfer_budget(source.id, target.id, amount, "Nothing")


@pytest.mark.parametrize("amount", ["0.004", "10.005"])
def test_sub_cent_amount_is_rejected_without_side_effects(services, seed, amount):
    bs = services["budget_service"]
    audit = services["audit_service"]
    source, target = _pair(services, seed)

    with pytest.raises(ValidationError):
        bs.transfer_budget(source.id, target.id, Decimal(amount), "Rounding")

    assert bs.get_budget(source.id).total_amount == Decimal("100000")
    assert bs.get_budget(target.id).total_amount == Decimal("50000")
    assert audit.list_recent(action="budget.transfer_out") == []


def test_smallest_transfer_is_one_cent(services, seed):
    bs = services["budget_service"]
    source, target = _pair(services, seed)

    result = bs.transfer_budget(source.id, target.id, "0.01", "Penny")

    assert result.from_budget_new_total == Decimal("99999.99")
    assert bs.get_budget(source.id).total_amount == result.from_budget_new_total
    assert bs.get_budget(target.id).total_amount == result.to_budget_new_total == Decimal("50000.01")


def test_self_transfer_and_blank_reason_are_rejected(services, seed):
    bs = services["budget_service"]
    source, target = _pair(services, seed)

    with pytest.raises(ValidationError):
        bs.transfer_budget(source.id, source.id, 10, "Loop")
    with pytest.raises(ValidationError):
        bs.transfer_budget(source.id, target.id, 10, "   ")
    with pytest.raises(ValidationError):
        bs.transfer_budget(source.id, target.id, 10, "x" * 501)


def test_missing_budget_is_not_found(services, seed):
    source, _ = _pair(services, seed)

    with pytest.raises(NotFoundError):
        services["budget_service"].transfer_budget(source.id, "missing", 10, "Ghost")


def test_transfer_writes_paired_audit_entries(services, seed):
    bs = services["budget_service"]
    audit = services["audit_service"]
    source, target = _pair(services, seed)

    bs.transfer_budget(source.id, target.id, 2500, "Q2 shift", actor_id="cfo", notes="approved in board")

    out_entry = audit.list_recent(entity_id=source.id, action="budget.transfer_out")
    in_entry = audit.list_recent(entity_id=target.id, action="budget.transfer_in")
    assert len(out_entry) == 1 and len(in_entry) == 1
    assert out_entry[0].reason == "Q2 shift"
    assert out_entry[0].actor_user_id == "cfo"
    assert out_entry[0].new_value["counterpart_budget_id"] == target.id
    assert in_entry[0].new_value["notes"] == "approved in board"
    assert Decimal(in_entry[0].old_value["total_amount"]) == Decimal("50000")
    assert Decimal(in_entry[0].new_value["total_amount"]) == Decimal("52500")


def test_stale_version_rolls_back_whole_transfer(services, seed, monkeypatch):
    bs = services["budget_service"]
    audit = services["audit_service"]
    source, target = _pair(services, seed)
    stale_target = bs.get_budget(target.id)
    # A concurrent writer bumps the target's version after it was read.
    bs.update_budget(target.id, name="Research (renamed)")

    real_get = bs._budget_repo.get

    def _get(budget_id):
        return stale_target if budget_id == target.id else real_get(budget_id)

    monkeypatch.setattr(bs._budget_repo, "get", _get)

    with pytest.raises(ConcurrencyError):
        bs.transfer_budget(source.id, target.id, 1000, "Race")

    monkeypatch.setattr(bs._budget_repo, "get", real_get)
    assert bs.get_budget(source.id).total_amount == Decimal("100000")
    assert bs.get_budget(target.id).total_amount == Decimal("50000")
    actions = {e.action for e in audit.list_recent()}
    assert "budget.transfer_out" not in actions
    assert "budget.transfer_in" not in actions
