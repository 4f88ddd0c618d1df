from __future__ import annotations

from typing import Any


def record_audit(
    owner: object,
    *,
    action: str,
    entity_type: str,
    entity_id: str,
    actor_user_id: str | None = None,
    old_value: dict[str, Any] | None = None,
    new_value: dict[str, Any] | None = None,
    reason: str | None = None,
) -> None:
    """Stage an audit entry in the owner's pending unit of work.

    The caller commits; the entry lands or vanishes together with the change it describes.
    """
    owner._audit_service.record(
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        actor_user_id=actor_user_id,
        old_value=old_value,
        new_value=new_value,
        reason=reason,
        commit=False,
    )


def budget_snapshot(budget: Any) -> dict[str, Any]:
    return {
        "name": budget.name,
        "type": budget.type.value,
        "period": budget.period.value,
        "total_amount": str(budget.total_amount),
        "used_amount": str(budget.used_amount),
        "warning_threshold": str(budget.warning_threshold),
        "enforcement": budget.enforcement.value,
        "currency": budget.currency,
        "is_active": budget.is_active,
        "scope_id": budget.scope_id,
        "start_date": budget.start_date.isoformat(),
        "end_date": budget.end_date.isoformat(),
    }


__all__ = ["record_audit", "budget_snapshot"]
