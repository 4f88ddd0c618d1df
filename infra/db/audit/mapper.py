from __future__ import annotations

import json
from typing import Any, Mapping

from core.models import AuditLogEntry
from infra.db.models import AuditLogORM

# Columns copied one-to-one between the entry and its row.
_SCALAR_COLUMNS = ("id", "occurred_at", "actor_user_id", "action", "entity_type", "entity_id", "reason")


def encode_snapshot(snapshot: Mapping[str, Any]) -> str:
    # Decimals and datetimes are stored as their string form.
    return json.dumps(dict(snapshot), default=str, ensure_ascii=False, sort_keys=True)


def decode_snapshot(raw: str | None) -> dict[str, Any]:
    try:
        decoded = json.loads(raw) if raw else {}
    except json.JSONDecodeError:
        return {}
    return decoded if isinstance(decoded, dict) else {}


def audit_to_orm(entry: AuditLogEntry) -> AuditLogORM:
    row = AuditLogORM(**{name: getattr(entry, name) for name in _SCALAR_COLUMNS})
    row.old_value_json = encode_snapshot(entry.old_value)
    row.new_value_json = encode_snapshot(entry.new_value)
    return row


def audit_from_orm(row: AuditLogORM) -> AuditLogEntry:
    return AuditLogEntry(
        old_value=decode_snapshot(row.old_value_json),
        new_value=decode_snapshot(row.new_value_json),
        **{name: getattr(row, name) for name in _SCALAR_COLUMNS},
    )


__all__ = ["audit_to_orm", "audit_from_orm", "encode_snapshot", "decode_snapshot"]
