from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List

from sqlalchemy import update
from sqlalchemy.orm import Session

from core.exceptions import ConcurrencyError, NotFoundError


@dataclass(frozen=True)
class VersionedWrite:
    row_id: str
    expected_version: int
    values: dict[str, Any]


def update_with_version_check(
    session: Session,
    orm_type: type[Any],
    write: VersionedWrite,
    *,
    label: str,
) -> int:
    """Compare-and-set on ``version``; returns the bumped version.

    Nothing is committed here. A missing row raises NotFoundError and a
    version mismatch raises ConcurrencyError, leaving the caller to roll back.
    """
    next_version = int(write.expected_version) + 1
    stmt = (
        update(orm_type)
        .where(orm_type.id == write.row_id, orm_type.version == write.expected_version)
        .values(**write.values, version=next_version)
        .execution_options(synchronize_session=False)
    )
    if session.execute(stmt).rowcount == 1:
        return next_version

    if session.get(orm_type, write.row_id) is None:
        raise NotFoundError(f"{label} with ID {write.row_id} not found", code=f"{label.upper()}_NOT_FOUND")
    raise ConcurrencyError(
        f"{label} {write.row_id} was updated by another user. Refresh and try again.",
        code="STALE_WRITE",
    )


def apply_versioned_writes(
    session: Session,
    orm_type: type[Any],
    writes: Iterable[VersionedWrite],
    *,
    label: str,
) -> List[int]:
    """Apply several compare-and-set writes in order; the first failure stops the batch."""
    return [update_with_version_check(session, orm_type, write, label=label) for write in writes]


__all__ = ["VersionedWrite", "update_with_version_check", "apply_versioned_writes"]
