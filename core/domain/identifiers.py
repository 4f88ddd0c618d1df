from __future__ import annotations

from uuid import uuid4


def generate_id() -> str:
    return str(uuid4())


def normalize_ref(value: str | None) -> str | None:
    """Blank reference ids are treated as absent."""
    cleaned = (value or "").strip()
    return cleaned or None


__all__ = ["generate_id", "normalize_ref"]
