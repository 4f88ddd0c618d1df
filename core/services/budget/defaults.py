from __future__ import annotations

import os

FALLBACK_CURRENCY_CODE = "PKR"


def default_currency() -> str:
    raw = os.getenv("BUDGET_DEFAULT_CURRENCY", "")
    return raw.strip().upper() or FALLBACK_CURRENCY_CODE


__all__ = ["FALLBACK_CURRENCY_CODE", "default_currency"]
