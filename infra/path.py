# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "BudgetEngine"
COMPANY_NAME = "ExpenseSuite"
DB_FILENAME = "budget_engine.db"


def _platform_base() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA") or Path.home() / "AppData" / "Roaming")
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")


def user_data_dir() -> Path:
    """Per-user directory holding the database and logs.

    ``BUDGET_DATA_DIR`` wins when set; otherwise
    ``<APPDATA | ~/Library/Application Support | $XDG_DATA_HOME>/ExpenseSuite/BudgetEngine``.
    """
    override = (os.getenv("BUDGET_DATA_DIR") or "").strip()
    target = Path(override).expanduser() if override else _platform_base() / COMPANY_NAME / APP_NAME
    try:
        target.mkdir(parents=True, exist_ok=True)
        return target
    except OSError:
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_log_dir() -> Path:
    return user_data_dir() / "logs"


def default_db_path() -> Path:
    return user_data_dir() / DB_FILENAME
