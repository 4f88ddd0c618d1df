from __future__ import annotations

import logging
import os
from pathlib import Path

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def migration_dir() -> Path:
    """Alembic script directory; ``BUDGET_MIGRATIONS_DIR`` overrides the bundled one."""
    override = (os.getenv("BUDGET_MIGRATIONS_DIR") or "").strip()
    location = Path(override).expanduser() if override else PROJECT_ROOT / "migration"
    if not (location / "alembic.ini").exists():
        raise RuntimeError(f"Alembic config missing: {location / 'alembic.ini'}")
    return location


def build_alembic_config(db_url: str) -> Config:
    location = migration_dir()
    cfg = Config(str(location / "alembic.ini"))
    cfg.set_main_option("script_location", str(location))
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


def run_migrations(db_url: str, revision: str = "head") -> None:
    logger.info("Upgrading budget schema to %s", revision)
    command.upgrade(build_alembic_config(db_url), revision)


def downgrade(db_url: str, revision: str = "base") -> None:
    logger.info("Downgrading budget schema to %s", revision)
    command.downgrade(build_alembic_config(db_url), revision)
