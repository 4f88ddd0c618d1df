from __future__ import annotations

from sqlalchemy import create_engine, inspect

from infra.db.base import Base
from infra.migrate import downgrade, run_migrations


def test_migrations_create_every_mapped_table(tmp_path):
    db_url = f"sqlite:///{(tmp_path / 'migrated.db').as_posix()}"

    run_migrations(db_url)

    engine = create_engine(db_url, future=True)
    try:
        tables = set(inspect(engine).get_table_names())
        assert set(Base.metadata.tables) <= tables
        assert "alembic_version" in tables
        budget_columns = {col["name"] for col in inspect(engine).get_columns("budgets")}
        assert {"version", "used_amount", "warning_threshold", "employee_id"} <= budget_columns
    finally:
        engine.dispose()


def test_migrated_schema_supports_budget_service(tmp_path):
    from sqlalchemy.orm import sessionmaker

    from core.models import BudgetPeriod, BudgetType
    from infra.db.models import ProjectORM
    from infra.services import build_service_graph

    db_url = f"sqlite:///{(tmp_path / 'service.db').as_posix()}"
    run_migrations(db_url)
    engine = create_engine(db_url, future=True)
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        session.add(ProjectORM(id="p-1", name="Apollo"))
        session.commit()
        bs = build_service_graph(session).budget_service
        budget = bs.create_budget("Apollo", BudgetType.PROJECT, BudgetPeriod.ANNUAL, 10, fiscal_year=2024, scope_id="p-1")
        assert bs.get_budget(budget.id).version == 1
    finally:
        session.close()
        engine.dispose()


def test_downgrade_to_base_drops_budget_tables(tmp_path):
    db_url = f"sqlite:///{(tmp_path / 'roundtrip.db').as_posix()}"
    run_migrations(db_url)

    downgrade(db_url)

    engine = create_engine(db_url, future=True)
    try:
        tables = set(inspect(engine).get_table_names())
        assert not set(Base.metadata.tables) & tables
    finally:
        engine.dispose()


def test_missing_migration_dir_is_reported(tmp_path, monkeypatch):
    import pytest

    monkeypatch.setenv("BUDGET_MIGRATIONS_DIR", str(tmp_path / "nowhere"))

    with pytest.raises(RuntimeError, match="Alembic config missing"):
        run_migrations(f"sqlite:///{(tmp_path / 'x.db').as_posix()}")
