from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from infra.db.base import Base, resolve_db_url
import infra.db.models  # noqa: F401  registers the budget tables on Base.metadata


config = context.config

if config.config_file_name is not None and config.file_config.has_section("loggers"):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# SQLite needs batch mode for ALTER TABLE on the budget tables.
_COMMON_OPTIONS = dict(
    target_metadata=Base.metadata,
    render_as_batch=True,
    compare_type=True,
)


def _db_url() -> str:
    return config.get_main_option("sqlalchemy.url") or resolve_db_url()


def _run(**options) -> None:
    context.configure(**_COMMON_OPTIONS, **options)
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    _run(url=_db_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
else:
    engine = create_engine(_db_url(), poolclass=pool.NullPool)
    with engine.connect() as connection:
        _run(connection=connection)
    engine.dispose()
