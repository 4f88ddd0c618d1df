# main.py
import logging
import sys
from pathlib import Path

from infra.db.base import make_engine, make_session_factory, resolve_db_url
from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.operational_support import bind_request_context
from infra.services import ServiceGraph, build_service_graph
from infra.version import get_app_version

logger = logging.getLogger(__name__)


def build_services() -> ServiceGraph:
    db_url = resolve_db_url()
    run_migrations(db_url=db_url)
    session = make_session_factory(make_engine(db_url))()
    return build_service_graph(session)


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    setup_logging()
    logger.info("Budget engine %s starting", get_app_version())

    with bind_request_context(actor_id="cli"):
        services = build_services()
        try:
            summary = services.budget_service.get_budget_summary()
            logger.info(
                "%d active budget(s), overall utilization %s%%",
                summary.totals.active_budgets,
                summary.totals.overall_utilization,
            )
            if argv:
                from core.reporting.api import export_budget_summary_xlsx

                output = export_budget_summary_xlsx(summary, Path(argv[0]))
                logger.info("Budget summary exported to %s", output)
        finally:
            services.session.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
