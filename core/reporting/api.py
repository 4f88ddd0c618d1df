"""Reporting API wrappers around renderer classes."""

from pathlib import Path

from core.reporting.renderers.excel import BudgetSummaryExcelRenderer
from core.services.budget.models import BudgetSummary


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def export_budget_summary_xlsx(summary: BudgetSummary, output_path: str | Path) -> Path:
    renderer = BudgetSummaryExcelRenderer()
    return renderer.render(summary, _ensure_parent(Path(output_path)))


__all__ = ["export_budget_summary_xlsx"]
