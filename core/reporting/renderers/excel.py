from pathlib import Path
from typing import Any, Callable, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from core.services.budget.models import BudgetSummary, UtilizationResult

_THIN = Side(style="thin")
BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)
BOLD = Font(bold=True)
TITLE = Font(bold=True, size=14)
HEADER_FILL = PatternFill("solid", fgColor="DDDDDD")
EXCEEDED_FILL = PatternFill("solid", fgColor="F8D7DA")
WARNING_FILL = PatternFill("solid", fgColor="FFF3CD")

# (header, width, value) for each column of the Budgets sheet.
BUDGET_COLUMNS: Sequence[tuple[str, int, Callable[[UtilizationResult], Any]]] = (
    ("Budget ID", 36, lambda u: u.budget_id),
    ("Name", 30, lambda u: u.budget_name),
    ("Type", 15, lambda u: u.type.value),
    ("Period", 15, lambda u: u.period.value),
    ("Status", 15, lambda u: u.status.value),
    ("Start", 15, lambda u: u.start_date.date().isoformat()),
    ("End", 15, lambda u: u.end_date.date().isoformat()),
    ("Currency", 10, lambda u: u.currency),
    ("Allocated", 15, lambda u: float(u.allocated)),
    ("Committed", 15, lambda u: float(u.committed)),
    ("Spent", 15, lambda u: float(u.spent)),
    ("Available", 15, lambda u: float(u.available)),
    ("Utilization (%)", 15, lambda u: float(u.utilization_percentage)),
    ("Warning threshold (%)", 20, lambda u: float(u.warning_threshold)),
    ("Enforcement", 16, lambda u: u.enforcement.value),
)


def _row_fill(u: UtilizationResult):
    if u.is_over_budget:
        return EXCEEDED_FILL
    if u.is_at_warning_threshold:
        return WARNING_FILL
    return None


class BudgetSummaryExcelRenderer:
    """Two-sheet workbook: portfolio totals, then one row per budget."""

    def render(self, summary: BudgetSummary, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()
        self._write_overview(wb.active, summary)
        self._write_budgets(wb.create_sheet("Budgets"), summary)
        wb.save(output_path)
        return output_path

    def _write_overview(self, ws: Worksheet, summary: BudgetSummary) -> None:
        totals = summary.totals
        ws.title = "Overview"
        ws["A1"] = "Budget vs Actual Summary"
        ws["A1"].font = TITLE

        # Blank groups separate the sections.
        sections = (
            (
                ("Generated at", summary.generated_at.isoformat(sep=" ", timespec="seconds")),
                ("Currency", totals.currency or ""),
            ),
            (
                ("Budgets - total", totals.total_budgets),
                ("Budgets - active", totals.active_budgets),
                ("Budgets - over warning threshold", totals.budgets_over_threshold),
                ("Budgets - exceeded", totals.budgets_exceeded),
            ),
            (
                ("Allocated", float(totals.total_allocated)),
                ("Committed", float(totals.total_committed)),
                ("Spent", float(totals.total_spent)),
                ("Available", float(totals.total_available)),
                ("Overall utilization (%)", float(totals.overall_utilization)),
            ),
        )
        row = 3
        for section in sections:
            for label, value in section:
                key_cell = ws.cell(row=row, column=1, value=label)
                key_cell.font = BOLD
                key_cell.border = BORDER
                ws.cell(row=row, column=2, value=value).border = BORDER
                row += 1
            row += 1

        ws.column_dimensions["A"].width = 34
        ws.column_dimensions["B"].width = 25

    def _write_budgets(self, ws: Worksheet, summary: BudgetSummary) -> None:
        for col, (header, width, _) in enumerate(BUDGET_COLUMNS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = BOLD
            cell.alignment = Alignment(horizontal="center")
            cell.fill = HEADER_FILL
            cell.border = BORDER
            ws.column_dimensions[get_column_letter(col)].width = width

        for row, u in enumerate(summary.budgets, start=2):
            fill = _row_fill(u)
            for col, (_, _, value_of) in enumerate(BUDGET_COLUMNS, start=1):
                cell = ws.cell(row=row, column=col, value=value_of(u))
                cell.border = BORDER
                if fill is not None:
                    cell.fill = fill
