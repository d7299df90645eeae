"""Use case to load monthly revenue ledgers."""

from src.application.use_cases.workbook_upload import WorkbookUploadUseCase
from src.domain.models.cells import Workbook
from src.domain.models.revenue import MonthlyLedgerEntry
from src.domain.services.revenue_parser import parse_revenue_workbook


class LoadRevenueWorkbookUseCase(WorkbookUploadUseCase[MonthlyLedgerEntry]):
    """Parse the first worksheet of a revenue ledger into month entries.

    An empty parse reports the first rows of the sheet as diagnostics.
    """

    dataset_name = "revenue"
    error_prefix = "Error parsing file"

    def _build_records(
        self,
        workbook: Workbook,
    ) -> tuple[MonthlyLedgerEntry, ...]:
        return parse_revenue_workbook(workbook, logger=self._logger)


__all__ = ["LoadRevenueWorkbookUseCase"]
