"""Use case to load loan amortization workbooks."""

from collections.abc import Iterable, Mapping
from datetime import date

from src.application.ports.workbook_reader import WorkbookReaderPort
from src.application.use_cases.workbook_upload import WorkbookUploadUseCase
from src.domain.constants import (
    ACCEPTED_EXTENSIONS,
    DEFAULT_CUTOFF_DATE,
    LOAN_COLORS,
)
from src.domain.models.cells import Workbook
from src.domain.models.debt import LoanPosition
from src.domain.services.debt_parser import parse_loan_workbook
from src.domain.services.reconstruction import reconstruct_positions


class LoadDebtWorkbookUseCase(WorkbookUploadUseCase[LoanPosition]):
    """Parse one loan per worksheet and reconstruct it at the cutoff."""

    dataset_name = "debt"
    error_prefix = "Error"

    def __init__(
        self,
        reader: WorkbookReaderPort,
        logger=None,
        usage_logger=None,
        cutoff: date = DEFAULT_CUTOFF_DATE,
        colors: Mapping[str, str] = LOAN_COLORS,
        accepted_extensions: Iterable[str] = ACCEPTED_EXTENSIONS,
    ) -> None:
        """Initialize the use case.

        Args:
            reader: Port decoding the uploaded file into sheets.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording upload events.
            cutoff: Snapshot date for balance reconstruction.
            colors: Chart colors keyed by loan or sheet name.
            accepted_extensions: File suffixes accepted for upload.
        """
        super().__init__(
            reader,
            logger=logger,
            usage_logger=usage_logger,
            accepted_extensions=accepted_extensions,
        )
        self._cutoff = cutoff
        self._colors = colors

    @property
    def cutoff(self) -> date:
        return self._cutoff

    def _build_records(self, workbook: Workbook) -> tuple[LoanPosition, ...]:
        schedules = parse_loan_workbook(
            workbook,
            logger=self._logger,
            colors=self._colors,
        )
        self._logger.info(
            f"Parsed {len(schedules)} loan schedules from "
            f"{len(workbook)} sheets"
        )
        return reconstruct_positions(schedules, self._cutoff)


__all__ = ["LoadDebtWorkbookUseCase"]
