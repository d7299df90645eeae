"""Tests for the workbook upload use cases."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases import load_debt_workbook as debt_module
from src.application.use_cases.load_debt_workbook import (
    LoadDebtWorkbookUseCase,
)
from src.application.use_cases.load_revenue_workbook import (
    LoadRevenueWorkbookUseCase,
)
from src.application.use_cases.workbook_upload import (
    WorkbookUploadUseCase,
    has_accepted_extension,
)
from src.domain.models.cells import Sheet
from src.domain.models.outcome import ParseStatus


def _loan_sheet(name: str, payments) -> Sheet:
    rows = [
        ["Loan", name],
        ["Amount", 6000],
        [None],
        ["Frequency", "Monthly"],
        [None],
        ["#", "Date", "Principal", "Interest", "Payment", "Balance"],
    ]
    rows.extend(payments)
    return Sheet.from_values(name, rows)


def _reader(workbook) -> MagicMock:
    reader = MagicMock()
    reader.read_workbook.return_value = workbook
    return reader


def test_has_accepted_extension_ignores_case() -> None:
    assert has_accepted_extension("Prestamos.XLSX")
    assert has_accepted_extension("ledger.xls")
    assert not has_accepted_extension("ledger.csv")
    assert not has_accepted_extension("xlsx")


def test_debt_upload_reconstructs_positions() -> None:
    workbook = (
        _loan_sheet(
            "Loan A",
            [
                [1, date(2026, 1, 1), 500, 50, 550, 5500],
                [2, date(2026, 2, 1), 500, 45, 545, 5000],
            ],
        ),
    )
    reader = _reader(workbook)
    logger = MagicMock()
    usage_logger = MagicMock()

    use_case = LoadDebtWorkbookUseCase(
        reader,
        logger=logger,
        usage_logger=usage_logger,
        cutoff=date(2026, 2, 1),
    )
    outcome = use_case.execute(b"raw", "prestamos.xlsx")

    assert outcome.ok
    assert outcome.status is ParseStatus.SUCCESS
    assert outcome.file_name == "prestamos.xlsx"
    (position,) = outcome.records
    assert position.current_balance == Decimal("5500")
    reader.read_workbook.assert_called_once_with(b"raw", "prestamos.xlsx")
    usage_logger.info.assert_called_once()
    assert "status=success" in usage_logger.info.call_args[0][0]


def test_wrong_extension_is_rejected_before_reading() -> None:
    reader = _reader(())
    use_case = LoadDebtWorkbookUseCase(
        reader,
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )

    outcome = use_case.execute(b"raw", "prestamos.csv")

    assert outcome.status is ParseStatus.UNRECOGNIZED_FILE_TYPE
    assert outcome.message == "Please upload an Excel file (.xlsx or .xls)"
    assert outcome.records == ()
    reader.read_workbook.assert_not_called()


def test_reader_failure_is_reported_as_malformed() -> None:
    reader = MagicMock()
    reader.read_workbook.side_effect = OSError("corrupt zip")
    logger = MagicMock()
    use_case = LoadDebtWorkbookUseCase(
        reader,
        logger=logger,
        usage_logger=MagicMock(),
    )

    outcome = use_case.execute(b"raw", "prestamos.xlsx")

    assert outcome.status is ParseStatus.MALFORMED
    assert outcome.message == "Error: corrupt zip"
    logger.warning.assert_called_once()


def test_debt_upload_without_loans_is_empty() -> None:
    reader = _reader((Sheet.from_values("Notes", [["nothing"]]),))
    use_case = LoadDebtWorkbookUseCase(
        reader,
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )

    outcome = use_case.execute(b"raw", "prestamos.xls")

    assert outcome.status is ParseStatus.EMPTY
    assert outcome.message == "No valid loan data found."
    assert not outcome.ok


def test_revenue_upload_returns_entries() -> None:
    workbook = (
        Sheet.from_values(
            "Ingresos",
            [
                ["Marzo", 2025, 10000],
                ["Malaga Palace", "", 6000],
                ["Private Offices", "", 4000],
                ["Malaga Terrace", "", 4000],
                ["Coworking", "", 4000],
            ],
        ),
    )
    use_case = LoadRevenueWorkbookUseCase(
        _reader(workbook),
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )

    outcome = use_case.execute(b"raw", "ingresos.xlsx")

    assert outcome.ok
    assert len(outcome.records) == 1
    assert outcome.records[0].total == Decimal("10000")


def test_empty_revenue_upload_carries_diagnostics() -> None:
    workbook = (Sheet.from_values("Ingresos", [["Resumen", None, None]]),)
    logger = MagicMock()
    use_case = LoadRevenueWorkbookUseCase(
        _reader(workbook),
        logger=logger,
        usage_logger=MagicMock(),
    )

    outcome = use_case.execute(b"raw", "ingresos.xlsx")

    assert outcome.status is ParseStatus.EMPTY
    assert outcome.message == "No valid data found."
    assert outcome.diagnostics == (
        'Row 0: col0="Resumen", col1=- (type: empty), col2=-',
    )
    logger.debug.assert_called_with(outcome.diagnostics[0])


def test_revenue_reader_failure_uses_parsing_prefix() -> None:
    reader = MagicMock()
    reader.read_workbook.side_effect = ValueError("bad header")
    use_case = LoadRevenueWorkbookUseCase(
        reader,
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )

    outcome = use_case.execute(b"raw", "ingresos.xlsx")

    assert outcome.status is ParseStatus.MALFORMED
    assert outcome.message == "Error parsing file: bad header"


def test_unexpected_parse_error_is_reported_as_malformed(monkeypatch) -> None:
    def _broken_parse(sheets, logger=None, colors=None):
        raise KeyError("Fecha")

    monkeypatch.setattr(debt_module, "parse_loan_workbook", _broken_parse)
    usage_logger = MagicMock()
    use_case = LoadDebtWorkbookUseCase(
        _reader((Sheet.from_values("Loan", [["x"]]),)),
        logger=MagicMock(),
        usage_logger=usage_logger,
    )

    outcome = use_case.execute(b"raw", "prestamos.xlsx")

    assert outcome.status is ParseStatus.MALFORMED
    assert outcome.message == "Error: 'Fecha'"
    assert outcome.records == ()
    assert "status=malformed" in usage_logger.info.call_args.args[0]


def test_upload_base_class_requires_record_builder() -> None:
    with pytest.raises(TypeError):
        WorkbookUploadUseCase(MagicMock(), MagicMock(), MagicMock())
