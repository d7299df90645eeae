"""Tests for the summarize_workbook_cli adapter."""

from datetime import date
from pathlib import Path
from unittest.mock import MagicMock

from src.adapters import summarize_workbook_cli
from src.domain.models.cells import Sheet
from src.infrastructure import container
from src.infrastructure.settings import DashboardSettings


class _FakeReader:
    def __init__(self, workbooks: dict[str, tuple[Sheet, ...]]) -> None:
        self.workbooks = workbooks
        self.calls: list[tuple[str, str]] = []

    def read_workbook(self, source, file_name):
        self.calls.append((source, file_name))
        return self.workbooks[file_name]


def _loan_sheet() -> Sheet:
    return Sheet.from_values(
        "Caixa",
        [
            ["Loan", "Caixa Prestamo 30000"],
            ["Amount", 30000],
            [None],
            ["Frequency", "Monthly"],
            [None],
            ["#", "Date", "Principal", "Interest", "Payment", "Balance"],
            [1, date(2026, 2, 1), 500, 45, 545, 5000],
            [2, date(2026, 3, 1), 500, 40, 540, 4500],
        ],
    )


def _ledger_sheet() -> Sheet:
    return Sheet.from_values(
        "Ingresos",
        [
            ["Marzo", 2025, 10000],
            ["Malaga Palace", "", 6000],
            ["Private Offices", "", 6000],
            ["Malaga Terrace", "", 4000],
            ["Coworking", "", 4000],
        ],
    )


def _patch(monkeypatch, settings: DashboardSettings, reader) -> None:
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())
    monkeypatch.setattr(container, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(
        summarize_workbook_cli,
        "get_app_logger",
        lambda: MagicMock(),
    )
    monkeypatch.setattr(
        summarize_workbook_cli,
        "build_settings",
        lambda: settings,
    )
    monkeypatch.setattr(
        summarize_workbook_cli,
        "build_workbook_reader",
        lambda: reader,
    )


def test_main_prints_debt_and_revenue_summaries(monkeypatch, capsys) -> None:
    """The CLI should summarize both configured workbooks."""
    reader = _FakeReader(
        {
            "prestamos.xlsx": (_loan_sheet(),),
            "ingresos.xlsx": (_ledger_sheet(),),
        }
    )
    settings = DashboardSettings(
        cutoff_date=date(2026, 2, 1),
        debt_workbook=Path("/data/prestamos.xlsx"),
        revenue_workbook=Path("/data/ingresos.xlsx"),
    )
    _patch(monkeypatch, settings, reader)

    summarize_workbook_cli.main()

    out = capsys.readouterr().out
    assert "Debt at 2026-02-01 (prestamos.xlsx)" in out
    assert "Total debt: 5,500.00 of 30,000.00" in out
    assert "Caixa Prestamo 30000: 5,500.00 until 2026-03-01" in out
    assert "Revenue by year (ingresos.xlsx, 1 months)" in out
    assert "2025: 10,000.00 (Palace 6,000.00, Terrace 4,000.00)" in out
    assert reader.calls == [
        (str(Path("/data/prestamos.xlsx")), "prestamos.xlsx"),
        (str(Path("/data/ingresos.xlsx")), "ingresos.xlsx"),
    ]


def test_main_prints_failure_and_diagnostics(monkeypatch, capsys) -> None:
    reader = _FakeReader(
        {"ingresos.xlsx": (Sheet.from_values("Ingresos", [["Hola"]]),)}
    )
    settings = DashboardSettings(revenue_workbook=Path("/data/ingresos.xlsx"))
    _patch(monkeypatch, settings, reader)

    summarize_workbook_cli.main()

    out = capsys.readouterr().out
    assert "ingresos.xlsx: No valid data found." in out
    assert 'Row 0: col0="Hola"' in out


def test_main_without_configuration(monkeypatch, capsys) -> None:
    """Nothing configured should print a hint and not build a reader."""
    reader = MagicMock()
    _patch(monkeypatch, DashboardSettings(), reader)
    monkeypatch.setattr(
        summarize_workbook_cli,
        "build_workbook_reader",
        MagicMock(side_effect=AssertionError("reader built")),
    )

    summarize_workbook_cli.main()

    assert "DEBT_WORKBOOK" in capsys.readouterr().out
