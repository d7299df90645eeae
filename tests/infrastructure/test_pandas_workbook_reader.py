"""Tests for the pandas-backed workbook reader."""

from datetime import datetime
from decimal import Decimal
from io import BytesIO
from unittest.mock import MagicMock

import pandas as pd

from src.domain.models.cells import EMPTY, DateCell, NumberCell, TextCell
from src.infrastructure import pandas_workbook_reader as reader_module
from src.infrastructure.pandas_workbook_reader import PandasWorkbookReader


def _frames() -> dict[str, pd.DataFrame]:
    loans = pd.DataFrame(
        [
            [None, "Loan", "Outfund 40000"],
            [None, "Amount", 40000.0],
            [None, 1, datetime(2026, 2, 1)],
        ]
    )
    notes = pd.DataFrame([["only text", float("nan")]])
    return {"Outfund": loans, "Notes": notes}


def test_read_workbook_converts_every_sheet(monkeypatch) -> None:
    calls = {}

    def _fake_read_excel(source, **kwargs):
        calls["source"] = source
        calls["kwargs"] = kwargs
        return _frames()

    monkeypatch.setattr(reader_module.pd, "read_excel", _fake_read_excel)
    logger = MagicMock()

    sheets = PandasWorkbookReader(logger=logger).read_workbook(
        b"payload",
        "Prestamos.XLSX",
    )

    assert isinstance(calls["source"], BytesIO)
    assert calls["kwargs"] == {
        "sheet_name": None,
        "header": None,
        "engine": "openpyxl",
    }
    assert [sheet.name for sheet in sheets] == ["Outfund", "Notes"]
    loans = sheets[0]
    assert loans.rows[0][0] == TextCell("Loan")
    assert loans.rows[1][1] == NumberCell(Decimal("40000.0"))
    assert loans.rows[2][1] == DateCell(datetime(2026, 2, 1).date())
    assert sheets[1].rows[0][1] is EMPTY
    logger.info.assert_called_once()


def test_read_workbook_picks_xlrd_for_legacy_files(monkeypatch) -> None:
    captured = {}

    def _fake_read_excel(source, **kwargs):
        captured["source"] = source
        captured["engine"] = kwargs["engine"]
        return {}

    monkeypatch.setattr(reader_module.pd, "read_excel", _fake_read_excel)

    sheets = PandasWorkbookReader(logger=MagicMock()).read_workbook(
        "/data/ingresos.xls",
        "ingresos.xls",
    )

    assert sheets == ()
    assert captured == {"source": "/data/ingresos.xls", "engine": "xlrd"}
