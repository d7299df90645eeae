"""Tests for the revenue ledger state machine."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.errors import EmptyResult
from src.domain.models.cells import Sheet
from src.domain.models.revenue import Location, Month, RevenueCategory
from src.domain.services.revenue_parser import (
    describe_rows,
    parse_revenue_sheet,
    parse_revenue_workbook,
)


def _ledger(rows, name="Ingresos") -> Sheet:
    return Sheet.from_values(name, rows)


def test_single_month_block_end_to_end() -> None:
    """One month block yields one entry with location and category totals."""
    sheet = _ledger(
        [
            ["Marzo", 2025, 10000],
            ["Malaga Palace", "", 6000],
            ["Private Offices", "", 4000],
            ["Malaga Terrace", "", 4000],
            ["Coworking", "", 4000],
        ]
    )

    (entry,) = parse_revenue_sheet(sheet)

    assert entry.month is Month.MAR
    assert entry.year == 2025
    assert entry.total == Decimal("10000")
    assert entry.by_location == {
        Location.PALACE: Decimal("6000"),
        Location.TERRACE: Decimal("4000"),
    }
    palace = entry.by_location_by_category[Location.PALACE]
    terrace = entry.by_location_by_category[Location.TERRACE]
    assert palace[RevenueCategory.PRIVATE_OFFICES] == Decimal("4000")
    assert terrace[RevenueCategory.COWORKING] == Decimal("4000")
    assert palace[RevenueCategory.COWORKING] == Decimal("0")


def test_repeated_categories_accumulate() -> None:
    """Rows mapping onto the same category add up instead of overwriting."""
    sheet = _ledger(
        [
            ["Marzo", 2025, 200],
            ["Malaga Palace", "", 200],
            ["one-off fees", "", 50],
            ["One-off Fees", "", 30],
        ]
    )

    (entry,) = parse_revenue_sheet(sheet)

    palace = entry.by_location_by_category[Location.PALACE]
    assert palace[RevenueCategory.OTHER] == Decimal("80")


def test_category_rows_before_a_location_are_dropped() -> None:
    sheet = _ledger(
        [
            ["Abril", 2025, 100],
            ["Coworking", "", 20],
            ["Malaga Palace", "", 100],
            ["Coworking", "", 30],
        ]
    )

    (entry,) = parse_revenue_sheet(sheet)

    palace = entry.by_location_by_category[Location.PALACE]
    assert palace[RevenueCategory.COWORKING] == Decimal("30")


def test_new_header_closes_the_open_block() -> None:
    """Each header starts a fresh block; location does not carry over."""
    sheet = _ledger(
        [
            ["Title row"],
            ["Enero", 2025, 100],
            ["Malaga Terrace", "", 100],
            ["Catering", "", 100],
            ["Febrero", 2025, 70],
            ["Catering", "", 70],
            ["Malaga Terrace", "", 70],
            ["Formación", "", 70],
        ]
    )

    entries = parse_revenue_sheet(sheet)

    assert [(e.month, e.year) for e in entries] == [
        (Month.JAN, 2025),
        (Month.FEB, 2025),
    ]
    january = entries[0].by_location_by_category[Location.TERRACE]
    february = entries[1].by_location_by_category[Location.TERRACE]
    assert january[RevenueCategory.CATERING] == Decimal("100")
    assert february[RevenueCategory.CATERING] == Decimal("0")
    assert february[RevenueCategory.TRAINING] == Decimal("70")


def test_header_total_is_not_reconciled() -> None:
    sheet = _ledger(
        [
            ["Mayo", 2025, 999],
            ["Malaga Palace", "", 10],
            ["Services", "", 10],
        ]
    )
    (entry,) = parse_revenue_sheet(sheet)
    assert entry.total == Decimal("999")


def test_empty_ledger_raises_with_diagnostics() -> None:
    """No valid header gives an empty result carrying the first rows."""
    rows = [["Resumen", "2019", 5]] + [["x", None, None]] * 12
    sheet = _ledger(rows)

    with pytest.raises(EmptyResult) as excinfo:
        parse_revenue_sheet(sheet)

    assert str(excinfo.value) == "No valid data found."
    assert len(excinfo.value.diagnostics) == 10
    assert excinfo.value.diagnostics[0] == (
        'Row 0: col0="Resumen", col1=2019 (type: text), col2=5'
    )


def test_describe_rows_marks_missing_cells() -> None:
    lines = describe_rows(_ledger([["Marzo"]]).rows)
    assert lines == ('Row 0: col0="Marzo", col1=- (type: empty), col2=-',)


def test_parse_revenue_workbook_uses_first_sheet_only() -> None:
    logger = MagicMock()
    first = _ledger([["Junio", 2024, 10]], name="2024")
    second = _ledger([["Julio", 2024, 20]], name="2024b")

    entries = parse_revenue_workbook((first, second), logger=logger)

    assert [e.month for e in entries] == [Month.JUN]
    logger.debug.assert_called_once()


def test_parse_revenue_workbook_without_sheets() -> None:
    with pytest.raises(EmptyResult):
        parse_revenue_workbook(())
