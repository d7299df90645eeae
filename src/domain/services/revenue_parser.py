"""Build monthly ledger entries from a revenue worksheet.

The ledger is scanned top to bottom as a small state machine:

* ``NO_PERIOD``: nothing open; only a month header changes state.
* ``PERIOD_OPEN``: a month block is open; a location marker selects a site.
* ``LOCATION_SET``: category rows add into the selected site.

A new month header closes the open block. The open block is closed again
at the end of the sheet.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from decimal import Decimal

from src.domain.constants import (
    DIAGNOSTIC_ROW_COUNT,
    REVENUE_AMOUNT_COLUMN,
    REVENUE_LABEL_COLUMN,
    REVENUE_YEAR_COLUMN,
)
from src.domain.errors import EmptyResult
from src.domain.models.cells import Row, Sheet, as_text, cell_at, kind_name
from src.domain.models.revenue import (
    CategoryGrid,
    Location,
    LocationAmounts,
    Month,
    MonthlyLedgerEntry,
    zero_category_grid,
    zero_location_amounts,
)
from src.domain.services.classification import (
    ClassifiedRow,
    ParserState,
    RowKind,
    classify_revenue_row,
)


@dataclass
class _LedgerDraft:
    """Month block being accumulated; never leaves this module."""

    month: Month
    year: int
    total: Decimal
    by_location: LocationAmounts = field(default_factory=zero_location_amounts)
    by_location_by_category: CategoryGrid = field(
        default_factory=zero_category_grid
    )

    def finalize(self) -> MonthlyLedgerEntry:
        return MonthlyLedgerEntry(
            month=self.month,
            year=self.year,
            total=self.total,
            by_location=dict(self.by_location),
            by_location_by_category={
                location: dict(amounts)
                for location, amounts in self.by_location_by_category.items()
            },
        )


@dataclass(frozen=True)
class _Fold:
    """Accumulator threaded through the row scan."""

    state: ParserState = ParserState.NO_PERIOD
    draft: _LedgerDraft | None = None
    location: Location | None = None
    entries: tuple[MonthlyLedgerEntry, ...] = ()


def _step(fold: _Fold, classified: ClassifiedRow) -> _Fold:
    kind = classified.kind
    if kind is RowKind.PERIOD_HEADER:
        entries = fold.entries
        if fold.draft is not None:
            entries = entries + (fold.draft.finalize(),)
        return _Fold(
            state=ParserState.PERIOD_OPEN,
            draft=_LedgerDraft(
                month=classified.month,
                year=classified.year,
                total=classified.amount,
            ),
            location=None,
            entries=entries,
        )
    if kind is RowKind.LOCATION_MARKER and fold.draft is not None:
        fold.draft.by_location[classified.location] = classified.amount
        return replace(
            fold,
            state=ParserState.LOCATION_SET,
            location=classified.location,
        )
    if (
        kind is RowKind.CATEGORY
        and fold.draft is not None
        and fold.location is not None
    ):
        amounts = fold.draft.by_location_by_category[fold.location]
        amounts[classified.category] += classified.amount
    return fold


def fold_ledger_rows(rows: Iterable[Row]) -> tuple[MonthlyLedgerEntry, ...]:
    """Fold ledger rows into finalized monthly entries.

    Args:
        rows: Ledger rows in sheet order.

    Returns:
        tuple[MonthlyLedgerEntry, ...]: Entries in the order their month
        headers appear; empty when the sheet has no valid month header.
    """
    fold = _Fold()
    for index, row in enumerate(rows):
        classified = classify_revenue_row(index, row, fold.state)
        fold = _step(fold, classified)
    if fold.draft is not None:
        return fold.entries + (fold.draft.finalize(),)
    return fold.entries


def describe_rows(
    rows: Iterable[Row],
    limit: int = DIAGNOSTIC_ROW_COUNT,
) -> tuple[str, ...]:
    """Describe the first rows of a sheet for parse-failure diagnostics.

    Args:
        rows: Sheet rows.
        limit: Number of rows to describe.

    Returns:
        tuple[str, ...]: One line per row with the label, year and amount
        cells and the year cell's type.
    """
    lines: list[str] = []
    for index, row in enumerate(rows):
        if index >= limit:
            break
        label = cell_at(row, REVENUE_LABEL_COLUMN)
        year = cell_at(row, REVENUE_YEAR_COLUMN)
        amount = cell_at(row, REVENUE_AMOUNT_COLUMN)
        lines.append(
            f'Row {index}: col0="{as_text(label)}", '
            f"col1={as_text(year) or '-'} (type: {kind_name(year)}), "
            f"col2={as_text(amount) or '-'}"
        )
    return tuple(lines)


def parse_revenue_sheet(
    sheet: Sheet,
    logger=None,
) -> tuple[MonthlyLedgerEntry, ...]:
    """Parse one revenue ledger worksheet.

    Args:
        sheet: Ledger worksheet.
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        tuple[MonthlyLedgerEntry, ...]: Finalized month entries.

    Raises:
        EmptyResult: If no month block was found; carries a description of
        the first rows.
    """
    entries = fold_ledger_rows(sheet.rows)
    if not entries:
        raise EmptyResult(
            "No valid data found.",
            diagnostics=describe_rows(sheet.rows),
        )
    if logger is not None:
        logger.debug(
            f"Parsed {len(entries)} month blocks from sheet '{sheet.name}'"
        )
    return entries


def parse_revenue_workbook(
    sheets: Iterable[Sheet],
    logger=None,
) -> tuple[MonthlyLedgerEntry, ...]:
    """Parse the first worksheet of a revenue workbook.

    Raises:
        EmptyResult: If the workbook has no sheet or no month block.
    """
    for sheet in sheets:
        return parse_revenue_sheet(sheet, logger)
    raise EmptyResult("The workbook contains no sheets.")


__all__ = [
    "describe_rows",
    "fold_ledger_rows",
    "parse_revenue_sheet",
    "parse_revenue_workbook",
]
