"""Row classification for loan and revenue sheets.

Loan sheets are positional: metadata sits in fixed rows and every row from
``LOAN_FIRST_PAYMENT_ROW`` on is a candidate installment. Revenue ledgers are
lexical: month, location and category labels in column 0 decide the row
type, and location/category rows only count inside an open month block.
"""

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from enum import Enum

from src.domain.constants import (
    CATEGORY_LABELS,
    LOAN_AMOUNT_ROW,
    LOAN_FIRST_PAYMENT_ROW,
    LOAN_FREQUENCY_ROW,
    LOAN_NAME_ROW,
    LOAN_PAYMENT_COLUMNS,
    LOCATION_LABELS,
    MONTH_LABELS,
    REVENUE_AMOUNT_COLUMN,
    REVENUE_LABEL_COLUMN,
    REVENUE_YEAR_COLUMN,
    REVENUE_YEAR_MAX,
    REVENUE_YEAR_MIN,
)
from src.domain.models.cells import (
    Row,
    as_date,
    as_number,
    as_text,
    cell_at,
    is_blank,
)
from src.domain.models.revenue import Location, Month, RevenueCategory
from src.domain.policies.label_tables import lookup_label


class RowKind(Enum):
    """Tag assigned to a sheet row."""

    LOAN_NAME = "loan_name"
    LOAN_AMOUNT = "loan_amount"
    LOAN_FREQUENCY = "loan_frequency"
    PAYMENT = "payment"
    PERIOD_HEADER = "period_header"
    LOCATION_MARKER = "location_marker"
    CATEGORY = "category"
    IGNORABLE = "ignorable"


class ParserState(Enum):
    """Open sections while scanning a revenue ledger."""

    NO_PERIOD = "no_period"
    PERIOD_OPEN = "period_open"
    LOCATION_SET = "location_set"


@dataclass(frozen=True)
class ClassifiedRow:
    """Row tag plus the scalars extracted while classifying it.

    Attributes:
        index: Zero-based row index in the sheet.
        kind: Assigned tag.
        row: Source cells.
        amount: Column-2 amount for revenue rows.
        month: Month of a period header.
        year: Year of a period header.
        location: Location of a location marker.
        category: Canonical category of a category row.
    """

    index: int
    kind: RowKind
    row: Row
    amount: Decimal = Decimal("0")
    month: Month | None = None
    year: int | None = None
    location: Location | None = None
    category: RevenueCategory | None = None


_LOAN_METADATA_ROWS = {
    LOAN_NAME_ROW: RowKind.LOAN_NAME,
    LOAN_AMOUNT_ROW: RowKind.LOAN_AMOUNT,
    LOAN_FREQUENCY_ROW: RowKind.LOAN_FREQUENCY,
}


def classify_loan_row(index: int, row: Row) -> ClassifiedRow:
    """Classify a loan sheet row by position.

    Args:
        index: Zero-based row index.
        row: Row cells.

    Returns:
        ClassifiedRow: Metadata, payment or ignorable tag.
    """
    if index < LOAN_FIRST_PAYMENT_ROW:
        kind = _LOAN_METADATA_ROWS.get(index, RowKind.IGNORABLE)
        return ClassifiedRow(index=index, kind=kind, row=row)
    if _is_payment_candidate(row):
        return ClassifiedRow(index=index, kind=RowKind.PAYMENT, row=row)
    return ClassifiedRow(index=index, kind=RowKind.IGNORABLE, row=row)


def _is_payment_candidate(row: Row) -> bool:
    if len(row) < LOAN_PAYMENT_COLUMNS:
        return False
    number, due, principal, _, total = row[:5]
    if all(is_blank(cell) for cell in (number, due, principal, total)):
        return False
    return as_date(due) is not None


def classify_revenue_row(
    index: int,
    row: Row,
    state: ParserState,
) -> ClassifiedRow:
    """Classify a revenue ledger row given the currently open sections.

    Args:
        index: Zero-based row index.
        row: Row cells.
        state: Sections open before this row.

    Returns:
        ClassifiedRow: Period header, location marker, category or ignorable.
    """
    label = as_text(cell_at(row, REVENUE_LABEL_COLUMN))
    amount = as_number(cell_at(row, REVENUE_AMOUNT_COLUMN))

    month = lookup_label(MONTH_LABELS, label) if label else None
    if month is not None:
        year = _ledger_year(row)
        if year is not None:
            return ClassifiedRow(
                index=index,
                kind=RowKind.PERIOD_HEADER,
                row=row,
                amount=amount,
                month=month,
                year=year,
            )

    if state is ParserState.NO_PERIOD or not label:
        return ClassifiedRow(index=index, kind=RowKind.IGNORABLE, row=row)

    location = lookup_label(LOCATION_LABELS, label, case_sensitive=True)
    if location is not None:
        return ClassifiedRow(
            index=index,
            kind=RowKind.LOCATION_MARKER,
            row=row,
            amount=amount,
            location=location,
        )

    category = lookup_label(CATEGORY_LABELS, label)
    if category is not None and state is ParserState.LOCATION_SET:
        return ClassifiedRow(
            index=index,
            kind=RowKind.CATEGORY,
            row=row,
            amount=amount,
            category=category,
        )
    return ClassifiedRow(index=index, kind=RowKind.IGNORABLE, row=row)


def _ledger_year(row: Row) -> int | None:
    cell = cell_at(row, REVENUE_YEAR_COLUMN)
    if is_blank(cell):
        return None
    value = as_number(cell)
    if not REVENUE_YEAR_MIN <= value <= REVENUE_YEAR_MAX:
        return None
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


__all__ = [
    "ClassifiedRow",
    "ParserState",
    "RowKind",
    "classify_loan_row",
    "classify_revenue_row",
]
