"""Typed spreadsheet cells and the coercions the parsers rely on.

A decoded workbook hands the engine loosely typed values: headers hold text,
data rows hold numbers or dates, and gaps are ``None``, ``NaN`` or empty
strings depending on the decoder. ``to_cell`` folds all of them into one of
four variants so that every coercion site has a single fallback:

* ``as_number`` returns ``Decimal("0")`` for anything that is not numeric.
* ``as_date`` returns ``None`` for anything that is not a date.
* ``as_text`` returns ``""`` for empty cells.
"""

import numbers
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Iterable, Union

from src.utils.decimal_utils import coerce_decimal


@dataclass(frozen=True)
class EmptyCell:
    """Absent value."""


@dataclass(frozen=True)
class TextCell:
    """Text value as decoded, untrimmed."""

    value: str


@dataclass(frozen=True)
class NumberCell:
    """Numeric value."""

    value: Decimal


@dataclass(frozen=True)
class DateCell:
    """Calendar date value."""

    value: date


Cell = Union[EmptyCell, TextCell, NumberCell, DateCell]
Row = tuple[Cell, ...]

EMPTY = EmptyCell()

# Excel stores dates as days since 1899-12-30.
_EXCEL_EPOCH = date(1899, 12, 30)
_SERIAL_MIN = 20000  # 1954-10-03
_SERIAL_MAX = 80000  # 2119-01-10

_TEXT_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%d/%m/%y",
)


def to_cell(raw) -> Cell:
    """Convert a decoded spreadsheet value into a typed cell.

    Args:
        raw: Value produced by the workbook decoder.

    Returns:
        Cell: The matching variant; NaN, NaT and None become ``EMPTY``.
    """
    if raw is None or isinstance(raw, EmptyCell):
        return EMPTY
    if isinstance(raw, (TextCell, NumberCell, DateCell)):
        return raw
    # NaN and NaT are the only values unequal to themselves.
    if raw != raw:
        return EMPTY
    if isinstance(raw, datetime):
        return DateCell(raw.date())
    if isinstance(raw, date):
        return DateCell(raw)
    if isinstance(raw, bool):
        return NumberCell(Decimal(int(raw)))
    if isinstance(raw, (numbers.Real, Decimal)):
        if not Decimal(str(raw)).is_finite():
            return EMPTY
        return NumberCell(coerce_decimal(raw))
    if isinstance(raw, str):
        return TextCell(raw) if raw else EMPTY
    return TextCell(str(raw))


def to_row(values: Iterable) -> Row:
    """Convert an iterable of decoded values into a row of cells."""
    return tuple(to_cell(value) for value in values)


def cell_at(row: Row, index: int) -> Cell:
    """Return the cell at ``index`` or ``EMPTY`` past the end of the row."""
    if 0 <= index < len(row):
        return row[index]
    return EMPTY


def is_blank(cell: Cell) -> bool:
    """Return True for values a spreadsheet would treat as falsy.

    Args:
        cell: Cell to inspect.

    Returns:
        bool: True for empty cells, blank text and zero numbers.
    """
    if isinstance(cell, EmptyCell):
        return True
    if isinstance(cell, TextCell):
        return not cell.value.strip()
    if isinstance(cell, NumberCell):
        return cell.value == 0
    return False


def as_text(cell: Cell) -> str:
    """Render a cell as trimmed text."""
    if isinstance(cell, TextCell):
        return cell.value.strip()
    if isinstance(cell, NumberCell):
        return _format_number(cell.value)
    if isinstance(cell, DateCell):
        return cell.value.isoformat()
    return ""


def as_number(cell: Cell) -> Decimal:
    """Coerce a cell to Decimal, defaulting to zero.

    Numeric text such as ``"1200.50"`` is parsed; dates and other text
    return zero.
    """
    if isinstance(cell, NumberCell):
        return cell.value
    if isinstance(cell, TextCell):
        parsed = _parse_decimal(cell.value)
        return parsed if parsed is not None else Decimal("0")
    return Decimal("0")


def as_date(cell: Cell) -> date | None:
    """Coerce a cell to a date, returning None when it cannot be parsed.

    Text is tried against ISO and day-first layouts; numbers are read as
    Excel serial day counts when they fall within a plausible window.
    """
    if isinstance(cell, DateCell):
        return cell.value
    if isinstance(cell, NumberCell):
        return _from_excel_serial(cell.value)
    if isinstance(cell, TextCell):
        return _parse_date_text(cell.value.strip())
    return None


def as_int(cell: Cell) -> int | None:
    """Return the integer part of a numeric cell, or None."""
    if isinstance(cell, NumberCell):
        return int(cell.value)
    if isinstance(cell, TextCell):
        parsed = _parse_decimal(cell.value)
        return int(parsed) if parsed is not None else None
    return None


def kind_name(cell: Cell) -> str:
    """Return a short name for the variant, used in diagnostics."""
    return {
        EmptyCell: "empty",
        TextCell: "text",
        NumberCell: "number",
        DateCell: "date",
    }[type(cell)]


def _from_excel_serial(value: Decimal) -> date | None:
    if not _SERIAL_MIN <= value <= _SERIAL_MAX:
        return None
    return _EXCEL_EPOCH + timedelta(days=int(value))


def _parse_date_text(text: str) -> date | None:
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in _TEXT_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _parse_decimal(text: str) -> Decimal | None:
    cleaned = text.strip().replace(",", "")
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def _format_number(value: Decimal) -> str:
    if value == value.to_integral_value():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Sheet:
    """One worksheet as a read-only grid of typed cells."""

    name: str
    rows: tuple[Row, ...]

    @classmethod
    def from_values(cls, name: str, rows: Iterable[Iterable]) -> "Sheet":
        """Build a sheet from decoded values.

        Leading columns that are empty on every row are dropped so that the
        first used column becomes column 0.

        Args:
            name: Worksheet name.
            rows: Decoded row values.

        Returns:
            Sheet: Typed grid.
        """
        typed = [to_row(values) for values in rows]
        offset = _leading_empty_columns(typed)
        if offset:
            typed = [row[offset:] for row in typed]
        return cls(name=name, rows=tuple(typed))

    def __len__(self) -> int:
        return len(self.rows)


Workbook = tuple[Sheet, ...]


def _leading_empty_columns(rows: list[Row]) -> int:
    width = max((len(row) for row in rows), default=0)
    offset = 0
    while offset < width and all(
        isinstance(cell_at(row, offset), EmptyCell) for row in rows
    ):
        offset += 1
    return offset if offset < width else 0


__all__ = [
    "Cell",
    "DateCell",
    "EMPTY",
    "EmptyCell",
    "NumberCell",
    "Row",
    "Sheet",
    "TextCell",
    "Workbook",
    "as_date",
    "as_int",
    "as_number",
    "as_text",
    "cell_at",
    "is_blank",
    "kind_name",
    "to_cell",
    "to_row",
]
