"""Build loan schedules from amortization worksheets."""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from src.domain.constants import (
    DEFAULT_LOAN_COLOR,
    LOAN_COLORS,
    LOAN_FIRST_PAYMENT_ROW,
    LOAN_METADATA_COLUMN,
)
from src.domain.errors import EmptyResult
from src.domain.models.cells import (
    Row,
    Sheet,
    as_date,
    as_int,
    as_number,
    as_text,
    cell_at,
    is_blank,
)
from src.domain.models.debt import LoanSchedule, PaymentFrequency, PaymentRow
from src.domain.services.classification import RowKind, classify_loan_row


def parse_loan_sheet(
    sheet: Sheet,
    colors: Mapping[str, str] = LOAN_COLORS,
) -> LoanSchedule | None:
    """Build a loan schedule from one worksheet.

    Args:
        sheet: Worksheet with metadata rows followed by installment rows.
        colors: Chart colors keyed by loan or sheet name.

    Returns:
        LoanSchedule | None: Schedule with payments sorted by due date, or
        None when the sheet holds no valid installment.
    """
    if len(sheet) <= LOAN_FIRST_PAYMENT_ROW:
        return None

    name = sheet.name
    original_amount = Decimal("0")
    frequency = PaymentFrequency.MONTHLY
    payments: list[PaymentRow] = []

    for index, row in enumerate(sheet.rows):
        classified = classify_loan_row(index, row)
        value = cell_at(row, LOAN_METADATA_COLUMN)
        if classified.kind is RowKind.LOAN_NAME:
            if not is_blank(value):
                name = as_text(value)
        elif classified.kind is RowKind.LOAN_AMOUNT:
            original_amount = max(as_number(value), Decimal("0"))
        elif classified.kind is RowKind.LOAN_FREQUENCY:
            if not is_blank(value):
                frequency = PaymentFrequency.from_label(as_text(value))
        elif classified.kind is RowKind.PAYMENT:
            payments.append(_payment_from_row(row))

    if not payments:
        return None

    payments.sort(key=lambda payment: payment.due_date)
    return LoanSchedule(
        name=name,
        original_amount=original_amount,
        frequency=frequency,
        payments=tuple(payments),
        color=colors.get(name) or colors.get(sheet.name) or DEFAULT_LOAN_COLOR,
        sheet_name=sheet.name,
    )


def _payment_from_row(row: Row) -> PaymentRow:
    number, due, principal, interest, total, balance = row[:6]
    due_date = as_date(due)
    if due_date is None:
        raise ValueError("Payment rows must carry a parseable due date")
    return PaymentRow(
        sequence_number=as_int(number),
        due_date=due_date,
        principal=as_number(principal),
        interest=as_number(interest),
        total_payment=as_number(total),
        remaining_balance=as_number(balance),
    )


def parse_loan_workbook(
    sheets: Iterable[Sheet],
    logger=None,
    colors: Mapping[str, str] = LOAN_COLORS,
) -> tuple[LoanSchedule, ...]:
    """Build one loan schedule per worksheet that holds installments.

    Args:
        sheets: Worksheets of the uploaded workbook.
        logger: Optional logger compatible with logging.Logger-like API.
        colors: Chart colors keyed by loan or sheet name.

    Returns:
        tuple[LoanSchedule, ...]: Schedules in sheet order.

    Raises:
        EmptyResult: If no sheet yields a schedule.
    """
    schedules: list[LoanSchedule] = []
    for sheet in sheets:
        schedule = parse_loan_sheet(sheet, colors)
        if schedule is None:
            if logger is not None:
                logger.debug(f"Skipping sheet '{sheet.name}': no payments")
            continue
        schedules.append(schedule)
    if not schedules:
        raise EmptyResult("No valid loan data found.")
    return tuple(schedules)


__all__ = ["parse_loan_sheet", "parse_loan_workbook"]
