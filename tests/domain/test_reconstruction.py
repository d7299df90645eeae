"""Tests for cutoff reconstruction of loans."""

from datetime import date
from decimal import Decimal

import pytest

from src.domain.models.debt import LoanSchedule, PaymentFrequency, PaymentRow
from src.domain.services.reconstruction import (
    reconstruct_position,
    reconstruct_positions,
    select_anchor,
)

CUTOFF = date(2026, 2, 1)


def _payment(number, due, principal, interest, total, balance) -> PaymentRow:
    return PaymentRow(
        sequence_number=number,
        due_date=due,
        principal=Decimal(principal),
        interest=Decimal(interest),
        total_payment=Decimal(total),
        remaining_balance=Decimal(balance),
    )


def _schedule(payments, frequency=PaymentFrequency.MONTHLY) -> LoanSchedule:
    return LoanSchedule(
        name="Sabadell Prestamo 15000",
        original_amount=Decimal("15000"),
        frequency=frequency,
        payments=tuple(payments),
        color="#06b6d4",
    )


MONTHLY_PAYMENTS = [
    _payment(1, date(2026, 1, 1), "500", "50", "550", "5500"),
    _payment(2, date(2026, 2, 1), "500", "45", "545", "5000"),
    _payment(3, date(2026, 3, 1), "500", "40", "540", "4500"),
]


def test_balance_adds_back_anchor_principal() -> None:
    """Balance at the cutoff is the anchor's balance plus its principal."""
    position = reconstruct_position(_schedule(MONTHLY_PAYMENTS), CUTOFF)

    assert position.anchor.sequence_number == 2
    assert position.current_balance == Decimal("5500")
    assert position.monthly_payment == Decimal("545")
    assert position.payment_amount == Decimal("545")
    assert position.remaining_interest == Decimal("85")
    assert position.end_date == date(2026, 3, 1)


def test_weekly_anchor_is_converted_to_monthly() -> None:
    payments = [_payment(1, date(2026, 2, 2), "90", "10", "100", "900")]
    position = reconstruct_position(
        _schedule(payments, PaymentFrequency.WEEKLY),
        CUTOFF,
    )

    assert position.monthly_payment == Decimal("433.0")
    assert position.payment_amount == Decimal("100")
    assert position.is_weekly


def test_fully_past_loan_anchors_on_last_payment() -> None:
    payments = MONTHLY_PAYMENTS[:1]
    position = reconstruct_position(_schedule(payments), CUTOFF)

    assert position.anchor.sequence_number == 1
    assert position.current_balance == Decimal("6000")
    assert position.remaining_interest == Decimal("0")


def test_select_anchor_requires_payments() -> None:
    with pytest.raises(ValueError):
        select_anchor((), CUTOFF)


def test_reconstruct_positions_keeps_order() -> None:
    first = _schedule(MONTHLY_PAYMENTS)
    second = _schedule(MONTHLY_PAYMENTS[2:])
    positions = reconstruct_positions([first, second], CUTOFF)

    assert [p.schedule for p in positions] == [first, second]
    assert all(p.cutoff == CUTOFF for p in positions)
