"""Reconstruct loan state at the cutoff date from discrete installments."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from src.domain.constants import WEEKS_PER_MONTH
from src.domain.models.debt import LoanPosition, LoanSchedule, PaymentRow


def select_anchor(
    payments: tuple[PaymentRow, ...],
    cutoff: date,
) -> PaymentRow:
    """Return the installment that represents the loan at ``cutoff``.

    The first installment due on or after the cutoff is used; when every
    installment is already past, the final one is used.

    Raises:
        ValueError: If ``payments`` is empty.
    """
    if not payments:
        raise ValueError("A loan needs at least one payment to be anchored")
    for payment in payments:
        if payment.due_date >= cutoff:
            return payment
    return payments[-1]


def monthly_equivalent(schedule: LoanSchedule, amount: Decimal) -> Decimal:
    """Express an installment amount per month."""
    if schedule.is_weekly:
        return amount * WEEKS_PER_MONTH
    return amount


def reconstruct_position(schedule: LoanSchedule, cutoff: date) -> LoanPosition:
    """Derive the cutoff snapshot of one loan.

    The stored remaining balance is the balance after an installment posts,
    so the anchor's principal is added back to get the balance standing at
    the cutoff.

    Args:
        schedule: Loan with payments sorted by due date.
        cutoff: Snapshot date.

    Returns:
        LoanPosition: Balance, monthly payment, remaining interest and end
        date at the cutoff.
    """
    payments = schedule.payments
    anchor = select_anchor(payments, cutoff)
    remaining_interest = sum(
        (p.interest for p in payments if p.due_date >= cutoff),
        start=Decimal("0"),
    )
    return LoanPosition(
        schedule=schedule,
        cutoff=cutoff,
        anchor=anchor,
        current_balance=anchor.balance_before,
        monthly_payment=monthly_equivalent(schedule, anchor.total_payment),
        payment_amount=anchor.total_payment,
        remaining_interest=remaining_interest,
        end_date=payments[-1].due_date,
    )


def reconstruct_positions(
    schedules: Iterable[LoanSchedule],
    cutoff: date,
) -> tuple[LoanPosition, ...]:
    """Reconstruct every schedule at the same cutoff."""
    return tuple(reconstruct_position(s, cutoff) for s in schedules)


__all__ = [
    "monthly_equivalent",
    "reconstruct_position",
    "reconstruct_positions",
    "select_anchor",
]
