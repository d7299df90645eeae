"""Re-bucket reconstructed loans into dashboard series."""

import calendar
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from src.domain.models.debt import (
    DebtMetrics,
    LoanPosition,
    PaymentScheduleBucket,
    TimelinePoint,
)
from src.domain.services.ratios import paid_off_percent


def month_start(value: date) -> date:
    return value.replace(day=1)


def month_end(value: date) -> date:
    last_day = calendar.monthrange(value.year, value.month)[1]
    return value.replace(day=last_day)


def next_month(value: date) -> date:
    if value.month == 12:
        return date(value.year + 1, 1, 1)
    return date(value.year, value.month + 1, 1)


def month_key(value: date) -> str:
    """Return the sortable ``YYYY-MM`` key of a date."""
    return f"{value.year:04d}-{value.month:02d}"


def month_label(value: date) -> str:
    """Return a short label such as ``Feb 26``."""
    return value.strftime("%b %y")


def iter_months(start: date, end: date) -> Iterable[date]:
    """Yield the first day of every month from ``start`` to ``end``."""
    current = month_start(start)
    last = month_start(end)
    while current <= last:
        yield current
        current = next_month(current)


def balance_at(position: LoanPosition, as_of: date) -> Decimal:
    """Return the balance left after every installment due by ``as_of``.

    Before the first installment the balance is the first installment's
    pre-payment balance.
    """
    payments = position.payments
    if not payments:
        return Decimal("0")
    latest = None
    for payment in payments:
        if payment.due_date > as_of:
            break
        latest = payment
    if latest is None:
        return payments[0].balance_before
    return latest.remaining_balance


def latest_due_date(positions: Iterable[LoanPosition]) -> date | None:
    dates = [p.payments[-1].due_date for p in positions if p.payments]
    return max(dates) if dates else None


def build_debt_timeline(
    positions: Sequence[LoanPosition],
    start: date,
    end: date,
) -> list[TimelinePoint]:
    """Build month-end balances for every month of ``[start, end]``.

    Args:
        positions: Reconstructed loans.
        start: Any date in the first month.
        end: Any date in the last month.

    Returns:
        list[TimelinePoint]: One point per month with per-loan balances and
        their total; empty when ``end`` is before ``start``.
    """
    timeline: list[TimelinePoint] = []
    for first_day in iter_months(start, end):
        cutoff = month_end(first_day)
        balances: dict[str, Decimal] = {}
        for position in positions:
            balance = balance_at(position, cutoff)
            balances[position.name] = (
                balances.get(position.name, Decimal("0")) + balance
            )
        timeline.append(
            TimelinePoint(
                month_start=first_day,
                label=month_label(first_day),
                total=sum(balances.values(), start=Decimal("0")),
                balances=balances,
            )
        )
    return timeline


def build_payment_schedule(
    positions: Sequence[LoanPosition],
    cutoff: date,
) -> list[PaymentScheduleBucket]:
    """Group installments due on or after ``cutoff`` by calendar month.

    Returns:
        list[PaymentScheduleBucket]: Buckets sorted by ``YYYY-MM`` key.
    """
    totals: dict[str, Decimal] = {}
    labels: dict[str, str] = {}
    by_loan: dict[str, dict[str, Decimal]] = {}
    for position in positions:
        for payment in position.payments:
            if payment.due_date < cutoff:
                continue
            key = month_key(payment.due_date)
            if key not in totals:
                totals[key] = Decimal("0")
                labels[key] = month_label(payment.due_date)
                by_loan[key] = {}
            totals[key] += payment.total_payment
            loans = by_loan[key]
            loans[position.name] = (
                loans.get(position.name, Decimal("0")) + payment.total_payment
            )
    return [
        PaymentScheduleBucket(
            key=key,
            label=labels[key],
            total=totals[key],
            by_loan=by_loan[key],
        )
        for key in sorted(totals)
    ]


def compute_debt_metrics(positions: Sequence[LoanPosition]) -> DebtMetrics:
    """Aggregate cutoff figures across loans."""
    zero = Decimal("0")
    total_debt = sum((p.current_balance for p in positions), start=zero)
    total_original = sum((p.original_amount for p in positions), start=zero)
    return DebtMetrics(
        total_debt=total_debt,
        total_original=total_original,
        monthly_payment=sum((p.monthly_payment for p in positions), start=zero),
        remaining_interest=sum(
            (p.remaining_interest for p in positions),
            start=zero,
        ),
        active_loans=sum(1 for p in positions if p.current_balance > 0),
        final_payoff=max((p.end_date for p in positions), default=None),
        paid_off_percent=paid_off_percent(total_original, total_debt),
    )


def sort_by_balance(
    positions: Iterable[LoanPosition],
) -> list[LoanPosition]:
    """Return loans ordered by current balance, largest first."""
    return sorted(positions, key=lambda p: p.current_balance, reverse=True)


__all__ = [
    "balance_at",
    "build_debt_timeline",
    "build_payment_schedule",
    "compute_debt_metrics",
    "iter_months",
    "latest_due_date",
    "month_end",
    "month_key",
    "month_label",
    "month_start",
    "next_month",
    "sort_by_balance",
]
