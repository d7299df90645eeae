"""Domain models for loan amortization schedules."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class PaymentFrequency(Enum):
    """How often a loan is repaid."""

    MONTHLY = "Monthly"
    WEEKLY = "Weekly"

    @classmethod
    def from_label(cls, label: str) -> "PaymentFrequency":
        """Return WEEKLY for a case-insensitive "weekly" label, else MONTHLY."""
        if label.strip().casefold() == "weekly":
            return cls.WEEKLY
        return cls.MONTHLY


@dataclass(frozen=True)
class PaymentRow:
    """One row of an amortization schedule.

    Attributes:
        sequence_number: Installment number when the sheet provides one.
        due_date: Date the installment falls due.
        principal: Principal repaid by the installment.
        interest: Interest paid by the installment.
        total_payment: Installment amount.
        remaining_balance: Outstanding balance after the installment posts.
    """

    sequence_number: int | None
    due_date: date
    principal: Decimal = Decimal("0")
    interest: Decimal = Decimal("0")
    total_payment: Decimal = Decimal("0")
    remaining_balance: Decimal = Decimal("0")

    @property
    def balance_before(self) -> Decimal:
        """Balance standing immediately before this installment posts."""
        return self.remaining_balance + self.principal


@dataclass(frozen=True)
class LoanSchedule:
    """Loan parsed from one worksheet, payments sorted by due date."""

    name: str
    original_amount: Decimal
    frequency: PaymentFrequency
    payments: tuple[PaymentRow, ...]
    color: str
    sheet_name: str = ""

    @property
    def is_weekly(self) -> bool:
        return self.frequency is PaymentFrequency.WEEKLY

    @property
    def series_key(self) -> str:
        """Column-safe identifier used by chart series."""
        return "_".join(self.name.split())


@dataclass(frozen=True)
class LoanPosition:
    """Loan state reconstructed at the cutoff date.

    Attributes:
        schedule: Source schedule.
        cutoff: Date the snapshot is taken at.
        anchor: Installment representing the loan at the cutoff.
        current_balance: Outstanding balance at the cutoff.
        monthly_payment: Anchor installment expressed per month.
        payment_amount: Anchor installment as stated in the sheet.
        remaining_interest: Interest still due on or after the cutoff.
        end_date: Due date of the final installment.
    """

    schedule: LoanSchedule
    cutoff: date
    anchor: PaymentRow
    current_balance: Decimal
    monthly_payment: Decimal
    payment_amount: Decimal
    remaining_interest: Decimal
    end_date: date

    @property
    def name(self) -> str:
        return self.schedule.name

    @property
    def color(self) -> str:
        return self.schedule.color

    @property
    def original_amount(self) -> Decimal:
        return self.schedule.original_amount

    @property
    def is_weekly(self) -> bool:
        return self.schedule.is_weekly

    @property
    def payments(self) -> tuple[PaymentRow, ...]:
        return self.schedule.payments


@dataclass(frozen=True)
class DebtMetrics:
    """Portfolio-level figures at the cutoff."""

    total_debt: Decimal
    total_original: Decimal
    monthly_payment: Decimal
    remaining_interest: Decimal
    active_loans: int
    final_payoff: date | None
    paid_off_percent: Decimal


@dataclass(frozen=True)
class TimelinePoint:
    """Outstanding balances at the end of one calendar month."""

    month_start: date
    label: str
    total: Decimal
    balances: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class PaymentScheduleBucket:
    """Installments due in one calendar month."""

    key: str
    label: str
    total: Decimal
    by_loan: dict[str, Decimal] = field(default_factory=dict)


__all__ = [
    "DebtMetrics",
    "LoanPosition",
    "LoanSchedule",
    "PaymentFrequency",
    "PaymentRow",
    "PaymentScheduleBucket",
    "TimelinePoint",
]
