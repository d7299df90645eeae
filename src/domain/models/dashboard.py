"""View models handed to the presentation layer."""

from dataclasses import dataclass, field
from datetime import date

from src.domain.models.debt import (
    DebtMetrics,
    LoanPosition,
    PaymentScheduleBucket,
    TimelinePoint,
)
from src.domain.models.revenue import (
    CategoryCompositionPoint,
    Granularity,
    LocationBreakdowns,
    LocationFilter,
    MonthlyLedgerEntry,
    PeriodFilter,
    RevenueBucket,
)


@dataclass(frozen=True)
class DebtDashboardView:
    """Loans, cutoff metrics and the two debt series.

    Attributes:
        cutoff: Snapshot date of the positions.
        positions: Loans ordered by current balance, largest first.
        metrics: Portfolio figures at the cutoff.
        timeline: Month-end balances over the requested range.
        payment_schedule: Installments due from the cutoff, per month.
    """

    cutoff: date
    positions: list[LoanPosition]
    metrics: DebtMetrics
    timeline: list[TimelinePoint]
    payment_schedule: list[PaymentScheduleBucket]


@dataclass(frozen=True)
class RevenueDashboardView:
    """Ledger entries and the revenue series for the active view settings."""

    entries: list[MonthlyLedgerEntry]
    granularity: Granularity
    display_series: list[RevenueBucket]
    category_granularity: Granularity
    location_filter: LocationFilter
    category_series: list[CategoryCompositionPoint]
    period_filter: PeriodFilter | None = None
    period_options: list[str] = field(default_factory=list)
    breakdowns: LocationBreakdowns | None = None


__all__ = ["DebtDashboardView", "RevenueDashboardView"]
