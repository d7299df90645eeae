"""Domain models package."""

from .cells import (
    Cell,
    DateCell,
    EmptyCell,
    NumberCell,
    Sheet,
    TextCell,
    Workbook,
)
from .dashboard import DebtDashboardView, RevenueDashboardView
from .debt import (
    DebtMetrics,
    LoanPosition,
    LoanSchedule,
    PaymentFrequency,
    PaymentRow,
    PaymentScheduleBucket,
    TimelinePoint,
)
from .outcome import ParseOutcome, ParseStatus
from .revenue import (
    CategoryCompositionPoint,
    CategorySlice,
    Granularity,
    Location,
    LocationBreakdown,
    LocationBreakdowns,
    LocationFilter,
    Month,
    MonthlyLedgerEntry,
    PeriodFilter,
    PeriodFilterKind,
    PeriodKey,
    RevenueBucket,
    RevenueCategory,
)

__all__ = [
    "Cell",
    "CategoryCompositionPoint",
    "CategorySlice",
    "DateCell",
    "DebtDashboardView",
    "DebtMetrics",
    "EmptyCell",
    "Granularity",
    "LoanPosition",
    "LoanSchedule",
    "Location",
    "LocationBreakdown",
    "LocationBreakdowns",
    "LocationFilter",
    "Month",
    "MonthlyLedgerEntry",
    "NumberCell",
    "ParseOutcome",
    "ParseStatus",
    "PaymentFrequency",
    "PaymentRow",
    "PaymentScheduleBucket",
    "PeriodFilter",
    "PeriodFilterKind",
    "PeriodKey",
    "RevenueBucket",
    "RevenueCategory",
    "RevenueDashboardView",
    "Sheet",
    "TextCell",
    "TimelinePoint",
    "Workbook",
]
