"""Domain services package."""

from .classification import (
    ClassifiedRow,
    ParserState,
    RowKind,
    classify_loan_row,
    classify_revenue_row,
)
from .debt_aggregation import (
    build_debt_timeline,
    build_payment_schedule,
    compute_debt_metrics,
    sort_by_balance,
)
from .debt_parser import parse_loan_sheet, parse_loan_workbook
from .ratios import paid_off_percent, safe_percent
from .reconstruction import reconstruct_position, reconstruct_positions
from .revenue_aggregation import (
    bucket_revenue,
    build_category_composition,
    build_location_breakdowns,
    default_period_filter,
    filter_entries,
    period_filter_options,
)
from .revenue_parser import parse_revenue_sheet, parse_revenue_workbook

__all__ = [
    "ClassifiedRow",
    "ParserState",
    "RowKind",
    "bucket_revenue",
    "build_category_composition",
    "build_debt_timeline",
    "build_location_breakdowns",
    "build_payment_schedule",
    "classify_loan_row",
    "classify_revenue_row",
    "compute_debt_metrics",
    "default_period_filter",
    "filter_entries",
    "paid_off_percent",
    "parse_loan_sheet",
    "parse_loan_workbook",
    "parse_revenue_sheet",
    "parse_revenue_workbook",
    "period_filter_options",
    "reconstruct_position",
    "reconstruct_positions",
    "safe_percent",
    "sort_by_balance",
]
