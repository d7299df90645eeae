"""Tests for revenue bucketing, filters and location breakdowns."""

import pickle
from decimal import Decimal

import pytest

from src.domain.models.cells import Sheet
from src.domain.models.revenue import (
    Granularity,
    Location,
    LocationFilter,
    Month,
    MonthlyLedgerEntry,
    PeriodFilter,
    PeriodFilterKind,
    RevenueCategory,
    zero_category_grid,
)
from src.domain.services.revenue_aggregation import (
    bucket_revenue,
    build_category_composition,
    build_location_breakdowns,
    default_period_filter,
    filter_entries,
    period_filter_options,
)
from src.domain.services.revenue_parser import parse_revenue_sheet


def _entry(month, year, palace="0", terrace="0", categories=None):
    grid = zero_category_grid()
    for (location, category), amount in (categories or {}).items():
        grid[location][category] = Decimal(amount)
    palace_amount = Decimal(palace)
    terrace_amount = Decimal(terrace)
    return MonthlyLedgerEntry(
        month=month,
        year=year,
        total=palace_amount + terrace_amount,
        by_location={
            Location.PALACE: palace_amount,
            Location.TERRACE: terrace_amount,
        },
        by_location_by_category=grid,
    )


P, T = Location.PALACE, Location.TERRACE

ENTRIES = [
    _entry(
        Month.NOV,
        2024,
        palace="100",
        categories={(P, RevenueCategory.COWORKING): "100"},
    ),
    _entry(
        Month.JAN,
        2025,
        palace="300",
        terrace="200",
        categories={
            (P, RevenueCategory.PRIVATE_OFFICES): "300",
            (T, RevenueCategory.CATERING): "200",
        },
    ),
    _entry(
        Month.MAR,
        2025,
        palace="100",
        terrace="100",
        categories={
            (P, RevenueCategory.PRIVATE_OFFICES): "100",
            (T, RevenueCategory.COWORKING): "100",
        },
    ),
    _entry(
        Month.APR,
        2025,
        terrace="50",
        categories={(T, RevenueCategory.TRAINING): "50"},
    ),
]


def test_monthly_bucketing_is_identity() -> None:
    buckets = bucket_revenue(ENTRIES, Granularity.MONTHLY)
    assert [b.label for b in buckets] == [
        "Nov 2024",
        "Jan 2025",
        "Mar 2025",
        "Apr 2025",
    ]
    assert [b.total for b in buckets] == [e.total for e in ENTRIES]


def test_quarterly_bucketing_sums_components() -> None:
    buckets = bucket_revenue(ENTRIES, Granularity.QUARTERLY)

    assert [b.label for b in buckets] == ["Q4 2024", "Q1 2025", "Q2 2025"]
    first_quarter = buckets[1]
    assert first_quarter.total == Decimal("700")
    assert first_quarter.palace == Decimal("400")
    assert first_quarter.terrace == Decimal("300")
    palace = first_quarter.by_location_by_category[P]
    assert palace[RevenueCategory.PRIVATE_OFFICES] == Decimal("400")


def test_yearly_rebucketing_is_idempotent() -> None:
    yearly = bucket_revenue(ENTRIES, Granularity.YEARLY)

    assert [b.label for b in yearly] == ["2024", "2025"]
    assert bucket_revenue(yearly, Granularity.YEARLY) == yearly


def test_quarters_roll_up_into_years() -> None:
    quarterly = bucket_revenue(ENTRIES, Granularity.QUARTERLY)
    assert bucket_revenue(quarterly, Granularity.YEARLY) == bucket_revenue(
        ENTRIES,
        Granularity.YEARLY,
    )


def test_finer_granularity_than_input_is_rejected() -> None:
    yearly = bucket_revenue(ENTRIES, Granularity.YEARLY)
    with pytest.raises(ValueError):
        bucket_revenue(yearly, Granularity.QUARTERLY)
    with pytest.raises(ValueError):
        bucket_revenue(yearly, Granularity.MONTHLY)


def test_category_composition_follows_location_filter() -> None:
    both = build_category_composition(
        ENTRIES,
        Granularity.YEARLY,
        LocationFilter.BOTH,
    )
    terrace = build_category_composition(
        ENTRIES,
        Granularity.YEARLY,
        LocationFilter.TERRACE,
    )

    assert both[1].label == "2025"
    assert both[1].total == Decimal("750")
    assert terrace[1].amounts[RevenueCategory.CATERING] == Decimal("200")
    assert terrace[1].amounts[RevenueCategory.PRIVATE_OFFICES] == Decimal("0")
    assert terrace[0].total == Decimal("0")


def test_period_filter_options_and_default() -> None:
    assert period_filter_options(ENTRIES, PeriodFilterKind.YEAR) == [
        "2024",
        "2025",
    ]
    assert period_filter_options(ENTRIES, PeriodFilterKind.QUARTER) == [
        "Q4 2024",
        "Q1 2025",
        "Q2 2025",
    ]
    assert default_period_filter(ENTRIES) == PeriodFilter(
        kind=PeriodFilterKind.YEAR,
        value="2025",
    )
    assert default_period_filter([]) is None


def test_filter_entries_selects_one_period() -> None:
    selected = filter_entries(
        ENTRIES,
        PeriodFilter(kind=PeriodFilterKind.MONTH, value="Mar 2025"),
    )
    assert [(e.month, e.year) for e in selected] == [(Month.MAR, 2025)]


def test_location_breakdowns_drop_zero_slices() -> None:
    breakdowns = build_location_breakdowns(
        ENTRIES,
        PeriodFilter(kind=PeriodFilterKind.YEAR, value="2025"),
    )

    assert breakdowns.palace.total == Decimal("400")
    assert [s.category for s in breakdowns.palace.slices] == [
        RevenueCategory.PRIVATE_OFFICES,
    ]
    assert breakdowns.palace.slices[0].share_percent == Decimal("100")
    assert breakdowns.terrace.total == Decimal("350")
    assert breakdowns.grand_total == Decimal("750")
    assert round(breakdowns.terrace_share_percent, 2) == Decimal("46.67")


def test_location_breakdowns_for_empty_period_are_zero() -> None:
    """Shares are zero rather than undefined when nothing was earned."""
    breakdowns = build_location_breakdowns(
        ENTRIES,
        PeriodFilter(kind=PeriodFilterKind.YEAR, value="2030"),
    )

    assert breakdowns.grand_total == Decimal("0")
    assert breakdowns.palace_share_percent == Decimal("0")
    assert breakdowns.terrace_share_percent == Decimal("0")
    assert breakdowns.palace.slices == []


def test_repeated_month_block_stays_separate_when_monthly() -> None:
    sheet = Sheet.from_values(
        "Ingresos",
        [
            ["Marzo", 2025, 100],
            ["Malaga Palace", "", 100],
            ["Marzo", 2025, 50],
            ["Malaga Terrace", "", 50],
        ],
    )
    entries = parse_revenue_sheet(sheet)

    monthly = bucket_revenue(entries, Granularity.MONTHLY)
    composition = build_category_composition(
        entries,
        Granularity.MONTHLY,
        LocationFilter.BOTH,
    )

    assert [b.total for b in monthly] == [Decimal("100"), Decimal("50")]
    assert [b.label for b in monthly] == ["Mar 2025", "Mar 2025"]
    assert len(composition) == 2
    assert period_filter_options(entries, PeriodFilterKind.MONTH) == [
        "Mar 2025",
        "Mar 2025",
    ]
    (quarter,) = bucket_revenue(entries, Granularity.QUARTERLY)
    assert quarter.total == Decimal("150")
    assert quarter.palace == Decimal("100")
    assert quarter.terrace == Decimal("50")


def test_ledger_entry_amounts_are_read_only() -> None:
    entry = ENTRIES[1]
    bucket = bucket_revenue([entry], Granularity.YEARLY)[0]

    with pytest.raises(TypeError):
        entry.by_location[Location.PALACE] = Decimal("1")
    with pytest.raises(TypeError):
        entry.by_location_by_category[P][RevenueCategory.COWORKING] = 1
    with pytest.raises(TypeError):
        bucket.by_location[Location.TERRACE] = Decimal("1")
    assert bucket_revenue([entry], Granularity.YEARLY)[0] == bucket


def test_ledger_entries_survive_pickling() -> None:
    """Streamlit's data cache pickles parsed entries."""
    restored = pickle.loads(pickle.dumps(ENTRIES))

    assert restored == ENTRIES
    with pytest.raises(TypeError):
        restored[0].by_location[P] = Decimal("1")
