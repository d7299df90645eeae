"""Re-bucket monthly ledger entries into dashboard series."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from src.domain.models.revenue import (
    CategoryCompositionPoint,
    CategorySlice,
    Granularity,
    Location,
    LocationBreakdown,
    LocationBreakdowns,
    LocationFilter,
    MonthlyLedgerEntry,
    PeriodFilter,
    PeriodFilterKind,
    PeriodKey,
    RevenueBucket,
    RevenueCategory,
    zero_category_amounts,
    zero_category_grid,
    zero_location_amounts,
)
from src.domain.services.ratios import safe_percent

_FILTER_GRANULARITY = {
    PeriodFilterKind.YEAR: Granularity.YEARLY,
    PeriodFilterKind.QUARTER: Granularity.QUARTERLY,
    PeriodFilterKind.MONTH: Granularity.MONTHLY,
}

_FILTER_LOCATIONS = {
    LocationFilter.PALACE: (Location.PALACE,),
    LocationFilter.TERRACE: (Location.TERRACE,),
    LocationFilter.BOTH: (Location.PALACE, Location.TERRACE),
}


def _as_bucket(item: MonthlyLedgerEntry | RevenueBucket) -> RevenueBucket:
    if isinstance(item, RevenueBucket):
        return item
    return RevenueBucket.from_entry(item)


def bucket_revenue(
    items: Iterable[MonthlyLedgerEntry | RevenueBucket],
    granularity: Granularity,
) -> list[RevenueBucket]:
    """Group entries (or coarser buckets) by month, quarter or year.

    Monthly grouping keeps one bucket per item, so a month block that
    repeats in the ledger stays a separate bucket. Quarterly and yearly
    grouping sum totals, location subtotals and category amounts component
    by component, and buckets keep the order in which their first member
    appears. Grouping buckets that are already at ``granularity`` returns
    equal buckets.

    Args:
        items: Monthly entries or previously bucketed series.
        granularity: Target bucket size.

    Returns:
        list[RevenueBucket]: One bucket per item when monthly, otherwise
        one bucket per distinct period key.

    Raises:
        ValueError: If an item is coarser than ``granularity``.
    """
    if granularity is Granularity.MONTHLY:
        buckets = [_as_bucket(item) for item in items]
        for bucket in buckets:
            # raises for quarterly or yearly buckets
            bucket.period.coarsen(granularity)
        return buckets
    totals: dict[PeriodKey, Decimal] = {}
    locations: dict[PeriodKey, dict[Location, Decimal]] = {}
    grids: dict[PeriodKey, dict[Location, dict[RevenueCategory, Decimal]]] = {}
    for item in items:
        bucket = _as_bucket(item)
        key = bucket.period.coarsen(granularity)
        if key not in totals:
            totals[key] = Decimal("0")
            locations[key] = zero_location_amounts()
            grids[key] = zero_category_grid()
        totals[key] += bucket.total
        for location, amount in bucket.by_location.items():
            locations[key][location] += amount
        for location, amounts in bucket.by_location_by_category.items():
            for category, amount in amounts.items():
                grids[key][location][category] += amount
    return [
        RevenueBucket(
            period=key,
            total=totals[key],
            by_location=locations[key],
            by_location_by_category=grids[key],
        )
        for key in totals
    ]


def category_amounts(
    bucket: RevenueBucket,
    location_filter: LocationFilter,
) -> dict[RevenueCategory, Decimal]:
    """Return category amounts for the locations selected by the filter."""
    amounts = zero_category_amounts()
    for location in _FILTER_LOCATIONS[location_filter]:
        for category, amount in bucket.by_location_by_category.get(
            location, {}
        ).items():
            amounts[category] += amount
    return amounts


def build_category_composition(
    entries: Iterable[MonthlyLedgerEntry | RevenueBucket],
    granularity: Granularity,
    location_filter: LocationFilter,
) -> list[CategoryCompositionPoint]:
    """Build the category mix per bucket for one location filter."""
    return [
        CategoryCompositionPoint(
            label=bucket.label,
            amounts=category_amounts(bucket, location_filter),
        )
        for bucket in bucket_revenue(entries, granularity)
    ]


def period_value(entry: MonthlyLedgerEntry, kind: PeriodFilterKind) -> str:
    """Return the label an entry has under a period filter kind."""
    return entry.period.coarsen(_FILTER_GRANULARITY[kind]).label


def period_filter_options(
    entries: Sequence[MonthlyLedgerEntry],
    kind: PeriodFilterKind,
) -> list[str]:
    """List selectable periods for a filter kind.

    Years are sorted ascending and quarters follow ledger order. Months
    are listed once per entry, in ledger order.
    """
    if kind is PeriodFilterKind.YEAR:
        return [str(year) for year in sorted({e.year for e in entries})]
    if kind is PeriodFilterKind.MONTH:
        return [period_value(entry, kind) for entry in entries]
    options: list[str] = []
    for entry in entries:
        value = period_value(entry, kind)
        if value not in options:
            options.append(value)
    return options


def default_period_filter(
    entries: Sequence[MonthlyLedgerEntry],
) -> PeriodFilter | None:
    """Select the most recent year present in the ledger."""
    if not entries:
        return None
    latest = max(entry.year for entry in entries)
    return PeriodFilter(kind=PeriodFilterKind.YEAR, value=str(latest))


def filter_entries(
    entries: Iterable[MonthlyLedgerEntry],
    period_filter: PeriodFilter,
) -> list[MonthlyLedgerEntry]:
    """Keep the entries falling inside the selected period."""
    return [
        entry
        for entry in entries
        if period_value(entry, period_filter.kind) == period_filter.value
    ]


def _location_breakdown(
    entries: Sequence[MonthlyLedgerEntry],
    location: Location,
) -> LocationBreakdown:
    amounts = zero_category_amounts()
    for entry in entries:
        for category, amount in entry.by_location_by_category.get(
            location, {}
        ).items():
            amounts[category] += amount
    kept = {c: a for c, a in amounts.items() if a > 0}
    total = sum(kept.values(), start=Decimal("0"))
    return LocationBreakdown(
        location=location,
        slices=[
            CategorySlice(
                category=category,
                amount=amount,
                share_percent=safe_percent(amount, total),
            )
            for category, amount in kept.items()
        ],
        total=total,
    )


def build_location_breakdowns(
    entries: Iterable[MonthlyLedgerEntry],
    period_filter: PeriodFilter,
) -> LocationBreakdowns:
    """Build palace and terrace category breakdowns for one period.

    Categories with no positive amount are left out. Location shares are
    zero when the period holds no revenue.
    """
    selected = filter_entries(entries, period_filter)
    palace = _location_breakdown(selected, Location.PALACE)
    terrace = _location_breakdown(selected, Location.TERRACE)
    grand_total = palace.total + terrace.total
    return LocationBreakdowns(
        period_filter=period_filter,
        palace=palace,
        terrace=terrace,
        grand_total=grand_total,
        palace_share_percent=safe_percent(palace.total, grand_total),
        terrace_share_percent=safe_percent(terrace.total, grand_total),
    )


__all__ = [
    "bucket_revenue",
    "build_category_composition",
    "build_location_breakdowns",
    "category_amounts",
    "default_period_filter",
    "filter_entries",
    "period_filter_options",
    "period_value",
]
