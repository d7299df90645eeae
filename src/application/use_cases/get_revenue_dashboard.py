"""Use case to assemble the revenue dashboard from ledger entries."""

from collections.abc import Iterable

from src.domain.models.dashboard import RevenueDashboardView
from src.domain.models.revenue import (
    Granularity,
    LocationFilter,
    MonthlyLedgerEntry,
    PeriodFilter,
)
from src.domain.services.revenue_aggregation import (
    bucket_revenue,
    build_category_composition,
    build_location_breakdowns,
    default_period_filter,
    period_filter_options,
)
from src.infrastructure.logging.logger import get_app_logger


class GetRevenueDashboardUseCase:
    """Bucket ledger entries for the revenue charts and breakdowns."""

    def __init__(self, logger=None) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger or get_app_logger()

    def execute(
        self,
        entries: Iterable[MonthlyLedgerEntry],
        granularity: Granularity = Granularity.MONTHLY,
        category_granularity: Granularity = Granularity.MONTHLY,
        location_filter: LocationFilter = LocationFilter.BOTH,
        period_filter: PeriodFilter | None = None,
    ) -> RevenueDashboardView:
        """Return the revenue dashboard view.

        Args:
            entries: Monthly ledger entries in ledger order.
            granularity: Bucket size of the revenue evolution chart.
            category_granularity: Bucket size of the category chart.
            location_filter: Locations included in the category chart.
            period_filter: Period of the location breakdowns; defaults to
                the latest year in the ledger.

        Returns:
            RevenueDashboardView: Series, breakdowns and filter options.
        """
        entries = list(entries)
        display_series = bucket_revenue(entries, granularity)
        category_series = build_category_composition(
            entries,
            category_granularity,
            location_filter,
        )

        active_filter = period_filter or default_period_filter(entries)
        breakdowns = None
        options: list[str] = []
        if active_filter is not None:
            options = period_filter_options(entries, active_filter.kind)
            breakdowns = build_location_breakdowns(entries, active_filter)

        self._logger.info(
            f"Revenue dashboard computed: entries={len(entries)}, "
            f"buckets={len(display_series)} ({granularity.value}), "
            f"location={location_filter.value}"
        )
        return RevenueDashboardView(
            entries=entries,
            granularity=granularity,
            display_series=display_series,
            category_granularity=category_granularity,
            location_filter=location_filter,
            category_series=category_series,
            period_filter=active_filter,
            period_options=options,
            breakdowns=breakdowns,
        )


__all__ = ["GetRevenueDashboardUseCase", "RevenueDashboardView"]
