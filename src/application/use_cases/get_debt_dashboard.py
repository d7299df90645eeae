"""Use case to assemble the debt dashboard from reconstructed loans."""

from collections.abc import Iterable
from datetime import date

from src.domain.constants import DEFAULT_CUTOFF_DATE
from src.domain.models.dashboard import DebtDashboardView
from src.domain.models.debt import LoanPosition
from src.domain.services.debt_aggregation import (
    build_debt_timeline,
    build_payment_schedule,
    compute_debt_metrics,
    latest_due_date,
    sort_by_balance,
)
from src.infrastructure.logging.logger import get_app_logger


class GetDebtDashboardUseCase:
    """Compute metrics, timeline and payment schedule for loaded loans."""

    def __init__(
        self,
        logger=None,
        cutoff: date = DEFAULT_CUTOFF_DATE,
    ) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
            cutoff: Snapshot date; the default timeline starts in its month
                and the payment schedule keeps installments due from it.
        """
        self._logger = logger or get_app_logger()
        self._cutoff = cutoff

    def execute(
        self,
        positions: Iterable[LoanPosition],
        timeline_start: date | None = None,
        timeline_end: date | None = None,
    ) -> DebtDashboardView:
        """Return the debt dashboard view.

        Args:
            positions: Loans reconstructed at the cutoff.
            timeline_start: Optional first timeline month; defaults to the
                cutoff month. Earlier months give a historical trend.
            timeline_end: Optional last timeline month; defaults to the
                latest due date across loans.

        Returns:
            DebtDashboardView: Sorted loans, metrics and chart series.
        """
        ordered = sort_by_balance(positions)
        metrics = compute_debt_metrics(ordered)

        start = timeline_start or self._cutoff
        end = timeline_end or latest_due_date(ordered)
        timeline = []
        if end is not None:
            timeline = build_debt_timeline(ordered, start, end)
        schedule = build_payment_schedule(ordered, self._cutoff)

        self._logger.info(
            f"Debt dashboard computed: loans={len(ordered)}, "
            f"total_debt={metrics.total_debt}, "
            f"timeline_points={len(timeline)}, "
            f"schedule_months={len(schedule)}"
        )
        return DebtDashboardView(
            cutoff=self._cutoff,
            positions=ordered,
            metrics=metrics,
            timeline=timeline,
            payment_schedule=schedule,
        )


__all__ = ["GetDebtDashboardUseCase", "DebtDashboardView"]
