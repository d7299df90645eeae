"""CLI adapter printing a summary of the configured workbooks.

The loan workbook is read from ``DEBT_WORKBOOK`` and the revenue ledger from
``REVENUE_WORKBOOK``; ``DASHBOARD_CUTOFF_DATE`` moves the snapshot date.
"""

from pathlib import Path

from src.application.ports.workbook_reader import WorkbookReaderPort
from src.domain.models.outcome import ParseOutcome
from src.domain.models.revenue import Granularity
from src.infrastructure.container import (
    build_debt_dashboard_use_case,
    build_load_debt_use_case,
    build_load_revenue_use_case,
    build_revenue_dashboard_use_case,
    build_settings,
    build_workbook_reader,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import DashboardSettings


def _print_failure(outcome: ParseOutcome) -> None:
    print(f"{outcome.file_name}: {outcome.message}")
    for line in outcome.diagnostics:
        print(f"  {line}")


def _summarize_debt(
    path: Path,
    reader: WorkbookReaderPort,
    settings: DashboardSettings,
) -> None:
    """Print cutoff metrics and per-loan balances."""
    outcome = build_load_debt_use_case(reader, settings).execute(
        str(path),
        path.name,
    )
    if not outcome.ok:
        _print_failure(outcome)
        return
    view = build_debt_dashboard_use_case(settings).execute(
        outcome.records,
        timeline_end=settings.timeline_end,
    )
    metrics = view.metrics
    payoff = metrics.final_payoff.isoformat() if metrics.final_payoff else "-"
    print(f"Debt at {view.cutoff.isoformat()} ({path.name})")
    print(
        f"  Total debt: {metrics.total_debt:,.2f} of "
        f"{metrics.total_original:,.2f} "
        f"({metrics.paid_off_percent:.1f}% paid off)"
    )
    print(f"  Monthly payment: {metrics.monthly_payment:,.2f}")
    print(f"  Remaining interest: {metrics.remaining_interest:,.2f}")
    print(f"  Active loans: {metrics.active_loans}, final payoff: {payoff}")
    for position in view.positions:
        print(
            f"  - {position.name}: {position.current_balance:,.2f} "
            f"until {position.end_date.isoformat()}"
        )


def _summarize_revenue(path: Path, reader: WorkbookReaderPort) -> None:
    """Print yearly revenue totals with the location split."""
    outcome = build_load_revenue_use_case(reader).execute(
        str(path),
        path.name,
    )
    if not outcome.ok:
        _print_failure(outcome)
        return
    view = build_revenue_dashboard_use_case().execute(
        outcome.records,
        granularity=Granularity.YEARLY,
    )
    print(f"Revenue by year ({path.name}, {len(view.entries)} months)")
    for bucket in view.display_series:
        print(
            f"  {bucket.label}: {bucket.total:,.2f} "
            f"(Palace {bucket.palace:,.2f}, Terrace {bucket.terrace:,.2f})"
        )


def main() -> None:
    """Summarize the workbooks configured in the environment."""
    logger = get_app_logger()
    settings = build_settings()
    if settings.debt_workbook is None and settings.revenue_workbook is None:
        logger.warning("No workbook configured for the summary")
        print("Set DEBT_WORKBOOK and/or REVENUE_WORKBOOK to a workbook path.")
        return

    reader = build_workbook_reader()
    if settings.debt_workbook is not None:
        _summarize_debt(settings.debt_workbook, reader, settings)
    if settings.revenue_workbook is not None:
        _summarize_revenue(settings.revenue_workbook, reader)


if __name__ == "__main__":  # pragma: no cover
    main()
