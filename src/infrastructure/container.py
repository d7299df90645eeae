"""Composition root for wiring infrastructure adapters."""

from src.application.ports.workbook_reader import WorkbookReaderPort
from src.application.use_cases.get_debt_dashboard import (
    GetDebtDashboardUseCase,
)
from src.application.use_cases.get_revenue_dashboard import (
    GetRevenueDashboardUseCase,
)
from src.application.use_cases.load_debt_workbook import (
    LoadDebtWorkbookUseCase,
)
from src.application.use_cases.load_revenue_workbook import (
    LoadRevenueWorkbookUseCase,
)
from src.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from src.infrastructure.pandas_workbook_reader import PandasWorkbookReader
from src.infrastructure.settings import DashboardSettings


def build_settings() -> DashboardSettings:
    """Return settings sourced from the environment."""
    return DashboardSettings.from_env()


def build_workbook_reader() -> WorkbookReaderPort:
    """Return the workbook reader adapter."""
    return PandasWorkbookReader(logger=get_app_logger())


def build_load_debt_use_case(
    reader: WorkbookReaderPort | None = None,
    settings: DashboardSettings | None = None,
) -> LoadDebtWorkbookUseCase:
    """Return the loan workbook loader for the configured cutoff."""
    resolved_settings = settings or build_settings()
    return LoadDebtWorkbookUseCase(
        reader or build_workbook_reader(),
        logger=get_app_logger(),
        usage_logger=get_usage_logger(),
        cutoff=resolved_settings.cutoff_date,
    )


def build_load_revenue_use_case(
    reader: WorkbookReaderPort | None = None,
) -> LoadRevenueWorkbookUseCase:
    """Return the revenue ledger loader."""
    return LoadRevenueWorkbookUseCase(
        reader or build_workbook_reader(),
        logger=get_app_logger(),
        usage_logger=get_usage_logger(),
    )


def build_debt_dashboard_use_case(
    settings: DashboardSettings | None = None,
) -> GetDebtDashboardUseCase:
    """Return the debt dashboard use case for the configured cutoff."""
    resolved_settings = settings or build_settings()
    return GetDebtDashboardUseCase(
        logger=get_app_logger(),
        cutoff=resolved_settings.cutoff_date,
    )


def build_revenue_dashboard_use_case() -> GetRevenueDashboardUseCase:
    """Return the revenue dashboard use case."""
    return GetRevenueDashboardUseCase(logger=get_app_logger())


__all__ = [
    "build_settings",
    "build_workbook_reader",
    "build_load_debt_use_case",
    "build_load_revenue_use_case",
    "build_debt_dashboard_use_case",
    "build_revenue_dashboard_use_case",
]
