"""Application use cases package."""

from .get_debt_dashboard import DebtDashboardView, GetDebtDashboardUseCase
from .get_revenue_dashboard import (
    GetRevenueDashboardUseCase,
    RevenueDashboardView,
)
from .load_debt_workbook import LoadDebtWorkbookUseCase
from .load_revenue_workbook import LoadRevenueWorkbookUseCase
from .workbook_upload import WorkbookUploadUseCase, has_accepted_extension

__all__ = [
    "LoadDebtWorkbookUseCase",
    "LoadRevenueWorkbookUseCase",
    "GetDebtDashboardUseCase",
    "DebtDashboardView",
    "GetRevenueDashboardUseCase",
    "RevenueDashboardView",
    "WorkbookUploadUseCase",
    "has_accepted_extension",
]
