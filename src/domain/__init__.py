"""Domain package for workbook parsing rules and core models."""

from .constants import ACCEPTED_EXTENSIONS, DEFAULT_CUTOFF_DATE
from .errors import (
    EmptyResult,
    MalformedInput,
    UnrecognizedFileType,
    WorkbookError,
)
from .models import (
    LoanPosition,
    LoanSchedule,
    MonthlyLedgerEntry,
    ParseOutcome,
    ParseStatus,
    PaymentRow,
    Sheet,
)
from .policies import build_label_table

__all__ = [
    "ACCEPTED_EXTENSIONS",
    "DEFAULT_CUTOFF_DATE",
    "EmptyResult",
    "LoanPosition",
    "LoanSchedule",
    "MalformedInput",
    "MonthlyLedgerEntry",
    "ParseOutcome",
    "ParseStatus",
    "PaymentRow",
    "Sheet",
    "UnrecognizedFileType",
    "WorkbookError",
    "build_label_table",
]
