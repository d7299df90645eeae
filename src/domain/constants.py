"""Domain constants for workbook parsing and aggregation."""

from datetime import date
from decimal import Decimal

from src.domain.models.revenue import Location, Month, RevenueCategory
from src.domain.policies.label_tables import build_label_table

ACCEPTED_EXTENSIONS = (".xlsx", ".xls")

DEFAULT_CUTOFF_DATE = date(2026, 2, 1)

# Loan sheets: fixed-position metadata in column 1, payments from row 6.
LOAN_NAME_ROW = 0
LOAN_AMOUNT_ROW = 1
LOAN_FREQUENCY_ROW = 3
LOAN_METADATA_COLUMN = 1
LOAN_FIRST_PAYMENT_ROW = 6
LOAN_PAYMENT_COLUMNS = 6

# Average number of weeks in a month.
WEEKS_PER_MONTH = Decimal("4.33")

DEFAULT_LOAN_COLOR = "#64748b"

LOAN_COLORS = {
    "Leasing Sabadell": "#6366f1",
    "Acquisgran 50000": "#22c55e",
    "Caixa Prestamo 30000": "#f59e0b",
    "Caixa Prestamo 50000": "#ef4444",
    "Caixa Prestamo 65000": "#8b5cf6",
    "Sabadell Prestamo 15000": "#06b6d4",
    "Outfund 50000": "#ec4899",
    "Outfund 40000": "#ec4899",
    "BBVA Click and Play 17000": "#14b8a6",
}

# Revenue ledger: label in column 0, year in column 1, amount in column 2.
REVENUE_LABEL_COLUMN = 0
REVENUE_YEAR_COLUMN = 1
REVENUE_AMOUNT_COLUMN = 2
REVENUE_YEAR_MIN = 2020
REVENUE_YEAR_MAX = 2030
DIAGNOSTIC_ROW_COUNT = 10

MONTH_LABELS = build_label_table(
    [
        ("Enero", Month.JAN),
        ("Febrero", Month.FEB),
        ("Marzo", Month.MAR),
        ("Abril", Month.APR),
        ("Mayo", Month.MAY),
        ("Junio", Month.JUN),
        ("Julio", Month.JUL),
        ("Agosto", Month.AUG),
        ("Septiembre", Month.SEP),
        ("Setiembre", Month.SEP),
        ("Octubre", Month.OCT),
        ("Noviembre", Month.NOV),
        ("Diciembre", Month.DEC),
        ("January", Month.JAN),
        ("February", Month.FEB),
        ("March", Month.MAR),
        ("April", Month.APR),
        ("May", Month.MAY),
        ("June", Month.JUN),
        ("July", Month.JUL),
        ("August", Month.AUG),
        ("September", Month.SEP),
        ("October", Month.OCT),
        ("November", Month.NOV),
        ("December", Month.DEC),
    ]
)

LOCATION_LABELS = build_label_table(
    [
        ("Malaga Palace", Location.PALACE),
        ("Malaga Terrace", Location.TERRACE),
    ],
    case_sensitive=True,
)

CATEGORY_LABELS = build_label_table(
    [
        ("Private Offices", RevenueCategory.PRIVATE_OFFICES),
        ("Coworking", RevenueCategory.COWORKING),
        ("Meeting Rooms", RevenueCategory.MEETING_ROOMS),
        ("Catering", RevenueCategory.CATERING),
        ("Services", RevenueCategory.SERVICES),
        ("Commision due", RevenueCategory.OTHER),
        ("One-off Fees", RevenueCategory.OTHER),
        ("Formacion", RevenueCategory.TRAINING),
        ("Formación", RevenueCategory.TRAINING),
        # Mis-encoded UTF-8 as found in exported ledgers.
        ("FormaciÃ³n", RevenueCategory.TRAINING),
    ]
)

CATEGORY_COLORS = {
    RevenueCategory.PRIVATE_OFFICES: "#6366f1",
    RevenueCategory.COWORKING: "#22c55e",
    RevenueCategory.MEETING_ROOMS: "#f59e0b",
    RevenueCategory.CATERING: "#ef4444",
    RevenueCategory.SERVICES: "#8b5cf6",
    RevenueCategory.OTHER: "#64748b",
    RevenueCategory.TRAINING: "#06b6d4",
}

LOCATION_COLORS = {
    Location.PALACE: "#8b5cf6",
    Location.TERRACE: "#10b981",
}


__all__ = [
    "ACCEPTED_EXTENSIONS",
    "CATEGORY_COLORS",
    "CATEGORY_LABELS",
    "DEFAULT_CUTOFF_DATE",
    "DEFAULT_LOAN_COLOR",
    "DIAGNOSTIC_ROW_COUNT",
    "LOAN_AMOUNT_ROW",
    "LOAN_COLORS",
    "LOAN_FIRST_PAYMENT_ROW",
    "LOAN_FREQUENCY_ROW",
    "LOAN_METADATA_COLUMN",
    "LOAN_NAME_ROW",
    "LOAN_PAYMENT_COLUMNS",
    "LOCATION_COLORS",
    "LOCATION_LABELS",
    "MONTH_LABELS",
    "REVENUE_AMOUNT_COLUMN",
    "REVENUE_LABEL_COLUMN",
    "REVENUE_YEAR_COLUMN",
    "REVENUE_YEAR_MAX",
    "REVENUE_YEAR_MIN",
    "WEEKS_PER_MONTH",
]
