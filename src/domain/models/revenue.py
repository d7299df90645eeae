"""Domain models for the monthly revenue ledger."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, IntEnum
from types import MappingProxyType


class Month(IntEnum):
    """Calendar month."""

    JAN = 1
    FEB = 2
    MAR = 3
    APR = 4
    MAY = 5
    JUN = 6
    JUL = 7
    AUG = 8
    SEP = 9
    OCT = 10
    NOV = 11
    DEC = 12

    @property
    def abbreviation(self) -> str:
        return self.name.title()

    @property
    def quarter(self) -> int:
        return MONTH_TO_QUARTER[self]


MONTH_TO_QUARTER = {
    Month.JAN: 1,
    Month.FEB: 1,
    Month.MAR: 1,
    Month.APR: 2,
    Month.MAY: 2,
    Month.JUN: 2,
    Month.JUL: 3,
    Month.AUG: 3,
    Month.SEP: 3,
    Month.OCT: 4,
    Month.NOV: 4,
    Month.DEC: 4,
}


class Location(Enum):
    """Physical site revenue is attributed to."""

    PALACE = "palace"
    TERRACE = "terrace"

    @property
    def display_name(self) -> str:
        return f"Malaga {self.name.title()}"


class RevenueCategory(Enum):
    """Canonical revenue category."""

    PRIVATE_OFFICES = "privateOffices"
    COWORKING = "coworking"
    MEETING_ROOMS = "meetingRooms"
    CATERING = "catering"
    SERVICES = "services"
    OTHER = "other"
    TRAINING = "training"

    @property
    def display_name(self) -> str:
        return CATEGORY_DISPLAY_NAMES[self]


CATEGORY_DISPLAY_NAMES = {
    RevenueCategory.PRIVATE_OFFICES: "Private Offices",
    RevenueCategory.COWORKING: "Coworking",
    RevenueCategory.MEETING_ROOMS: "Meeting Rooms",
    RevenueCategory.CATERING: "Catering",
    RevenueCategory.SERVICES: "Services",
    RevenueCategory.OTHER: "Other",
    RevenueCategory.TRAINING: "Training",
}


class Granularity(Enum):
    """Bucket size for revenue series."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class LocationFilter(Enum):
    """Which location(s) a category series covers."""

    PALACE = "palace"
    TERRACE = "terrace"
    BOTH = "both"


class PeriodFilterKind(Enum):
    """Granularity of a single-period selection."""

    YEAR = "year"
    QUARTER = "quarter"
    MONTH = "month"


LocationAmounts = dict[Location, Decimal]
CategoryAmounts = dict[RevenueCategory, Decimal]
CategoryGrid = dict[Location, CategoryAmounts]


def zero_location_amounts() -> LocationAmounts:
    return {location: Decimal("0") for location in Location}


def zero_category_amounts() -> CategoryAmounts:
    return {category: Decimal("0") for category in RevenueCategory}


def zero_category_grid() -> CategoryGrid:
    return {location: zero_category_amounts() for location in Location}


LocationTotals = Mapping[Location, Decimal]
CategoryTotals = Mapping[Location, Mapping[RevenueCategory, Decimal]]


def _read_only_grid(grid: CategoryTotals) -> CategoryTotals:
    return MappingProxyType(
        {
            location: MappingProxyType(dict(amounts))
            for location, amounts in grid.items()
        }
    )


def _editable_grid(grid: CategoryTotals) -> CategoryGrid:
    return {location: dict(amounts) for location, amounts in grid.items()}


@dataclass(frozen=True)
class PeriodKey:
    """Identity of a revenue bucket.

    A monthly key carries year, quarter and month; a quarterly key drops the
    month; a yearly key keeps only the year.
    """

    year: int
    quarter: int | None = None
    month: Month | None = None

    @classmethod
    def for_month(cls, month: Month, year: int) -> "PeriodKey":
        return cls(year=year, quarter=month.quarter, month=month)

    @property
    def granularity(self) -> Granularity:
        if self.month is not None:
            return Granularity.MONTHLY
        if self.quarter is not None:
            return Granularity.QUARTERLY
        return Granularity.YEARLY

    @property
    def label(self) -> str:
        if self.month is not None:
            return f"{self.month.abbreviation} {self.year}"
        if self.quarter is not None:
            return f"Q{self.quarter} {self.year}"
        return str(self.year)

    def coarsen(self, granularity: Granularity) -> "PeriodKey":
        """Return the key of the enclosing bucket at ``granularity``.

        Raises:
            ValueError: If ``granularity`` is finer than this key.
        """
        if granularity is Granularity.YEARLY:
            return PeriodKey(year=self.year)
        if granularity is Granularity.QUARTERLY:
            if self.quarter is None:
                raise ValueError(
                    f"Cannot split yearly bucket {self.label} into quarters"
                )
            return PeriodKey(year=self.year, quarter=self.quarter)
        if self.month is None:
            raise ValueError(
                f"Cannot split bucket {self.label} into months"
            )
        return self


@dataclass(frozen=True)
class MonthlyLedgerEntry:
    """Revenue stated for one month block of the ledger.

    Attributes:
        month: Calendar month of the block.
        year: Year of the block.
        total: Grand total stated on the month header row.
        by_location: Subtotal stated on each location marker row.
        by_location_by_category: Category amounts summed per location.
    """

    month: Month
    year: int
    total: Decimal
    by_location: LocationTotals = field(default_factory=zero_location_amounts)
    by_location_by_category: CategoryTotals = field(
        default_factory=zero_category_grid
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "by_location", MappingProxyType(dict(self.by_location))
        )
        object.__setattr__(
            self,
            "by_location_by_category",
            _read_only_grid(self.by_location_by_category),
        )

    def __reduce__(self):
        return (
            type(self),
            (
                self.month,
                self.year,
                self.total,
                dict(self.by_location),
                _editable_grid(self.by_location_by_category),
            ),
        )

    @property
    def period(self) -> PeriodKey:
        return PeriodKey.for_month(self.month, self.year)

    @property
    def label(self) -> str:
        return self.period.label


@dataclass(frozen=True)
class RevenueBucket:
    """Revenue summed over one month, quarter or year."""

    period: PeriodKey
    total: Decimal
    by_location: LocationTotals
    by_location_by_category: CategoryTotals

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "by_location", MappingProxyType(dict(self.by_location))
        )
        object.__setattr__(
            self,
            "by_location_by_category",
            _read_only_grid(self.by_location_by_category),
        )

    def __reduce__(self):
        return (
            type(self),
            (
                self.period,
                self.total,
                dict(self.by_location),
                _editable_grid(self.by_location_by_category),
            ),
        )

    @classmethod
    def from_entry(cls, entry: MonthlyLedgerEntry) -> "RevenueBucket":
        return cls(
            period=entry.period,
            total=entry.total,
            by_location=entry.by_location,
            by_location_by_category=entry.by_location_by_category,
        )

    @property
    def label(self) -> str:
        return self.period.label

    @property
    def palace(self) -> Decimal:
        return self.by_location.get(Location.PALACE, Decimal("0"))

    @property
    def terrace(self) -> Decimal:
        return self.by_location.get(Location.TERRACE, Decimal("0"))


@dataclass(frozen=True)
class CategoryCompositionPoint:
    """Category amounts for one bucket under a location filter."""

    label: str
    amounts: CategoryAmounts

    @property
    def total(self) -> Decimal:
        return sum(self.amounts.values(), start=Decimal("0"))


@dataclass(frozen=True)
class PeriodFilter:
    """Single period selection, e.g. year ``2025`` or quarter ``Q1 2025``."""

    kind: PeriodFilterKind
    value: str


@dataclass(frozen=True)
class CategorySlice:
    """One category's share of a location's revenue."""

    category: RevenueCategory
    amount: Decimal
    share_percent: Decimal


@dataclass(frozen=True)
class LocationBreakdown:
    """Category slices of one location for the selected period."""

    location: Location
    slices: list[CategorySlice]
    total: Decimal


@dataclass(frozen=True)
class LocationBreakdowns:
    """Palace and terrace breakdowns with their shares of the grand total."""

    period_filter: PeriodFilter
    palace: LocationBreakdown
    terrace: LocationBreakdown
    grand_total: Decimal
    palace_share_percent: Decimal
    terrace_share_percent: Decimal


__all__ = [
    "CATEGORY_DISPLAY_NAMES",
    "CategoryAmounts",
    "CategoryCompositionPoint",
    "CategoryGrid",
    "CategoryTotals",
    "CategorySlice",
    "Granularity",
    "Location",
    "LocationAmounts",
    "LocationBreakdown",
    "LocationBreakdowns",
    "LocationFilter",
    "LocationTotals",
    "MONTH_TO_QUARTER",
    "Month",
    "MonthlyLedgerEntry",
    "PeriodFilter",
    "PeriodFilterKind",
    "PeriodKey",
    "RevenueBucket",
    "RevenueCategory",
    "zero_category_amounts",
    "zero_category_grid",
    "zero_location_amounts",
]
