"""Tests for label lookup tables."""

import pytest

from src.domain.constants import CATEGORY_LABELS, LOCATION_LABELS, MONTH_LABELS
from src.domain.models.revenue import Location, Month, RevenueCategory
from src.domain.policies import build_label_table, lookup_label


def test_build_label_table_rejects_conflicting_labels() -> None:
    """A label mapping onto two tags should fail at construction."""
    with pytest.raises(ValueError):
        build_label_table(
            [
                ("Formacion", RevenueCategory.TRAINING),
                ("formacion ", RevenueCategory.OTHER),
            ]
        )


def test_build_label_table_rejects_empty_labels() -> None:
    with pytest.raises(ValueError):
        build_label_table([("  ", Month.JAN)])


def test_build_label_table_allows_aliases() -> None:
    """Several labels may share one tag."""
    table = build_label_table(
        [("Commision due", "other"), ("One-off Fees", "other")]
    )
    assert lookup_label(table, "one-off fees") == "other"
    assert lookup_label(table, "Commision due ") == "other"


def test_month_table_covers_spanish_english_and_variants() -> None:
    assert lookup_label(MONTH_LABELS, "Marzo") is Month.MAR
    assert lookup_label(MONTH_LABELS, "MARZO ") is Month.MAR
    assert lookup_label(MONTH_LABELS, "Setiembre") is Month.SEP
    assert lookup_label(MONTH_LABELS, "December") is Month.DEC
    assert lookup_label(MONTH_LABELS, "Total") is None


def test_category_table_maps_aliases_onto_canonical_categories() -> None:
    assert lookup_label(CATEGORY_LABELS, "One-off Fees") is RevenueCategory.OTHER
    assert lookup_label(CATEGORY_LABELS, "Commision due") is RevenueCategory.OTHER
    for label in ("Formacion", "Formación", "FormaciÃ³n"):
        assert lookup_label(CATEGORY_LABELS, label) is RevenueCategory.TRAINING


def test_location_table_is_case_sensitive() -> None:
    assert (
        lookup_label(LOCATION_LABELS, " Malaga Palace ", case_sensitive=True)
        is Location.PALACE
    )
    assert (
        lookup_label(LOCATION_LABELS, "malaga palace", case_sensitive=True)
        is None
    )
