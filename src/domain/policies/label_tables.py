"""Lookup tables mapping raw sheet labels onto canonical tags."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TypeVar

T = TypeVar("T")


def fold_label(label: str) -> str:
    """Return the lookup key for a label: trimmed and case-folded."""
    return label.strip().casefold()


def build_label_table(
    pairs: Iterable[tuple[str, T]],
    *,
    case_sensitive: bool = False,
) -> Mapping[str, T]:
    """Build a read-only label table, rejecting conflicting entries.

    Several raw labels may map onto the same tag, but a raw label (after
    normalization) may only ever map onto one tag.

    Args:
        pairs: ``(raw_label, tag)`` pairs.
        case_sensitive: Keep labels as-is instead of folding them.

    Returns:
        Mapping[str, T]: Normalized label to tag.

    Raises:
        ValueError: If a label is empty or maps onto two different tags.
    """
    table: dict[str, T] = {}
    for raw_label, tag in pairs:
        key = raw_label.strip() if case_sensitive else fold_label(raw_label)
        if not key:
            raise ValueError("Label tables cannot contain empty labels")
        existing = table.get(key)
        if existing is not None and existing != tag:
            raise ValueError(
                f"Label '{raw_label}' maps to both {existing} and {tag}"
            )
        table[key] = tag
    return MappingProxyType(table)


def lookup_label(
    table: Mapping[str, T],
    label: str,
    *,
    case_sensitive: bool = False,
) -> T | None:
    """Return the tag for ``label`` or None when it is not in the table."""
    key = label.strip() if case_sensitive else fold_label(label)
    return table.get(key)


__all__ = ["build_label_table", "fold_label", "lookup_label"]
