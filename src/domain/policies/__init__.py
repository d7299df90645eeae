"""Domain policies package."""

from .label_tables import build_label_table, fold_label, lookup_label

__all__ = ["build_label_table", "fold_label", "lookup_label"]
