"""Percentage helpers shared by the dashboard views."""

from decimal import Decimal


def safe_percent(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Return ``numerator / denominator`` as a percentage, 0 when undefined."""
    if not denominator:
        return Decimal("0")
    return numerator / denominator * Decimal("100")


def paid_off_percent(original: Decimal, balance: Decimal) -> Decimal:
    """Share of the original amount already repaid, 0 for a zero original."""
    return safe_percent(original - balance, original)


__all__ = ["paid_off_percent", "safe_percent"]
