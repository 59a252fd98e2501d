from __future__ import annotations

from decimal import ROUND_DOWN, Decimal


def truncate(value: Decimal, decimals: int) -> Decimal:
    """Quantize ``value`` to ``decimals`` places, rounding toward zero."""
    return value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_DOWN)


def from_base_units(raw: int, decimals: int) -> Decimal:
    return truncate(Decimal(raw).scaleb(-decimals), decimals)


def safe_div(numerator: Decimal, denominator: Decimal, decimals: int) -> Decimal:
    # Callers guarantee a positive denominator.
    return truncate(numerator / denominator, decimals)
