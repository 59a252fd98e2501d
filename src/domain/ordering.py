from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import Iterable

from .crates import DepositCrate
from .fixed_point import safe_div

# Precision used when comparing bdv/amount ratios.
RATIO_DECIMALS = 18


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


def sort_crates_by_epoch(
    crates: Iterable[DepositCrate],
    direction: SortDirection = SortDirection.DESC,
) -> list[DepositCrate]:
    """Order crates by epoch; newest first unless ``direction`` is ASC."""
    return sorted(crates, key=lambda crate: crate.epoch, reverse=direction == SortDirection.DESC)


def bdv_ratio(crate: DepositCrate) -> Decimal:
    crate.ensure_positive()
    return safe_div(crate.bdv, crate.amount, RATIO_DECIMALS)


def sort_crates_by_bdv_ratio(
    crates: Iterable[DepositCrate],
    direction: SortDirection = SortDirection.ASC,
) -> list[DepositCrate]:
    """Order crates by bdv per unit deposited; lowest ratio first unless ``direction`` is DESC."""
    return sorted(crates, key=bdv_ratio, reverse=direction == SortDirection.DESC)


__all__ = ["SortDirection", "bdv_ratio", "sort_crates_by_bdv_ratio", "sort_crates_by_epoch"]
