from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from .assets import SiloAsset
from .crates import DepositCrate


def make_plant_crate(asset: SiloAsset, earned_amount: Decimal, current_epoch: int) -> DepositCrate:
    """Crate that planting earned beans would create this epoch; earned beans carry 1 bdv each."""
    return DepositCrate(
        epoch=current_epoch,
        amount=earned_amount,
        bdv=earned_amount,
        seeds=asset.seeds_from_bdv(earned_amount),
    ).ensure_positive()


def with_plant_crate(crates: Iterable[DepositCrate], plant: DepositCrate | None) -> list[DepositCrate]:
    # Appended last without re-sorting, so earned beans are consumed after existing deposits.
    result = list(crates)
    if plant is not None:
        result.append(plant)
    return result


__all__ = ["make_plant_crate", "with_plant_crate"]
