from __future__ import annotations

from decimal import Decimal
from typing import NamedTuple

from config import config

from .assets import SiloAsset
from .errors import InvalidEpoch
from .fixed_point import truncate


class StalkBreakdown(NamedTuple):
    base: Decimal
    grown: Decimal

    @property
    def total(self) -> Decimal:
        return self.base + self.grown


def grown_stalk(
    seeds: Decimal,
    deposit_epoch: int,
    current_epoch: int,
    *,
    rate: Decimal | None = None,
) -> Decimal:
    """Stalk accrued by ``seeds`` between ``deposit_epoch`` and ``current_epoch``.

    Recomputed on every call; crates never carry an accrued value.
    """
    if current_epoch < deposit_epoch:
        raise InvalidEpoch(deposit_epoch=deposit_epoch, current_epoch=current_epoch)
    settings = config()
    rate = settings.stalk_per_seed_per_epoch if rate is None else rate
    elapsed = current_epoch - deposit_epoch
    return truncate(seeds * elapsed * rate, settings.stalk_decimals)


def crate_stalk(
    asset: SiloAsset,
    *,
    bdv: Decimal,
    seeds: Decimal,
    deposit_epoch: int,
    current_epoch: int,
    rate: Decimal | None = None,
) -> StalkBreakdown:
    return StalkBreakdown(
        base=asset.stalk_from_bdv(bdv),
        grown=grown_stalk(seeds, deposit_epoch, current_epoch, rate=rate),
    )


__all__ = ["StalkBreakdown", "crate_stalk", "grown_stalk"]
