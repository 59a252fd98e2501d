from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Iterator

from config import config

from .assets import SiloAsset
from .crates import ZERO, DepositCrate, SelectedCrate, SelectionResult
from .errors import InsufficientBalance
from .fixed_point import safe_div
from .growth import crate_stalk

logger = logging.getLogger(__name__)


def pick_crates(
    crates: Iterable[DepositCrate],
    amount: Decimal,
    asset: SiloAsset,
    current_epoch: int,
    *,
    rate: Decimal | None = None,
) -> SelectionResult:
    """Consume ``crates`` in the order given until exactly ``amount`` is selected.

    The last crate touched may be split; its slice keeps the parent's bdv and
    seeds per unit. Raises ``InsufficientBalance`` if the crates run out first.
    """
    if amount <= 0:
        raise ValueError(f"amount must be positive, got {amount}")

    crates = list(crates)
    selected: list[SelectedCrate] = []
    total_amount = ZERO
    total_bdv = ZERO
    total_stalk = ZERO
    total_seeds = ZERO

    for crate, take_amount in _match_crates(crates, amount):
        slice_ = _slice_crate(crate, take_amount, asset, current_epoch, rate=rate)
        logger.debug(
            "Selected %s %s from crate epoch=%d (crate amount=%s)",
            take_amount,
            asset.symbol,
            crate.epoch,
            crate.amount,
        )
        selected.append(slice_)
        total_amount += slice_.amount
        total_bdv += slice_.bdv
        total_stalk += slice_.stalk
        total_seeds += slice_.seeds
        if total_amount == amount:
            break

    if total_amount < amount:
        raise InsufficientBalance(asset_id=asset.symbol, requested=amount, available=total_amount)

    logger.info(
        "Picked %d crate(s) for %s %s: bdv=%s stalk=%s",
        len(selected),
        amount,
        asset.symbol,
        total_bdv,
        total_stalk,
    )
    return SelectionResult(
        total_amount=total_amount,
        total_bdv=total_bdv,
        total_stalk=total_stalk,
        total_seeds=total_seeds,
        crates=selected,
    )


def _match_crates(crates: list[DepositCrate], amount_needed: Decimal) -> Iterator[tuple[DepositCrate, Decimal]]:
    remaining = amount_needed
    for crate in crates:
        if remaining <= 0:
            return
        crate.ensure_positive()
        take_amount = min(remaining, crate.amount)
        remaining -= take_amount
        yield crate, take_amount


def _slice_crate(
    crate: DepositCrate,
    take_amount: Decimal,
    asset: SiloAsset,
    current_epoch: int,
    *,
    rate: Decimal | None,
) -> SelectedCrate:
    if take_amount == crate.amount:
        bdv = crate.bdv
        seeds = crate.seeds
    else:
        settings = config()
        # Multiply before dividing so the only rounding is the final truncation.
        bdv = safe_div(take_amount * crate.bdv, crate.amount, settings.bdv_decimals)
        seeds = safe_div(take_amount * crate.seeds, crate.amount, settings.seeds_decimals)

    stalk = crate_stalk(
        asset,
        bdv=bdv,
        seeds=seeds,
        deposit_epoch=crate.epoch,
        current_epoch=current_epoch,
        rate=rate,
    )
    return SelectedCrate(
        epoch=crate.epoch,
        amount=take_amount,
        bdv=bdv,
        seeds=seeds,
        base_stalk=stalk.base,
        grown_stalk=stalk.grown,
    )


__all__ = ["pick_crates"]
