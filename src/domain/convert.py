from __future__ import annotations

import logging
from decimal import Decimal
from enum import StrEnum
from typing import Iterable

from .assets import AssetRegistry, SiloAsset, default_registry
from .crate_selector import pick_crates
from .crates import ConversionResult, DepositCrate, SelectedCrate
from .growth import crate_stalk
from .ordering import SortDirection, sort_crates_by_bdv_ratio, sort_crates_by_epoch
from .pricing import ConversionQuoter

logger = logging.getLogger(__name__)


class OrderingPolicy(StrEnum):
    # Oldest crates first when converting into LP, lowest bdv ratio first otherwise.
    AUTO = "auto"
    EPOCH = "epoch"
    BDV_RATIO = "bdv_ratio"
    CALLER = "caller"


class ConversionEngine:
    """Compute the effect of converting deposited value from one asset into another.

    The engine only does the arithmetic. Whether a convert is currently allowed
    (price deviation and the like) must be checked by the caller beforehand.
    """

    def __init__(
        self,
        *,
        quoter: ConversionQuoter,
        registry: AssetRegistry | None = None,
        rate: Decimal | None = None,
    ) -> None:
        self._quoter = quoter
        self._registry = registry or default_registry()
        self._rate = rate

    def convert(
        self,
        from_asset: SiloAsset | str,
        to_asset: SiloAsset | str,
        amount: Decimal,
        crates: Iterable[DepositCrate],
        current_epoch: int,
        *,
        policy: OrderingPolicy = OrderingPolicy.AUTO,
    ) -> ConversionResult:
        source = self._registry.resolve(from_asset)
        destination = self._registry.resolve(to_asset)

        ordered = self.order_crates(crates, destination, policy)
        consumed = pick_crates(ordered, amount, source, current_epoch, rate=self._rate)

        quote = self._quoter.quote(source, destination, amount)
        minted = self._mint_crate(destination, quote.amount_out, quote.bdv_out, current_epoch)

        result = ConversionResult(
            from_asset=source.symbol,
            to_asset=destination.symbol,
            amount=consumed.total_amount,
            amount_out=quote.amount_out,
            bdv_out=quote.bdv_out,
            delta_bdv=minted.bdv - consumed.total_bdv,
            delta_stalk=minted.stalk - consumed.total_stalk,
            delta_seeds=minted.seeds - consumed.total_seeds,
            seeds_per_bdv_delta=destination.seeds_from_bdv(Decimal(1)) - source.seeds_from_bdv(Decimal(1)),
            consumed=consumed,
            minted_crate=minted,
        )
        logger.info(
            "Convert %s %s -> %s %s: delta_bdv=%s delta_stalk=%s delta_seeds=%s",
            result.amount,
            source.symbol,
            result.amount_out,
            destination.symbol,
            result.delta_bdv,
            result.delta_stalk,
            result.delta_seeds,
        )
        return result

    @staticmethod
    def order_crates(
        crates: Iterable[DepositCrate],
        destination: SiloAsset,
        policy: OrderingPolicy,
    ) -> list[DepositCrate]:
        if policy == OrderingPolicy.AUTO:
            policy = OrderingPolicy.EPOCH if destination.is_lp else OrderingPolicy.BDV_RATIO

        if policy == OrderingPolicy.EPOCH:
            return sort_crates_by_epoch(crates, SortDirection.ASC)
        if policy == OrderingPolicy.BDV_RATIO:
            return sort_crates_by_bdv_ratio(crates, SortDirection.ASC)
        return list(crates)

    def _mint_crate(
        self,
        asset: SiloAsset,
        amount: Decimal,
        bdv: Decimal,
        current_epoch: int,
    ) -> SelectedCrate:
        seeds = asset.seeds_from_bdv(bdv)
        stalk = crate_stalk(
            asset,
            bdv=bdv,
            seeds=seeds,
            deposit_epoch=current_epoch,
            current_epoch=current_epoch,
            rate=self._rate,
        )
        return SelectedCrate(
            epoch=current_epoch,
            amount=amount,
            bdv=bdv,
            seeds=seeds,
            base_stalk=stalk.base,
            grown_stalk=stalk.grown,
        )


__all__ = ["ConversionEngine", "OrderingPolicy"]
