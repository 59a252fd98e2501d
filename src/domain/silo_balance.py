from __future__ import annotations

from typing import Iterable, Mapping

from .assets import SiloAsset
from .crates import ZERO, DepositCrate, DepositedBalance, PendingWithdrawal, SiloBalance
from .withdrawals import classify_withdrawals


def build_silo_balance(
    asset: SiloAsset,
    *,
    deposits: Iterable[DepositCrate],
    withdrawals: Mapping[int | str, PendingWithdrawal],
    current_epoch: int,
) -> SiloBalance:
    crates = [crate.ensure_positive() for crate in deposits]
    deposited = DepositedBalance(
        amount=sum((crate.amount for crate in crates), start=ZERO),
        bdv=sum((crate.bdv for crate in crates), start=ZERO),
        crates=crates,
    )
    buckets = classify_withdrawals(asset, withdrawals, current_epoch)
    return SiloBalance(
        asset_id=asset.symbol,
        deposited=deposited,
        locked=buckets.locked,
        claimable=buckets.claimable,
    )


__all__ = ["build_silo_balance"]
