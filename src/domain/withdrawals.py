from __future__ import annotations

import logging
from typing import Mapping

from .assets import SiloAsset
from .crates import ZERO, PendingWithdrawal, WithdrawalBucket, WithdrawalBuckets, WithdrawalRecord
from .fixed_point import from_base_units

logger = logging.getLogger(__name__)


def classify_withdrawals(
    asset: SiloAsset,
    withdrawals: Mapping[int | str, PendingWithdrawal],
    current_epoch: int,
) -> WithdrawalBuckets:
    """Split pending withdrawals into locked and claimable buckets.

    ``withdrawals`` maps the epoch a withdrawal unlocks at to the pending
    record. Nothing is re-categorised on the ledger itself: a record is
    claimable as soon as its epoch is at or before ``current_epoch``.
    """
    locked_amount = ZERO
    claimable_amount = ZERO
    locked: list[WithdrawalRecord] = []
    claimable: list[WithdrawalRecord] = []

    for epoch_key, pending in withdrawals.items():
        record = WithdrawalRecord(
            epoch=int(epoch_key),
            amount=from_base_units(pending.amount, asset.decimals),
        )
        if record.epoch <= current_epoch:
            claimable_amount += record.amount
            claimable.append(record)
        else:
            locked_amount += record.amount
            locked.append(record)

    logger.debug(
        "Classified %d %s withdrawal(s) at epoch=%d: locked=%s claimable=%s",
        len(withdrawals),
        asset.symbol,
        current_epoch,
        locked_amount,
        claimable_amount,
    )
    return WithdrawalBuckets(
        locked=WithdrawalBucket(amount=locked_amount, records=locked),
        claimable=WithdrawalBucket(amount=claimable_amount, records=claimable),
    )


__all__ = ["classify_withdrawals"]
