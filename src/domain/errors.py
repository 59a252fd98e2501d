from __future__ import annotations

from decimal import Decimal


class SiloError(Exception):
    """Base class for accounting failures raised by the silo core."""


class InsufficientBalance(SiloError):
    def __init__(
        self,
        *,
        asset_id: str,
        requested: Decimal,
        available: Decimal,
    ) -> None:
        self.asset_id = asset_id
        self.requested = requested
        self.available = available
        super().__init__(f"Not enough deposits for asset={asset_id} requested={requested} available={available}")


class InvalidAsset(SiloError):
    def __init__(self, asset_id: str) -> None:
        self.asset_id = asset_id
        super().__init__(f"Unknown silo asset: {asset_id!r}")


class InvalidEpoch(SiloError):
    def __init__(self, *, deposit_epoch: int, current_epoch: int) -> None:
        self.deposit_epoch = deposit_epoch
        self.current_epoch = current_epoch
        super().__init__(f"Current epoch {current_epoch} precedes deposit epoch {deposit_epoch}")


class ZeroAmountCrate(SiloError):
    def __init__(self, *, epoch: int, amount: Decimal) -> None:
        self.epoch = epoch
        self.amount = amount
        super().__init__(f"Crate at epoch={epoch} has non-positive amount={amount}")


__all__ = ["InsufficientBalance", "InvalidAsset", "InvalidEpoch", "SiloError", "ZeroAmountCrate"]
