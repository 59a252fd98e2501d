"""Value records exchanged with the silo accounting core.

Every model is frozen: callers pass a fresh snapshot in and receive a new
result back, nothing is mutated or retained between calls.

Sign convention for conversion deltas:
- Positive values indicate a gain for the depositor.
- Negative values indicate value, stalk or seeds given up.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from .errors import ZeroAmountCrate

ZERO = Decimal(0)


class DepositCrate(BaseModel):
    """A deposit position keyed by the epoch it was made in."""

    model_config = ConfigDict(frozen=True)

    epoch: int
    amount: Decimal
    bdv: Decimal
    seeds: Decimal

    def ensure_positive(self) -> DepositCrate:
        if self.amount <= 0:
            raise ZeroAmountCrate(epoch=self.epoch, amount=self.amount)
        return self


class SelectedCrate(BaseModel):
    """A whole crate or a proportional slice of one, with its stalk resolved."""

    model_config = ConfigDict(frozen=True)

    epoch: int
    amount: Decimal
    bdv: Decimal
    seeds: Decimal
    base_stalk: Decimal
    grown_stalk: Decimal

    @property
    def stalk(self) -> Decimal:
        return self.base_stalk + self.grown_stalk


class SelectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_amount: Decimal
    total_bdv: Decimal
    total_stalk: Decimal
    total_seeds: Decimal
    crates: list[SelectedCrate] = Field(default_factory=list)


class PendingWithdrawal(BaseModel):
    """Withdrawal as reported by the records source, amount in raw base units."""

    model_config = ConfigDict(frozen=True)

    amount: int = Field(strict=True, ge=0)


class WithdrawalRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    epoch: int
    amount: Decimal


class WithdrawalBucket(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: Decimal = ZERO
    records: list[WithdrawalRecord] = Field(default_factory=list)


class WithdrawalBuckets(BaseModel):
    model_config = ConfigDict(frozen=True)

    locked: WithdrawalBucket
    claimable: WithdrawalBucket


class DepositedBalance(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: Decimal = ZERO
    bdv: Decimal = ZERO
    crates: list[DepositCrate] = Field(default_factory=list)


class SiloBalance(BaseModel):
    model_config = ConfigDict(frozen=True)

    asset_id: str
    deposited: DepositedBalance
    locked: WithdrawalBucket
    claimable: WithdrawalBucket


class ConversionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_asset: str
    to_asset: str
    amount: Decimal
    amount_out: Decimal
    bdv_out: Decimal
    delta_bdv: Decimal
    delta_stalk: Decimal
    delta_seeds: Decimal
    # Change in seeds earned per BDV along this pathway.
    seeds_per_bdv_delta: Decimal
    consumed: SelectionResult
    minted_crate: SelectedCrate

    @property
    def consumed_crates(self) -> list[SelectedCrate]:
        return self.consumed.crates


__all__ = [
    "ConversionResult",
    "DepositCrate",
    "DepositedBalance",
    "PendingWithdrawal",
    "SelectedCrate",
    "SelectionResult",
    "SiloBalance",
    "WithdrawalBucket",
    "WithdrawalBuckets",
    "WithdrawalRecord",
]
