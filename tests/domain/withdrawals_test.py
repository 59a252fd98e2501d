from decimal import Decimal

import pytest
from pydantic import ValidationError

from domain.assets import BEAN, BEAN_3CRV
from domain.crates import PendingWithdrawal, WithdrawalRecord
from domain.withdrawals import classify_withdrawals
from tests.helpers.crates import make_withdrawals


def test_splits_locked_and_claimable() -> None:
    buckets = classify_withdrawals(BEAN, make_withdrawals({5: 30_000000, 10: 20_000000}), current_epoch=8)

    assert buckets.claimable.amount == Decimal(30)
    assert buckets.claimable.records == [WithdrawalRecord(epoch=5, amount=Decimal(30))]
    assert buckets.locked.amount == Decimal(20)
    assert buckets.locked.records == [WithdrawalRecord(epoch=10, amount=Decimal(20))]


def test_record_at_current_epoch_is_claimable() -> None:
    buckets = classify_withdrawals(BEAN, make_withdrawals({8: 1_000000, 9: 2_000000}), current_epoch=8)

    assert [record.epoch for record in buckets.claimable.records] == [8]
    assert [record.epoch for record in buckets.locked.records] == [9]


def test_amounts_are_normalised_by_asset_decimals() -> None:
    buckets = classify_withdrawals(BEAN_3CRV, make_withdrawals({"3": 1_500000000000000000}), current_epoch=3)

    assert buckets.claimable.amount == Decimal("1.5")
    assert buckets.claimable.records[0].epoch == 3


def test_every_record_lands_in_exactly_one_bucket() -> None:
    raw_amounts: dict[int | str, int] = {epoch: epoch * 1_000000 + 17 for epoch in range(1, 25)}

    buckets = classify_withdrawals(BEAN, make_withdrawals(raw_amounts), current_epoch=12)

    total = sum((Decimal(raw) / 10**6 for raw in raw_amounts.values()), start=Decimal(0))
    assert buckets.locked.amount + buckets.claimable.amount == total
    epochs = sorted(record.epoch for record in buckets.locked.records + buckets.claimable.records)
    assert epochs == sorted(raw_amounts)
    assert all(record.epoch > 12 for record in buckets.locked.records)


def test_classification_ignores_mapping_order() -> None:
    forward = classify_withdrawals(BEAN, make_withdrawals({2: 10, 7: 20, 4: 30}), current_epoch=4)
    backward = classify_withdrawals(BEAN, make_withdrawals({4: 30, 7: 20, 2: 10}), current_epoch=4)

    assert forward.claimable.amount == backward.claimable.amount == Decimal("0.00004")
    assert forward.locked.amount == backward.locked.amount == Decimal("0.00002")


def test_pending_amount_must_be_raw_base_units() -> None:
    with pytest.raises(ValidationError):
        PendingWithdrawal(amount=Decimal("30"))  # type: ignore[arg-type]

    with pytest.raises(ValidationError):
        PendingWithdrawal(amount=-1)


def test_no_withdrawals() -> None:
    buckets = classify_withdrawals(BEAN, {}, current_epoch=1)

    assert buckets.locked.amount == 0
    assert buckets.claimable.amount == 0
    assert buckets.locked.records == []
    assert buckets.claimable.records == []
