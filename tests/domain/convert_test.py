from decimal import Decimal

import pytest

from domain.assets import BEAN, BEAN_3CRV, WhitelistedAsset
from domain.convert import ConversionEngine, OrderingPolicy
from domain.crates import DepositCrate
from domain.errors import InsufficientBalance, InvalidAsset, InvalidEpoch
from tests.helpers.crates import make_crate


def test_convert_into_lp_consumes_oldest_first(
    conversion_engine: ConversionEngine,
    bean_crates: list[DepositCrate],
) -> None:
    newest_first = list(reversed(bean_crates))

    result = conversion_engine.convert(BEAN, BEAN_3CRV, Decimal(80), newest_first, current_epoch=30)

    assert [(crate.epoch, crate.amount) for crate in result.consumed_crates] == [(10, Decimal(80))]
    assert result.consumed.total_bdv == Decimal(80)
    assert result.consumed.total_seeds == Decimal(160)
    assert result.consumed.total_stalk == Decimal("80.32")

    assert result.amount == Decimal(80)
    assert result.amount_out == Decimal(40)
    assert result.bdv_out == Decimal(80)

    minted = result.minted_crate
    assert minted.epoch == 30
    assert minted.amount == Decimal(40)
    assert minted.bdv == Decimal(80)
    assert minted.seeds == Decimal(320)
    assert minted.grown_stalk == 0
    assert minted.stalk == Decimal(80)

    assert result.delta_bdv == 0
    assert result.delta_stalk == Decimal("-0.32")
    assert result.delta_seeds == Decimal(160)
    assert result.seeds_per_bdv_delta == Decimal(2)


def test_convert_out_of_lp_consumes_lowest_bdv_ratio_first(conversion_engine: ConversionEngine) -> None:
    lp_crates = [
        make_crate(epoch=5, amount=10, bdv=30, seeds=120),
        make_crate(epoch=8, amount=10, bdv=20, seeds=80),
    ]

    result = conversion_engine.convert(BEAN_3CRV, BEAN, Decimal(15), lp_crates, current_epoch=8)

    assert [(crate.epoch, crate.amount) for crate in result.consumed_crates] == [(8, Decimal(10)), (5, Decimal(5))]
    assert result.consumed.total_bdv == Decimal(35)
    assert result.amount_out == Decimal(30)
    assert result.bdv_out == Decimal(30)
    assert result.delta_bdv == Decimal(-5)
    assert result.delta_seeds == Decimal(60) - Decimal(140)
    assert result.seeds_per_bdv_delta == Decimal(-2)


def test_caller_policy_keeps_given_order(
    conversion_engine: ConversionEngine,
    bean_crates: list[DepositCrate],
) -> None:
    result = conversion_engine.convert(
        BEAN,
        BEAN_3CRV,
        Decimal(110),
        list(reversed(bean_crates)),
        current_epoch=30,
        policy=OrderingPolicy.CALLER,
    )

    assert [(crate.epoch, crate.amount) for crate in result.consumed_crates] == [(20, Decimal(50)), (10, Decimal(60))]


def test_explicit_policies_override_pathway_default(bean_crates: list[DepositCrate]) -> None:
    crates = [make_crate(epoch=25, amount=10, bdv=5, seeds=10), *bean_crates]

    by_epoch = ConversionEngine.order_crates(crates, BEAN, OrderingPolicy.EPOCH)
    by_ratio = ConversionEngine.order_crates(crates, BEAN_3CRV, OrderingPolicy.BDV_RATIO)

    assert [crate.epoch for crate in by_epoch] == [10, 20, 25]
    assert [crate.epoch for crate in by_ratio] == [25, 10, 20]


def test_convert_accepts_asset_symbols(
    conversion_engine: ConversionEngine,
    bean_crates: list[DepositCrate],
) -> None:
    result = conversion_engine.convert("BEAN", "BEAN3CRV", Decimal(10), bean_crates, current_epoch=30)

    assert result.from_asset == BEAN.symbol
    assert result.to_asset == BEAN_3CRV.symbol


def test_unknown_asset_fails_before_selection(conversion_engine: ConversionEngine) -> None:
    with pytest.raises(InvalidAsset):
        conversion_engine.convert("BEAN", "NOPE", Decimal(10), [], current_epoch=30)

    stranger = WhitelistedAsset(symbol="STRANGER", decimals=6, seeds_per_bdv=Decimal(1))
    with pytest.raises(InvalidAsset):
        conversion_engine.convert(stranger, BEAN, Decimal(10), [], current_epoch=30)


def test_convert_more_than_deposited_raises(
    conversion_engine: ConversionEngine,
    bean_crates: list[DepositCrate],
) -> None:
    with pytest.raises(InsufficientBalance):
        conversion_engine.convert(BEAN, BEAN_3CRV, Decimal(500), bean_crates, current_epoch=30)


def test_convert_with_crate_from_a_future_epoch_raises(conversion_engine: ConversionEngine) -> None:
    crates = [make_crate(epoch=31, amount=10, bdv=10, seeds=20)]

    with pytest.raises(InvalidEpoch) as exc_info:
        conversion_engine.convert(BEAN, BEAN_3CRV, Decimal(5), crates, current_epoch=30)

    assert exc_info.value.deposit_epoch == 31
