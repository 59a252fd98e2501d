from decimal import Decimal

import pytest

from domain.assets import BEAN, BEAN_3CRV, BEAN_ETH
from domain.errors import InvalidAsset
from domain.pricing import FixedRateQuoter


def test_fixed_rate_quote_preserves_bdv() -> None:
    quoter = FixedRateQuoter({"BEAN": Decimal(1), "BEAN3CRV": Decimal(2)})

    quote = quoter.quote(BEAN, BEAN_3CRV, Decimal(10))

    assert quote.amount_out == Decimal(5)
    assert quote.bdv_out == Decimal(10)


def test_quote_truncates_to_destination_decimals() -> None:
    quoter = FixedRateQuoter({"BEAN3CRV": Decimal(1), "BEAN": Decimal(3)})

    quote = quoter.quote(BEAN_3CRV, BEAN, Decimal(1))

    assert quote.amount_out == Decimal("0.333333")
    assert quote.bdv_out == Decimal("0.999999")


def test_missing_rate_raises_invalid_asset() -> None:
    quoter = FixedRateQuoter({"BEAN": Decimal(1)})

    with pytest.raises(InvalidAsset):
        quoter.quote(BEAN, BEAN_ETH, Decimal(1))
