from decimal import Decimal

import pytest

from domain.assets import AssetRegistry, default_registry
from domain.convert import ConversionEngine
from domain.crates import DepositCrate
from domain.pricing import FixedRateQuoter
from tests.constants import BEAN_3CRV_ID, BEAN_ID
from tests.helpers.crates import make_crate


@pytest.fixture(scope="function")
def registry() -> AssetRegistry:
    return default_registry()


@pytest.fixture(scope="function")
def quoter() -> FixedRateQuoter:
    return FixedRateQuoter({BEAN_ID: Decimal(1), BEAN_3CRV_ID: Decimal(2)})


@pytest.fixture(scope="function")
def conversion_engine(quoter: FixedRateQuoter, registry: AssetRegistry) -> ConversionEngine:
    return ConversionEngine(quoter=quoter, registry=registry)


@pytest.fixture(scope="function")
def bean_crates() -> list[DepositCrate]:
    return [
        make_crate(epoch=10, amount=100, bdv=100, seeds=200),
        make_crate(epoch=20, amount=50, bdv=50, seeds=100),
    ]
