from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Protocol

from pydantic import BaseModel, ConfigDict, Field

from config import config

from .errors import InvalidAsset
from .fixed_point import truncate


class SiloAsset(Protocol):
    """Capability interface the engine relies on; concrete asset identity never matters."""

    symbol: str
    decimals: int
    is_lp: bool

    def seeds_from_bdv(self, bdv: Decimal) -> Decimal: ...

    def stalk_from_bdv(self, bdv: Decimal) -> Decimal: ...


class WhitelistedAsset(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str = Field(min_length=1)
    decimals: int = Field(ge=0)
    stalk_per_bdv: Decimal = Decimal(1)
    seeds_per_bdv: Decimal
    is_lp: bool = False

    def seeds_from_bdv(self, bdv: Decimal) -> Decimal:
        return truncate(self.seeds_per_bdv * bdv, config().seeds_decimals)

    def stalk_from_bdv(self, bdv: Decimal) -> Decimal:
        return truncate(self.stalk_per_bdv * bdv, config().stalk_decimals)


BEAN = WhitelistedAsset(symbol="BEAN", decimals=6, seeds_per_bdv=Decimal(2))
BEAN_3CRV = WhitelistedAsset(symbol="BEAN3CRV", decimals=18, seeds_per_bdv=Decimal(4), is_lp=True)
BEAN_ETH = WhitelistedAsset(symbol="BEANETH", decimals=18, seeds_per_bdv=Decimal(3), is_lp=True)
UNRIPE_BEAN = WhitelistedAsset(symbol="urBEAN", decimals=6, seeds_per_bdv=Decimal(2))
UNRIPE_BEAN_3CRV = WhitelistedAsset(symbol="urBEAN3CRV", decimals=6, seeds_per_bdv=Decimal(4), is_lp=True)


class AssetRegistry:
    def __init__(self, assets: Iterable[SiloAsset]) -> None:
        self._assets: dict[str, SiloAsset] = {}
        for asset in assets:
            self.register(asset)

    def register(self, asset: SiloAsset) -> None:
        self._assets[asset.symbol] = asset

    def get(self, symbol: str) -> SiloAsset:
        asset = self._assets.get(symbol)
        if asset is None:
            raise InvalidAsset(symbol)
        return asset

    def resolve(self, asset: SiloAsset | str) -> SiloAsset:
        if isinstance(asset, str):
            return self.get(asset)
        if asset.symbol not in self._assets:
            raise InvalidAsset(asset.symbol)
        return asset

    def symbols(self) -> list[str]:
        return sorted(self._assets)


def default_registry() -> AssetRegistry:
    return AssetRegistry([BEAN, BEAN_3CRV, BEAN_ETH, UNRIPE_BEAN, UNRIPE_BEAN_3CRV])


__all__ = [
    "AssetRegistry",
    "BEAN",
    "BEAN_3CRV",
    "BEAN_ETH",
    "SiloAsset",
    "UNRIPE_BEAN",
    "UNRIPE_BEAN_3CRV",
    "WhitelistedAsset",
    "default_registry",
]
