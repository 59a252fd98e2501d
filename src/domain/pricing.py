from __future__ import annotations

from decimal import Decimal
from typing import Mapping, NamedTuple, Protocol

from config import config

from .assets import SiloAsset
from .errors import InvalidAsset
from .fixed_point import truncate


class ConversionQuote(NamedTuple):
    amount_out: Decimal
    bdv_out: Decimal


class ConversionQuoter(Protocol):
    """Destination-side pricing for a convert: what ``amount_in`` of one asset becomes in another."""

    def quote(self, from_asset: SiloAsset, to_asset: SiloAsset, amount_in: Decimal) -> ConversionQuote: ...


class FixedRateQuoter:
    """Quotes conversions from a static bdv-per-unit table."""

    def __init__(self, bdv_per_unit: Mapping[str, Decimal]) -> None:
        self._bdv_per_unit = dict(bdv_per_unit)

    def bdv_per_unit(self, asset: SiloAsset) -> Decimal:
        rate = self._bdv_per_unit.get(asset.symbol)
        if rate is None:
            raise InvalidAsset(asset.symbol)
        return rate

    def quote(self, from_asset: SiloAsset, to_asset: SiloAsset, amount_in: Decimal) -> ConversionQuote:
        bdv_in = amount_in * self.bdv_per_unit(from_asset)
        amount_out = truncate(bdv_in / self.bdv_per_unit(to_asset), to_asset.decimals)
        bdv_out = truncate(amount_out * self.bdv_per_unit(to_asset), config().bdv_decimals)
        return ConversionQuote(amount_out=amount_out, bdv_out=bdv_out)


__all__ = ["ConversionQuote", "ConversionQuoter", "FixedRateQuoter"]
