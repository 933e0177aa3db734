"""Price source protocol: collateral price quote abstraction."""
from typing import Protocol

from ..models import PriceQuote


class PriceSource(Protocol):
    """Supplies the collateral price in the reference unit as ``(price, decimals)``."""

    def get_price(self) -> PriceQuote: ...
