"""Fixed-quote price source."""
from __future__ import annotations

from ..models import PriceQuote


class StaticPriceSource:
    """Price source returning one quote until updated."""

    def __init__(self, price: int, decimals: int) -> None:
        self._quote = PriceQuote(price, decimals)

    def get_price(self) -> PriceQuote:
        return self._quote

    def update_price(self, price: int, decimals: int | None = None) -> None:
        self._quote = PriceQuote(
            price, self._quote.decimals if decimals is None else decimals
        )

    def __repr__(self) -> str:
        return f"StaticPriceSource(price={self._quote.price}, decimals={self._quote.decimals})"
