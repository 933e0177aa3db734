"""Mock price source backed by the stored protocol config."""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import MOCK_PRICE_DECIMALS, PriceQuote

if TYPE_CHECKING:
    from ..services.ledger import PositionLedger


class MockPriceSource:
    """Quote the admin-set ``mock_price`` at a fixed scale of 7 decimals."""

    def __init__(self, ledger: PositionLedger) -> None:
        self._ledger = ledger

    def get_price(self) -> PriceQuote:
        config = self._ledger.load_config()
        return PriceQuote(config.mock_price, MOCK_PRICE_DECIMALS)
