"""Price sources and mode-based selection."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..interfaces.price_source import PriceSource
from ..models import PriceSourceMode, ProtocolConfig
from .mock import MockPriceSource
from .static import StaticPriceSource

if TYPE_CHECKING:
    from ..services.ledger import PositionLedger

logger = logging.getLogger(__name__)


def select_price_source(
    config: ProtocolConfig,
    ledger: PositionLedger,
    external: PriceSource | None = None,
) -> PriceSource:
    """Pick the price source for ``config.price_source_mode``.

    External mode without an injected source falls back to the stored mock
    price.
    """
    if config.price_source_mode is PriceSourceMode.EXTERNAL:
        if external is not None:
            return external
        logger.warning("No external price source configured, using stored mock price")
    return MockPriceSource(ledger)


__all__ = ["MockPriceSource", "StaticPriceSource", "select_price_source"]
