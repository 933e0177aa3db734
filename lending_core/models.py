"""Data models: all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, NamedTuple

from .fixed_point import BPS_SCALE

MOCK_PRICE_DECIMALS = 7
# 0.50 in reference units at 7 decimals
DEFAULT_MOCK_PRICE = 5_000_000
# 100% health: capacity exactly covers debt
HEALTHY_THRESHOLD_BPS = BPS_SCALE


class PriceSourceMode(Enum):
    MOCK = "mock"
    EXTERNAL = "external"


class RiskLevel(Enum):
    SAFE = "safe"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ProtocolConfig:
    """Singleton protocol record written once by initialize."""

    admin: str
    collateral_asset_ref: str
    debt_asset_ref: str
    ltv_bps: int
    price_source_mode: PriceSourceMode = PriceSourceMode.MOCK
    mock_price: int = DEFAULT_MOCK_PRICE

    def with_mock_price(self, price: int) -> ProtocolConfig:
        return replace(self, mock_price=price)

    def to_record(self) -> dict[str, Any]:
        """Plain-dict form for the key-value store."""
        return {
            "admin": self.admin,
            "collateral_asset_ref": self.collateral_asset_ref,
            "debt_asset_ref": self.debt_asset_ref,
            "ltv_bps": self.ltv_bps,
            "price_source_mode": self.price_source_mode.value,
            "mock_price": self.mock_price,
        }

    @classmethod
    def from_record(cls, raw: dict[str, Any]) -> ProtocolConfig:
        return cls(
            admin=raw["admin"],
            collateral_asset_ref=raw["collateral_asset_ref"],
            debt_asset_ref=raw["debt_asset_ref"],
            ltv_bps=int(raw["ltv_bps"]),
            price_source_mode=PriceSourceMode(raw["price_source_mode"]),
            mock_price=int(raw["mock_price"]),
        )


@dataclass(frozen=True)
class AccountPosition:
    """Collateral and debt balances of a single account."""

    account: str
    collateral_amount: int = 0
    debt_amount: int = 0


class PriceQuote(NamedTuple):
    price: int
    decimals: int


class HealthReport(NamedTuple):
    """Result of a health-factor evaluation, compares equal to the plain triple."""

    collateral_value: int
    debt_value: int
    health_factor_bps: int

    @property
    def is_healthy(self) -> bool:
        return self.health_factor_bps >= HEALTHY_THRESHOLD_BPS


@dataclass(frozen=True)
class PositionSummary:
    """Everything the front end shows for one account."""

    account: str
    collateral_amount: int
    debt_amount: int
    collateral_value: int
    max_borrow_value: int
    available_to_borrow: int
    health_factor_bps: int
    risk: RiskLevel
