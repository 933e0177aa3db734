"""Accounting and risk-control core of a single-asset collateralized lending position."""
from .errors import (
    AlreadyInitialized,
    ArithmeticOverflow,
    InsufficientBalance,
    InsufficientHealthFactor,
    InvalidAmount,
    InvalidConfiguration,
    LendingError,
    NotInitialized,
    Unauthorized,
)
from .models import (
    AccountPosition,
    HealthReport,
    PositionSummary,
    PriceQuote,
    PriceSourceMode,
    ProtocolConfig,
    RiskLevel,
)
from .services import LendingProtocol, PositionLedger

__version__ = "0.1.0"

__all__ = [
    "AccountPosition",
    "AlreadyInitialized",
    "ArithmeticOverflow",
    "HealthReport",
    "InsufficientBalance",
    "InsufficientHealthFactor",
    "InvalidAmount",
    "InvalidConfiguration",
    "LendingError",
    "LendingProtocol",
    "NotInitialized",
    "PositionLedger",
    "PositionSummary",
    "PriceQuote",
    "PriceSourceMode",
    "ProtocolConfig",
    "RiskLevel",
    "Unauthorized",
]
