"""Health factor engine: pure fixed-point valuation of a position.

All arithmetic is checked against the i128 range; an overflow aborts the
evaluation instead of wrapping or saturating. The debt asset is valued 1:1
with the oracle's reference unit.
"""
from __future__ import annotations

import logging

from ..fixed_point import (
    BPS_SCALE,
    MAX_INT,
    checked_mul,
    checked_pow10,
    div_trunc,
)
from ..models import HEALTHY_THRESHOLD_BPS, HealthReport, RiskLevel

logger = logging.getLogger(__name__)


def collateral_value(collateral_amount: int, price: int, decimals: int) -> int:
    """``collateral_amount * price / 10**decimals``, truncated."""
    denom = checked_pow10(decimals)
    return div_trunc(checked_mul(collateral_amount, price), denom)


def max_borrow_value(
    collateral_amount: int, ltv_bps: int, price: int, decimals: int
) -> int:
    """LTV-capped borrowing capacity in reference units."""
    value = collateral_value(collateral_amount, price, decimals)
    return div_trunc(checked_mul(value, ltv_bps), BPS_SCALE)


def evaluate(
    collateral_amount: int,
    debt_amount: int,
    ltv_bps: int,
    price: int,
    decimals: int,
) -> HealthReport:
    """Compute ``(collateral_value, debt_value, health_factor_bps)``.

    A debt-free position short-circuits to ``(0, 0, MAX_INT)`` without
    touching the price, which also rules out a division by zero below.
    """
    if debt_amount == 0:
        return HealthReport(0, 0, MAX_INT)

    coll_value = collateral_value(collateral_amount, price, decimals)
    capacity = div_trunc(checked_mul(coll_value, ltv_bps), BPS_SCALE)
    debt_value = debt_amount
    hf_bps = div_trunc(checked_mul(capacity, BPS_SCALE), debt_value)

    logger.debug(
        "Evaluated collateral=%d debt=%d price=%d/1e%d -> value=%d hf=%d bps",
        collateral_amount, debt_amount, price, decimals, coll_value, hf_bps,
    )
    return HealthReport(coll_value, debt_value, hf_bps)


def available_to_borrow(capacity: int, debt_amount: int) -> int:
    """Remaining headroom under the LTV cap, never negative."""
    return max(0, capacity - debt_amount)


def classify_risk(health_factor_bps: int) -> RiskLevel:
    if health_factor_bps >= 20_000:
        return RiskLevel.SAFE
    if health_factor_bps >= 15_000:
        return RiskLevel.MODERATE
    if health_factor_bps >= HEALTHY_THRESHOLD_BPS:
        return RiskLevel.HIGH
    return RiskLevel.CRITICAL
