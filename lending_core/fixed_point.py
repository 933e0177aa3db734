"""Checked signed 128-bit integer arithmetic.

Python integers never wrap, so the i128 range of the ledger values is
enforced explicitly: any result outside it raises ``ArithmeticOverflow``.
"""
from __future__ import annotations

from .errors import ArithmeticOverflow, InvalidAmount

I128_MIN = -(2**127)
I128_MAX = 2**127 - 1

# Sentinel ratio for a debt-free position.
MAX_INT = I128_MAX

BPS_SCALE = 10_000


def _checked(value: int, op: str) -> int:
    if value < I128_MIN or value > I128_MAX:
        raise ArithmeticOverflow(f"i128 overflow in {op}")
    return value


def checked_add(a: int, b: int) -> int:
    return _checked(a + b, "add")


def checked_mul(a: int, b: int) -> int:
    return _checked(a * b, "mul")


def checked_pow10(decimals: int) -> int:
    """Return ``10 ** decimals``; negative scales are rejected."""
    if decimals < 0:
        raise ArithmeticOverflow(f"negative decimal scale {decimals}")
    return _checked(10**decimals, "pow")


def div_trunc(a: int, b: int) -> int:
    """Integer division truncating toward zero.

    Identical to floor division for non-negative operands, and matches
    fixed-width integer division when a negative price is in play.
    """
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def in_range(value: int) -> bool:
    return I128_MIN <= value <= I128_MAX


def require_i128(value: int, what: str = "Amount") -> None:
    """Reject anything that is not a plain ``int`` inside the i128 range."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(f"{what} must be an integer, got {value!r}")
    if not in_range(value):
        raise InvalidAmount(f"{what} is outside the i128 range: {value}")


def require_positive(amount: int) -> None:
    """Reject amounts that are not a positive i128."""
    require_i128(amount)
    if amount <= 0:
        raise InvalidAmount(f"Amount must be a positive i128, got {amount}")
