"""Unit tests for checked i128 arithmetic."""
from __future__ import annotations

from decimal import Decimal

import pytest

from lending_core.errors import ArithmeticOverflow, InvalidAmount
from lending_core.fixed_point import (
    I128_MAX,
    I128_MIN,
    MAX_INT,
    checked_add,
    checked_mul,
    checked_pow10,
    div_trunc,
    in_range,
    require_i128,
    require_positive,
)


class TestCheckedArithmetic:
    def test_add_within_range(self) -> None:
        assert checked_add(2, 3) == 5

    def test_add_overflow(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            checked_add(I128_MAX, 1)

    def test_mul_within_range(self) -> None:
        assert checked_mul(1_000_000_000, 5_000_000) == 5_000_000_000_000_000

    def test_mul_overflow_is_not_wrapped(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            checked_mul(I128_MAX, 2)

    def test_mul_negative_underflow(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            checked_mul(I128_MIN, 2)

    def test_pow10(self) -> None:
        assert checked_pow10(7) == 10_000_000
        assert checked_pow10(0) == 1

    def test_pow10_too_large(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            checked_pow10(39)

    def test_pow10_negative_scale(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            checked_pow10(-1)

    def test_sentinel_is_i128_max(self) -> None:
        assert MAX_INT == 2**127 - 1
        assert in_range(MAX_INT)
        assert not in_range(MAX_INT + 1)


class TestDivTrunc:
    def test_non_negative_matches_floor(self) -> None:
        assert div_trunc(7, 2) == 3
        assert div_trunc(0, 5) == 0

    def test_negative_truncates_toward_zero(self) -> None:
        assert div_trunc(-7, 2) == -3
        assert div_trunc(7, -2) == -3
        assert div_trunc(-7, -2) == 3


class TestAmountValidation:
    @pytest.mark.parametrize("value", [1.5, 2.0, Decimal("2"), "3", None, True, False])
    def test_non_integers_rejected(self, value) -> None:
        with pytest.raises(InvalidAmount):
            require_i128(value)
        with pytest.raises(InvalidAmount):
            require_positive(value)

    def test_i128_accepts_any_sign(self) -> None:
        require_i128(0)
        require_i128(-1)
        require_i128(I128_MIN)
        require_i128(I128_MAX)

    @pytest.mark.parametrize("value", [I128_MIN - 1, I128_MAX + 1])
    def test_i128_out_of_range(self, value: int) -> None:
        with pytest.raises(InvalidAmount):
            require_i128(value)

    @pytest.mark.parametrize("value", [0, -1])
    def test_positive_rejects_non_positive(self, value: int) -> None:
        with pytest.raises(InvalidAmount):
            require_positive(value)

    def test_positive_bounds(self) -> None:
        require_positive(1)
        require_positive(I128_MAX)
