"""
Тесты для FixedPoint — целочисленные примитивы

Проверяемые инварианты:
1. Float и bool никогда не принимаются
2. Деление на ноль → InvalidInputError до деления
3. Результат > uint256 → ArithmeticOverflowError (fail closed)
4. mul_div округляет вниз, mul_div_up вверх
5. integer_root — наибольшее r с r**n <= value
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from btdcore.core.errors import ArithmeticOverflowError, InvalidInputError
from btdcore.core.math.fixed_point import (
    BPS_BASE,
    MAX_UINT256,
    PRECISION_18,
    SECONDS_PER_YEAR,
    checked_uint256,
    clamp,
    div_up,
    integer_root,
    mul_div,
    mul_div_up,
    require_positive,
    require_uint,
    saturating_sub,
    validate_bps,
)


# =============================================================================
# ТЕСТЫ: Константы
# =============================================================================


class TestConstants:
    def test_scales(self):
        assert PRECISION_18 == 10**18
        assert BPS_BASE == 10_000
        assert SECONDS_PER_YEAR == 31_536_000
        assert MAX_UINT256 == 2**256 - 1


# =============================================================================
# ТЕСТЫ: Валидация
# =============================================================================


class TestRequireUint:
    """Тесты require_uint."""

    def test_valid_values_pass_through(self):
        assert require_uint(0, "x") == 0
        assert require_uint(MAX_UINT256, "x") == MAX_UINT256

    def test_float_rejected(self):
        """Float нарушает воспроизводимость → отклоняется."""
        with pytest.raises(InvalidInputError):
            require_uint(1.0, "x")

    def test_bool_rejected(self):
        """bool — подкласс int, но не количество."""
        with pytest.raises(InvalidInputError):
            require_uint(True, "x")

    def test_negative_rejected(self):
        with pytest.raises(InvalidInputError, match="non-negative"):
            require_uint(-1, "x")

    def test_above_uint256_rejected(self):
        with pytest.raises(InvalidInputError):
            require_uint(MAX_UINT256 + 1, "x")

    def test_require_positive_rejects_zero(self):
        with pytest.raises(InvalidInputError):
            require_positive(0, "x")
        assert require_positive(5, "x") == 5


class TestValidateBps:
    def test_bounds(self):
        assert validate_bps(0, "fee") == 0
        assert validate_bps(BPS_BASE, "fee") == BPS_BASE

    def test_above_100_percent_rejected(self):
        with pytest.raises(InvalidInputError, match="fee"):
            validate_bps(BPS_BASE + 1, "fee")


# =============================================================================
# ТЕСТЫ: mul_div
# =============================================================================


class TestMulDiv:
    """Тесты mul_div / mul_div_up."""

    def test_floor(self):
        assert mul_div(3, 5, 2) == 7
        assert mul_div(10, 10, 3) == 33

    def test_ceil(self):
        assert mul_div_up(3, 5, 2) == 8
        assert mul_div_up(4, 5, 2) == 10
        assert div_up(7, 2) == 4

    def test_zero_denominator(self):
        with pytest.raises(InvalidInputError):
            mul_div(1, 1, 0)
        with pytest.raises(InvalidInputError):
            mul_div_up(1, 1, 0)

    def test_wide_intermediate_product(self):
        """Произведение шире uint256 допустимо, если результат помещается."""
        assert mul_div(MAX_UINT256, MAX_UINT256, MAX_UINT256) == MAX_UINT256

    def test_overflow_fails_closed(self):
        with pytest.raises(ArithmeticOverflowError):
            mul_div(MAX_UINT256, 2, 1)

    def test_checked_uint256_rejects_negative(self):
        with pytest.raises(ArithmeticOverflowError):
            checked_uint256(-1)

    @given(
        st.integers(min_value=0, max_value=2**128),
        st.integers(min_value=0, max_value=2**128),
        st.integers(min_value=1, max_value=2**128),
    )
    def test_up_is_floor_or_floor_plus_one(self, a, b, d):
        down = mul_div(a, b, d)
        up = mul_div_up(a, b, d)
        assert up - down in (0, 1)
        assert (up == down) == ((a * b) % d == 0)


# =============================================================================
# ТЕСТЫ: Утилиты
# =============================================================================


class TestUtilities:
    def test_clamp(self):
        assert clamp(5, 0, 10) == 5
        assert clamp(-1, 0, 10) == 0
        assert clamp(15, 0, 10) == 10

    def test_clamp_inverted_bounds(self):
        with pytest.raises(InvalidInputError):
            clamp(5, 10, 0)

    def test_saturating_sub(self):
        assert saturating_sub(10, 3) == 7
        assert saturating_sub(3, 10) == 0


class TestIntegerRoot:
    """Тесты integer_root."""

    def test_exact_roots(self):
        assert integer_root(27, 3) == 3
        assert integer_root(10**216, 12) == PRECISION_18
        assert integer_root(144, 2) == 12

    def test_floor_roots(self):
        assert integer_root(28, 3) == 3
        assert integer_root(26, 3) == 2

    def test_trivial(self):
        assert integer_root(0, 5) == 0
        assert integer_root(1, 5) == 1
        assert integer_root(12345, 1) == 12345

    def test_invalid(self):
        with pytest.raises(InvalidInputError):
            integer_root(-1, 2)
        with pytest.raises(InvalidInputError):
            integer_root(10, 0)

    @given(st.integers(min_value=0, max_value=2**300), st.integers(min_value=1, max_value=12))
    def test_root_is_largest(self, value, n):
        r = integer_root(value, n)
        assert r**n <= value < (r + 1) ** n
