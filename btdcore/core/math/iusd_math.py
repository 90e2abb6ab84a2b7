"""
IUSDMath — индекс покупательной способности (iUSD)

iUSD — номинальный доллар, скорректированный на инфляцию относительно
целевого тренда (2% в год). Модуль считает:
- коэффициент инфляции CPI_current / CPI_previous
- коэффициент коррекции inflation / monthly_growth_factor
- месячный фактор роста из годовой ставки (точный целочисленный корень 12-й степени)
- переход номинальный USD ↔ индексированные единицы

Все величины — 18 знаков, деление floor.
"""

from typing import Final, NamedTuple

from btdcore.core.errors import InvalidCPIError, InvalidInputError
from btdcore.core.math.fixed_point import (
    BPS_BASE,
    PRECISION_18,
    checked_uint256,
    integer_root,
    mul_div,
    require_positive,
    require_uint,
)

# Целевой годовой рост iUSD: 2%
TARGET_ANNUAL_GROWTH_BPS: Final[int] = 200

MONTHS_PER_YEAR: Final[int] = 12


class AdjustmentFactor(NamedTuple):
    """Результат adjustment_factor."""

    inflation_multiplier: int
    adjustment_factor: int


def adjustment_factor(
    current_cpi: int, previous_cpi: int, monthly_growth_factor: int
) -> AdjustmentFactor:
    """
    Коэффициент коррекции покупательной способности.

    ФОРМУЛА:
        inflation = current_cpi * 1e18 / previous_cpi
        adjust    = inflation * 1e18 / monthly_growth_factor

    adjust > 1e18 означает, что фактическая инфляция обогнала тренд.

    Args:
        current_cpi: CPI текущего месяца
        previous_cpi: CPI предыдущего месяца
        monthly_growth_factor: Целевой месячный рост (18 знаков, ~1.00165e18)

    Returns:
        AdjustmentFactor(inflation_multiplier, adjustment_factor)

    Raises:
        InvalidCPIError: Если previous_cpi == 0 или current_cpi == 0
        InvalidInputError: Если monthly_growth_factor == 0
    """
    require_uint(current_cpi, "current_cpi")
    require_uint(previous_cpi, "previous_cpi")
    require_uint(monthly_growth_factor, "monthly_growth_factor")

    if previous_cpi == 0:
        raise InvalidCPIError("previous_cpi must be positive")
    if current_cpi == 0:
        raise InvalidCPIError("current_cpi must be positive")
    if monthly_growth_factor == 0:
        raise InvalidInputError("monthly_growth_factor must be positive")

    inflation = mul_div(current_cpi, PRECISION_18, previous_cpi)
    adjust = mul_div(inflation, PRECISION_18, monthly_growth_factor)

    return AdjustmentFactor(inflation_multiplier=inflation, adjustment_factor=adjust)


def monthly_growth_factor(annual_growth_bps: int = TARGET_ANNUAL_GROWTH_BPS) -> int:
    """
    Месячный фактор роста: (1 + annual)^(1/12), 18 знаков, floor.

    Examples:
        >>> monthly_growth_factor(0)
        1000000000000000000
    """
    require_uint(annual_growth_bps, "annual_growth_bps")

    # (1 + r) * 1e18^12 → корень 12-й степени даёт результат в шкале 1e18.
    # Подкоренное выражение шире uint256, сужается только корень.
    radicand = (BPS_BASE + annual_growth_bps) * PRECISION_18**MONTHS_PER_YEAR // BPS_BASE
    return checked_uint256(integer_root(radicand, MONTHS_PER_YEAR), "growth_factor")


def next_iusd_value(current_iusd: int, factor: int) -> int:
    """Новое значение iUSD после применения месячного фактора."""
    require_positive(current_iusd, "current_iusd")
    require_positive(factor, "factor")
    return mul_div(current_iusd, factor, PRECISION_18)


def to_indexed(amount_usd: int, iusd_value: int) -> int:
    """Номинальные USD → индексированные единицы (floor)."""
    require_uint(amount_usd, "amount_usd")
    require_positive(iusd_value, "iusd_value")
    return mul_div(amount_usd, PRECISION_18, iusd_value)


def to_nominal(amount_indexed: int, iusd_value: int) -> int:
    """Индексированные единицы → номинальные USD (floor)."""
    require_uint(amount_indexed, "amount_indexed")
    require_positive(iusd_value, "iusd_value")
    return mul_div(amount_indexed, iusd_value, PRECISION_18)
