"""
CollateralMath — стоимость залога, обязательств и collateral ratio

ОПРЕДЕЛЕНИЯ:
    collateral_value = norm(collateral_amount) * collateral_price / 1e18
    liability_value  = (primary + secondary) * reference_price / 1e18
    CR               = collateral_value * 1e18 / liability_value

CR при нулевых обязательствах = 1e18 (нейтральное значение, без деления на 0).
CR при нулевом залоге = 0 (максимальный риск).
Нулевая цена залога или reference_price → InvalidPriceError,
в том числе при нулевых обязательствах.

CR считается одним mul_div от исходных величин, без промежуточного
округления collateral_value и liability_value: поэтому CR в точности
инвариантен к пропорциональному масштабированию залога и обязательств.
"""

from typing import Final

from btdcore.core.errors import InvalidPriceError
from btdcore.core.math.fixed_point import (
    PRECISION_18,
    mul_div,
    require_uint,
    saturating_sub,
)
from btdcore.core.math.token_precision import to_canonical

# Decimals залога по умолчанию (WBTC)
DEFAULT_COLLATERAL_DECIMALS: Final[int] = 8

# CR = 100%
CR_ONE: Final[int] = PRECISION_18


def _require_price(price: int, name: str) -> None:
    require_uint(price, name)
    if price == 0:
        raise InvalidPriceError(f"{name} must be positive")


def collateral_value(
    collateral_amount: int,
    collateral_price: int,
    collateral_decimals: int = DEFAULT_COLLATERAL_DECIMALS,
) -> int:
    """
    USD стоимость залога (18 знаков).

    Raises:
        InvalidPriceError: Если collateral_price == 0

    Examples:
        >>> collateral_value(10**8, 50_000 * 10**18)   # 1 WBTC по $50k
        50000000000000000000000
    """
    _require_price(collateral_price, "collateral_price")
    normalized = to_canonical(collateral_amount, collateral_decimals)
    return mul_div(normalized, collateral_price, PRECISION_18)


def liability_value(
    primary_supply: int, secondary_equivalent: int, reference_price: int
) -> int:
    """
    USD стоимость обязательств: (BTD supply + BTB в BTD-эквиваленте) * price.

    Args:
        primary_supply: Эмиссия основного стейблкоина (18 знаков)
        secondary_equivalent: Обязательства по облигациям в единицах основного
        reference_price: Цена единицы обязательства в USD (iUSD, 18 знаков)

    Raises:
        InvalidPriceError: Если reference_price == 0
    """
    require_uint(primary_supply, "primary_supply")
    require_uint(secondary_equivalent, "secondary_equivalent")
    _require_price(reference_price, "reference_price")
    return mul_div(primary_supply + secondary_equivalent, reference_price, PRECISION_18)


def collateral_ratio(
    collateral_amount: int,
    collateral_price: int,
    primary_supply: int,
    secondary_equivalent: int,
    reference_price: int,
    collateral_decimals: int = DEFAULT_COLLATERAL_DECIMALS,
) -> int:
    """
    Collateral ratio (18 знаков, 1e18 = 100%).

    Returns:
        1e18 если обязательств нет, иначе
        collateral_value * 1e18 / liability_value (floor)

    Raises:
        InvalidPriceError: Если collateral_price == 0 или reference_price == 0

    Examples:
        >>> collateral_ratio(10**8, 50_000 * 10**18, 25_000 * 10**18, 0, 10**18)
        2000000000000000000
        >>> collateral_ratio(10**8, 50_000 * 10**18, 0, 0, 10**18)
        1000000000000000000
    """
    _require_price(collateral_price, "collateral_price")
    _require_price(reference_price, "reference_price")
    require_uint(primary_supply, "primary_supply")
    require_uint(secondary_equivalent, "secondary_equivalent")

    normalized = to_canonical(collateral_amount, collateral_decimals)
    liability = primary_supply + secondary_equivalent

    if liability == 0:
        return CR_ONE

    # (norm * price / 1e18) * 1e18 / (liab * ref / 1e18) = norm * price * 1e18 / (liab * ref)
    return mul_div(
        normalized * collateral_price, PRECISION_18, liability * reference_price
    )


def is_undercollateralized(cr: int) -> bool:
    """CR ниже 100%."""
    return cr < CR_ONE


def max_redeemable_usd(collateral_value_usd: int, liability_value_usd: int) -> int:
    """
    Избыток залога над 100% покрытием в USD; 0 при недообеспечении.

    Examples:
        >>> max_redeemable_usd(150, 100)
        50
        >>> max_redeemable_usd(80, 100)
        0
    """
    require_uint(collateral_value_usd, "collateral_value_usd")
    require_uint(liability_value_usd, "liability_value_usd")
    return saturating_sub(collateral_value_usd, liability_value_usd)


def max_redeemable_btd(
    collateral_value_usd: int, liability_value_usd: int, reference_price: int
) -> int:
    """
    Избыток залога, выраженный в единицах основного стейблкоина (floor).

    Raises:
        InvalidPriceError: Если reference_price == 0
    """
    _require_price(reference_price, "reference_price")

    surplus = max_redeemable_usd(collateral_value_usd, liability_value_usd)
    return mul_div(surplus, PRECISION_18, reference_price)
