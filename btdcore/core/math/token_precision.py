"""
TokenPrecision — конверсия native decimals ↔ canonical (18 знаков)

Единственный допустимый способ нормализации количеств токенов с разными
decimals (WBTC=8, USDC=6, BTD=18) в общую 18-знаковую шкалу.

ЗАПРЕЩЕНО смешивать native и canonical количества в одной формуле без
явного конвертера из этого модуля.

ПРАВИЛА:
    d < 18:  canonical = native * 10^(18-d)        (точно)
    d > 18:  canonical = native // 10^(d-18)       (floor)
    d == 18: canonical = native                    (identity)

Для d <= 18 путь native → canonical → native всегда без потерь.
"""

from typing import Final

from btdcore.core.domain.assets import Asset, decimals_of
from btdcore.core.errors import InvalidInputError
from btdcore.core.math.fixed_point import checked_uint256, require_uint

# Каноническое число знаков
CANONICAL_DECIMALS: Final[int] = 18

# Максимальные поддерживаемые native decimals
MAX_SUPPORTED_DECIMALS: Final[int] = 36


def validate_decimals(decimals: int, name: str = "decimals") -> int:
    """
    Проверка, что decimals поддерживаются.

    Raises:
        InvalidInputError: Если decimals не int или вне [0, MAX_SUPPORTED_DECIMALS]
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise InvalidInputError(f"{name} must be an integer, got {decimals!r}")
    if decimals < 0 or decimals > MAX_SUPPORTED_DECIMALS:
        raise InvalidInputError(
            f"Unsupported {name}: {decimals} "
            f"(must be in [0, {MAX_SUPPORTED_DECIMALS}])"
        )
    return decimals


def to_canonical(amount_native: int, native_decimals: int) -> int:
    """
    Конверсия: native количество → canonical (18 знаков).

    Args:
        amount_native: Количество в native decimals токена
        native_decimals: Decimals токена

    Returns:
        Количество в canonical шкале

    Examples:
        >>> to_canonical(1 * 10**8, 8)   # 1 WBTC
        1000000000000000000
        >>> to_canonical(1_500_000, 6)   # 1.5 USDC
        1500000000000000000
    """
    require_uint(amount_native, "amount_native")
    validate_decimals(native_decimals, "native_decimals")

    if native_decimals < CANONICAL_DECIMALS:
        scale = 10 ** (CANONICAL_DECIMALS - native_decimals)
        return checked_uint256(amount_native * scale, "amount_canonical")

    if native_decimals > CANONICAL_DECIMALS:
        return amount_native // 10 ** (native_decimals - CANONICAL_DECIMALS)

    return amount_native


def from_canonical(amount_canonical: int, native_decimals: int) -> int:
    """
    Конверсия: canonical (18 знаков) → native количество.

    Для d < 18 округление вниз: пыль ниже наименьшей native единицы
    остаётся в протоколе.

    Args:
        amount_canonical: Количество в canonical шкале
        native_decimals: Decimals токена

    Returns:
        Количество в native decimals

    Examples:
        >>> from_canonical(10**18, 8)
        100000000
        >>> from_canonical(10**10 + 1, 8)
        1
    """
    require_uint(amount_canonical, "amount_canonical")
    validate_decimals(native_decimals, "native_decimals")

    if native_decimals < CANONICAL_DECIMALS:
        return amount_canonical // 10 ** (CANONICAL_DECIMALS - native_decimals)

    if native_decimals > CANONICAL_DECIMALS:
        scale = 10 ** (native_decimals - CANONICAL_DECIMALS)
        return checked_uint256(amount_canonical * scale, "amount_native")

    return amount_canonical


def to_canonical_for(asset: Asset | str, amount_native: int) -> int:
    """
    Нормализация количества по идентификатору актива.

    Raises:
        UnsupportedAssetError: Если актив неизвестен
    """
    return to_canonical(amount_native, decimals_of(asset))


def from_canonical_for(asset: Asset | str, amount_canonical: int) -> int:
    """
    Денормализация количества по идентификатору актива.

    Raises:
        UnsupportedAssetError: Если актив неизвестен
    """
    return from_canonical(amount_canonical, decimals_of(asset))
