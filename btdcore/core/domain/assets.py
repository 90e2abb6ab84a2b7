"""
Assets — реестр активов протокола и их native decimals

Единственный источник истины о decimals каждого токена. Любая конверсия
native ↔ canonical по идентификатору актива идёт через этот реестр.
"""

from enum import Enum
from typing import Final

from btdcore.core.errors import UnsupportedAssetError


# =============================================================================
# ENUMS
# =============================================================================


class Asset(str, Enum):
    """Токены, с которыми работает ядро."""

    WBTC = "WBTC"  # залог
    USDC = "USDC"
    USDT = "USDT"
    BTD = "BTD"  # основной стейблкоин (senior)
    BTB = "BTB"  # облигационный токен (junior), компенсация A
    BRS = "BRS"  # governance/reward токен, компенсация B


class AssetClass(str, Enum):
    """Класс актива для кривой процентной ставки."""

    SENIOR = "senior"  # BTD
    JUNIOR = "junior"  # BTB


# =============================================================================
# DECIMALS
# =============================================================================

ASSET_DECIMALS: Final[dict[Asset, int]] = {
    Asset.WBTC: 8,
    Asset.USDC: 6,
    Asset.USDT: 6,
    Asset.BTD: 18,
    Asset.BTB: 18,
    Asset.BRS: 18,
}


def decimals_of(asset: Asset | str) -> int:
    """
    Native decimals актива.

    Args:
        asset: Asset или его строковый идентификатор ('WBTC', 'USDC', ...)

    Returns:
        Количество знаков после запятой в native представлении

    Raises:
        UnsupportedAssetError: Если идентификатор неизвестен
    """
    try:
        key = Asset(asset)
    except ValueError:
        raise UnsupportedAssetError(f"Unsupported asset: {asset!r}") from None

    return ASSET_DECIMALS[key]
