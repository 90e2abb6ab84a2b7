"""
VaultShares — конверсия активов ↔ доли стейкинг-vault (stBTD, stBTB)

ERC-4626 арифметика с виртуальным смещением 1 доля / 1 актив, которое
делает пустой vault корректным (1:1) и гасит атаку инфляцией доли:

    shares = assets * (supply + 1) / (total_assets + 1)
    assets = shares * (total_assets + 1) / (supply + 1)

Округление всегда в пользу vault:
    preview_deposit / preview_redeem  → вниз
    preview_mint    / preview_withdraw → вверх
"""

from enum import Enum

from btdcore.core.math.fixed_point import mul_div, mul_div_up, require_uint

VIRTUAL_OFFSET = 1


class Rounding(str, Enum):
    """Направление округления."""

    DOWN = "down"
    UP = "up"


def _mul_div(a: int, b: int, denominator: int, rounding: Rounding) -> int:
    if rounding is Rounding.UP:
        return mul_div_up(a, b, denominator)
    return mul_div(a, b, denominator)


def convert_to_shares(
    assets: int, total_supply: int, total_assets: int, rounding: Rounding = Rounding.DOWN
) -> int:
    """Доли за assets при текущем состоянии vault."""
    require_uint(assets, "assets")
    require_uint(total_supply, "total_supply")
    require_uint(total_assets, "total_assets")
    return _mul_div(
        assets, total_supply + VIRTUAL_OFFSET, total_assets + VIRTUAL_OFFSET, rounding
    )


def convert_to_assets(
    shares: int, total_supply: int, total_assets: int, rounding: Rounding = Rounding.DOWN
) -> int:
    """Активы за shares при текущем состоянии vault."""
    require_uint(shares, "shares")
    require_uint(total_supply, "total_supply")
    require_uint(total_assets, "total_assets")
    return _mul_div(
        shares, total_assets + VIRTUAL_OFFSET, total_supply + VIRTUAL_OFFSET, rounding
    )


def preview_deposit(assets: int, total_supply: int, total_assets: int) -> int:
    return convert_to_shares(assets, total_supply, total_assets, Rounding.DOWN)


def preview_mint(shares: int, total_supply: int, total_assets: int) -> int:
    return convert_to_assets(shares, total_supply, total_assets, Rounding.UP)


def preview_withdraw(assets: int, total_supply: int, total_assets: int) -> int:
    return convert_to_shares(assets, total_supply, total_assets, Rounding.UP)


def preview_redeem(shares: int, total_supply: int, total_assets: int) -> int:
    return convert_to_assets(shares, total_supply, total_assets, Rounding.DOWN)
