"""Minter — эмиссия и погашение BTD/BTB"""

from btdcore.minter.mint_logic import MintLogic, MintLogicConfig
from btdcore.minter.redeem_logic import BTBRedeemLogic, RedeemLogic, RedeemLogicConfig

__all__ = [
    "MintLogic",
    "MintLogicConfig",
    "RedeemLogic",
    "RedeemLogicConfig",
    "BTBRedeemLogic",
]
