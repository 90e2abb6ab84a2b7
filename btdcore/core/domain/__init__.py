"""
Domain models and value objects.

Immutable input/output structs of every state transition, the asset
registry and governance parameters.
"""

from btdcore.core.domain.assets import (
    ASSET_DECIMALS,
    Asset,
    AssetClass,
    decimals_of,
)
from btdcore.core.domain.oracle import OracleReading
from btdcore.core.domain.fees import FeeSplit, WithdrawalSplit
from btdcore.core.domain.params import (
    DEFAULT_FUND_SHARES_PCT,
    MAX_FEE_BPS,
    MIN_BTB_PRICE_FLOOR,
    ProtocolParams,
)
from btdcore.core.domain.mint import MintInputs, MintOutputs
from btdcore.core.domain.redeem import (
    BTBRedeemInputs,
    BTBRedeemOutputs,
    RedeemInputs,
    RedeemOutputs,
)
from btdcore.core.domain.pools import (
    FarmUpdateInputs,
    FarmUpdateOutputs,
    InterestAccrualInputs,
    InterestAccrualOutputs,
    PositionSettlement,
)

__all__ = [
    # Assets
    "ASSET_DECIMALS",
    "Asset",
    "AssetClass",
    "decimals_of",
    # Oracle
    "OracleReading",
    # Splits
    "FeeSplit",
    "WithdrawalSplit",
    # Params
    "DEFAULT_FUND_SHARES_PCT",
    "MAX_FEE_BPS",
    "MIN_BTB_PRICE_FLOOR",
    "ProtocolParams",
    # Mint / redeem
    "MintInputs",
    "MintOutputs",
    "RedeemInputs",
    "RedeemOutputs",
    "BTBRedeemInputs",
    "BTBRedeemOutputs",
    # Pools
    "FarmUpdateInputs",
    "FarmUpdateOutputs",
    "InterestAccrualInputs",
    "InterestAccrualOutputs",
    "PositionSettlement",
]
