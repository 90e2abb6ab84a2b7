"""MintLogic: эмиссия BTD под залог WBTC

Один переход состояния:
    gross = norm(collateral_amount) * collateral_price / reference_price
    fee   = gross * fee_bps / BPS_BASE
    net   = gross - fee

reference_price — номинал BTD в USD (iUSD): при инфляции выше тренда он
растёт и эмиссия на тот же залог уменьшается. Без коррекции = 1e18.

Эмиссия линейна по залогу: удвоение collateral_amount удваивает net
с точностью до округления.
"""

import logging
from dataclasses import dataclass

from btdcore.core.domain.mint import MintInputs, MintOutputs
from btdcore.core.domain.params import ProtocolParams
from btdcore.core.errors import (
    BelowMinimumAmountError,
    InvalidInputError,
    InvalidPriceError,
)
from btdcore.core.math.fixed_point import (
    BPS_BASE,
    checked_uint256,
    mul_div,
    validate_bps,
)
from btdcore.core.math.interest_math import split_fee
from btdcore.core.math.token_precision import to_canonical

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class MintLogicConfig:
    """Конфигурация эмиссии.

    fee_bps — комиссия по умолчанию, если MintInputs.fee_bps не задан.
    min_net_issuance — порог пыли, не ниже BPS_BASE: тогда любая
    ненулевая комиссия в bps даёт ненулевой fee.
    """

    fee_bps: int = 50
    min_net_issuance: int = 10**15

    def __post_init__(self):
        validate_bps(self.fee_bps, "fee_bps")
        if self.min_net_issuance < BPS_BASE:
            raise InvalidInputError(
                f"min_net_issuance must be >= {BPS_BASE}, got {self.min_net_issuance}"
            )

    @classmethod
    def from_params(cls, params: ProtocolParams) -> "MintLogicConfig":
        return cls(
            fee_bps=params.mint_fee_bps,
            min_net_issuance=params.min_mint_amount,
        )


# =============================================================================
# MINT LOGIC
# =============================================================================


class MintLogic:
    """Расчёт эмиссии BTD.

    Порядок проверок:
    1. Нулевой залог → InvalidInputError
    2. Нулевые цены → InvalidPriceError
    3. Комиссия вне [0, BPS_BASE] → InvalidInputError
    4. net ниже порога пыли → BelowMinimumAmountError
    """

    def __init__(self, config: MintLogicConfig | None = None):
        self.config = config or MintLogicConfig()

    def evaluate(self, inputs: MintInputs) -> MintOutputs:
        """Расчёт эмиссии.

        Args:
            inputs: вход эмиссии

        Returns:
            MintOutputs с gross/fee/net и supply после эмиссии
        """
        if inputs.collateral_amount == 0:
            raise InvalidInputError("collateral_amount must be positive")
        if inputs.collateral_price == 0:
            raise InvalidPriceError("collateral_price must be positive")
        if inputs.reference_price == 0:
            raise InvalidPriceError("reference_price must be positive")

        collateral_canonical = to_canonical(
            inputs.collateral_amount, inputs.collateral_decimals
        )
        gross = mul_div(
            collateral_canonical, inputs.collateral_price, inputs.reference_price
        )
        fee_bps = self.config.fee_bps if inputs.fee_bps is None else inputs.fee_bps
        split = split_fee(gross, fee_bps)

        if split.net < self.config.min_net_issuance:
            logger.warning(
                "Mint rejected: net issuance %d below minimum %d",
                split.net,
                self.config.min_net_issuance,
            )
            raise BelowMinimumAmountError(
                f"net issuance {split.net} below minimum {self.config.min_net_issuance}"
            )

        supply_after = checked_uint256(inputs.current_supply + split.net, "supply_after")

        logger.debug(
            "Mint: collateral=%d gross=%d fee=%d net=%d supply_after=%d",
            collateral_canonical,
            split.gross,
            split.fee,
            split.net,
            supply_after,
        )

        return MintOutputs(
            collateral_canonical=collateral_canonical,
            gross_issuance=split.gross,
            fee=split.fee,
            net_issuance=split.net,
            supply_after=supply_after,
        )
