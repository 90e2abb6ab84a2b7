"""RedeemLogic: погашение BTD в WBTC с компенсацией при недообеспечении

Водопад выплаты (в USD):
1. net_btd = btd_amount - fee;  net_usd = net_btd * reference_price / 1e18
2. CR >= 100%: весь net_usd выплачивается залогом (WBTC)
3. CR <  100%: залогом выплачивается net_usd * CR, недостача покрывается
   a) BTB, если цена BTB не ниже floor (min_btb_price в BTD, пересчитанный в USD);
      выпуск BTB может быть ограничен max_compensation_a
   b) остаток (или вся недостача, если BTB ниже floor) — BRS

Водопад строгий: BTB исчерпывается первым, пропорционального смешивания нет.

BTBRedeemLogic: погашение BTB 1:1 в BTD из избытка залога при CR >= 100%.
"""

import logging
from dataclasses import dataclass

from btdcore.core.domain.params import ProtocolParams
from btdcore.core.domain.redeem import (
    BTBRedeemInputs,
    BTBRedeemOutputs,
    RedeemInputs,
    RedeemOutputs,
)
from btdcore.core.errors import (
    BelowMinimumAmountError,
    ExceedsRedeemableError,
    InvalidInputError,
    InvalidPriceError,
    InvalidSecondaryPriceError,
)
from btdcore.core.math.collateral_math import CR_ONE, max_redeemable_btd
from btdcore.core.math.fixed_point import (
    BPS_BASE,
    PRECISION_18,
    mul_div,
    validate_bps,
)
from btdcore.core.math.interest_math import split_fee
from btdcore.core.math.token_precision import from_canonical

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class RedeemLogicConfig:
    """Конфигурация погашения.

    fee_bps и min_btb_price используются, если в RedeemInputs они не заданы.
    min_redeem_amount — порог пыли для net_btd, не ниже BPS_BASE.
    """

    fee_bps: int = 50
    min_btb_price: int = PRECISION_18 // 2
    min_redeem_amount: int = 10**15
    max_compensation_a: int | None = None  # лимит выпуска BTB за одно погашение

    def __post_init__(self):
        validate_bps(self.fee_bps, "fee_bps")
        if self.min_redeem_amount < BPS_BASE:
            raise InvalidInputError(
                f"min_redeem_amount must be >= {BPS_BASE}, got {self.min_redeem_amount}"
            )

    @classmethod
    def from_params(
        cls, params: ProtocolParams, max_compensation_a: int | None = None
    ) -> "RedeemLogicConfig":
        return cls(
            fee_bps=params.redeem_fee_bps,
            min_btb_price=params.min_btb_price,
            min_redeem_amount=params.min_redeem_amount,
            max_compensation_a=max_compensation_a,
        )


@dataclass(frozen=True)
class _Compensation:
    btb_usd: int = 0
    btb_out: int = 0
    brs_usd: int = 0
    brs_out: int = 0


# =============================================================================
# BTD REDEEM
# =============================================================================


class RedeemLogic:
    """Расчёт погашения BTD.

    Порядок проверок:
    1. Комиссия вне [0, BPS_BASE] → InvalidInputError
    2. net_btd ниже порога пыли → BelowMinimumAmountError (как net_issuance при эмиссии)
    3. Нулевые цены → InvalidPriceError
    4. Недостача без оценки BTB/BRS → InvalidSecondaryPriceError
    """

    def __init__(self, config: RedeemLogicConfig | None = None):
        self.config = config or RedeemLogicConfig()

    def evaluate(self, inputs: RedeemInputs) -> RedeemOutputs:
        """Расчёт погашения.

        Raises:
            BelowMinimumAmountError: net_btd ниже порога пыли
            InvalidPriceError: нулевая цена залога или reference_price
            InvalidSecondaryPriceError: нужна компенсация, но её нельзя оценить
        """
        fee_bps = self.config.fee_bps if inputs.fee_bps is None else inputs.fee_bps
        split = split_fee(inputs.btd_amount, fee_bps)

        if split.net < self.config.min_redeem_amount:
            logger.warning(
                "Redeem rejected: net amount %d below minimum %d",
                split.net,
                self.config.min_redeem_amount,
            )
            raise BelowMinimumAmountError(
                f"net redeem amount {split.net} below minimum "
                f"{self.config.min_redeem_amount}"
            )
        if inputs.collateral_price == 0:
            raise InvalidPriceError("collateral_price must be positive")
        if inputs.reference_price == 0:
            raise InvalidPriceError("reference_price must be positive")

        net_usd = mul_div(split.net, inputs.reference_price, PRECISION_18)

        if inputs.cr >= CR_ONE:
            collateral_usd = net_usd
        else:
            collateral_usd = mul_div(net_usd, inputs.cr, PRECISION_18)

        shortfall = net_usd - collateral_usd
        compensation = self._compensate(shortfall, inputs) if shortfall else _Compensation()

        collateral_canonical = mul_div(collateral_usd, PRECISION_18, inputs.collateral_price)
        collateral_out = from_canonical(collateral_canonical, inputs.collateral_decimals)

        logger.debug(
            "Redeem: cr=%d net_usd=%d collateral_usd=%d btb_usd=%d brs_usd=%d",
            inputs.cr,
            net_usd,
            collateral_usd,
            compensation.btb_usd,
            compensation.brs_usd,
        )

        return RedeemOutputs(
            btd_amount=split.gross,
            fee=split.fee,
            net_btd=split.net,
            net_usd=net_usd,
            collateral_usd=collateral_usd,
            btb_usd=compensation.btb_usd,
            brs_usd=compensation.brs_usd,
            collateral_out=collateral_out,
            btb_out=compensation.btb_out,
            brs_out=compensation.brs_out,
        )

    def _compensate(self, shortfall: int, inputs: RedeemInputs) -> _Compensation:
        """Покрытие недостачи: сначала BTB, остаток BRS."""
        if inputs.btd_price == 0:
            logger.warning("Redeem rejected: BTD price unavailable for BTB floor")
            raise InvalidSecondaryPriceError("btd_price required to evaluate BTB floor")

        min_btb_price = (
            self.config.min_btb_price
            if inputs.min_btb_price is None
            else inputs.min_btb_price
        )
        floor_usd = mul_div(min_btb_price, inputs.btd_price, PRECISION_18)

        btb_usd = 0
        btb_out = 0
        if inputs.btb_price > 0 and inputs.btb_price >= floor_usd:
            btb_out = mul_div(shortfall, PRECISION_18, inputs.btb_price)
            cap = self.config.max_compensation_a
            if cap is not None and btb_out > cap:
                btb_out = cap
                btb_usd = mul_div(cap, inputs.btb_price, PRECISION_18)
            else:
                btb_usd = shortfall

        brs_usd = shortfall - btb_usd
        brs_out = 0
        if brs_usd > 0:
            if inputs.brs_price == 0:
                logger.warning(
                    "Redeem rejected: BRS unpriced, shortfall %d uncovered", brs_usd
                )
                raise InvalidSecondaryPriceError(
                    f"brs_price required to cover shortfall of {brs_usd} USD"
                )
            brs_out = mul_div(brs_usd, PRECISION_18, inputs.brs_price)

        return _Compensation(
            btb_usd=btb_usd, btb_out=btb_out, brs_usd=brs_usd, brs_out=brs_out
        )


# =============================================================================
# BTB REDEEM
# =============================================================================


class BTBRedeemLogic:
    """Погашение BTB 1:1 в BTD из избытка залога над 100% покрытием."""

    def evaluate(self, inputs: BTBRedeemInputs) -> BTBRedeemOutputs:
        """Raises InvalidInputError при CR < 100%, ExceedsRedeemableError сверх избытка."""
        if inputs.btb_amount == 0:
            raise InvalidInputError("btb_amount must be positive")
        if inputs.cr < CR_ONE:
            logger.warning("BTB redeem rejected: system undercollateralized (cr=%d)", inputs.cr)
            raise InvalidInputError(
                f"BTB redemption requires cr >= 1e18, got {inputs.cr}"
            )

        limit = max_redeemable_btd(
            inputs.collateral_value_usd,
            inputs.liability_value_usd,
            inputs.reference_price,
        )
        if inputs.btb_amount > limit:
            logger.warning(
                "BTB redeem rejected: amount %d exceeds surplus %d",
                inputs.btb_amount,
                limit,
            )
            raise ExceedsRedeemableError(
                f"btb_amount {inputs.btb_amount} exceeds redeemable {limit}"
            )

        return BTBRedeemOutputs(
            btb_amount=inputs.btb_amount,
            btd_out=inputs.btb_amount,
            max_redeemable_btd=limit,
        )
