"""InterestPool: начисление процентов стейкерам BTD/BTB

    delta     = rate_bps * elapsed * 1e18 / (BPS_BASE * SECONDS_PER_YEAR)
    gross     = total_staked * delta / 1e18
    fee       = gross * interest_fee_bps / BPS_BASE
    acc_new   = acc + net * 1e12 / total_staked

Время не может идти назад, ставка и комиссия не выше BPS_BASE.
При нулевом стейке начисление пропускается, timestamp сдвигается.
"""

import logging

from btdcore.core.domain.pools import InterestAccrualInputs, InterestAccrualOutputs
from btdcore.core.errors import InvalidInputError
from btdcore.core.math.fixed_point import validate_bps
from btdcore.core.math.interest_math import (
    accrued_interest,
    interest_per_share_delta,
    split_fee,
)
from btdcore.core.math.reward_math import acc_reward_per_share

logger = logging.getLogger(__name__)


def accrue_interest(inputs: InterestAccrualInputs) -> InterestAccrualOutputs:
    """
    Начисление процентов пула за период [last_accrual_ts, now].

    Raises:
        InvalidInputError: Если now < last_accrual_ts
            или ставка/комиссия выше BPS_BASE
    """
    validate_bps(inputs.annual_rate_bps, "annual_rate_bps")
    validate_bps(inputs.interest_fee_bps, "interest_fee_bps")
    if inputs.now < inputs.last_accrual_ts:
        raise InvalidInputError(
            f"now {inputs.now} is before last_accrual_ts {inputs.last_accrual_ts}"
        )

    elapsed = inputs.now - inputs.last_accrual_ts

    if inputs.total_staked == 0 or elapsed == 0:
        return InterestAccrualOutputs(
            gross_interest=0,
            fee=0,
            net_interest=0,
            acc_interest_per_share=inputs.acc_interest_per_share,
            last_accrual_ts=inputs.now,
        )

    delta = interest_per_share_delta(inputs.annual_rate_bps, elapsed)
    gross = accrued_interest(inputs.total_staked, delta)
    split = split_fee(gross, inputs.interest_fee_bps)

    acc = acc_reward_per_share(
        inputs.acc_interest_per_share, split.net, inputs.total_staked
    )

    logger.debug(
        "Interest accrued: elapsed=%ds gross=%d fee=%d acc=%d",
        elapsed,
        split.gross,
        split.fee,
        acc,
    )

    return InterestAccrualOutputs(
        gross_interest=split.gross,
        fee=split.fee,
        net_interest=split.net,
        acc_interest_per_share=acc,
        last_accrual_ts=inputs.now,
    )
