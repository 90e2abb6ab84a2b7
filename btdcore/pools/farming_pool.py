"""FarmingPool: эмиссия BRS по пулам и расчёт позиций

update_farm:
1. Эмиссия пула за период по alloc points
2. Ограничение оставшимся лимитом max_supply
3. Доли фондов по fund_shares_pct, остаток стейкерам
4. Стейкерская часть → accumulator-per-share

При нулевом стейке accumulator не меняется, стейкерская часть
возвращается как undistributed: вызывающий переносит её вперёд.
"""

import logging

from btdcore.core.domain.pools import (
    FarmUpdateInputs,
    FarmUpdateOutputs,
    PositionSettlement,
)
from btdcore.core.errors import InvalidInputError
from btdcore.core.math.fixed_point import checked_uint256
from btdcore.core.math.interest_math import pending_reward
from btdcore.core.math.reward_math import (
    acc_reward_per_share,
    clamp_to_max,
    emission_for,
    reward_debt,
    split_emission,
)

logger = logging.getLogger(__name__)


def update_farm(inputs: FarmUpdateInputs) -> FarmUpdateOutputs:
    """
    Обновление фарм-пула за период [last_reward_ts, now].

    Raises:
        InvalidInputError: Если now < last_reward_ts
        ArithmeticOverflowError: Если accumulator или minted_after вне uint256
    """
    if inputs.now < inputs.last_reward_ts:
        raise InvalidInputError(
            f"now {inputs.now} is before last_reward_ts {inputs.last_reward_ts}"
        )

    duration = inputs.now - inputs.last_reward_ts
    proposed = emission_for(
        duration,
        inputs.reward_per_second,
        inputs.alloc_points,
        inputs.total_alloc_points,
    )
    reward = clamp_to_max(inputs.already_minted, proposed, inputs.max_supply)
    if reward < proposed:
        logger.info(
            "Farm emission clamped by max supply: proposed=%d reward=%d",
            proposed,
            reward,
        )

    minted_after = checked_uint256(inputs.already_minted + reward, "minted_after")
    split = split_emission(reward, inputs.fund_shares_pct)

    undistributed = 0
    if inputs.total_staked == 0:
        undistributed = split.staker_amount

    acc = acc_reward_per_share(
        inputs.acc_reward_per_share, split.staker_amount, inputs.total_staked
    )

    logger.debug(
        "Farm update: duration=%ds reward=%d staker=%d undistributed=%d acc=%d",
        duration,
        reward,
        split.staker_amount,
        undistributed,
        acc,
    )

    return FarmUpdateOutputs(
        reward=reward,
        fund_amounts=split.fund_amounts,
        staker_reward=split.staker_amount,
        undistributed=undistributed,
        acc_reward_per_share=acc,
        last_reward_ts=inputs.now,
        minted_after=minted_after,
    )


def settle_position(
    staked_amount: int, acc_per_share: int, current_reward_debt: int
) -> PositionSettlement:
    """Награда к выплате и новый reward debt позиции."""
    return PositionSettlement(
        pending=pending_reward(staked_amount, acc_per_share, current_reward_debt),
        reward_debt=reward_debt(staked_amount, acc_per_share),
    )
