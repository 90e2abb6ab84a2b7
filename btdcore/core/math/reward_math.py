"""
RewardMath — эмиссия и accumulator-per-share для стейкинга

    emission_for       = rate_per_second * duration * alloc / total_alloc
    clamp_to_max       = min(proposed, max_supply - already_minted)
    acc_reward_per_share = current + reward * 1e12 / total_staked

Accumulator монотонно не убывает при неотрицательных наградах. При нулевом
стейке accumulator не меняется: вызывающий переносит награду вперёд сам.
"""

from collections.abc import Sequence
from typing import NamedTuple

from btdcore.core.errors import InvalidInputError
from btdcore.core.math.fixed_point import (
    ACC_PRECISION,
    checked_uint256,
    mul_div,
    require_uint,
    saturating_sub,
)

# Доли фондов задаются в процентах
PERCENT_BASE = 100


class EmissionSplit(NamedTuple):
    """Разделение эмиссии между фондами и стейкерами."""

    fund_amounts: tuple[int, ...]
    staker_amount: int


def emission_for(
    duration: int, rate_per_second: int, alloc_points: int, total_alloc_points: int
) -> int:
    """
    Эмиссия пула за период, пропорционально его alloc points.

    Returns:
        0 если total_alloc_points == 0; иначе <= rate_per_second * duration

    Raises:
        InvalidInputError: Если alloc_points > total_alloc_points
    """
    require_uint(duration, "duration")
    require_uint(rate_per_second, "rate_per_second")
    require_uint(alloc_points, "alloc_points")
    require_uint(total_alloc_points, "total_alloc_points")

    if total_alloc_points == 0:
        return 0
    if alloc_points > total_alloc_points:
        raise InvalidInputError(
            f"alloc_points {alloc_points} exceeds total_alloc_points {total_alloc_points}"
        )

    return mul_div(rate_per_second * duration, alloc_points, total_alloc_points)


def clamp_to_max(already_minted: int, proposed_reward: int, max_supply: int) -> int:
    """
    Ограничение награды оставшимся лимитом эмиссии.

    Examples:
        >>> clamp_to_max(90, 20, 100)
        10
        >>> clamp_to_max(100, 20, 100)
        0
    """
    require_uint(already_minted, "already_minted")
    require_uint(proposed_reward, "proposed_reward")
    require_uint(max_supply, "max_supply")
    return min(proposed_reward, saturating_sub(max_supply, already_minted))


def acc_reward_per_share(current: int, reward: int, total_staked: int) -> int:
    """
    Новый accumulator-per-share (шкала 1e12).

    При total_staked == 0 возвращает current без изменений.

    Raises:
        ArithmeticOverflowError: Если новый accumulator не помещается в uint256
    """
    require_uint(current, "current")
    require_uint(reward, "reward")
    require_uint(total_staked, "total_staked")

    if total_staked == 0:
        return current

    return checked_uint256(
        current + mul_div(reward, ACC_PRECISION, total_staked), "acc_reward_per_share"
    )


def reward_debt(staked_amount: int, acc_per_share: int) -> int:
    """Снимок reward debt: staked * acc / 1e12."""
    require_uint(staked_amount, "staked_amount")
    require_uint(acc_per_share, "acc_per_share")
    return mul_div(staked_amount, acc_per_share, ACC_PRECISION)


def split_emission(reward: int, fund_shares_pct: Sequence[int]) -> EmissionSplit:
    """
    Разделение эмиссии: фонды по процентам, остаток стейкерам.

    Остаток округления достаётся стейкерам: сумма частей равна reward.

    Raises:
        InvalidInputError: Если сумма долей фондов > 100%
    """
    require_uint(reward, "reward")
    for i, pct in enumerate(fund_shares_pct):
        require_uint(pct, f"fund_shares_pct[{i}]")

    total_pct = sum(fund_shares_pct)
    if total_pct > PERCENT_BASE:
        raise InvalidInputError(f"fund shares sum to {total_pct}% (max {PERCENT_BASE}%)")

    fund_amounts = tuple(mul_div(reward, pct, PERCENT_BASE) for pct in fund_shares_pct)
    return EmissionSplit(
        fund_amounts=fund_amounts, staker_amount=reward - sum(fund_amounts)
    )
