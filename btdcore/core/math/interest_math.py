"""
InterestMath — начисление процентов, комиссии и разделение вывода

ФОРМУЛЫ:
    interest_per_share_delta = rate_bps * elapsed * 1e18 / (BPS_BASE * SECONDS_PER_YEAR)
    accrued_interest         = principal * delta / 1e18
    pending_reward           = max(0, staked * acc_per_share / 1e12 - reward_debt)
    fee_amount               = amount * fee_bps / BPS_BASE          (<= amount)

split_withdrawal делит вывод на проценты и тело пропорционально
requested / total_available; остаток округления уходит в тело, чтобы
проценты никогда не были начислены сверх положенного.
"""

from btdcore.core.domain.fees import FeeSplit, WithdrawalSplit
from btdcore.core.errors import InvalidInputError
from btdcore.core.math.fixed_point import (
    ACC_PRECISION,
    BPS_BASE,
    PRECISION_18,
    SECONDS_PER_YEAR,
    mul_div,
    require_uint,
    saturating_sub,
    validate_bps,
)


def interest_per_share_delta(annual_rate_bps: int, seconds_elapsed: int) -> int:
    """
    Прирост процентов на единицу вклада за период (18 знаков).

    Raises:
        InvalidInputError: Если annual_rate_bps > BPS_BASE

    Examples:
        >>> interest_per_share_delta(1_000, SECONDS_PER_YEAR)   # 10% за год
        100000000000000000
        >>> interest_per_share_delta(0, 3600)
        0
    """
    validate_bps(annual_rate_bps, "annual_rate_bps")
    require_uint(seconds_elapsed, "seconds_elapsed")

    return mul_div(
        annual_rate_bps * seconds_elapsed, PRECISION_18, BPS_BASE * SECONDS_PER_YEAR
    )


def accrued_interest(principal: int, delta_per_share: int) -> int:
    """Проценты на сумму principal за период с приростом delta_per_share."""
    require_uint(principal, "principal")
    require_uint(delta_per_share, "delta_per_share")
    return mul_div(principal, delta_per_share, PRECISION_18)


def pending_reward(staked_amount: int, acc_per_share: int, reward_debt: int) -> int:
    """
    Невыплаченная награда по позиции (MasterChef).

    Никогда не отрицательна: при reward_debt > накопленного — 0.
    """
    require_uint(staked_amount, "staked_amount")
    require_uint(acc_per_share, "acc_per_share")
    require_uint(reward_debt, "reward_debt")

    accumulated = mul_div(staked_amount, acc_per_share, ACC_PRECISION)
    return saturating_sub(accumulated, reward_debt)


def fee_amount(amount: int, fee_bps: int) -> int:
    """
    Комиссия floor(amount * fee_bps / BPS_BASE).

    Raises:
        InvalidInputError: Если fee_bps > BPS_BASE

    Examples:
        >>> fee_amount(50_000 * 10**18, 50)
        250000000000000000000
    """
    require_uint(amount, "amount")
    validate_bps(fee_bps, "fee_bps")
    return mul_div(amount, fee_bps, BPS_BASE)


def split_fee(gross: int, fee_bps: int) -> FeeSplit:
    """Разделение gross на fee и net: net + fee == gross."""
    fee = fee_amount(gross, fee_bps)
    return FeeSplit(gross=gross, fee=fee, net=gross - fee)


def split_withdrawal(
    requested_amount: int, pending_interest: int, total_available: int
) -> WithdrawalSplit:
    """
    Разделение вывода на проценты и тело.

    Args:
        requested_amount: Запрошенная к выводу сумма
        pending_interest: Накопленные проценты в составе total_available
        total_available: Тело + проценты, доступные к выводу

    Returns:
        WithdrawalSplit(requested, interest, principal)

    Raises:
        InvalidInputError: Если requested или pending больше total_available
    """
    require_uint(requested_amount, "requested_amount")
    require_uint(pending_interest, "pending_interest")
    require_uint(total_available, "total_available")

    if requested_amount > total_available:
        raise InvalidInputError(
            f"requested_amount {requested_amount} exceeds total_available {total_available}"
        )
    if pending_interest > total_available:
        raise InvalidInputError(
            f"pending_interest {pending_interest} exceeds total_available {total_available}"
        )

    if total_available == 0:
        return WithdrawalSplit(requested=0, interest=0, principal=0)

    interest = mul_div(requested_amount, pending_interest, total_available)
    return WithdrawalSplit(
        requested=requested_amount,
        interest=interest,
        principal=requested_amount - interest,
    )
