"""
Pool state transitions — вход и выход начисления в InterestPool и FarmingPool

Состояние (accumulator, timestamp) хранит вызывающий: на вход подаётся
текущее, на выходе возвращается новое для сохранения.
"""

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# INTEREST POOL
# =============================================================================


class InterestAccrualInputs(BaseModel):
    """Вход начисления процентов пула."""

    total_staked: int = Field(..., ge=0)
    acc_interest_per_share: int = Field(..., ge=0, description="Шкала 1e12")
    last_accrual_ts: int = Field(..., ge=0)
    now: int = Field(..., ge=0)
    annual_rate_bps: int = Field(..., ge=0)
    interest_fee_bps: int = Field(default=0, ge=0)

    model_config = {"frozen": True, "strict": True}


class InterestAccrualOutputs(BaseModel):
    """Результат начисления: net_interest + fee == gross_interest."""

    gross_interest: int = Field(..., ge=0)
    fee: int = Field(..., ge=0)
    net_interest: int = Field(..., ge=0)
    acc_interest_per_share: int = Field(..., ge=0)
    last_accrual_ts: int = Field(..., ge=0)

    model_config = {"frozen": True, "strict": True}

    @field_validator("net_interest")
    @classmethod
    def validate_fee_conservation(cls, v: int, info) -> int:
        """net_interest + fee == gross_interest"""
        if "gross_interest" in info.data and "fee" in info.data:
            if v + info.data["fee"] != info.data["gross_interest"]:
                raise ValueError("net_interest + fee must equal gross_interest")
        return v


# =============================================================================
# FARMING POOL
# =============================================================================


class FarmUpdateInputs(BaseModel):
    """Вход обновления фарм-пула."""

    total_staked: int = Field(..., ge=0)
    acc_reward_per_share: int = Field(..., ge=0, description="Шкала 1e12")
    last_reward_ts: int = Field(..., ge=0)
    now: int = Field(..., ge=0)
    reward_per_second: int = Field(..., ge=0)
    alloc_points: int = Field(..., ge=0)
    total_alloc_points: int = Field(..., ge=0)
    already_minted: int = Field(default=0, ge=0)
    max_supply: int = Field(..., ge=0)
    fund_shares_pct: tuple[int, ...] = Field(default=(), strict=False)

    model_config = {"frozen": True, "strict": True}


class FarmUpdateOutputs(BaseModel):
    """
    Результат обновления фарм-пула.

    sum(fund_amounts) + staker_reward == reward
    undistributed > 0 только при нулевом стейке (переносится вызывающим)
    """

    reward: int = Field(..., ge=0, description="Эмиссия за период после лимита")
    fund_amounts: tuple[int, ...] = Field(default=(), strict=False)
    staker_reward: int = Field(..., ge=0)
    undistributed: int = Field(default=0, ge=0)
    acc_reward_per_share: int = Field(..., ge=0)
    last_reward_ts: int = Field(..., ge=0)
    minted_after: int = Field(..., ge=0)

    model_config = {"frozen": True, "strict": True}

    @field_validator("staker_reward")
    @classmethod
    def validate_split(cls, v: int, info) -> int:
        """sum(fund_amounts) + staker_reward == reward"""
        if "reward" in info.data and "fund_amounts" in info.data:
            if sum(info.data["fund_amounts"]) + v != info.data["reward"]:
                raise ValueError("fund_amounts + staker_reward must equal reward")
        return v


class PositionSettlement(BaseModel):
    """Расчёт позиции: награда к выплате и новый reward debt."""

    pending: int = Field(..., ge=0)
    reward_debt: int = Field(..., ge=0)

    model_config = {"frozen": True, "strict": True}
