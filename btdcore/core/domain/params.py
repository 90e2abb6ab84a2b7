"""
ProtocolParams — параметры governance

Immutable Pydantic модель с границами, которые governance не может
нарушить. Ядро не читает глобальную конфигурацию: вызывающий передаёт
ProtocolParams (или производные конфиги) явно в каждый вызов.

Совместима с JSON Schema (contracts/schema/protocol_params.json).
"""

from typing import Final

from pydantic import BaseModel, Field, field_validator

from btdcore.core.math.fixed_point import BPS_BASE, PRECISION_18

# =============================================================================
# ГРАНИЦЫ
# =============================================================================

# Максимальная комиссия mint/redeem: 10%
MAX_FEE_BPS: Final[int] = 1_000

# Минимальный floor цены BTB: 0.1 BTD
MIN_BTB_PRICE_FLOOR: Final[int] = PRECISION_18 // 10

# Доли фондов фарминга по умолчанию (проценты)
DEFAULT_FUND_SHARES_PCT: Final[tuple[int, ...]] = (20, 10, 10)


class ProtocolParams(BaseModel):
    """
    Параметры протокола.

    Все ставки и комиссии в basis points, цены и суммы в 18 знаках.
    """

    # Комиссии
    mint_fee_bps: int = Field(default=50, ge=0, le=MAX_FEE_BPS)
    redeem_fee_bps: int = Field(default=50, ge=0, le=MAX_FEE_BPS)
    interest_fee_bps: int = Field(
        default=1_000, ge=0, le=BPS_BASE, description="Доля процентов в казну"
    )

    # Компенсация при недообеспечении
    min_btb_price: int = Field(
        default=PRECISION_18 // 2,
        ge=MIN_BTB_PRICE_FLOOR,
        description="Floor цены BTB в единицах BTD (18 знаков)",
    )

    # Ставки: min_rate_bps <= default_rate_bps <= max_btd_rate_bps <= max_btb_rate_bps
    min_rate_bps: int = Field(
        default=200, ge=0, le=BPS_BASE, description="Ставка при CR >= 150%"
    )
    default_rate_bps: int = Field(
        default=500, ge=0, le=BPS_BASE, description="Ставка при CR = 100%"
    )
    max_btd_rate_bps: int = Field(default=1_000, ge=0, le=BPS_BASE)
    max_btb_rate_bps: int = Field(default=2_000, ge=0, le=BPS_BASE)

    # Оракулы
    max_deviation_bps: int = Field(default=100, ge=0, le=BPS_BASE)
    oracle_max_age_seconds: int = Field(default=3_600, gt=0)
    twap_period_seconds: int = Field(default=1_800, gt=0)

    # Пыль: порог >= BPS_BASE, тогда fee == 0 только при fee_bps == 0
    min_mint_amount: int = Field(default=10**15, ge=BPS_BASE)
    min_redeem_amount: int = Field(default=10**15, ge=BPS_BASE)

    # Фарминг
    fund_shares_pct: tuple[int, ...] = Field(
        default=DEFAULT_FUND_SHARES_PCT,
        strict=False,
        description="Доли фондов в эмиссии фарминга (проценты)",
    )

    model_config = {"frozen": True, "strict": True}

    @field_validator("default_rate_bps")
    @classmethod
    def validate_default_rate(cls, v: int, info) -> int:
        """Базовая ставка не ниже минимальной."""
        if "min_rate_bps" in info.data and v < info.data["min_rate_bps"]:
            raise ValueError(
                f"default_rate_bps {v} must be >= min_rate_bps {info.data['min_rate_bps']}"
            )
        return v

    @field_validator("max_btd_rate_bps")
    @classmethod
    def validate_senior_cap(cls, v: int, info) -> int:
        """Потолок senior ставки выше минимальной и не ниже базовой."""
        if "min_rate_bps" in info.data and v <= info.data["min_rate_bps"]:
            raise ValueError(
                f"max_btd_rate_bps {v} must be > min_rate_bps {info.data['min_rate_bps']}"
            )
        if "default_rate_bps" in info.data and v < info.data["default_rate_bps"]:
            raise ValueError(
                f"max_btd_rate_bps {v} must be >= default_rate_bps "
                f"{info.data['default_rate_bps']}"
            )
        return v

    @field_validator("max_btb_rate_bps")
    @classmethod
    def validate_junior_cap(cls, v: int, info) -> int:
        """Потолок junior ставки не ниже senior."""
        if "max_btd_rate_bps" in info.data:
            senior = info.data["max_btd_rate_bps"]
            if v < senior:
                raise ValueError(
                    f"max_btb_rate_bps {v} must be >= max_btd_rate_bps {senior}"
                )
        return v

    @field_validator("fund_shares_pct")
    @classmethod
    def validate_fund_shares(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Каждая доля >= 0, сумма <= 100%."""
        if any(pct < 0 for pct in v):
            raise ValueError(f"fund_shares_pct must be non-negative, got {v}")
        if sum(v) > 100:
            raise ValueError(f"fund_shares_pct sum {sum(v)} exceeds 100%")
        return v
