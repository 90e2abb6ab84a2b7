"""
RedeemInputs / RedeemOutputs — погашение BTD и BTB

Выход погашения BTD хранит распределение в USD по трём инструментам
(залог, BTB, BRS) и количества токенов, полученные из USD долей округлением
вниз. Сумма USD долей в точности равна net_usd.
"""

from pydantic import BaseModel, Field, field_validator

from btdcore.core.math.fixed_point import PRECISION_18


# =============================================================================
# BTD → WBTC (+ BTB/BRS)
# =============================================================================


class RedeemInputs(BaseModel):
    """Вход одного погашения BTD."""

    btd_amount: int = Field(..., ge=0, description="Погашаемые BTD (18 знаков)")
    collateral_price: int = Field(..., ge=0, description="Цена WBTC в USD")
    collateral_decimals: int = Field(default=8, ge=0, le=36)
    reference_price: int = Field(
        default=PRECISION_18, ge=0, description="Номинал BTD в USD (iUSD)"
    )
    cr: int = Field(..., ge=0, description="Текущий collateral ratio (18 знаков)")
    btd_price: int = Field(
        default=PRECISION_18, ge=0, description="Рыночная цена BTD в USD"
    )
    btb_price: int = Field(default=0, ge=0, description="Рыночная цена BTB в USD")
    brs_price: int = Field(default=0, ge=0, description="Рыночная цена BRS в USD")
    min_btb_price: int | None = Field(
        default=None,
        ge=0,
        description="Floor цены BTB в единицах BTD (18 знаков), None: из конфига",
    )
    fee_bps: int | None = Field(
        default=None, ge=0, description="None: комиссия из RedeemLogicConfig"
    )

    model_config = {"frozen": True, "strict": True}


class RedeemOutputs(BaseModel):
    """
    Результат погашения BTD.

    Инварианты:
        net_btd + fee == btd_amount
        collateral_usd + btb_usd + brs_usd == net_usd
    """

    btd_amount: int = Field(..., ge=0)
    fee: int = Field(..., ge=0)
    net_btd: int = Field(..., ge=0)
    net_usd: int = Field(..., ge=0, description="USD стоимость net_btd")

    collateral_usd: int = Field(..., ge=0)
    btb_usd: int = Field(..., ge=0)
    brs_usd: int = Field(..., ge=0)

    collateral_out: int = Field(..., ge=0, description="WBTC в native decimals")
    btb_out: int = Field(..., ge=0)
    brs_out: int = Field(..., ge=0)

    model_config = {"frozen": True, "strict": True}

    @field_validator("net_btd")
    @classmethod
    def validate_fee_conservation(cls, v: int, info) -> int:
        """net_btd + fee == btd_amount"""
        if "btd_amount" in info.data and "fee" in info.data:
            if v + info.data["fee"] != info.data["btd_amount"]:
                raise ValueError(
                    f"net_btd {v} + fee {info.data['fee']} "
                    f"must equal btd_amount {info.data['btd_amount']}"
                )
        return v

    @field_validator("brs_usd")
    @classmethod
    def validate_usd_partition(cls, v: int, info) -> int:
        """collateral_usd + btb_usd + brs_usd == net_usd"""
        keys = ("net_usd", "collateral_usd", "btb_usd")
        if all(key in info.data for key in keys):
            total = info.data["collateral_usd"] + info.data["btb_usd"] + v
            if total != info.data["net_usd"]:
                raise ValueError(
                    f"USD parts sum to {total}, expected net_usd {info.data['net_usd']}"
                )
        return v

    @property
    def is_compensated(self) -> bool:
        """Выплачена ли компенсация BTB/BRS."""
        return self.btb_usd > 0 or self.brs_usd > 0


# =============================================================================
# BTB → BTD
# =============================================================================


class BTBRedeemInputs(BaseModel):
    """Вход погашения BTB из избытка залога."""

    btb_amount: int = Field(..., ge=0)
    cr: int = Field(..., ge=0)
    collateral_value_usd: int = Field(..., ge=0)
    liability_value_usd: int = Field(..., ge=0)
    reference_price: int = Field(default=PRECISION_18, ge=0)

    model_config = {"frozen": True, "strict": True}


class BTBRedeemOutputs(BaseModel):
    """Результат погашения BTB: 1:1 в BTD."""

    btb_amount: int = Field(..., ge=0)
    btd_out: int = Field(..., ge=0)
    max_redeemable_btd: int = Field(..., ge=0)

    model_config = {"frozen": True, "strict": True}

    @field_validator("max_redeemable_btd")
    @classmethod
    def validate_within_surplus(cls, v: int, info) -> int:
        """btd_out <= max_redeemable_btd"""
        if "btd_out" in info.data and info.data["btd_out"] > v:
            raise ValueError(
                f"btd_out {info.data['btd_out']} exceeds max_redeemable_btd {v}"
            )
        return v
