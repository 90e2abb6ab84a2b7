"""
MintInputs / MintOutputs — вход и выход эмиссии BTD под залог WBTC
"""

from pydantic import BaseModel, Field, field_validator

from btdcore.core.math.fixed_point import PRECISION_18


class MintInputs(BaseModel):
    """
    Вход одной эмиссии.

    Нули и выход за границы здесь не отклоняются: их проверяет MintLogic
    и поднимает типизированные ошибки ядра.
    """

    collateral_amount: int = Field(..., ge=0, description="Залог в native decimals")
    collateral_decimals: int = Field(default=8, ge=0, le=36)
    collateral_price: int = Field(..., ge=0, description="Цена залога в USD (18 знаков)")
    reference_price: int = Field(
        default=PRECISION_18, ge=0, description="Цена BTD в USD (iUSD, 18 знаков)"
    )
    current_supply: int = Field(default=0, ge=0, description="Текущая эмиссия BTD")
    fee_bps: int | None = Field(
        default=None, ge=0, description="None: комиссия из MintLogicConfig"
    )

    model_config = {"frozen": True, "strict": True}


class MintOutputs(BaseModel):
    """Результат эмиссии: net_issuance + fee == gross_issuance."""

    collateral_canonical: int = Field(..., ge=0, description="Залог в 18 знаках")
    gross_issuance: int = Field(..., ge=0)
    fee: int = Field(..., ge=0)
    net_issuance: int = Field(..., ge=0, description="BTD к выпуску пользователю")
    supply_after: int = Field(..., ge=0)

    model_config = {"frozen": True, "strict": True}

    @field_validator("net_issuance")
    @classmethod
    def validate_fee_conservation(cls, v: int, info) -> int:
        """net_issuance + fee == gross_issuance"""
        if "gross_issuance" in info.data and "fee" in info.data:
            gross = info.data["gross_issuance"]
            fee = info.data["fee"]
            if v + fee != gross:
                raise ValueError(
                    f"net_issuance {v} + fee {fee} must equal gross_issuance {gross}"
                )
        return v
