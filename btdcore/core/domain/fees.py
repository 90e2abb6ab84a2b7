"""
Fee и withdrawal splits — результаты разделения сумм

Immutable модели, которые проверяют собственные инварианты сохранения
при конструировании:
    FeeSplit:         net + fee == gross, fee <= gross
    WithdrawalSplit:  interest + principal == requested
"""

from pydantic import BaseModel, Field, field_validator


class FeeSplit(BaseModel):
    """Разделение суммы на комиссию и чистую часть."""

    gross: int = Field(..., ge=0, description="Сумма до комиссии")
    fee: int = Field(..., ge=0, description="Комиссия")
    net: int = Field(..., ge=0, description="Сумма после комиссии")

    model_config = {"frozen": True, "strict": True}

    @field_validator("net")
    @classmethod
    def validate_conservation(cls, v: int, info) -> int:
        """net + fee == gross"""
        if "gross" in info.data and "fee" in info.data:
            gross = info.data["gross"]
            fee = info.data["fee"]
            if v + fee != gross:
                raise ValueError(f"net {v} + fee {fee} must equal gross {gross}")
        return v


class WithdrawalSplit(BaseModel):
    """Разделение выводимой суммы на проценты и тело вклада."""

    requested: int = Field(..., ge=0)
    interest: int = Field(..., ge=0, description="Доля накопленных процентов")
    principal: int = Field(..., ge=0, description="Доля тела вклада")

    model_config = {"frozen": True, "strict": True}

    @field_validator("principal")
    @classmethod
    def validate_conservation(cls, v: int, info) -> int:
        """interest + principal == requested"""
        if "requested" in info.data and "interest" in info.data:
            requested = info.data["requested"]
            interest = info.data["interest"]
            if v + interest != requested:
                raise ValueError(
                    f"interest {interest} + principal {v} must equal requested {requested}"
                )
        return v
