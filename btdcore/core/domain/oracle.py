"""
OracleReading — сырой ответ ценового фида

Immutable Pydantic модель ответа оракула в том виде, в котором его
поставляет внешний фид: (answer, decimals, updated_at).
Совместима с JSON Schema (contracts/schema/oracle_reading.json).
"""

from pydantic import BaseModel, Field


class OracleReading(BaseModel):
    """
    Сырой ответ фида (Chainlink-стиль).

    answer может быть отрицательным: валидность ответа проверяется
    при чтении (read_feed), а не при конструировании, чтобы невалидный
    ответ фида можно было залогировать и отклонить явно.
    """

    answer: int = Field(..., description="Сырой ответ фида в его decimals")
    decimals: int = Field(..., ge=0, le=36, description="Decimals фида")
    updated_at: int = Field(
        ..., ge=0, description="Timestamp последнего обновления (UTC, секунды)"
    )

    model_config = {"frozen": True, "strict": True}
