"""
JSON Schema Contract Validators

Валидация данных, которые поставляют внешние коллабораторы (governance,
оракулы), против формальных JSON Schema контрактов. Использует библиотеку
jsonschema (Draft 2020-12).

Схемы (поставляются вместе с пакетом, contracts/schema/):
- protocol_params.json
- oracle_reading.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

from btdcore.core.domain.oracle import OracleReading
from btdcore.core.domain.params import ProtocolParams


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'protocol_params')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидация данных против одной JSON Schema."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class ProtocolParamsValidator(ContractValidator):
    def __init__(self):
        super().__init__("protocol_params")


class OracleReadingValidator(ContractValidator):
    def __init__(self):
        super().__init__("oracle_reading")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_protocol_params(data: Dict[str, Any]) -> None:
    """Raises jsonschema.ValidationError при несоответствии схеме."""
    ProtocolParamsValidator().validate(data)


def validate_oracle_reading(data: Dict[str, Any]) -> None:
    """Raises jsonschema.ValidationError при несоответствии схеме."""
    OracleReadingValidator().validate(data)


def load_protocol_params(data: Dict[str, Any]) -> ProtocolParams:
    """
    Построение ProtocolParams из сырого dict (например, из JSON governance).

    Сначала проверка схемой (структура и границы), затем Pydantic
    (межполевые инварианты). Отсутствующие поля получают значения по умолчанию.

    Raises:
        jsonschema.ValidationError: Нарушение схемы
        pydantic.ValidationError: Нарушение инвариантов модели
    """
    validate_protocol_params(data)
    return ProtocolParams.model_validate(data)


def load_oracle_reading(data: Dict[str, Any]) -> OracleReading:
    """Построение OracleReading из сырого dict с проверкой схемой."""
    validate_oracle_reading(data)
    return OracleReading.model_validate(data)
