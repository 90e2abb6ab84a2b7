"""
Contract Validation Module

Валидация JSON контрактов коллабораторов ядра.
"""

from .validators import (
    ContractValidator,
    OracleReadingValidator,
    ProtocolParamsValidator,
    SchemaLoader,
    load_oracle_reading,
    load_protocol_params,
    validate_oracle_reading,
    validate_protocol_params,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ProtocolParamsValidator",
    "OracleReadingValidator",
    # Functions
    "validate_protocol_params",
    "validate_oracle_reading",
    "load_protocol_params",
    "load_oracle_reading",
]
