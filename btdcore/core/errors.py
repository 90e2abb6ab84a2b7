"""
Errors — таксономия ошибок вычислительного ядра

Все ошибки локальные, синхронные и терминальные для вызова: функция либо
возвращает полный результат, либо бросает исключение и ничего не меняет.

Иерархия построена от ValueError, чтобы вызывающий код, который уже
обрабатывает ValueError, продолжал работать без изменений.
"""


class ProtocolMathError(ValueError):
    """Базовое исключение ядра."""

    pass


# =============================================================================
# INVALID INPUT
# =============================================================================


class InvalidInputError(ProtocolMathError):
    """
    Некорректный вход: отрицательное/нецелое значение, неподдерживаемые
    decimals, комиссия выше 100%, несогласованные суммы.
    """

    pass


class UnsupportedAssetError(InvalidInputError):
    """Неизвестный идентификатор актива (нет записи о decimals)."""

    pass


class InvalidCPIError(InvalidInputError):
    """Некорректное значение CPI (previousCPI == 0 и т.п.)."""

    pass


class ArithmeticOverflowError(ProtocolMathError):
    """
    Результат не помещается в uint256.

    Переполнение не детектируется постфактум: промежуточные произведения
    считаются без ограничения разрядности, а результат сужается с проверкой.
    Если сужение невозможно — вызов отклоняется (fail closed).
    """

    pass


# =============================================================================
# PRICES
# =============================================================================


class InvalidPriceError(ProtocolMathError):
    """Нулевая цена или неположительный ответ оракула."""

    pass


class StalePriceError(InvalidPriceError):
    """Ответ оракула устарел (или имеет timestamp из будущего)."""

    pass


class InsufficientSourcesError(ProtocolMathError):
    """Недостаточно источников цены для агрегации (нужно >= 2)."""

    pass


class ExcessiveDeviationError(ProtocolMathError):
    """Источники цены расходятся сильнее допустимого порога."""

    pass


class InvalidSecondaryPriceError(ProtocolMathError):
    """Компенсационный актив не имеет цены, когда компенсация нужна."""

    pass


# =============================================================================
# BUSINESS RULES
# =============================================================================


class BelowMinimumAmountError(ProtocolMathError):
    """Сумма mint/redeem ниже протокольного минимума (dust)."""

    pass


class ExceedsRedeemableError(ProtocolMathError):
    """Запрошенный BTB redeem превышает surplus над 100% обеспечения."""

    pass
