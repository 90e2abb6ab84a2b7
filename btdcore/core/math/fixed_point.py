"""
FixedPoint — Integer Fixed-Point Primitives

Модуль обеспечивает численную корректность всех операций ядра:
- Валидация целочисленных входов (uint256 домен, без float)
- mul_div с вычислением произведения на неограниченной разрядности
  и последующим сужением до uint256 с проверкой
- Округление вниз/вверх с явным выбором направления
- Валидация basis points
- Целочисленный корень n-й степени

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит (InvalidInputError до деления)
2. Float никогда не принимается (InvalidInputError)
3. Результат, не помещающийся в uint256, отклоняется (ArithmeticOverflowError)
4. Порядок a*b/c сохраняется (умножение до деления)
5. Все операции детерминированы и воспроизводимы
"""

from typing import Final

from btdcore.core.errors import ArithmeticOverflowError, InvalidInputError

# =============================================================================
# КОНСТАНТЫ ШКАЛЫ
# =============================================================================

# Каноническая шкала: 18 знаков (1e18 = 1.0)
PRECISION_18: Final[int] = 10**18

# Basis points: 10_000 = 100%
BPS_BASE: Final[int] = 10_000

# Точность accumulator-per-share для наград (MasterChef-стиль)
ACC_PRECISION: Final[int] = 10**12

# Секунд в году (365 дней)
SECONDS_PER_YEAR: Final[int] = 365 * 24 * 3600

# Верхняя граница uint256
MAX_UINT256: Final[int] = 2**256 - 1


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def require_uint(value: int, name: str) -> int:
    """
    Валидация беззнакового целого в домене uint256.

    bool и float отклоняются явно: bool является подклассом int, а float
    нарушает требование точной воспроизводимости.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        InvalidInputError: Если value не int, отрицательное или > MAX_UINT256
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(
            f"{name} must be an integer, got {type(value).__name__}"
        )

    if value < 0:
        raise InvalidInputError(f"{name} must be non-negative, got {value}")

    if value > MAX_UINT256:
        raise InvalidInputError(f"{name} exceeds uint256 range")

    return value


def require_positive(value: int, name: str) -> int:
    """
    Валидация строго положительного uint256.

    Raises:
        InvalidInputError: Если value == 0 или не проходит require_uint
    """
    require_uint(value, name)
    if value == 0:
        raise InvalidInputError(f"{name} must be positive, got 0")
    return value


def validate_bps(value: int, name: str) -> int:
    """
    Валидация ставки/комиссии в basis points.

    Args:
        value: Значение в bps
        name: Имя параметра

    Returns:
        value без изменений

    Raises:
        InvalidInputError: Если value вне [0, BPS_BASE]
    """
    require_uint(value, name)
    if value > BPS_BASE:
        raise InvalidInputError(
            f"{name} must be <= {BPS_BASE} bps (100%), got {value}"
        )
    return value


def checked_uint256(value: int, name: str = "result") -> int:
    """
    Сужение результата широкого вычисления до uint256.

    Args:
        value: Результат вычисления
        name: Имя величины (для сообщения)

    Returns:
        value если 0 <= value <= MAX_UINT256

    Raises:
        ArithmeticOverflowError: Если value не помещается в uint256
    """
    if value < 0 or value > MAX_UINT256:
        raise ArithmeticOverflowError(f"{name} does not fit in uint256")
    return value


# =============================================================================
# MUL-DIV
# =============================================================================


def mul_div(a: int, b: int, denominator: int) -> int:
    """
    floor(a * b / denominator).

    Произведение считается без ограничения разрядности, затем результат
    сужается до uint256. Эквивалент Solidity mulDiv.

    Args:
        a: Первый множитель
        b: Второй множитель
        denominator: Делитель (> 0)

    Returns:
        Округлённое вниз частное

    Raises:
        InvalidInputError: Если denominator == 0
        ArithmeticOverflowError: Если результат > MAX_UINT256

    Examples:
        >>> mul_div(3, 5, 2)
        7
        >>> mul_div(10**18, 50_000 * 10**18, 10**18)
        50000000000000000000000
    """
    if denominator == 0:
        raise InvalidInputError("mul_div: denominator must be non-zero")

    return checked_uint256(a * b // denominator, "mul_div")


def mul_div_up(a: int, b: int, denominator: int) -> int:
    """
    ceil(a * b / denominator).

    Используется там, где округление вверх защищает протокол
    (например, сколько активов взять с пользователя за долю vault).

    Raises:
        InvalidInputError: Если denominator == 0
        ArithmeticOverflowError: Если результат > MAX_UINT256
    """
    if denominator == 0:
        raise InvalidInputError("mul_div_up: denominator must be non-zero")

    product = a * b
    result = product // denominator
    if product % denominator != 0:
        result += 1
    return checked_uint256(result, "mul_div_up")


def div_up(a: int, b: int) -> int:
    """ceil(a / b) для неотрицательных a и положительного b."""
    return mul_div_up(a, 1, b)


# =============================================================================
# УТИЛИТЫ
# =============================================================================


def clamp(value: int, min_value: int, max_value: int) -> int:
    """
    Ограничение значения диапазоном [min_value, max_value].

    Examples:
        >>> clamp(5, 0, 10)
        5
        >>> clamp(-1, 0, 10)
        0
        >>> clamp(15, 0, 10)
        10
    """
    if min_value > max_value:
        raise InvalidInputError(
            f"clamp: min_value {min_value} > max_value {max_value}"
        )
    return max(min_value, min(value, max_value))


def saturating_sub(a: int, b: int) -> int:
    """max(0, a - b): вычитание без ухода в отрицательную область."""
    return a - b if a > b else 0


def integer_root(value: int, n: int) -> int:
    """
    floor(value ** (1/n)) в целых числах (метод Ньютона).

    Args:
        value: Неотрицательное подкоренное значение
        n: Степень корня (>= 1)

    Returns:
        Наибольшее r такое, что r**n <= value

    Examples:
        >>> integer_root(27, 3)
        3
        >>> integer_root(28, 3)
        3
        >>> integer_root(10**216, 12)
        1000000000000000000
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError("integer_root: value must be a non-negative int")
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise InvalidInputError(f"integer_root: n must be a positive int, got {n}")

    if value < 2 or n == 1:
        return value

    # Стартуем сверху: 2**ceil(bits/n) >= корня
    x = 1 << ((value.bit_length() + n - 1) // n)
    while True:
        y = ((n - 1) * x + value // x ** (n - 1)) // n
        if y >= x:
            return x
        x = y
