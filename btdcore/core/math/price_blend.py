"""
PriceBlend — агрегация цены из нескольких источников

Медиана по значению и проверка согласованности источников:
- median3: средний из трёх, не зависит от порядка аргументов
- median: статистическая медиана N значений (чётное N → среднее двух центральных)
- blend_multi_source: медиана + требование, что каждый источник в пределах
  max_deviation_bps от медианы
- validate_all_within_bounds: та же проверка без исключения
- read_blended_price: чтение фидов со staleness и агрегация по OracleConfig

Медиана N >= 2 источников всегда лежит в [min(sources), max(sources)]
и не зависит от порядка источников.
"""

from collections.abc import Sequence

from btdcore.core.domain.oracle import OracleReading
from btdcore.core.errors import (
    ExcessiveDeviationError,
    InsufficientSourcesError,
    InvalidPriceError,
)
from btdcore.core.math.fixed_point import require_uint
from btdcore.core.math.oracle_math import (
    OracleConfig,
    deviation_bps,
    deviation_within,
)

# Минимальное число источников для агрегации
MIN_SOURCES = 2


def median3(a: int, b: int, c: int) -> int:
    """
    Средний по значению из трёх.

    Examples:
        >>> median3(50_000, 50_050, 49_950)
        50000
        >>> median3(7, 7, 1)
        7
    """
    return max(min(a, b), min(max(a, b), c))


def median(prices: Sequence[int]) -> int:
    """
    Статистическая медиана (floor для чётного N).

    Raises:
        InsufficientSourcesError: Если prices пуст
    """
    if not prices:
        raise InsufficientSourcesError("median of an empty sequence")

    ordered = sorted(prices)
    mid = len(ordered) // 2

    if len(ordered) % 2 == 1:
        return ordered[mid]

    # Среднее двух центральных: результат между ними, значит в [min, max]
    return (ordered[mid - 1] + ordered[mid]) // 2


def _validate_sources(prices: Sequence[int]) -> None:
    if len(prices) < MIN_SOURCES:
        raise InsufficientSourcesError(
            f"At least {MIN_SOURCES} price sources required, got {len(prices)}"
        )

    for i, price in enumerate(prices):
        require_uint(price, f"prices[{i}]")
        if price == 0:
            raise InvalidPriceError(f"Price source {i} reported zero")


def blend_multi_source(prices: Sequence[int], max_deviation_bps: int) -> int:
    """
    Агрегированная цена: медиана при согласованных источниках.

    Args:
        prices: Цены источников (18 знаков), >= 2
        max_deviation_bps: Допустимое отклонение каждого источника от медианы

    Returns:
        Медиана источников

    Raises:
        InsufficientSourcesError: Если источников меньше двух
        InvalidPriceError: Если какой-то источник вернул 0
        ExcessiveDeviationError: Если источник отклоняется от медианы
            больше чем на max_deviation_bps
    """
    _validate_sources(prices)
    require_uint(max_deviation_bps, "max_deviation_bps")

    reference = median(prices)

    for i, price in enumerate(prices):
        if not deviation_within(price, reference, max_deviation_bps):
            raise ExcessiveDeviationError(
                f"Price source {i} deviates from median by "
                f"{deviation_bps(price, reference)} bps "
                f"(max {max_deviation_bps} bps)"
            )

    return reference


def validate_all_within_bounds(prices: Sequence[int], max_deviation_bps: int) -> bool:
    """
    Мягкая проверка согласованности источников.

    Returns:
        True если источников >= 2, ни один не равен 0 и каждый в пределах
        max_deviation_bps от медианы; иначе False.
    """
    if len(prices) < MIN_SOURCES or any(price == 0 for price in prices):
        return False

    reference = median(prices)
    return all(
        deviation_within(price, reference, max_deviation_bps) for price in prices
    )


def read_blended_price(
    readings: Sequence[OracleReading], now: int, config: OracleConfig | None = None
) -> int:
    """
    Цена из нескольких фидов: каждый читается с проверкой staleness,
    затем blend_multi_source с допуском config.max_deviation_bps.

    Raises:
        StalePriceError: Если любой фид устарел
        InsufficientSourcesError: Если фидов меньше двух
        ExcessiveDeviationError: Если фиды расходятся сильнее допуска
    """
    config = config or OracleConfig()
    prices = [config.read(reading, now) for reading in readings]
    return blend_multi_source(prices, config.max_deviation_bps)
