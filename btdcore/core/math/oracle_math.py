"""
OracleMath — чтение и нормализация ценовых фидов

Модуль превращает сырые ответы оракулов в Price (18 знаков):
- Чтение ответа фида с проверкой знака и staleness
- Рескейлинг decimals фида в canonical шкалу
- Инверсия цены (A/B → B/A)
- Композиция цен (WBTC/BTC × BTC/USD → WBTC/USD)
- Spot цена из резервов пула
- TWAP из накопленных (cumulative) цен пула, UQ112x112
- Тест отклонения двух цен в basis points

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Цена 0 никогда не возвращается (InvalidPriceError)
2. Отклонение против нуля не определено → False, а не исключение
3. Деления — floor, кроме отклонения (ceil); порядок a*b/c сохранён
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from btdcore.core.domain.oracle import OracleReading
from btdcore.core.errors import (
    InsufficientSourcesError,
    InvalidInputError,
    InvalidPriceError,
    StalePriceError,
)
from btdcore.core.math.fixed_point import (
    BPS_BASE,
    MAX_UINT256,
    PRECISION_18,
    mul_div,
    mul_div_up,
    require_uint,
)
from btdcore.core.math.token_precision import to_canonical, validate_decimals

if TYPE_CHECKING:
    from btdcore.core.domain.params import ProtocolParams

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Модуль арифметики накопленных цен (uint256 wrap-around в пуле)
CUMULATIVE_MODULUS: Final[int] = MAX_UINT256 + 1

# Дробная часть UQ112x112
Q112: Final[int] = 2**112

# Минимальный период TWAP по умолчанию (30 минут)
DEFAULT_TWAP_PERIOD_SECONDS: Final[int] = 30 * 60

# Максимальный возраст ответа фида по умолчанию (1 час)
DEFAULT_MAX_AGE_SECONDS: Final[int] = 60 * 60

# Допустимое расхождение источников по умолчанию (1%)
DEFAULT_MAX_DEVIATION_BPS: Final[int] = 100


# =============================================================================
# ЧТЕНИЕ ФИДА
# =============================================================================


def read_and_scale(raw_answer: int, feed_decimals: int) -> int:
    """
    Нормализация сырого ответа фида в Price (18 знаков).

    Args:
        raw_answer: Ответ фида (int256 в терминах фида)
        feed_decimals: Decimals фида

    Returns:
        Цена в canonical шкале (> 0)

    Raises:
        InvalidPriceError: Если raw_answer <= 0 или после рескейлинга цена = 0
        InvalidInputError: Если decimals не поддерживаются

    Examples:
        >>> read_and_scale(50_000 * 10**8, 8)
        50000000000000000000000
    """
    if isinstance(raw_answer, bool) or not isinstance(raw_answer, int):
        raise InvalidInputError(
            f"raw_answer must be an integer, got {type(raw_answer).__name__}"
        )

    if raw_answer <= 0:
        raise InvalidPriceError(f"Oracle answer must be positive, got {raw_answer}")

    price = to_canonical(raw_answer, feed_decimals)

    if price == 0:
        raise InvalidPriceError(
            f"Oracle answer {raw_answer} with {feed_decimals} decimals "
            f"rounds to zero at 18 decimals"
        )

    return price


def read_feed(reading: OracleReading, now: int, max_age_seconds: int) -> int:
    """
    Чтение ответа фида с проверкой staleness.

    Время — всегда явный вход: ядро не читает часы.

    Args:
        reading: Сырой ответ фида
        now: Текущее время (UTC, секунды)
        max_age_seconds: Максимально допустимый возраст ответа

    Returns:
        Цена в canonical шкале

    Raises:
        StalePriceError: Если updated_at == 0, из будущего или старше max_age
        InvalidPriceError: Если ответ неположительный
    """
    require_uint(now, "now")
    require_uint(max_age_seconds, "max_age_seconds")

    if reading.updated_at == 0:
        raise StalePriceError("Oracle reading has never been updated")

    if reading.updated_at > now:
        raise StalePriceError(
            f"Oracle reading timestamp {reading.updated_at} is in the future "
            f"(now={now})"
        )

    age = now - reading.updated_at
    if age > max_age_seconds:
        raise StalePriceError(
            f"Oracle reading is stale: age {age}s > max {max_age_seconds}s"
        )

    return read_and_scale(reading.answer, reading.decimals)


# =============================================================================
# ПРЕОБРАЗОВАНИЯ ЦЕН
# =============================================================================


def inverse_price(price: int) -> int:
    """
    Инверсия цены: 1 / price в 18-знаковой шкале.

    Examples:
        >>> inverse_price(2 * 10**18)
        500000000000000000
    """
    require_uint(price, "price")
    if price == 0:
        raise InvalidPriceError("Cannot invert a zero price")

    return mul_div(PRECISION_18, PRECISION_18, price)


def compose_prices(a_in_b: int, b_in_c: int) -> int:
    """
    Композиция цен: (A в B) × (B в C) → A в C.

    Пример: WBTC/BTC × BTC/USD → WBTC/USD.

    Raises:
        InvalidPriceError: Если одна из цен = 0 или результат = 0
    """
    require_uint(a_in_b, "a_in_b")
    require_uint(b_in_c, "b_in_c")
    if a_in_b == 0 or b_in_c == 0:
        raise InvalidPriceError("Cannot compose with a zero price")

    price = mul_div(a_in_b, b_in_c, PRECISION_18)
    if price == 0:
        raise InvalidPriceError("Composed price rounds to zero")
    return price


def spot_price_from_reserves(
    reserve_a: int,
    reserve_b: int,
    decimals_a: int,
    decimals_b: int,
) -> int:
    """
    Spot цена B, выраженная в A, из резервов пула.

    Оба резерва сначала нормализуются в canonical шкалу, затем делятся:
        price = norm(reserve_a) * 1e18 / norm(reserve_b)

    Args:
        reserve_a: Резерв токена A (native)
        reserve_b: Резерв токена B (native)
        decimals_a: Decimals токена A
        decimals_b: Decimals токена B

    Returns:
        Цена одной единицы B в единицах A (18 знаков)

    Raises:
        InvalidPriceError: Если любой резерв нормализуется в 0

    Examples:
        >>> # 100 WBTC / 5M USDC → 1 WBTC = 50_000 USDC
        >>> spot_price_from_reserves(5_000_000 * 10**6, 100 * 10**8, 6, 8)
        50000000000000000000000
    """
    norm_a = to_canonical(reserve_a, decimals_a)
    norm_b = to_canonical(reserve_b, decimals_b)

    if norm_a == 0 or norm_b == 0:
        raise InvalidPriceError(
            f"Pool reserve normalizes to zero (a={norm_a}, b={norm_b})"
        )

    return mul_div(norm_a, PRECISION_18, norm_b)


# =============================================================================
# TWAP
# =============================================================================


def twap_from_cumulatives(
    cumulative_start: int,
    cumulative_end: int,
    elapsed_seconds: int,
    decimals0: int,
    decimals1: int,
) -> int:
    """
    TWAP цены token0 в token1 из накопленных цен пула (UQ112x112).

    Накопленная цена в пуле переполняется by design, поэтому разность
    берётся по модулю 2**256.

    ФОРМУЛА:
        avg_q112 = ((cum_end - cum_start) mod 2^256) / elapsed
        raw      = avg_q112 * 1e18 / 2^112         (в raw единицах резервов)
        price    = raw * 10^decimals0 / 10^decimals1

    Args:
        cumulative_start: price0CumulativeLast на старом наблюдении
        cumulative_end: price0Cumulative сейчас
        elapsed_seconds: Время между наблюдениями
        decimals0: Decimals token0
        decimals1: Decimals token1

    Returns:
        Цена token0 в token1 (18 знаков)

    Raises:
        InsufficientSourcesError: Если elapsed_seconds == 0 (нет окна)
        InvalidPriceError: Если TWAP = 0
    """
    require_uint(cumulative_start, "cumulative_start")
    require_uint(cumulative_end, "cumulative_end")
    require_uint(elapsed_seconds, "elapsed_seconds")
    validate_decimals(decimals0, "decimals0")
    validate_decimals(decimals1, "decimals1")

    if elapsed_seconds == 0:
        raise InsufficientSourcesError("TWAP window is empty (elapsed_seconds == 0)")

    delta = (cumulative_end - cumulative_start) % CUMULATIVE_MODULUS
    average_q112 = delta // elapsed_seconds

    price = mul_div(average_q112 * PRECISION_18, 10**decimals0, Q112 * 10**decimals1)
    if price == 0:
        raise InvalidPriceError("TWAP price rounds to zero")

    return price


def is_twap_ready(
    elapsed_seconds: int, period_seconds: int = DEFAULT_TWAP_PERIOD_SECONDS
) -> bool:
    """TWAP готов, если между наблюдениями прошло не меньше period_seconds."""
    return elapsed_seconds >= period_seconds > 0


# =============================================================================
# ОТКЛОНЕНИЕ
# =============================================================================


def deviation_bps(a: int, b: int) -> int:
    """
    Отклонение |a - b| относительно среднего (a + b) / 2, в bps (ceil).

    Знаменатель — точное среднее: |a-b| * 2 * BPS_BASE / (a + b),
    без промежуточного округления среднего. Округление вверх: дробное
    превышение допуска не проходит проверку deviation_within.

    Examples:
        >>> deviation_bps(1_000_000, 1_010_100)   # 100.49 bps
        101

    Raises:
        InvalidPriceError: Если a == 0 или b == 0
    """
    require_uint(a, "a")
    require_uint(b, "b")
    if a == 0 or b == 0:
        raise InvalidPriceError("Deviation against a zero price is undefined")

    return mul_div_up(abs(a - b), 2 * BPS_BASE, a + b)


def deviation_within(a: int, b: int, max_bps: int) -> bool:
    """
    Проверка, что a и b отличаются не более чем на max_bps.

    Returns:
        True если deviation_bps(a, b) <= max_bps.
        False если любая из цен = 0 (отношение к нулю не определено).

    Examples:
        >>> deviation_within(100, 101, 100)
        True
        >>> deviation_within(100, 0, 100)
        False
    """
    require_uint(max_bps, "max_bps")
    if a == 0 or b == 0:
        return False

    return deviation_bps(a, b) <= max_bps


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class OracleConfig:
    """Параметры чтения оракулов, задаваемые governance."""

    max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS
    twap_period_seconds: int = DEFAULT_TWAP_PERIOD_SECONDS
    max_deviation_bps: int = DEFAULT_MAX_DEVIATION_BPS

    @classmethod
    def from_params(cls, params: "ProtocolParams") -> "OracleConfig":
        return cls(
            max_age_seconds=params.oracle_max_age_seconds,
            twap_period_seconds=params.twap_period_seconds,
            max_deviation_bps=params.max_deviation_bps,
        )

    def read(self, reading: OracleReading, now: int) -> int:
        """read_feed с max_age_seconds из конфига."""
        return read_feed(reading, now, self.max_age_seconds)

    def twap_ready(self, elapsed_seconds: int) -> bool:
        return is_twap_ready(elapsed_seconds, self.twap_period_seconds)

    def within_tolerance(self, a: int, b: int) -> bool:
        return deviation_within(a, b, self.max_deviation_bps)
