"""
SigmoidRate — динамическая процентная ставка от CR и отклонения от пега

Две кусочно-линейные кривые ставки по CR (в basis points):
- SENIOR (BTD): r_min .. r_max_senior (по умолчанию 2% .. 10%)
- JUNIOR (BTB): r_min .. r_max_junior (по умолчанию 2% .. 20%), чувствительность выше

Границы кривой задаёт governance: RateCurveConfig.from_params(params).
Без конфига используются константы модуля.

ОПОРНЫЕ ТОЧКИ:
    CR >= 150%          → r_min
    CR == 100%          → r_default
    CR <= 20%           → r_max класса

МЕЖДУ 100% И 150%:
    rate = r_default - (r_default - r_min) * dCR * k
    dCR  = (CR - 100%) / (150% - 100%)
    k    = 1 для senior, band_junior / band_senior для junior
    (band = r_max - r_min), затем clamp снизу к r_min

МЕЖДУ 20% И 100%:
    rate = r_default + (r_max_class - r_default) * (100% - CR) / (100% - 20%)

Junior кривая при CR < 100% всегда не ниже senior (r_max_junior >= r_max_senior),
при CR >= 100% обе сходятся к r_min.

Второй слой (calculate_x_rate) добавляет реакцию на отклонение рыночной
цены актива от $1 через ограниченную S-образную функцию
softsign(x) = x / (1 + |x|) и итоговый clamp в [r_min, r_max_class].
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from btdcore.core.domain.assets import AssetClass
from btdcore.core.errors import InvalidInputError, InvalidPriceError
from btdcore.core.math.fixed_point import PRECISION_18, clamp, require_uint, validate_bps

if TYPE_CHECKING:
    from btdcore.core.domain.params import ProtocolParams

# =============================================================================
# КОНСТАНТЫ КРИВОЙ
# =============================================================================

CR_UPPER: Final[int] = 15 * PRECISION_18 // 10  # 150%
CR_THRESHOLD: Final[int] = PRECISION_18  # 100%
CR_FLOOR: Final[int] = 2 * PRECISION_18 // 10  # 20%

# Границы по умолчанию
R_MIN: Final[int] = 200  # 2%
R_DEFAULT: Final[int] = 500  # 5%
R_MAX_SENIOR: Final[int] = 1_000  # 10%
R_MAX_JUNIOR: Final[int] = 2_000  # 20%

# Множитель отклонения цены от пега перед softsign
PRICE_SENSITIVITY: Final[dict[AssetClass, int]] = {
    AssetClass.SENIOR: 10,
    AssetClass.JUNIOR: 30,
}

# Цена пега
PEG_PRICE: Final[int] = PRECISION_18


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class RateCurveConfig:
    """Границы кривой ставки в bps.

    r_min < r_max_senior <= r_max_junior, r_default в [r_min, r_max_senior].
    """

    r_min: int = R_MIN
    r_default: int = R_DEFAULT
    r_max_senior: int = R_MAX_SENIOR
    r_max_junior: int = R_MAX_JUNIOR

    def __post_init__(self):
        for name in ("r_min", "r_default", "r_max_senior", "r_max_junior"):
            validate_bps(getattr(self, name), name)
        if not self.r_min < self.r_max_senior <= self.r_max_junior:
            raise InvalidInputError(
                f"rate bounds must satisfy r_min < r_max_senior <= r_max_junior, "
                f"got {self.r_min}, {self.r_max_senior}, {self.r_max_junior}"
            )
        _validate_r_default(self.r_default, self)

    @classmethod
    def from_params(cls, params: "ProtocolParams") -> "RateCurveConfig":
        return cls(
            r_min=params.min_rate_bps,
            r_default=params.default_rate_bps,
            r_max_senior=params.max_btd_rate_bps,
            r_max_junior=params.max_btb_rate_bps,
        )

    def rate(
        self, price: int, cr: int, asset_class: AssetClass = AssetClass.SENIOR
    ) -> int:
        """calculate_x_rate с базовой ставкой r_default из конфига."""
        return calculate_x_rate(price, cr, self.r_default, asset_class, self)


def r_max_for(asset_class: AssetClass, config: RateCurveConfig | None = None) -> int:
    """Верхняя граница ставки для класса актива ('senior' / 'junior')."""
    config = config or DEFAULT_RATE_CURVE
    try:
        asset_class = AssetClass(asset_class)
    except ValueError:
        raise InvalidInputError(f"Unknown asset class: {asset_class!r}") from None

    if asset_class is AssetClass.SENIOR:
        return config.r_max_senior
    return config.r_max_junior


def _validate_r_default(r_default: int, config: RateCurveConfig) -> None:
    require_uint(r_default, "r_default")
    if r_default < config.r_min or r_default > config.r_max_senior:
        raise InvalidInputError(
            f"r_default must be in [{config.r_min}, {config.r_max_senior}] bps, "
            f"got {r_default}"
        )


DEFAULT_RATE_CURVE: Final[RateCurveConfig] = RateCurveConfig()


# =============================================================================
# КРИВАЯ ПО CR
# =============================================================================


def cr_rate(
    cr: int,
    r_default: int,
    asset_class: AssetClass = AssetClass.SENIOR,
    config: RateCurveConfig | None = None,
) -> int:
    """
    Ставка по CR (bps).

    Args:
        cr: Collateral ratio (18 знаков)
        r_default: Базовая ставка при CR = 100% (bps, в [r_min, r_max_senior])
        asset_class: SENIOR или JUNIOR
        config: Границы кривой (по умолчанию DEFAULT_RATE_CURVE)

    Returns:
        Ставка в bps, всегда в [r_min, r_max_class]

    Examples:
        >>> cr_rate(CR_UPPER, 500)
        200
        >>> cr_rate(CR_THRESHOLD, 500)
        500
        >>> cr_rate(CR_FLOOR, 500, AssetClass.JUNIOR)
        2000
    """
    config = config or DEFAULT_RATE_CURVE
    require_uint(cr, "cr")
    _validate_r_default(r_default, config)
    r_min = config.r_min
    r_max = r_max_for(asset_class, config)

    if cr >= CR_UPPER:
        return r_min

    if cr <= CR_FLOOR:
        return r_max

    if cr >= CR_THRESHOLD:
        band_class = r_max - r_min
        band_senior = config.r_max_senior - r_min
        decrease = (
            (r_default - r_min)
            * (cr - CR_THRESHOLD)
            * band_class
            // ((CR_UPPER - CR_THRESHOLD) * band_senior)
        )
        return max(r_min, r_default - decrease)

    increase = (r_max - r_default) * (CR_THRESHOLD - cr) // (CR_THRESHOLD - CR_FLOOR)
    return min(r_max, r_default + increase)


# =============================================================================
# СЛОЙ ОТКЛОНЕНИЯ ЦЕНЫ
# =============================================================================


def softsign(x: int) -> int:
    """
    x / (1 + |x|) в 18-знаковой шкале, усечение к нулю.

    Результат строго в (-1e18, 1e18) и нечётен: softsign(-x) == -softsign(x).
    """
    magnitude = abs(x) * PRECISION_18 // (PRECISION_18 + abs(x))
    return magnitude if x >= 0 else -magnitude


def calculate_x_rate(
    price: int,
    cr: int,
    r_default: int,
    asset_class: AssetClass = AssetClass.SENIOR,
    config: RateCurveConfig | None = None,
) -> int:
    """
    Итоговая ставка: кривая по CR + реакция на отклонение цены от $1.

    Цена ниже пега повышает ставку (стимул держать актив), выше пега — понижает.
    Итог всегда в [r_min, r_max_class] при любых price и cr.

    Args:
        price: Рыночная цена актива в USD (18 знаков, > 0)
        cr: Collateral ratio (18 знаков)
        r_default: Базовая ставка при CR = 100%
        asset_class: SENIOR или JUNIOR
        config: Границы кривой (по умолчанию DEFAULT_RATE_CURVE)

    Raises:
        InvalidPriceError: Если price == 0
    """
    config = config or DEFAULT_RATE_CURVE
    require_uint(price, "price")
    if price == 0:
        raise InvalidPriceError("price must be positive")

    base = cr_rate(cr, r_default, asset_class, config)
    r_max = r_max_for(asset_class, config)

    deviation = (PEG_PRICE - price) * PRICE_SENSITIVITY[asset_class]
    s = softsign(deviation)

    adjust_magnitude = (r_max - config.r_min) * abs(s) // PRECISION_18
    adjust = adjust_magnitude if s >= 0 else -adjust_magnitude

    return clamp(base + adjust, config.r_min, r_max)
