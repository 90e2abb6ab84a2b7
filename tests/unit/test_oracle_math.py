"""
Тесты для OracleMath — чтение фидов, инверсия, spot, TWAP, отклонение
"""

import pytest
from pydantic import ValidationError

from btdcore.core.domain.oracle import OracleReading
from btdcore.core.domain.params import ProtocolParams
from btdcore.core.errors import (
    InsufficientSourcesError,
    InvalidInputError,
    InvalidPriceError,
    StalePriceError,
)
from btdcore.core.math.fixed_point import MAX_UINT256, PRECISION_18
from btdcore.core.math.oracle_math import (
    Q112,
    OracleConfig,
    compose_prices,
    deviation_bps,
    deviation_within,
    inverse_price,
    is_twap_ready,
    read_and_scale,
    read_feed,
    spot_price_from_reserves,
    twap_from_cumulatives,
)


# =============================================================================
# ТЕСТЫ: Чтение фида
# =============================================================================


class TestReadAndScale:
    def test_8_decimals_feed(self):
        assert read_and_scale(50_000 * 10**8, 8) == 50_000 * PRECISION_18

    def test_18_decimals_feed(self):
        assert read_and_scale(PRECISION_18, 18) == PRECISION_18

    def test_non_positive_rejected(self):
        with pytest.raises(InvalidPriceError):
            read_and_scale(0, 8)
        with pytest.raises(InvalidPriceError):
            read_and_scale(-5, 8)

    def test_rounds_to_zero_rejected(self):
        with pytest.raises(InvalidPriceError):
            read_and_scale(1, 20)

    def test_float_rejected(self):
        with pytest.raises(InvalidInputError):
            read_and_scale(1.5, 8)


class TestReadFeed:
    """Staleness: время — явный вход."""

    NOW = 1_700_000_000

    def _reading(self, updated_at, answer=50_000 * 10**8):
        return OracleReading(answer=answer, decimals=8, updated_at=updated_at)

    def test_fresh_reading(self):
        price = read_feed(self._reading(self.NOW - 60), self.NOW, 3600)
        assert price == 50_000 * PRECISION_18

    def test_exact_max_age_is_fresh(self):
        assert read_feed(self._reading(self.NOW - 3600), self.NOW, 3600) > 0

    def test_stale(self):
        with pytest.raises(StalePriceError, match="stale"):
            read_feed(self._reading(self.NOW - 3601), self.NOW, 3600)

    def test_never_updated(self):
        with pytest.raises(StalePriceError):
            read_feed(self._reading(0), self.NOW, 3600)

    def test_future_timestamp(self):
        with pytest.raises(StalePriceError, match="future"):
            read_feed(self._reading(self.NOW + 1), self.NOW, 3600)

    def test_negative_answer(self):
        with pytest.raises(InvalidPriceError):
            read_feed(self._reading(self.NOW, answer=-1), self.NOW, 3600)

    def test_stale_is_invalid_price(self):
        """StalePriceError — частный случай InvalidPriceError."""
        with pytest.raises(InvalidPriceError):
            read_feed(self._reading(1), self.NOW, 10)

    def test_reading_is_immutable(self):
        reading = self._reading(self.NOW)
        with pytest.raises(ValidationError):
            reading.answer = 1


# =============================================================================
# ТЕСТЫ: Преобразования
# =============================================================================


class TestInverseAndCompose:
    def test_inverse(self):
        assert inverse_price(2 * PRECISION_18) == PRECISION_18 // 2
        assert inverse_price(PRECISION_18) == PRECISION_18

    def test_inverse_zero(self):
        with pytest.raises(InvalidPriceError):
            inverse_price(0)

    def test_compose(self):
        # WBTC/BTC = 0.999, BTC/USD = 50_000 → WBTC/USD = 49_950
        wbtc_btc = 999 * PRECISION_18 // 1000
        btc_usd = 50_000 * PRECISION_18
        assert compose_prices(wbtc_btc, btc_usd) == 49_950 * PRECISION_18

    def test_compose_zero(self):
        with pytest.raises(InvalidPriceError):
            compose_prices(0, PRECISION_18)


class TestSpotPrice:
    def test_wbtc_usdc_pool(self):
        price = spot_price_from_reserves(5_000_000 * 10**6, 100 * 10**8, 6, 8)
        assert price == 50_000 * PRECISION_18

    def test_same_decimals(self):
        assert spot_price_from_reserves(200, 100, 18, 18) == 2 * PRECISION_18

    def test_zero_reserve(self):
        with pytest.raises(InvalidPriceError):
            spot_price_from_reserves(0, 100, 18, 18)
        with pytest.raises(InvalidPriceError):
            spot_price_from_reserves(100, 0, 18, 18)

    def test_reserve_normalizing_to_zero(self):
        with pytest.raises(InvalidPriceError):
            spot_price_from_reserves(100, 10, 18, 24)


# =============================================================================
# ТЕСТЫ: TWAP
# =============================================================================


class TestTwap:
    """Накопленные цены UQ112x112."""

    def test_constant_price(self):
        # Цена token0 в token1 = 2.0 в raw единицах, одинаковые decimals
        elapsed = 1800
        cumulative = 2 * Q112 * elapsed
        assert twap_from_cumulatives(0, cumulative, elapsed, 18, 18) == 2 * PRECISION_18

    def test_decimals_adjustment(self):
        # 1 WBTC (8) = 50_000 USDC (6): raw ratio = 50_000 * 10^6 / 10^8 = 500
        elapsed = 600
        cumulative = 500 * Q112 * elapsed
        price = twap_from_cumulatives(0, cumulative, elapsed, 8, 6)
        assert price == 50_000 * PRECISION_18

    def test_wraparound(self):
        """Переполнение накопленной цены обрабатывается по модулю 2^256."""
        elapsed = 100
        start = MAX_UINT256 - Q112 * elapsed + 1
        end = 0
        assert twap_from_cumulatives(start, end, elapsed, 18, 18) == PRECISION_18

    def test_empty_window(self):
        with pytest.raises(InsufficientSourcesError):
            twap_from_cumulatives(0, Q112, 0, 18, 18)

    def test_zero_twap(self):
        with pytest.raises(InvalidPriceError):
            twap_from_cumulatives(5, 5, 10, 18, 18)

    def test_ready(self):
        assert is_twap_ready(1800)
        assert is_twap_ready(3600, 1800)
        assert not is_twap_ready(1799)
        assert not is_twap_ready(10, 0)


# =============================================================================
# ТЕСТЫ: Отклонение
# =============================================================================


class TestDeviation:
    def test_bps_against_average(self):
        # |100 - 102| / 101 = 1.9802% → 199 bps (вверх)
        assert deviation_bps(100, 102) == 199

    def test_symmetric(self):
        assert deviation_bps(100, 102) == deviation_bps(102, 100)

    def test_within(self):
        assert deviation_within(100, 101, 100)
        assert not deviation_within(100, 110, 100)
        assert deviation_within(100, 100, 0)

    def test_fractional_excess_rejected(self):
        """100.49 bps не проходит допуск 100 bps."""
        assert deviation_bps(1_000_000, 1_010_100) == 101
        assert not deviation_within(1_000_000, 1_010_100, 100)
        assert deviation_within(1_000_000, 1_010_100, 101)

    def test_exact_boundary_accepted(self):
        # 2 / 200 = ровно 1% → 100 bps без округления
        assert deviation_bps(199, 201) == 100
        assert deviation_within(199, 201, 100)
        assert not deviation_within(199, 201, 99)

    def test_zero_is_false_not_error(self):
        assert deviation_within(0, 100, 10_000) is False
        assert deviation_within(100, 0, 10_000) is False

    def test_deviation_bps_zero_rejected(self):
        with pytest.raises(InvalidPriceError):
            deviation_bps(0, 1)


# =============================================================================
# ТЕСТЫ: OracleConfig
# =============================================================================


class TestOracleConfig:
    def test_from_params(self):
        params = ProtocolParams(
            oracle_max_age_seconds=600, twap_period_seconds=900, max_deviation_bps=50
        )
        config = OracleConfig.from_params(params)
        assert config == OracleConfig(
            max_age_seconds=600, twap_period_seconds=900, max_deviation_bps=50
        )

    def test_read_uses_max_age(self):
        config = OracleConfig(max_age_seconds=600)
        reading = OracleReading(answer=50_000 * 10**8, decimals=8, updated_at=1_000)

        assert config.read(reading, now=1_600) == 50_000 * PRECISION_18
        with pytest.raises(StalePriceError):
            config.read(reading, now=1_601)

    def test_twap_period(self):
        config = OracleConfig(twap_period_seconds=900)
        assert config.twap_ready(900)
        assert not config.twap_ready(899)

    def test_tolerance(self):
        config = OracleConfig(max_deviation_bps=100)
        assert config.within_tolerance(199, 201)
        assert not config.within_tolerance(1_000_000, 1_010_100)
