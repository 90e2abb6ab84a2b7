"""
Тесты для доменных моделей и ProtocolParams

Проверяем:
- Immutability (frozen=True)
- Strict int: float и строки отклоняются
- Инварианты сохранения в выходных моделях
- Границы governance параметров
"""

import pytest
from pydantic import ValidationError

from btdcore.core.domain import (
    FarmUpdateOutputs,
    MintInputs,
    MintOutputs,
    ProtocolParams,
    RedeemOutputs,
)
from btdcore.core.math.fixed_point import BPS_BASE, PRECISION_18


class TestProtocolParams:
    def test_defaults(self):
        params = ProtocolParams()
        assert params.mint_fee_bps == 50
        assert params.twap_period_seconds == 1_800
        assert params.fund_shares_pct == (20, 10, 10)

    def test_fee_cap(self):
        with pytest.raises(ValidationError):
            ProtocolParams(mint_fee_bps=1_001)
        with pytest.raises(ValidationError):
            ProtocolParams(redeem_fee_bps=-1)

    def test_min_btb_price_floor(self):
        with pytest.raises(ValidationError):
            ProtocolParams(min_btb_price=PRECISION_18 // 10 - 1)
        assert ProtocolParams(min_btb_price=PRECISION_18 // 10).min_btb_price == PRECISION_18 // 10

    def test_junior_cap_not_below_senior(self):
        with pytest.raises(ValidationError, match="max_btb_rate_bps"):
            ProtocolParams(max_btd_rate_bps=1_500, max_btb_rate_bps=1_000)

    def test_rate_bounds_ordered(self):
        with pytest.raises(ValidationError, match="max_btd_rate_bps"):
            ProtocolParams(default_rate_bps=5_000)
        with pytest.raises(ValidationError, match="min_rate_bps"):
            ProtocolParams(min_rate_bps=600, default_rate_bps=500)
        params = ProtocolParams(
            default_rate_bps=5_000, max_btd_rate_bps=5_000, max_btb_rate_bps=8_000
        )
        assert params.default_rate_bps == 5_000

    def test_dust_floor_at_least_bps_base(self):
        with pytest.raises(ValidationError):
            ProtocolParams(min_mint_amount=0)
        with pytest.raises(ValidationError):
            ProtocolParams(min_redeem_amount=BPS_BASE - 1)
        assert ProtocolParams(min_mint_amount=BPS_BASE).min_mint_amount == BPS_BASE

    def test_fund_shares_sum(self):
        with pytest.raises(ValidationError):
            ProtocolParams(fund_shares_pct=(60, 50))

    def test_float_rejected(self):
        with pytest.raises(ValidationError):
            ProtocolParams(mint_fee_bps=50.0)

    def test_frozen(self):
        params = ProtocolParams()
        with pytest.raises(ValidationError):
            params.mint_fee_bps = 10


class TestInputModels:
    def test_strict_int(self):
        with pytest.raises(ValidationError):
            MintInputs(collateral_amount="100", collateral_price=1, fee_bps=0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            MintInputs(collateral_amount=-1, collateral_price=1, fee_bps=0)

    def test_defaults(self):
        inputs = MintInputs(collateral_amount=1, collateral_price=1, fee_bps=0)
        assert inputs.reference_price == PRECISION_18
        assert inputs.collateral_decimals == 8


class TestOutputInvariants:
    def test_mint_conservation(self):
        with pytest.raises(ValidationError, match="gross_issuance"):
            MintOutputs(
                collateral_canonical=1,
                gross_issuance=100,
                fee=1,
                net_issuance=100,
                supply_after=100,
            )

    def test_redeem_usd_partition(self):
        with pytest.raises(ValidationError, match="net_usd"):
            RedeemOutputs(
                btd_amount=100,
                fee=0,
                net_btd=100,
                net_usd=100,
                collateral_usd=50,
                btb_usd=40,
                brs_usd=0,
                collateral_out=1,
                btb_out=1,
                brs_out=0,
            )

    def test_farm_split(self):
        with pytest.raises(ValidationError):
            FarmUpdateOutputs(
                reward=100,
                fund_amounts=(10,),
                staker_reward=80,
                acc_reward_per_share=0,
                last_reward_ts=0,
                minted_after=100,
            )
