"""
Тесты для InterestMath — начисление процентов, комиссии, разделение вывода
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from btdcore.core.domain.fees import FeeSplit, WithdrawalSplit
from btdcore.core.errors import InvalidInputError
from btdcore.core.math.fixed_point import ACC_PRECISION, BPS_BASE, PRECISION_18, SECONDS_PER_YEAR
from btdcore.core.math.interest_math import (
    accrued_interest,
    fee_amount,
    interest_per_share_delta,
    pending_reward,
    split_fee,
    split_withdrawal,
)

amount_st = st.integers(min_value=0, max_value=10**40)
bps_st = st.integers(min_value=0, max_value=BPS_BASE)


class TestInterestPerShareDelta:
    def test_full_year(self):
        assert interest_per_share_delta(1_000, SECONDS_PER_YEAR) == PRECISION_18 // 10

    def test_zero_factors(self):
        assert interest_per_share_delta(0, 3600) == 0
        assert interest_per_share_delta(500, 0) == 0

    def test_rate_above_100_percent(self):
        with pytest.raises(InvalidInputError):
            interest_per_share_delta(BPS_BASE + 1, SECONDS_PER_YEAR)
        assert interest_per_share_delta(BPS_BASE, SECONDS_PER_YEAR) == PRECISION_18

    def test_accrued(self):
        delta = interest_per_share_delta(500, SECONDS_PER_YEAR)
        assert accrued_interest(1_000 * PRECISION_18, delta) == 50 * PRECISION_18


class TestPendingReward:
    def test_basic(self):
        assert pending_reward(100, 5 * ACC_PRECISION, 200) == 300

    def test_clamped_at_zero(self):
        """reward_debt больше накопленного → 0, не отрицательное."""
        assert pending_reward(100, ACC_PRECISION, 10_000) == 0


class TestFee:
    """Тесты fee_amount / split_fee."""

    def test_example(self):
        assert fee_amount(50_000 * PRECISION_18, 50) == 250 * PRECISION_18

    def test_fee_above_100_percent(self):
        with pytest.raises(InvalidInputError):
            fee_amount(100, BPS_BASE + 1)

    @given(amount_st, bps_st)
    def test_conservation(self, amount, bps):
        split = split_fee(amount, bps)
        assert split.net + split.fee == split.gross == amount
        assert split.fee <= amount

    def test_fee_split_validates_itself(self):
        with pytest.raises(ValidationError):
            FeeSplit(gross=100, fee=10, net=80)


class TestSplitWithdrawal:
    def test_proportional(self):
        split = split_withdrawal(50, 20, 100)
        assert split == WithdrawalSplit(requested=50, interest=10, principal=40)

    def test_rounding_favors_principal(self):
        split = split_withdrawal(1, 1, 3)
        assert split.interest == 0
        assert split.principal == 1

    def test_empty_pool(self):
        split = split_withdrawal(0, 0, 0)
        assert split.interest == split.principal == 0

    def test_requested_above_total(self):
        with pytest.raises(InvalidInputError):
            split_withdrawal(101, 0, 100)

    def test_pending_above_total(self):
        with pytest.raises(InvalidInputError):
            split_withdrawal(10, 101, 100)

    @given(st.data())
    def test_sum_exact(self, data):
        total = data.draw(st.integers(min_value=0, max_value=10**30))
        requested = data.draw(st.integers(min_value=0, max_value=total))
        pending = data.draw(st.integers(min_value=0, max_value=total))
        split = split_withdrawal(requested, pending, total)
        assert split.interest + split.principal == requested
        assert split.interest <= pending
