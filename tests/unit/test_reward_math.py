"""
Тесты для RewardMath — эмиссия и accumulator-per-share
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from btdcore.core.errors import ArithmeticOverflowError, InvalidInputError
from btdcore.core.math.fixed_point import ACC_PRECISION, MAX_UINT256
from btdcore.core.math.reward_math import (
    acc_reward_per_share,
    clamp_to_max,
    emission_for,
    reward_debt,
    split_emission,
)


class TestEmission:
    def test_full_allocation(self):
        assert emission_for(100, 10, 1, 1) == 1_000

    def test_partial_allocation(self):
        assert emission_for(100, 10, 1, 4) == 250

    def test_no_allocation(self):
        assert emission_for(100, 10, 0, 0) == 0

    def test_alloc_above_total(self):
        with pytest.raises(InvalidInputError):
            emission_for(100, 10, 5, 4)

    @given(st.data())
    def test_never_exceeds_full_rate(self, data):
        total = data.draw(st.integers(min_value=1, max_value=10**6))
        alloc = data.draw(st.integers(min_value=0, max_value=total))
        duration = data.draw(st.integers(min_value=0, max_value=10**8))
        rate = data.draw(st.integers(min_value=0, max_value=10**24))
        assert emission_for(duration, rate, alloc, total) <= rate * duration


class TestClampToMax:
    def test_clamps(self):
        assert clamp_to_max(90, 20, 100) == 10
        assert clamp_to_max(0, 20, 100) == 20

    def test_at_or_above_cap(self):
        assert clamp_to_max(100, 20, 100) == 0
        assert clamp_to_max(150, 20, 100) == 0


class TestAccumulator:
    """Тесты acc_reward_per_share."""

    def test_update(self):
        assert acc_reward_per_share(0, 100, 50) == 2 * ACC_PRECISION

    def test_zero_stake_is_noop(self):
        assert acc_reward_per_share(7, 100, 0) == 7

    def test_overflow_fails_closed(self):
        with pytest.raises(ArithmeticOverflowError):
            acc_reward_per_share(MAX_UINT256, 10**6, 1)
        assert acc_reward_per_share(MAX_UINT256, 0, 1) == MAX_UINT256

    def test_reward_debt(self):
        assert reward_debt(50, 2 * ACC_PRECISION) == 100

    @given(
        st.integers(min_value=0, max_value=10**30),
        st.lists(st.tuples(st.integers(min_value=0, max_value=10**24),
                           st.integers(min_value=0, max_value=10**24)), max_size=10),
    )
    def test_monotonic(self, start, updates):
        acc = start
        for reward, staked in updates:
            new_acc = acc_reward_per_share(acc, reward, staked)
            assert new_acc >= acc
            acc = new_acc


class TestSplitEmission:
    def test_default_fund_shares(self):
        split = split_emission(1_000, (20, 10, 10))
        assert split.fund_amounts == (200, 100, 100)
        assert split.staker_amount == 600

    def test_remainder_to_stakers(self):
        split = split_emission(7, (50,))
        assert split.fund_amounts == (3,)
        assert split.staker_amount == 4

    def test_no_funds(self):
        assert split_emission(10, ()).staker_amount == 10

    def test_shares_above_100(self):
        with pytest.raises(InvalidInputError):
            split_emission(10, (60, 50))
