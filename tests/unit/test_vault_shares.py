"""
Тесты для VaultShares — ERC-4626 конверсии stBTD/stBTB
"""

from hypothesis import given
from hypothesis import strategies as st

from btdcore.core.math.vault_shares import (
    Rounding,
    convert_to_assets,
    convert_to_shares,
    preview_deposit,
    preview_mint,
    preview_redeem,
    preview_withdraw,
)

state_st = st.integers(min_value=0, max_value=10**30)


class TestConversions:
    def test_empty_vault_is_one_to_one(self):
        assert convert_to_shares(1_000, 0, 0) == 1_000
        assert convert_to_assets(1_000, 0, 0) == 1_000

    def test_vault_with_yield(self):
        # 100 долей на 200 активов → 1 доля ≈ 2 актива
        assert preview_deposit(100, 100, 200) == 50
        assert preview_redeem(50, 100, 200) == 99

    def test_rounding_direction(self):
        assert convert_to_shares(10, 2, 2, Rounding.DOWN) == 10
        assert convert_to_shares(1, 1, 2, Rounding.DOWN) == 0
        assert convert_to_shares(1, 1, 2, Rounding.UP) == 1

    @given(st.integers(min_value=0, max_value=10**24), state_st, state_st)
    def test_deposit_then_redeem_never_profits(self, assets, supply, total_assets):
        shares = preview_deposit(assets, supply, total_assets)
        assert preview_redeem(shares, supply, total_assets) <= assets

    @given(st.integers(min_value=0, max_value=10**24), state_st, state_st)
    def test_mint_costs_at_least_redeem_value(self, shares, supply, total_assets):
        assert preview_mint(shares, supply, total_assets) >= preview_redeem(
            shares, supply, total_assets
        )

    @given(st.integers(min_value=0, max_value=10**24), state_st, state_st)
    def test_withdraw_burns_at_least_deposit_shares(self, assets, supply, total_assets):
        assert preview_withdraw(assets, supply, total_assets) >= preview_deposit(
            assets, supply, total_assets
        )
