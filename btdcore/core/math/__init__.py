"""
Core math modules для btdcore

Целочисленная арифметика с фиксированной точкой (18 знаков), без float.
"""

# Fixed-point primitives
from btdcore.core.math.fixed_point import (
    ACC_PRECISION,
    BPS_BASE,
    MAX_UINT256,
    PRECISION_18,
    SECONDS_PER_YEAR,
    checked_uint256,
    clamp,
    div_up,
    integer_root,
    mul_div,
    mul_div_up,
    require_positive,
    require_uint,
    saturating_sub,
    validate_bps,
)

# Token precision
from btdcore.core.math.token_precision import (
    CANONICAL_DECIMALS,
    from_canonical,
    from_canonical_for,
    to_canonical,
    to_canonical_for,
)

# Oracle math
from btdcore.core.math.oracle_math import (
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

# Price blend
from btdcore.core.math.price_blend import (
    blend_multi_source,
    median,
    median3,
    read_blended_price,
    validate_all_within_bounds,
)

# iUSD
from btdcore.core.math.iusd_math import (
    AdjustmentFactor,
    adjustment_factor,
    monthly_growth_factor,
    next_iusd_value,
    to_indexed,
    to_nominal,
)

# Collateral
from btdcore.core.math.collateral_math import (
    collateral_ratio,
    collateral_value,
    is_undercollateralized,
    liability_value,
    max_redeemable_btd,
    max_redeemable_usd,
)

# Rate curve
from btdcore.core.math.sigmoid_rate import (
    CR_FLOOR,
    CR_THRESHOLD,
    CR_UPPER,
    DEFAULT_RATE_CURVE,
    R_DEFAULT,
    R_MAX_JUNIOR,
    R_MAX_SENIOR,
    R_MIN,
    RateCurveConfig,
    calculate_x_rate,
    cr_rate,
)

# Interest
from btdcore.core.math.interest_math import (
    accrued_interest,
    fee_amount,
    interest_per_share_delta,
    pending_reward,
    split_fee,
    split_withdrawal,
)

# Rewards
from btdcore.core.math.reward_math import (
    EmissionSplit,
    acc_reward_per_share,
    clamp_to_max,
    emission_for,
    reward_debt,
    split_emission,
)

# Vault shares
from btdcore.core.math.vault_shares import (
    Rounding,
    convert_to_assets,
    convert_to_shares,
    preview_deposit,
    preview_mint,
    preview_redeem,
    preview_withdraw,
)

__all__ = [
    # Fixed point
    "ACC_PRECISION",
    "BPS_BASE",
    "MAX_UINT256",
    "PRECISION_18",
    "SECONDS_PER_YEAR",
    "checked_uint256",
    "clamp",
    "div_up",
    "integer_root",
    "mul_div",
    "mul_div_up",
    "require_positive",
    "require_uint",
    "saturating_sub",
    "validate_bps",
    # Token precision
    "CANONICAL_DECIMALS",
    "from_canonical",
    "from_canonical_for",
    "to_canonical",
    "to_canonical_for",
    # Oracle
    "OracleConfig",
    "compose_prices",
    "deviation_bps",
    "deviation_within",
    "inverse_price",
    "is_twap_ready",
    "read_and_scale",
    "read_feed",
    "spot_price_from_reserves",
    "twap_from_cumulatives",
    # Price blend
    "blend_multi_source",
    "median",
    "median3",
    "read_blended_price",
    "validate_all_within_bounds",
    # iUSD
    "AdjustmentFactor",
    "adjustment_factor",
    "monthly_growth_factor",
    "next_iusd_value",
    "to_indexed",
    "to_nominal",
    # Collateral
    "collateral_ratio",
    "collateral_value",
    "is_undercollateralized",
    "liability_value",
    "max_redeemable_btd",
    "max_redeemable_usd",
    # Rate curve
    "CR_FLOOR",
    "CR_THRESHOLD",
    "CR_UPPER",
    "DEFAULT_RATE_CURVE",
    "R_DEFAULT",
    "R_MAX_JUNIOR",
    "R_MAX_SENIOR",
    "R_MIN",
    "RateCurveConfig",
    "calculate_x_rate",
    "cr_rate",
    # Interest
    "accrued_interest",
    "fee_amount",
    "interest_per_share_delta",
    "pending_reward",
    "split_fee",
    "split_withdrawal",
    # Rewards
    "EmissionSplit",
    "acc_reward_per_share",
    "clamp_to_max",
    "emission_for",
    "reward_debt",
    "split_emission",
    # Vault shares
    "Rounding",
    "convert_to_assets",
    "convert_to_shares",
    "preview_deposit",
    "preview_mint",
    "preview_redeem",
    "preview_withdraw",
]
