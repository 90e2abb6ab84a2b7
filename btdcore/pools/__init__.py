"""Pools — начисление процентов и фарминг"""

from btdcore.pools.farming_pool import settle_position, update_farm
from btdcore.pools.interest_pool import accrue_interest

__all__ = [
    "accrue_interest",
    "update_farm",
    "settle_position",
]
