"""
State management for the fee engine
"""

from .market_data import MarketDataSource, MarketDataTable, PoolId
from .pools import DYNAMIC_FEE_FLAG, OVERRIDE_FEE_FLAG, PoolKey, compute_pool_id, is_dynamic_fee, pool_key_bytes

__all__ = [
    "MarketDataSource",
    "MarketDataTable",
    "PoolId",
    "DYNAMIC_FEE_FLAG",
    "OVERRIDE_FEE_FLAG",
    "PoolKey",
    "compute_pool_id",
    "is_dynamic_fee",
    "pool_key_bytes",
]
