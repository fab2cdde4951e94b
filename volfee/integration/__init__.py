"""
Host integration layer: fee registry, feed adapters, configuration.
"""

from .config import FeeEngineConfig, build_registry, config_from_env, load_config, parse_config
from .fee_registry import DEFAULT_FEE, PoolFeeRegistry
from .feeds import FreshnessCheckedOracle, InMemoryVolatilityFeed

__all__ = [
    "FeeEngineConfig",
    "build_registry",
    "config_from_env",
    "load_config",
    "parse_config",
    "DEFAULT_FEE",
    "PoolFeeRegistry",
    "FreshnessCheckedOracle",
    "InMemoryVolatilityFeed",
]
