"""
Core fee algorithms
"""

from .errors import (
    ConfigurationError,
    FeeEngineError,
    FixedPointOverflowError,
    MarketDataNotFoundError,
    MissingConfigurationError,
    PreconditionError,
    StaleReadingError,
    UpstreamDataError,
)
from .fee_curve import (
    DEFAULT_MIDPOINT,
    DEFAULT_STEEPNESS,
    MAX_LP_FEE,
    SATURATION_PERCENT,
    CurveParameters,
    curve_points,
    evaluate_fee,
    saturation_threshold,
    sigmoid,
)
from .oracle import VolatilityOracle, VolatilityReading, is_fresh

__all__ = [
    "ConfigurationError",
    "FeeEngineError",
    "FixedPointOverflowError",
    "MarketDataNotFoundError",
    "MissingConfigurationError",
    "PreconditionError",
    "StaleReadingError",
    "UpstreamDataError",
    "DEFAULT_MIDPOINT",
    "DEFAULT_STEEPNESS",
    "MAX_LP_FEE",
    "SATURATION_PERCENT",
    "CurveParameters",
    "curve_points",
    "evaluate_fee",
    "saturation_threshold",
    "sigmoid",
    "VolatilityOracle",
    "VolatilityReading",
    "is_fresh",
]
