"""
Fee engine configuration.

Two sources, both fail-closed:
- YAML files with schema ``volfee/fee-engine/v1``::

      schema: volfee/fee-engine/v1
      curve:
        lower_fee: 3000
        upper_fee: 10000
        steepness: 2
        midpoint: 5
      default_fee: 3000
      max_staleness_seconds: 0

- Environment variables (``VOLFEE_*``), unset values fall back to defaults.

``max_staleness_seconds == 0`` disables freshness checks.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

import yaml

from ..core.errors import ConfigurationError
from ..core.fee_curve import DEFAULT_MIDPOINT, DEFAULT_STEEPNESS, CurveParameters
from ..core.oracle import VolatilityOracle
from .fee_registry import DEFAULT_FEE, PoolFeeRegistry
from .feeds import FreshnessCheckedOracle


CONFIG_SCHEMA = "volfee/fee-engine/v1"

DEFAULT_LOWER_FEE = 3000
DEFAULT_UPPER_FEE = 10000


@dataclass(frozen=True)
class FeeEngineConfig:
    lower_fee: int = DEFAULT_LOWER_FEE
    upper_fee: int = DEFAULT_UPPER_FEE
    steepness: int = DEFAULT_STEEPNESS
    midpoint: int = DEFAULT_MIDPOINT
    default_fee: int = DEFAULT_FEE
    max_staleness_seconds: int = 0

    def __post_init__(self) -> None:
        for name in ("lower_fee", "upper_fee", "steepness", "midpoint", "default_fee", "max_staleness_seconds"):
            val = getattr(self, name)
            if not isinstance(val, int) or isinstance(val, bool):
                raise ConfigurationError(f"{name} must be an int")
        if self.default_fee < 0:
            raise ConfigurationError(f"default_fee must be non-negative: {self.default_fee}")
        if self.max_staleness_seconds < 0:
            raise ConfigurationError(f"max_staleness_seconds must be non-negative: {self.max_staleness_seconds}")
        # Validates the fee band and curve shape.
        self.curve_parameters()

    def curve_parameters(self) -> CurveParameters:
        return CurveParameters(
            lower_fee=self.lower_fee,
            upper_fee=self.upper_fee,
            steepness=self.steepness,
            midpoint=self.midpoint,
        )


def _require_mapping(obj: Any, *, name: str) -> dict[str, Any]:
    if not isinstance(obj, dict):
        raise ConfigurationError(f"{name} must be a mapping")
    return obj


def _optional_int(obj: Mapping[str, Any], key: str, default: int, *, name: str) -> int:
    value = obj.get(key)
    if value is None:
        return default
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigurationError(f"{name}.{key} must be an int")
    return value


def parse_config(root_obj: Any) -> FeeEngineConfig:
    """Validate an already-decoded config document."""
    root = _require_mapping(root_obj, name="config")

    unknown_root = set(root) - {"schema", "curve", "default_fee", "max_staleness_seconds"}
    if unknown_root:
        raise ConfigurationError(f"unknown config keys: {sorted(map(str, unknown_root))}")

    schema = root.get("schema")
    if schema != CONFIG_SCHEMA:
        raise ConfigurationError(f"unsupported config schema: {schema!r}")

    curve = _require_mapping(root.get("curve", {}), name="config.curve")
    unknown = set(curve) - {"lower_fee", "upper_fee", "steepness", "midpoint"}
    if unknown:
        raise ConfigurationError(f"unknown config.curve keys: {sorted(map(str, unknown))}")

    return FeeEngineConfig(
        lower_fee=_optional_int(curve, "lower_fee", DEFAULT_LOWER_FEE, name="curve"),
        upper_fee=_optional_int(curve, "upper_fee", DEFAULT_UPPER_FEE, name="curve"),
        steepness=_optional_int(curve, "steepness", DEFAULT_STEEPNESS, name="curve"),
        midpoint=_optional_int(curve, "midpoint", DEFAULT_MIDPOINT, name="curve"),
        default_fee=_optional_int(root, "default_fee", DEFAULT_FEE, name="config"),
        max_staleness_seconds=_optional_int(root, "max_staleness_seconds", 0, name="config"),
    )


def load_config(path: Path | str) -> FeeEngineConfig:
    """Load and validate a YAML config file."""
    raw = Path(path).read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"invalid YAML in {path}: {exc}") from exc
    return parse_config(doc)


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> FeeEngineConfig:
    env = os.environ if environ is None else environ
    return FeeEngineConfig(
        lower_fee=_env_int(env, "VOLFEE_LOWER_FEE", DEFAULT_LOWER_FEE),
        upper_fee=_env_int(env, "VOLFEE_UPPER_FEE", DEFAULT_UPPER_FEE),
        steepness=_env_int(env, "VOLFEE_STEEPNESS", DEFAULT_STEEPNESS),
        midpoint=_env_int(env, "VOLFEE_MIDPOINT", DEFAULT_MIDPOINT),
        default_fee=_env_int(env, "VOLFEE_DEFAULT_FEE", DEFAULT_FEE),
        max_staleness_seconds=_env_int(env, "VOLFEE_MAX_STALENESS_SECONDS", 0),
    )


def build_registry(
    config: FeeEngineConfig,
    oracle: VolatilityOracle,
    *,
    clock: Optional[Callable[[], int]] = None,
) -> PoolFeeRegistry:
    """Wire a registry from config, adding freshness checks when enabled."""
    if config.max_staleness_seconds > 0:
        oracle = FreshnessCheckedOracle(
            oracle,
            clock if clock is not None else (lambda: int(time.time())),
            config.max_staleness_seconds,
        )
    return PoolFeeRegistry(config.curve_parameters(), oracle, default_fee=config.default_fee)
