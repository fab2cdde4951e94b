"""
Volatility oracle contract and freshness kernel.

This module is intentionally small and pure:
- `VolatilityOracle` is the capability the fee registry is handed; it is the
  only place a live data feed is touched.
- The freshness check is a deterministic decision over integer timestamps. The
  fee path does not call it; hosts that want staleness protection wrap their
  oracle (see `volfee.integration.feeds.FreshnessCheckedOracle`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Protocol, runtime_checkable


SourceRef = Hashable  # opaque feed reference (address, symbol, ...)


@dataclass(frozen=True)
class VolatilityReading:
    """A signed volatility value scaled by ``10**decimals``, with its update time."""

    value: int
    decimals: int
    updated_at: int

    def __post_init__(self) -> None:
        for name, val in (
            ("value", self.value),
            ("decimals", self.decimals),
            ("updated_at", self.updated_at),
        ):
            if not isinstance(val, int) or isinstance(val, bool):
                raise TypeError(f"{name} must be an int")
        if self.decimals < 0:
            raise ValueError(f"decimals must be non-negative: {self.decimals}")
        if self.updated_at < 0:
            raise ValueError(f"updated_at must be non-negative: {self.updated_at}")


@runtime_checkable
class VolatilityOracle(Protocol):
    def latest_reading(self, source_ref: SourceRef) -> VolatilityReading:
        """Return the most recent reading for `source_ref` or raise."""
        ...


def is_fresh(reading: VolatilityReading, current_timestamp: int, max_staleness_seconds: int) -> bool:
    """Return True if the reading timestamp is within the max staleness window."""
    if current_timestamp < 0:
        raise ValueError(f"current_timestamp must be non-negative: {current_timestamp}")
    if max_staleness_seconds <= 0:
        raise ValueError(f"max_staleness_seconds must be positive: {max_staleness_seconds}")
    if reading.updated_at > current_timestamp:
        return False
    return (current_timestamp - reading.updated_at) <= max_staleness_seconds
