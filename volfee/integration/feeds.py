"""
Volatility feed adapters.

- `InMemoryVolatilityFeed`: deterministic stand-in for an on-chain aggregator.
  Each reference holds its latest answer, decimals and update time; answers are
  pushed explicitly, nothing is fetched.
- `FreshnessCheckedOracle`: wraps any `VolatilityOracle` and rejects readings
  older than a staleness window. The fee path itself never checks freshness.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict

from ..core.errors import StaleReadingError, UpstreamDataError
from ..core.oracle import SourceRef, VolatilityOracle, VolatilityReading, is_fresh


logger = logging.getLogger(__name__)

Clock = Callable[[], int]


@dataclass(frozen=True)
class _FeedSlot:
    decimals: int
    reading: VolatilityReading | None = None


class InMemoryVolatilityFeed:
    """Push-style volatility feed keyed by source reference."""

    def __init__(self, default_decimals: int = 5) -> None:
        if default_decimals < 0:
            raise ValueError(f"default_decimals must be non-negative: {default_decimals}")
        self._default_decimals = default_decimals
        self._slots: Dict[SourceRef, _FeedSlot] = {}

    def add_feed(self, source_ref: SourceRef, *, decimals: int | None = None) -> None:
        """Declare a feed with no answer yet."""
        d = self._default_decimals if decimals is None else decimals
        if d < 0:
            raise ValueError(f"decimals must be non-negative: {d}")
        self._slots[source_ref] = _FeedSlot(decimals=d)

    def set_answer(
        self,
        source_ref: SourceRef,
        value: int,
        *,
        updated_at: int = 0,
        decimals: int | None = None,
    ) -> VolatilityReading:
        """Publish a new latest answer for `source_ref` (declaring it if needed)."""
        slot = self._slots.get(source_ref)
        if decimals is None:
            decimals = slot.decimals if slot is not None else self._default_decimals
        reading = VolatilityReading(value=value, decimals=decimals, updated_at=updated_at)
        self._slots[source_ref] = _FeedSlot(decimals=decimals, reading=reading)
        logger.debug("feed %r answer=%d decimals=%d updated_at=%d", source_ref, value, decimals, updated_at)
        return reading

    def decimals(self, source_ref: SourceRef) -> int:
        slot = self._slots.get(source_ref)
        if slot is None:
            raise UpstreamDataError(f"unknown feed: {source_ref!r}")
        return slot.decimals

    def latest_reading(self, source_ref: SourceRef) -> VolatilityReading:
        slot = self._slots.get(source_ref)
        if slot is None:
            raise UpstreamDataError(f"unknown feed: {source_ref!r}")
        if slot.reading is None:
            raise UpstreamDataError(f"feed {source_ref!r} has no answer yet")
        return slot.reading


class FreshnessCheckedOracle:
    """Oracle wrapper that raises `StaleReadingError` for out-of-window readings."""

    def __init__(self, inner: VolatilityOracle, clock: Clock, max_staleness_seconds: int) -> None:
        if max_staleness_seconds <= 0:
            raise ValueError(f"max_staleness_seconds must be positive: {max_staleness_seconds}")
        self._inner = inner
        self._clock = clock
        self._max_staleness_seconds = max_staleness_seconds

    @property
    def max_staleness_seconds(self) -> int:
        return self._max_staleness_seconds

    def latest_reading(self, source_ref: SourceRef) -> VolatilityReading:
        reading = self._inner.latest_reading(source_ref)
        now = int(self._clock())
        if not is_fresh(reading, now, self._max_staleness_seconds):
            raise StaleReadingError(source_ref, reading.updated_at, now)
        return reading
