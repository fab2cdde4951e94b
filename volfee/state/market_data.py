"""
Per-pool market data registrations.

Implements MarketDataTable[PoolId] -> MarketDataSource
"""

from __future__ import annotations

from dataclasses import dataclass
import threading
from typing import Dict, Hashable, List, Optional

from ..core.errors import MarketDataNotFoundError
from ..core.oracle import SourceRef


PoolId = Hashable  # opaque, supplied by the host


@dataclass(frozen=True)
class MarketDataSource:
    """
    Volatility feeds registered for one pool.

    Attributes:
        short_term_feed: Feed reference for the short-horizon volatility
        long_term_feed: Feed reference for the long-horizon volatility
        precision: Precision hint supplied at registration (stored only)
    """

    short_term_feed: SourceRef
    long_term_feed: SourceRef
    precision: int

    def __post_init__(self) -> None:
        if not isinstance(self.precision, int) or isinstance(self.precision, bool):
            raise TypeError("precision must be an int")
        if self.precision < 0:
            raise ValueError(f"precision must be non-negative: {self.precision}")


class MarketDataTable:
    """
    Mapping pool_id -> MarketDataSource.

    A single lock guards the dict, so every replace, delete and read is atomic
    and immediately visible. Entries for different pools are independent.
    """

    def __init__(self) -> None:
        self._entries: Dict[PoolId, MarketDataSource] = {}
        self._lock = threading.Lock()

    def get(self, pool_id: PoolId) -> Optional[MarketDataSource]:
        """Registration for `pool_id`, or None when the pool is unconfigured."""
        with self._lock:
            return self._entries.get(pool_id)

    def set(self, pool_id: PoolId, source: MarketDataSource) -> Optional[MarketDataSource]:
        """Store `source`, replacing any prior entry. Returns the replaced entry."""
        if not isinstance(source, MarketDataSource):
            raise TypeError("source must be a MarketDataSource")
        with self._lock:
            previous = self._entries.get(pool_id)
            self._entries[pool_id] = source
            return previous

    def delete(self, pool_id: PoolId) -> MarketDataSource:
        """
        Remove the entry for `pool_id`.

        Raises:
            MarketDataNotFoundError: If no entry exists (table unchanged)
        """
        with self._lock:
            try:
                return self._entries.pop(pool_id)
            except KeyError:
                raise MarketDataNotFoundError(pool_id) from None

    def pool_ids(self) -> List[PoolId]:
        """Registered pool ids, sorted by their string form for stable output."""
        with self._lock:
            return sorted(self._entries.keys(), key=repr)

    def __contains__(self, pool_id: object) -> bool:
        with self._lock:
            return pool_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
