"""
Pool fee registry: the host-facing side of the fee engine.

This is an imperative-shell wrapper around the functional core:
- Keeps the per-pool volatility feed registrations (`MarketDataTable`).
- On a fee request, reads the latest readings through the injected oracle and
  evaluates the sigmoid curve (`evaluate_fee`).
- Falls back to the configured default fee only when a pool has no
  registration. A failed read from a registered feed is an error, never a
  fallback.

Known gap: the long-term reading is fetched on every request but does not enter
the fee formula. The two-horizon blend it was meant for is not defined, so only
the short-term reading drives the curve.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..core.errors import FeeEngineError, MissingConfigurationError, UpstreamDataError
from ..core.fee_curve import CurveParameters, evaluate_fee
from ..core.oracle import SourceRef, VolatilityOracle, VolatilityReading
from ..state.market_data import MarketDataSource, MarketDataTable, PoolId
from ..state.pools import OVERRIDE_FEE_FLAG, PoolKey, compute_pool_id, is_dynamic_fee


logger = logging.getLogger(__name__)

DEFAULT_FEE = 3000  # 0.30% in hundredths of a basis point


class PoolFeeRegistry:
    """
    Per-pool volatility registrations plus the fee computation over them.

    Args:
        params: Curve parameters shared by every pool (immutable)
        oracle: Volatility oracle capability
        default_fee: Fee returned for pools without a registration
        table: Backing table (a fresh one when omitted)
    """

    def __init__(
        self,
        params: CurveParameters,
        oracle: VolatilityOracle,
        *,
        default_fee: int = DEFAULT_FEE,
        table: Optional[MarketDataTable] = None,
    ) -> None:
        if not isinstance(params, CurveParameters):
            raise TypeError("params must be CurveParameters")
        if not isinstance(default_fee, int) or isinstance(default_fee, bool):
            raise TypeError("default_fee must be an int")
        if default_fee < 0:
            raise ValueError(f"default_fee must be non-negative: {default_fee}")
        self._params = params
        self._oracle = oracle
        self._default_fee = default_fee
        self._table = table if table is not None else MarketDataTable()

    @property
    def params(self) -> CurveParameters:
        return self._params

    @property
    def default_fee(self) -> int:
        return self._default_fee

    # -- Host lifecycle ------------------------------------------------------

    def initialize(self, pool: Union[PoolKey, int, PoolId]) -> None:
        """
        Precondition gate run once before a pool goes live.

        `pool` is a `PoolKey` or its raw fee field. Anything else, such as a bare
        pool id, has no fee field and never passes the gate.

        Raises:
            MissingConfigurationError: If the pool fee is not the dynamic fee marker
        """
        fee = pool.fee if isinstance(pool, PoolKey) else pool
        if isinstance(fee, bool) or not isinstance(fee, int) or not is_dynamic_fee(fee):
            raise MissingConfigurationError(fee)

    on_pool_activate = initialize

    # -- Fee path ------------------------------------------------------------

    def compute_fee(self, pool_id: PoolId) -> int:
        """Fee for the next trade in `pool_id`."""
        source = self._table.get(pool_id)
        if source is None:
            logger.debug("pool %r has no market data, default fee %d", pool_id, self._default_fee)
            return self._default_fee

        short = self._read(source.short_term_feed)
        # Fetched for the two-horizon model; not part of the fee yet.
        self._read(source.long_term_feed)

        fee = evaluate_fee(short.value, self._params, short.decimals)
        logger.debug("pool %r volatility=%d decimals=%d fee=%d", pool_id, short.value, short.decimals, fee)
        return fee

    def before_swap(self, key: PoolKey) -> int:
        """Per-swap hook: fee for the pool with the override flag set."""
        return self.compute_fee(compute_pool_id(key)) | OVERRIDE_FEE_FLAG

    def _read(self, source_ref: SourceRef) -> VolatilityReading:
        try:
            reading = self._oracle.latest_reading(source_ref)
        except FeeEngineError:
            raise
        except Exception as exc:
            raise UpstreamDataError(f"reading {source_ref!r} failed: {exc}") from exc
        if not isinstance(reading, VolatilityReading):
            raise UpstreamDataError(f"oracle returned {type(reading).__name__} for {source_ref!r}")
        return reading

    # -- Administration ------------------------------------------------------

    def update_market_data(
        self,
        pool_id: PoolId,
        short_term_feed: SourceRef,
        long_term_feed: SourceRef,
        precision: int,
    ) -> None:
        """Register (or replace) the feeds for `pool_id`. Feeds are not probed."""
        source = MarketDataSource(
            short_term_feed=short_term_feed,
            long_term_feed=long_term_feed,
            precision=precision,
        )
        previous = self._table.set(pool_id, source)
        logger.info(
            "market data %s for pool %r: short=%r long=%r precision=%d",
            "replaced" if previous is not None else "registered",
            pool_id,
            short_term_feed,
            long_term_feed,
            precision,
        )

    def remove_market_data(self, pool_id: PoolId) -> None:
        """
        Drop the registration for `pool_id`.

        Raises:
            MarketDataNotFoundError: If the pool has no registration
        """
        self._table.delete(pool_id)
        logger.info("market data removed for pool %r", pool_id)

    def market_data(self, pool_id: PoolId) -> Optional[MarketDataSource]:
        return self._table.get(pool_id)
