"""Exception types for the fee engine.

Every error raised by `volfee` derives from ``FeeEngineError`` so hosts can
catch the whole family in one place. Where a builtin category fits, the error
also subclasses it (``ValueError``, ``KeyError``, ``ArithmeticError``).
"""

from __future__ import annotations


class FeeEngineError(Exception):
    """Base class for all fee engine errors."""


class ConfigurationError(FeeEngineError, ValueError):
    """Raised when curve parameters or engine configuration are invalid."""


class PreconditionError(FeeEngineError):
    """Raised when a host call is made in a state that does not allow it."""


class MissingConfigurationError(PreconditionError):
    """Raised when a pool is activated without the dynamic fee marker."""

    def __init__(self, fee: object) -> None:
        self.fee = fee
        if isinstance(fee, int) and not isinstance(fee, bool):
            super().__init__(f"pool fee {fee:#x} is not marked for dynamic fees")
        else:
            super().__init__(f"pool {fee!r} carries no dynamic fee marker")


class MarketDataNotFoundError(FeeEngineError, KeyError):
    """Raised when removing market data for a pool that has none."""

    def __init__(self, pool_id: object) -> None:
        self.pool_id = pool_id
        super().__init__(pool_id)

    def __str__(self) -> str:
        return f"no market data registered for pool {self.pool_id!r}"


class UpstreamDataError(FeeEngineError):
    """Raised when the volatility oracle cannot supply a usable reading."""


class StaleReadingError(UpstreamDataError):
    """Raised when a reading is older than the allowed staleness window."""

    def __init__(self, source_ref: object, updated_at: int, now: int) -> None:
        self.source_ref = source_ref
        self.updated_at = updated_at
        self.now = now
        super().__init__(f"stale reading from {source_ref!r}: updated_at={updated_at}, now={now}")


class FixedPointOverflowError(FeeEngineError, ArithmeticError):
    """Raised when a 64.64 fixed-point result leaves the representable range."""
