from __future__ import annotations

import pytest

from volfee.core.oracle import VolatilityOracle, VolatilityReading, is_fresh
from volfee.integration.feeds import InMemoryVolatilityFeed


def test_reading_validation() -> None:
    r = VolatilityReading(value=-5, decimals=8, updated_at=100)
    assert r.value == -5

    with pytest.raises(TypeError):
        VolatilityReading(value=1.0, decimals=8, updated_at=0)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        VolatilityReading(value=1, decimals=True, updated_at=0)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        VolatilityReading(value=1, decimals=-1, updated_at=0)
    with pytest.raises(ValueError):
        VolatilityReading(value=1, decimals=0, updated_at=-1)


def test_is_fresh_window() -> None:
    r = VolatilityReading(value=1, decimals=0, updated_at=1000)
    assert is_fresh(r, 1000, 60)
    assert is_fresh(r, 1060, 60)
    assert not is_fresh(r, 1061, 60)


def test_is_fresh_future_timestamp_is_not_fresh() -> None:
    r = VolatilityReading(value=1, decimals=0, updated_at=2000)
    assert not is_fresh(r, 1000, 60)


def test_is_fresh_rejects_bad_inputs() -> None:
    r = VolatilityReading(value=1, decimals=0, updated_at=0)
    with pytest.raises(ValueError):
        is_fresh(r, -1, 60)
    with pytest.raises(ValueError):
        is_fresh(r, 0, 0)


def test_in_memory_feed_satisfies_protocol() -> None:
    assert isinstance(InMemoryVolatilityFeed(), VolatilityOracle)
