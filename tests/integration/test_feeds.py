from __future__ import annotations

import pytest

from volfee.core.errors import StaleReadingError, UpstreamDataError
from volfee.integration.feeds import FreshnessCheckedOracle, InMemoryVolatilityFeed


class FakeClock:
    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


def test_feed_unknown_ref() -> None:
    feed = InMemoryVolatilityFeed()
    with pytest.raises(UpstreamDataError):
        feed.latest_reading("missing")
    with pytest.raises(UpstreamDataError):
        feed.decimals("missing")


def test_feed_declared_without_answer() -> None:
    feed = InMemoryVolatilityFeed()
    feed.add_feed("vol", decimals=8)
    assert feed.decimals("vol") == 8
    with pytest.raises(UpstreamDataError):
        feed.latest_reading("vol")


def test_feed_answer_uses_declared_decimals() -> None:
    feed = InMemoryVolatilityFeed(default_decimals=5)
    feed.add_feed("vol", decimals=8)
    r = feed.set_answer("vol", 123, updated_at=7)
    assert (r.value, r.decimals, r.updated_at) == (123, 8, 7)
    assert feed.latest_reading("vol") == r


def test_feed_answer_defaults() -> None:
    feed = InMemoryVolatilityFeed(default_decimals=5)
    r = feed.set_answer("vol", -4)
    assert (r.value, r.decimals, r.updated_at) == (-4, 5, 0)


def test_feed_latest_answer_wins() -> None:
    feed = InMemoryVolatilityFeed()
    feed.set_answer("vol", 1, updated_at=1)
    feed.set_answer("vol", 2, updated_at=2)
    assert feed.latest_reading("vol").value == 2


def test_feed_rejects_negative_decimals() -> None:
    with pytest.raises(ValueError):
        InMemoryVolatilityFeed(default_decimals=-1)
    with pytest.raises(ValueError):
        InMemoryVolatilityFeed().add_feed("vol", decimals=-1)


def test_freshness_wrapper_passes_fresh_readings() -> None:
    feed = InMemoryVolatilityFeed()
    feed.set_answer("vol", 10, updated_at=1_000)
    clock = FakeClock(1_300)
    oracle = FreshnessCheckedOracle(feed, clock, max_staleness_seconds=300)
    assert oracle.latest_reading("vol").value == 10
    assert oracle.max_staleness_seconds == 300


def test_freshness_wrapper_rejects_stale_readings() -> None:
    feed = InMemoryVolatilityFeed()
    feed.set_answer("vol", 10, updated_at=1_000)
    clock = FakeClock(1_301)
    oracle = FreshnessCheckedOracle(feed, clock, max_staleness_seconds=300)
    with pytest.raises(StaleReadingError) as exc:
        oracle.latest_reading("vol")
    assert (exc.value.updated_at, exc.value.now) == (1_000, 1_301)
    assert isinstance(exc.value, UpstreamDataError)


def test_freshness_wrapper_propagates_inner_errors() -> None:
    oracle = FreshnessCheckedOracle(InMemoryVolatilityFeed(), FakeClock(0), max_staleness_seconds=1)
    with pytest.raises(UpstreamDataError):
        oracle.latest_reading("missing")


def test_freshness_wrapper_requires_positive_window() -> None:
    with pytest.raises(ValueError):
        FreshnessCheckedOracle(InMemoryVolatilityFeed(), FakeClock(0), max_staleness_seconds=0)
