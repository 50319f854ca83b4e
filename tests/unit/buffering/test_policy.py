"""Unit tests for flush and backpressure policies."""

from __future__ import annotations

import pytest

from logthis.buffering import BackpressurePolicy, FlushPolicy
from logthis.kernel.errors import ConfigurationError


class TestBackpressurePolicy:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("block", BackpressurePolicy.BLOCK),
            (" DROP_OLDEST ", BackpressurePolicy.DROP_OLDEST),
            (BackpressurePolicy.DROP_NEWEST, BackpressurePolicy.DROP_NEWEST),
        ],
    )
    def test_parse(self, raw: str, expected: BackpressurePolicy) -> None:
        assert BackpressurePolicy.parse(raw) is expected

    def test_parse_unknown(self) -> None:
        with pytest.raises(ConfigurationError, match="drop_oldest"):
            BackpressurePolicy.parse("drop_everything")


class TestFlushPolicy:
    def test_defaults(self) -> None:
        policy = FlushPolicy()
        assert policy.flush_threshold == 100
        assert policy.max_queue_size == 10_000
        assert policy.flush_interval is None
        assert policy.backpressure is BackpressurePolicy.BLOCK

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"flush_threshold": 0},
            {"max_queue_size": 0},
            {"flush_threshold": 5, "max_queue_size": 4},
            {"flush_interval": 0},
            {"flush_interval": -1.0},
        ],
    )
    def test_invalid(self, kwargs: dict) -> None:
        with pytest.raises(ConfigurationError):
            FlushPolicy(**kwargs)

    def test_interval_elapsed(self) -> None:
        policy = FlushPolicy(flush_interval=2.0)
        assert not policy.interval_elapsed(10.0, 11.9)
        assert policy.interval_elapsed(10.0, 12.0)
        assert not FlushPolicy().interval_elapsed(0.0, 1e9)
