"""Tests for RateLimiter spacing on fake time."""

from __future__ import annotations

import pytest

from map_organiser.ratelimit import RateLimiter


class TestRateLimiter:
    def test_first_call_does_not_wait(self, limiter, fake_clock):
        assert limiter.acquire() == 0.0
        assert fake_clock.sleeps == []

    def test_back_to_back_calls_are_spaced(self, limiter, fake_clock):
        starts = []
        for _ in range(4):
            limiter.acquire()
            starts.append(fake_clock.now)
        assert all(b - a >= 1.0 for a, b in zip(starts, starts[1:]))

    def test_elapsed_time_counts_toward_spacing(self, limiter, fake_clock):
        limiter.acquire()
        fake_clock.advance(0.7)
        waited = limiter.acquire()
        assert waited == pytest.approx(0.3)

    def test_no_wait_after_long_gap(self, limiter, fake_clock):
        limiter.acquire()
        fake_clock.advance(5.0)
        assert limiter.acquire() == 0.0

    def test_next_available_at(self, limiter, fake_clock):
        limiter.acquire()
        assert limiter.next_available_at == fake_clock.now + 1.0

    def test_negative_interval_rejected(self):
        with pytest.raises(ValueError):
            RateLimiter(min_interval=-1)
