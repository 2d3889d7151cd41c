"""
Unit tests — sliding-window flood control (middlewares/rate_limit_middleware.py).
"""
from __future__ import annotations

from pitchbot.middlewares.rate_limit_middleware import RateLimitMiddleware


class TestRateLimit:
    def test_allows_up_to_rate(self) -> None:
        limiter = RateLimitMiddleware(rate=3, period=60.0)
        assert [limiter.allow(1, now=t) for t in (0.0, 1.0, 2.0, 3.0)] == [True, True, True, False]

    def test_window_slides(self) -> None:
        limiter = RateLimitMiddleware(rate=2, period=10.0)
        limiter.allow(1, now=0.0)
        limiter.allow(1, now=5.0)
        assert not limiter.allow(1, now=9.0)
        assert limiter.allow(1, now=10.5)

    def test_users_are_independent(self) -> None:
        limiter = RateLimitMiddleware(rate=1, period=60.0)
        assert limiter.allow(1, now=0.0)
        assert limiter.allow(2, now=0.0)
        assert not limiter.allow(1, now=1.0)
