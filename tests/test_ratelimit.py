"""Unit tests for app.middleware.ratelimit bucket housekeeping."""

from collections import deque

from app.middleware.ratelimit import RateLimitMiddleware


def _limiter():
    return RateLimitMiddleware(None, window_seconds=60, max_calls=3, key_func=lambda r: "ip:x")


def test_prune_drops_idle_keys():
    limiter = _limiter()
    limiter._buckets = {
        "ip:old": deque([10.0, 20.0]),
        "ip:mixed": deque([10.0, 95.0]),
        "ip:fresh": deque([99.0]),
    }
    limiter._prune(cutoff=50.0)
    assert limiter._buckets == {"ip:mixed": deque([95.0]), "ip:fresh": deque([99.0])}


def test_prune_empty_map():
    limiter = _limiter()
    limiter._prune(cutoff=0.0)
    assert limiter._buckets == {}
