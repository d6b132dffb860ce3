"""
Redis cache degradation and rate limiting tests.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ackomer.adapters.cache.redis_cache_service import RedisCacheService, rate_limit_key
from ackomer.core.config import RateLimitSettings, RedisSettings
from ackomer.middleware import RateLimitMiddleware

from tests.fakes import DictCache


class CountingRedis:
    """Just enough of the redis client for INCR-based rate limiting."""

    def __init__(self):
        self.counts = {}
        self.expiries = {}

    async def incr(self, key):
        self.counts[key] = self.counts.get(key, 0) + 1
        return self.counts[key]

    async def expire(self, key, seconds):
        self.expiries[key] = seconds

    async def ttl(self, key):
        return self.expiries.get(key, -1)


@pytest.mark.asyncio
async def test_disconnected_cache_is_a_no_op():
    cache = RedisCacheService(RedisSettings(enabled=False))
    assert await cache.connect() is False
    assert await cache.cache_session("sess_1", {"a": 1}) is False
    assert await cache.get_cached_session("sess_1") is None
    assert await cache.invalidate_session("sess_1") is False
    assert await cache.get_transcription_status("trans_1") is None
    assert await cache.health_check() is False
    assert await cache.check_rate_limit("1.2.3.4", limit=5) == {
        "allowed": True,
        "remaining": 5,
        "reset_time": None,
    }


@pytest.mark.asyncio
async def test_rate_limit_counts_within_window():
    cache = RedisCacheService(RedisSettings())
    client = CountingRedis()
    cache._client = client
    cache._connected = True

    results = [await cache.check_rate_limit("1.2.3.4", limit=2, window=60) for _ in range(3)]
    assert [r["allowed"] for r in results] == [True, True, False]
    assert [r["remaining"] for r in results] == [1, 0, 0]
    assert client.expiries == {rate_limit_key("1.2.3.4"): 60}


def _limited_app(cache, max_requests=2, trust_forwarded_for=False):
    app = FastAPI()
    settings = RateLimitSettings(
        enabled=True,
        max_requests=max_requests,
        window_seconds=60,
        trust_forwarded_for=trust_forwarded_for,
    )
    app.add_middleware(RateLimitMiddleware, settings=settings, cache_provider=lambda: cache)

    @app.get("/api/ping")
    async def ping():
        return {"ok": True}

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app


def test_rate_limit_middleware_rejects_over_budget():
    client = TestClient(_limited_app(DictCache()))
    first = client.get("/api/ping")
    assert first.status_code == 200
    assert first.headers["X-RateLimit-Remaining"] == "1"
    client.get("/api/ping")

    response = client.get("/api/ping")
    assert response.status_code == 429
    assert response.json()["error"] == "RATE_LIMITED"
    assert response.json()["details"]["retryAfter"] >= 1
    assert int(response.headers["Retry-After"]) >= 1


def test_rate_limit_middleware_ignores_non_api_paths():
    cache = DictCache()
    client = TestClient(_limited_app(cache, max_requests=1))
    for _ in range(3):
        assert client.get("/health").status_code == 200
    assert cache.hits == {}


def test_rate_limit_is_per_forwarded_client_behind_trusted_proxy():
    cache = DictCache()
    client = TestClient(_limited_app(cache, max_requests=1, trust_forwarded_for=True))
    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.1, 172.16.0.1"}).status_code == 200
    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.2"}).status_code == 200
    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 429
    assert set(cache.hits) == {"10.0.0.1", "10.0.0.2"}


def test_forwarded_header_is_ignored_unless_proxy_is_trusted():
    cache = DictCache()
    client = TestClient(_limited_app(cache, max_requests=1))
    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 200
    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.2"}).status_code == 429
    assert set(cache.hits) == {"testclient"}
