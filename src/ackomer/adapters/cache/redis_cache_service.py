"""
Redis implementation of CacheService.

Every operation degrades to a no-op (False / None / allowed) while the
client is disconnected, so callers never need to guard on cache health.
"""

import json
import logging
import time
from typing import Any, Dict, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ackomer.application.ports.services.cache_service import CacheService
from ackomer.core.config import RedisSettings, get_settings

logger = logging.getLogger("ackomer")


def session_key(session_id: str) -> str:
    return f"session:{session_id}"


def transcription_status_key(transcription_id: str) -> str:
    return f"transcription:{transcription_id}:status"


def rate_limit_key(identifier: str) -> str:
    return f"rate_limit:{identifier}"


class RedisCacheService(CacheService):
    def __init__(self, settings: Optional[RedisSettings] = None) -> None:
        self._settings = settings or get_settings().redis
        self._client: Optional[redis.Redis] = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected and self._client is not None

    async def connect(self) -> bool:
        """Open the connection and verify it with PING. Returns False on failure."""
        if not self._settings.enabled:
            logger.info("Redis disabled by configuration; caching is off")
            return False
        try:
            self._client = redis.from_url(
                self._settings.url,
                decode_responses=True,
                socket_timeout=self._settings.socket_timeout,
                socket_connect_timeout=self._settings.socket_timeout,
            )
            await self._client.ping()
            self._connected = True
            logger.info("✅ Connected to Redis")
        except (RedisError, OSError) as e:
            logger.warning(f"⚠️ Redis unavailable, continuing without cache: {e}")
            self._connected = False
            await self._close_client()
        return self._connected

    async def close(self) -> None:
        await self._close_client()
        if self._connected:
            logger.info("Disconnected from Redis")
        self._connected = False

    async def _close_client(self) -> None:
        if self._client is not None:
            try:
                await self._client.aclose()
            except (RedisError, OSError) as e:
                logger.debug(f"Error closing Redis client: {e}")
            self._client = None

    # Generic operations

    async def set(self, key: str, value: Any, ttl: Optional[int] = 3600) -> bool:
        if not self.is_connected:
            return False
        try:
            payload = json.dumps(value, default=str)
            if ttl:
                await self._client.setex(key, ttl, payload)
            else:
                await self._client.set(key, payload)
            return True
        except (RedisError, OSError) as e:
            logger.error(f"Error setting cache value {key}: {e}")
            return False

    async def get(self, key: str) -> Optional[Any]:
        if not self.is_connected:
            return None
        try:
            data = await self._client.get(key)
            return json.loads(data) if data else None
        except (RedisError, OSError, ValueError) as e:
            logger.error(f"Error getting cache value {key}: {e}")
            return None

    async def delete(self, key: str) -> bool:
        if not self.is_connected:
            return False
        try:
            await self._client.delete(key)
            return True
        except (RedisError, OSError) as e:
            logger.error(f"Error deleting cache value {key}: {e}")
            return False

    async def exists(self, key: str) -> bool:
        if not self.is_connected:
            return False
        try:
            return await self._client.exists(key) == 1
        except (RedisError, OSError) as e:
            logger.error(f"Error checking cache key {key}: {e}")
            return False

    async def publish(self, channel: str, message: Any) -> bool:
        if not self.is_connected:
            return False
        try:
            await self._client.publish(channel, json.dumps(message, default=str))
            return True
        except (RedisError, OSError) as e:
            logger.error(f"Error publishing to {channel}: {e}")
            return False

    async def health_check(self) -> bool:
        if not self.is_connected:
            return False
        try:
            return bool(await self._client.ping())
        except (RedisError, OSError) as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    # Domain helpers

    async def cache_session(self, session_id: str, data: Dict[str, Any], ttl: Optional[int] = None) -> bool:
        return await self.set(session_key(session_id), data, ttl or self._settings.session_ttl)

    async def get_cached_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        return await self.get(session_key(session_id))

    async def invalidate_session(self, session_id: str) -> bool:
        return await self.delete(session_key(session_id))

    async def cache_transcription_status(
        self, transcription_id: str, status: str, ttl: Optional[int] = None
    ) -> bool:
        if not self.is_connected:
            return False
        try:
            await self._client.setex(
                transcription_status_key(transcription_id),
                ttl or self._settings.transcription_status_ttl,
                status,
            )
            return True
        except (RedisError, OSError) as e:
            logger.error(f"Error caching transcription status: {e}")
            return False

    async def get_transcription_status(self, transcription_id: str) -> Optional[str]:
        if not self.is_connected:
            return None
        try:
            return await self._client.get(transcription_status_key(transcription_id))
        except (RedisError, OSError) as e:
            logger.error(f"Error retrieving transcription status: {e}")
            return None

    async def check_rate_limit(
        self, identifier: str, limit: int = 100, window: int = 900
    ) -> Dict[str, Any]:
        allowed = {"allowed": True, "remaining": limit, "reset_time": None}
        if not self.is_connected:
            return allowed
        key = rate_limit_key(identifier)
        try:
            current = await self._client.incr(key)
            if current == 1:
                await self._client.expire(key, window)
            ttl = await self._client.ttl(key)
        except (RedisError, OSError) as e:
            logger.error(f"Error checking rate limit: {e}")
            return allowed
        ttl = ttl if ttl and ttl > 0 else window
        return {
            "allowed": current <= limit,
            "remaining": max(0, limit - current),
            "current": current,
            "reset_time": int(time.time()) + ttl,
        }


_cache_service: Optional[RedisCacheService] = None


def get_cache_service() -> RedisCacheService:
    """Shared cache instance; connected during application startup."""
    global _cache_service
    if _cache_service is None:
        _cache_service = RedisCacheService()
    return _cache_service
