"""Cache adapters."""

from .redis_cache_service import RedisCacheService, get_cache_service

__all__ = ["RedisCacheService", "get_cache_service"]
