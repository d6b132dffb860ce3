"""Per-client request rate limiting for the REST API, counted in Redis."""

import logging
import time
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..adapters.cache.redis_cache_service import get_cache_service
from ..api.errors import RateLimitError
from ..api.utils.responses import fail
from ..application.ports.services.cache_service import CacheService
from ..core.config import RateLimitSettings

logger = logging.getLogger("ackomer")

RATE_LIMITED_PREFIX = "/api/"


def client_identifier(request: Request, trust_forwarded_for: bool = False) -> str:
    """Client address; the first X-Forwarded-For hop only when the proxy is trusted."""
    if trust_forwarded_for:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Rejects /api requests over the configured budget with 429.

    When Redis is unavailable the cache reports every request as allowed.
    """

    def __init__(
        self,
        app,
        settings: RateLimitSettings,
        cache_provider: Optional[Callable[[], CacheService]] = None,
    ):
        super().__init__(app)
        self._settings = settings
        self._cache_provider = cache_provider or get_cache_service

    async def dispatch(self, request: Request, call_next):
        if not self._settings.enabled or not request.url.path.startswith(RATE_LIMITED_PREFIX):
            return await call_next(request)

        identifier = client_identifier(request, self._settings.trust_forwarded_for)
        result = await self._cache_provider().check_rate_limit(
            identifier, self._settings.max_requests, self._settings.window_seconds
        )
        if not result.get("allowed", True):
            reset_time = result.get("reset_time") or int(time.time()) + self._settings.window_seconds
            retry_after = max(1, int(reset_time - time.time()))
            logger.warning(f"Rate limit exceeded for {identifier} on {request.url.path}")
            error = RateLimitError(
                "Too many requests, please try again later.", {"retryAfter": retry_after}
            )
            response = fail(request, error.code, error.message, error.details, error.http_status)
            response.headers["Retry-After"] = str(retry_after)
            return response

        response = await call_next(request)
        remaining = result.get("remaining")
        if remaining is not None:
            response.headers["X-RateLimit-Limit"] = str(self._settings.max_requests)
            response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response
