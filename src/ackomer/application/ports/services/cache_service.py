"""
Cache service interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class CacheService(ABC):
    """Key-value cache with TTLs. Implementations degrade to no-ops when unavailable."""

    @abstractmethod
    async def cache_session(self, session_id: str, data: Dict[str, Any], ttl: Optional[int] = None) -> bool:
        pass

    @abstractmethod
    async def get_cached_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def invalidate_session(self, session_id: str) -> bool:
        pass

    @abstractmethod
    async def cache_transcription_status(
        self, transcription_id: str, status: str, ttl: Optional[int] = None
    ) -> bool:
        pass

    @abstractmethod
    async def get_transcription_status(self, transcription_id: str) -> Optional[str]:
        pass

    @abstractmethod
    async def check_rate_limit(
        self, identifier: str, limit: int = 100, window: int = 900
    ) -> Dict[str, Any]:
        """Count a hit; returns {allowed, remaining, reset_time}."""
        pass
