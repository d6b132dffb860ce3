"""
Real-time event publishing interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class EventPublisher(ABC):
    """Pushes named events to clients subscribed to a room."""

    @abstractmethod
    async def emit(self, room: str, event: str, data: Dict[str, Any]) -> int:
        """Send an event to every member of ``room``; returns how many received it."""
        pass
