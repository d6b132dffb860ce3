"""
Summary repository interface.
"""

from typing import Optional

from ackomer.domain.entities.summary import Summary


class SummaryRepository:
    """Repository interface for managing summaries."""

    async def save(self, summary: Summary) -> Summary:
        raise NotImplementedError

    async def find_by_id(self, summary_id: str) -> Optional[Summary]:
        raise NotImplementedError

    async def find_by_session(self, session_id: str) -> Optional[Summary]:
        raise NotImplementedError

    async def delete(self, summary_id: str) -> bool:
        raise NotImplementedError
