"""
Session repository interface for managing session data.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from ackomer.domain.entities.session import Session


@dataclass
class SessionQuery:
    """Filters for listing sessions. Unset fields do not filter."""

    status: Optional[str] = None
    doctor_id: Optional[str] = None
    session_type: Optional[str] = None
    priority: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    search: Optional[str] = None


class SessionRepository:
    """Repository interface for managing sessions."""

    async def save(self, session: Session) -> Session:
        """Insert or replace a session."""
        raise NotImplementedError

    async def find_by_id(self, session_id: str) -> Optional[Session]:
        """Find a session by its public ID."""
        raise NotImplementedError

    async def exists_by_id(self, session_id: str) -> bool:
        """Check if a session exists by ID."""
        raise NotImplementedError

    async def find_many(
        self, query: SessionQuery, skip: int = 0, limit: int = 20
    ) -> Tuple[List[Session], int]:
        """Sessions matching the query, newest start time first, plus the total match count."""
        raise NotImplementedError

    async def delete(self, session_id: str) -> bool:
        """Delete a session by ID."""
        raise NotImplementedError
