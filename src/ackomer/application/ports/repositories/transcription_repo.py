"""
Transcription repository interface.
"""

from typing import List, Optional, Tuple

from ackomer.domain.entities.transcription import Transcription


class TranscriptionRepository:
    """Repository interface for managing transcriptions."""

    async def save(self, transcription: Transcription) -> Transcription:
        raise NotImplementedError

    async def find_by_id(self, transcription_id: str) -> Optional[Transcription]:
        raise NotImplementedError

    async def find_by_session(
        self,
        session_id: str,
        status: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[Transcription], int]:
        """Transcriptions of a session in creation order, plus the total match count."""
        raise NotImplementedError

    async def delete(self, transcription_id: str) -> bool:
        raise NotImplementedError

    async def delete_by_session(self, session_id: str) -> int:
        """Delete every transcription of a session; returns the number removed."""
        raise NotImplementedError
