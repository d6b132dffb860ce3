"""Session write use cases: partial update, end and cascading delete."""

import logging
from typing import Any, Dict, Optional

from ...domain.entities.session import Session
from ...domain.errors import SessionNotFoundError
from ..ports.repositories.session_repo import SessionRepository
from ..ports.repositories.summary_repo import SummaryRepository
from ..ports.repositories.transcription_repo import TranscriptionRepository
from ..ports.services.cache_service import CacheService

logger = logging.getLogger("ackomer")


async def _load(repository: SessionRepository, session_id: str) -> Session:
    session = await repository.find_by_id(session_id)
    if not session:
        raise SessionNotFoundError(session_id)
    return session


class UpdateSessionUseCase:
    def __init__(self, session_repository: SessionRepository, cache: CacheService):
        self._session_repository = session_repository
        self._cache = cache

    async def execute(self, session_id: str, changes: Dict[str, Any]) -> Session:
        session = await _load(self._session_repository, session_id)
        applied = session.apply_update(changes)
        if applied:
            await self._session_repository.save(session)
            logger.info(f"Session {session_id} updated: {', '.join(applied)}")
        await self._cache.invalidate_session(session_id)
        return session


class EndSessionUseCase:
    def __init__(self, session_repository: SessionRepository, cache: CacheService):
        self._session_repository = session_repository
        self._cache = cache

    async def execute(self, session_id: str, notes: Optional[str] = None) -> Session:
        session = await _load(self._session_repository, session_id)
        session.end(notes)
        await self._session_repository.save(session)
        await self._cache.invalidate_session(session_id)
        logger.info(f"Session ended: {session_id} ({session.duration} min)")
        return session


class DeleteSessionUseCase:
    """Delete a session together with its transcriptions and summary."""

    def __init__(
        self,
        session_repository: SessionRepository,
        transcription_repository: TranscriptionRepository,
        summary_repository: SummaryRepository,
        cache: CacheService,
    ):
        self._session_repository = session_repository
        self._transcription_repository = transcription_repository
        self._summary_repository = summary_repository
        self._cache = cache

    async def execute(self, session_id: str) -> None:
        session = await _load(self._session_repository, session_id)

        removed = await self._transcription_repository.delete_by_session(session_id)
        summary = await self._summary_repository.find_by_session(session_id)
        if summary:
            await self._summary_repository.delete(summary.summary_id)
        await self._session_repository.delete(session.session_id)
        await self._cache.invalidate_session(session_id)
        logger.info(
            f"Session deleted: {session_id} ({removed} transcriptions, "
            f"summary={'yes' if summary else 'no'})"
        )
