"""Session read use cases: details (cached), listing and statistics."""

import logging
from typing import Any, Dict

from ...domain.enums.status import TranscriptionStatus
from ...domain.errors import SessionNotFoundError
from ..dto._format import pagination
from ..dto.session_dto import SessionStats, session_stats_to_dict, session_to_dict
from ..ports.repositories.patient_repo import PatientRepository
from ..ports.repositories.session_repo import SessionQuery, SessionRepository
from ..ports.repositories.summary_repo import SummaryRepository
from ..ports.repositories.transcription_repo import TranscriptionRepository
from ..ports.services.cache_service import CacheService

logger = logging.getLogger("ackomer")


class GetSessionUseCase:
    """Session with patient, transcriptions and summary populated; read through the cache."""

    def __init__(
        self,
        session_repository: SessionRepository,
        patient_repository: PatientRepository,
        transcription_repository: TranscriptionRepository,
        summary_repository: SummaryRepository,
        cache: CacheService,
    ):
        self._session_repository = session_repository
        self._patient_repository = patient_repository
        self._transcription_repository = transcription_repository
        self._summary_repository = summary_repository
        self._cache = cache

    async def execute(self, session_id: str) -> Dict[str, Any]:
        cached = await self._cache.get_cached_session(session_id)
        if cached:
            logger.debug(f"Session cache hit: {session_id}")
            return cached

        session = await self._session_repository.find_by_id(session_id)
        if not session:
            raise SessionNotFoundError(session_id)

        patient = None
        if session.patient_id:
            patient = await self._patient_repository.find_by_id(session.patient_id)
        transcriptions, _ = await self._transcription_repository.find_by_session(session_id)
        summary = None
        if session.summary_id:
            summary = await self._summary_repository.find_by_id(session.summary_id)

        data = session_to_dict(
            session, patient=patient, transcriptions=transcriptions, summary=summary
        )
        await self._cache.cache_session(session_id, data)
        return data


class ListSessionsUseCase:
    def __init__(self, session_repository: SessionRepository):
        self._session_repository = session_repository

    async def execute(self, query: SessionQuery, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        sessions, total = await self._session_repository.find_many(
            query, skip=(page - 1) * limit, limit=limit
        )
        return {
            "sessions": [session_to_dict(s) for s in sessions],
            "pagination": pagination(page, limit, total),
        }


class SessionStatsUseCase:
    def __init__(
        self,
        session_repository: SessionRepository,
        transcription_repository: TranscriptionRepository,
        summary_repository: SummaryRepository,
    ):
        self._session_repository = session_repository
        self._transcription_repository = transcription_repository
        self._summary_repository = summary_repository

    async def execute(self, session_id: str) -> Dict[str, Any]:
        session = await self._session_repository.find_by_id(session_id)
        if not session:
            raise SessionNotFoundError(session_id)

        transcriptions, total = await self._transcription_repository.find_by_session(session_id)
        by_status = {status: 0 for status in TranscriptionStatus}
        for transcription in transcriptions:
            by_status[transcription.status] += 1

        summary = None
        if session.summary_id:
            summary = await self._summary_repository.find_by_id(session.summary_id)

        stats = SessionStats(
            session=session,
            total_transcriptions=total,
            completed=by_status[TranscriptionStatus.COMPLETED],
            processing=by_status[TranscriptionStatus.PROCESSING],
            failed=by_status[TranscriptionStatus.FAILED],
            summary=summary,
        )
        return session_stats_to_dict(stats)
