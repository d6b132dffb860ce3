"""Manual transcription edits and deletion."""

import logging

from ...domain.entities.transcription import Transcription
from ...domain.enums.status import Speaker
from ...domain.errors import TranscriptionNotFoundError
from ...core.utils.file_utils import delete_file
from ..dto.transcription_dto import EditTranscriptionRequest
from ..ports.repositories.session_repo import SessionRepository
from ..ports.repositories.transcription_repo import TranscriptionRepository
from ..ports.services.cache_service import CacheService

logger = logging.getLogger("ackomer")


class EditTranscriptionUseCase:
    def __init__(self, transcription_repository: TranscriptionRepository, cache: CacheService):
        self._transcription_repository = transcription_repository
        self._cache = cache

    async def execute(self, transcription_id: str, request: EditTranscriptionRequest) -> Transcription:
        transcription = await self._transcription_repository.find_by_id(transcription_id)
        if not transcription:
            raise TranscriptionNotFoundError(transcription_id)

        changed = False
        if request.text:
            changed = transcription.edit(request.text, request.edited_by)
        if request.speaker:
            transcription.speaker = Speaker(request.speaker)
            transcription.touch()
            changed = True

        if changed:
            await self._transcription_repository.save(transcription)
            await self._cache.invalidate_session(transcription.session_id)
            logger.info(f"Transcription edited: {transcription_id}")
        return transcription


class DeleteTranscriptionUseCase:
    """Unlink a transcription from its session, then delete it."""

    def __init__(
        self,
        transcription_repository: TranscriptionRepository,
        session_repository: SessionRepository,
        cache: CacheService,
    ):
        self._transcription_repository = transcription_repository
        self._session_repository = session_repository
        self._cache = cache

    async def execute(self, transcription_id: str) -> None:
        transcription = await self._transcription_repository.find_by_id(transcription_id)
        if not transcription:
            raise TranscriptionNotFoundError(transcription_id)

        session = await self._session_repository.find_by_id(transcription.session_id)
        if session:
            session.remove_transcription(transcription_id)
            await self._session_repository.save(session)

        delete_file(transcription.audio_file.path)
        await self._transcription_repository.delete(transcription_id)
        await self._cache.invalidate_session(transcription.session_id)
        logger.info(f"Transcription deleted: {transcription_id}")
