"""Audio transcription use cases: queued upload and live chunk streaming."""

import logging
import os
from typing import Any, Dict, Optional

from ...core.config import AudioSettings
from ...core.exceptions import ConfigurationError
from ...core.utils.file_utils import delete_file, save_upload_bytes
from ...domain.entities.transcription import AudioFileInfo, Transcription
from ...domain.enums.status import TranscriptionStatus
from ...domain.errors import InvalidAudioFileError, SessionNotFoundError
from ..dto.transcription_dto import StreamChunkRequest, UploadAudioRequest
from ..ports.repositories.session_repo import SessionRepository
from ..ports.repositories.transcription_repo import TranscriptionRepository
from ..ports.services.cache_service import CacheService
from ..ports.services.event_publisher import EventPublisher
from ..ports.services.speech_service import SpeechService

logger = logging.getLogger("ackomer")

INVALID_FILE_TYPE_MESSAGE = "Invalid file type. Only audio files are allowed."
SPEECH_NOT_CONFIGURED_MESSAGE = "Speech service is not configured"


def validate_audio(
    content: bytes, mime_type: Optional[str], allowed_mime_types, max_bytes: int
) -> str:
    """Return the normalized MIME type or raise InvalidAudioFileError."""
    if not content:
        raise InvalidAudioFileError("No audio file provided")
    normalized = (mime_type or "").split(";")[0].strip().lower()
    if normalized not in allowed_mime_types:
        raise InvalidAudioFileError(INVALID_FILE_TYPE_MESSAGE, {"mime_type": mime_type})
    if len(content) > max_bytes:
        raise InvalidAudioFileError(
            f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB",
            {"size": len(content), "max_size": max_bytes},
        )
    return normalized


class UploadAudioUseCase:
    """Store an upload, create a processing record and transcribe it in the background."""

    def __init__(
        self,
        session_repository: SessionRepository,
        transcription_repository: TranscriptionRepository,
        speech_service: SpeechService,
        cache: CacheService,
        publisher: EventPublisher,
        audio_settings: AudioSettings,
        storage_path: str,
    ):
        self._session_repository = session_repository
        self._transcription_repository = transcription_repository
        self._speech_service = speech_service
        self._cache = cache
        self._publisher = publisher
        self._audio_settings = audio_settings
        self._storage_path = storage_path

    async def execute(self, request: UploadAudioRequest) -> Transcription:
        mime_type = validate_audio(
            request.content,
            request.mime_type,
            self._audio_settings.allowed_mime_types,
            self._audio_settings.max_size_bytes,
        )

        path = save_upload_bytes(request.content, self._storage_path, request.filename)
        session = await self._session_repository.find_by_id(request.session_id)
        if not session:
            delete_file(path)
            raise SessionNotFoundError(request.session_id)
        if not self._speech_service.is_configured():
            delete_file(path)
            raise ConfigurationError(SPEECH_NOT_CONFIGURED_MESSAGE)

        audio_file = AudioFileInfo(
            original_name=request.filename,
            filename=os.path.basename(path),
            path=path,
            size=len(request.content),
            mime_type=mime_type,
        )
        transcription = Transcription.pending(
            request.session_id, audio_file, language=request.language
        )
        await self._transcription_repository.save(transcription)
        await self._cache.invalidate_session(request.session_id)
        await self._cache.cache_transcription_status(
            transcription.transcription_id, TranscriptionStatus.PROCESSING.value
        )
        logger.info(
            f"Audio stored for transcription {transcription.transcription_id} "
            f"(session={request.session_id}, size={len(request.content)} bytes)"
        )
        return transcription

    async def process(self, transcription_id: str) -> None:
        """Background job: call the speech service and publish the outcome."""
        transcription = await self._transcription_repository.find_by_id(transcription_id)
        if not transcription:
            logger.error(f"Transcription {transcription_id} vanished before processing")
            return

        session_id = transcription.session_id
        path = transcription.audio_file.path
        try:
            with open(path, "rb") as fh:
                audio = fh.read()
            result = await self._speech_service.transcribe(
                audio,
                language=transcription.language,
                mime_type=transcription.audio_file.mime_type,
                filename=transcription.audio_file.original_name,
            )
            transcription.complete(
                text=result.text,
                confidence=result.confidence,
                language=result.language,
                segments=result.segments,
                speaker_count=result.speaker_count,
                model=result.model,
                processing_time=result.processing_time,
            )
            await self._transcription_repository.save(transcription)

            session = await self._session_repository.find_by_id(session_id)
            if session:
                session.add_transcription(transcription_id)
                await self._session_repository.save(session)
            await self._cache.invalidate_session(session_id)
            await self._cache.cache_transcription_status(
                transcription_id, TranscriptionStatus.COMPLETED.value
            )
            logger.info(
                f"Transcription completed: {transcription_id} "
                f"(session={session_id}, confidence={result.confidence})"
            )
            await self._publisher.emit(
                session_id,
                "transcription-completed",
                {
                    "transcriptionId": transcription_id,
                    "text": result.text,
                    "confidence": result.confidence,
                },
            )
        except Exception as e:
            logger.error(f"Transcription failed: {transcription_id} (session={session_id}): {e}")
            transcription.fail(str(e))
            await self._transcription_repository.save(transcription)
            await self._cache.invalidate_session(session_id)
            await self._cache.cache_transcription_status(
                transcription_id, TranscriptionStatus.FAILED.value
            )
            await self._publisher.emit(
                session_id,
                "transcription-failed",
                {"transcriptionId": transcription_id, "error": str(e)},
            )
        finally:
            delete_file(path)


class StreamTranscriptionUseCase:
    """Transcribe one live recording chunk synchronously and push it to the session room."""

    def __init__(
        self,
        session_repository: SessionRepository,
        speech_service: SpeechService,
        publisher: EventPublisher,
        audio_settings: AudioSettings,
    ):
        self._session_repository = session_repository
        self._speech_service = speech_service
        self._publisher = publisher
        self._audio_settings = audio_settings

    async def execute(self, request: StreamChunkRequest) -> Dict[str, Any]:
        mime_type = validate_audio(
            request.content,
            request.mime_type,
            self._audio_settings.allowed_mime_types,
            self._audio_settings.stream_chunk_max_bytes,
        )
        if not await self._session_repository.exists_by_id(request.session_id):
            raise SessionNotFoundError(request.session_id)
        if not self._speech_service.is_configured():
            raise ConfigurationError(SPEECH_NOT_CONFIGURED_MESSAGE)

        result = await self._speech_service.transcribe(
            request.content,
            language=request.language,
            mime_type=mime_type,
            filename=request.filename,
        )
        if result.text:
            await self._publisher.emit(
                request.session_id,
                "live-transcription",
                {
                    "transcriptionId": request.recording_id,
                    "text": result.text,
                    "confidence": result.confidence,
                    "isLive": True,
                },
            )
            logger.info(f"Live transcription sent for session {request.session_id}")
        return {
            "sessionId": request.session_id,
            "recordingId": request.recording_id,
            "text": result.text,
            "confidence": result.confidence,
            "isLive": request.is_live,
        }
