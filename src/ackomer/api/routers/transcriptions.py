"""Audio upload, live streaming and transcription management endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, File, Form, Query, Request, UploadFile, status

from ...application.dto._format import pagination
from ...application.dto.transcription_dto import (
    EditTranscriptionRequest,
    StreamChunkRequest,
    UploadAudioRequest,
    transcription_to_dict,
)
from ...application.use_cases.edit_transcription import (
    DeleteTranscriptionUseCase,
    EditTranscriptionUseCase,
)
from ...application.use_cases.transcribe_audio import (
    StreamTranscriptionUseCase,
    UploadAudioUseCase,
)
from ...domain.enums.status import TranscriptionStatus
from ...domain.errors import SessionNotFoundError, TranscriptionNotFoundError
from ..deps import (
    CacheDep,
    EventPublisherDep,
    SessionRepositoryDep,
    SettingsDep,
    SpeechServiceDep,
    TranscriptionRepositoryDep,
)
from ..schemas.common import ApiResponse, ErrorResponse
from ..schemas.transcriptions import EditTranscriptionSchema
from ..utils.responses import ok

router = APIRouter(prefix="/transcriptions", tags=["transcriptions"])
logger = logging.getLogger("ackomer")


@router.post(
    "/upload",
    response_model=ApiResponse[dict],
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid audio file or missing session id"},
        404: {"model": ErrorResponse, "description": "Session not found"},
        503: {"model": ErrorResponse, "description": "Speech service not configured"},
    },
)
async def upload_audio(
    request: Request,
    background: BackgroundTasks,
    session_repo: SessionRepositoryDep,
    transcription_repo: TranscriptionRepositoryDep,
    speech_service: SpeechServiceDep,
    cache: CacheDep,
    publisher: EventPublisherDep,
    settings: SettingsDep,
    audio: UploadFile = File(...),
    session_id: str = Form(..., alias="sessionId", min_length=1),
    language: str = Form(None),
):
    """Queue audio transcription and return immediately (202)."""
    content = await audio.read()
    logger.info(
        f"Audio upload received: session_id={session_id}, filename={audio.filename}, "
        f"content_type={audio.content_type}, size={len(content)}"
    )
    use_case = UploadAudioUseCase(
        session_repo,
        transcription_repo,
        speech_service,
        cache,
        publisher,
        settings.audio,
        settings.file_storage.audio_storage_path,
    )
    transcription = await use_case.execute(
        UploadAudioRequest(
            session_id=session_id,
            content=content,
            filename=audio.filename,
            mime_type=audio.content_type,
            language=language or settings.audio.default_language,
        )
    )
    background.add_task(use_case.process, transcription.transcription_id)
    return ok(
        request,
        data={
            "transcriptionId": transcription.transcription_id,
            "status": TranscriptionStatus.PROCESSING.value,
        },
        message="Audio uploaded successfully, transcription in progress",
    )


@router.post(
    "/stream",
    response_model=ApiResponse[dict],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def stream_audio_chunk(
    request: Request,
    session_repo: SessionRepositoryDep,
    speech_service: SpeechServiceDep,
    publisher: EventPublisherDep,
    settings: SettingsDep,
    audio: UploadFile = File(...),
    session_id: str = Form(..., alias="sessionId", min_length=1),
    recording_id: Optional[str] = Form(None, alias="recordingId"),
    is_live: bool = Form(True, alias="isLive"),
    language: str = Form(None),
):
    """Transcribe one live recording chunk and push it to the session room."""
    content = await audio.read()
    use_case = StreamTranscriptionUseCase(session_repo, speech_service, publisher, settings.audio)
    data = await use_case.execute(
        StreamChunkRequest(
            session_id=session_id,
            content=content,
            recording_id=recording_id,
            is_live=is_live,
            filename=audio.filename,
            mime_type=audio.content_type,
            language=language or settings.audio.default_language,
        )
    )
    return ok(request, data=data, message="Live transcription processed")


@router.get("/session/{session_id}", response_model=ApiResponse[dict])
async def list_session_transcriptions(
    request: Request,
    session_id: str,
    session_repo: SessionRepositoryDep,
    transcription_repo: TranscriptionRepositoryDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: Optional[TranscriptionStatus] = Query(None, alias="status"),
):
    if not await session_repo.exists_by_id(session_id):
        raise SessionNotFoundError(session_id)
    transcriptions, total = await transcription_repo.find_by_session(
        session_id,
        status=status_filter.value if status_filter else None,
        skip=(page - 1) * limit,
        limit=limit,
    )
    return ok(
        request,
        data={
            "transcriptions": [transcription_to_dict(t) for t in transcriptions],
            "pagination": pagination(page, limit, total),
        },
        message="Transcriptions retrieved",
    )


@router.get("/{transcription_id}", response_model=ApiResponse[dict])
async def get_transcription(
    request: Request,
    transcription_id: str,
    transcription_repo: TranscriptionRepositoryDep,
    cache: CacheDep,
):
    transcription = await transcription_repo.find_by_id(transcription_id)
    if not transcription:
        raise TranscriptionNotFoundError(transcription_id)
    data = transcription_to_dict(transcription)
    cached_status = await cache.get_transcription_status(transcription_id)
    if cached_status:
        data["status"] = cached_status
    return ok(request, data=data, message="Transcription retrieved")


@router.put("/{transcription_id}", response_model=ApiResponse[dict])
async def update_transcription(
    request: Request,
    transcription_id: str,
    body: EditTranscriptionSchema,
    transcription_repo: TranscriptionRepositoryDep,
    cache: CacheDep,
):
    transcription = await EditTranscriptionUseCase(transcription_repo, cache).execute(
        transcription_id,
        EditTranscriptionRequest(
            text=body.text,
            speaker=body.speaker.value if body.speaker else None,
            edited_by=body.edited_by,
        ),
    )
    return ok(request, data=transcription_to_dict(transcription), message="Transcription updated successfully")


@router.delete("/{transcription_id}", response_model=ApiResponse[dict])
async def delete_transcription(
    request: Request,
    transcription_id: str,
    transcription_repo: TranscriptionRepositoryDep,
    session_repo: SessionRepositoryDep,
    cache: CacheDep,
):
    await DeleteTranscriptionUseCase(transcription_repo, session_repo, cache).execute(transcription_id)
    return ok(request, data={"transcriptionId": transcription_id}, message="Transcription deleted successfully")
