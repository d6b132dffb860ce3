"""Consultation session endpoints."""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Query, Request, status

from ...application.dto.session_dto import CreateSessionRequest, session_to_dict
from ...application.ports.repositories.session_repo import SessionQuery
from ...application.use_cases.create_session import CreateSessionUseCase
from ...application.use_cases.get_session import (
    GetSessionUseCase,
    ListSessionsUseCase,
    SessionStatsUseCase,
)
from ...application.use_cases.update_session import (
    DeleteSessionUseCase,
    EndSessionUseCase,
    UpdateSessionUseCase,
)
from ...domain.enums.status import Priority, SessionStatus, SessionType
from ..deps import (
    CacheDep,
    PatientRepositoryDep,
    SessionRepositoryDep,
    SummaryRepositoryDep,
    TranscriptionRepositoryDep,
)
from ..schemas.common import ApiResponse, ErrorResponse
from ..schemas.sessions import CreateSessionSchema, EndSessionSchema, UpdateSessionSchema
from ..utils.responses import ok

router = APIRouter(prefix="/sessions", tags=["sessions"])
logger = logging.getLogger("ackomer")

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Session not found"}}


@router.post(
    "",
    response_model=ApiResponse[dict],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse, "description": "Patient not found"}},
)
async def create_session(
    request: Request,
    body: CreateSessionSchema,
    session_repo: SessionRepositoryDep,
    patient_repo: PatientRepositoryDep,
):
    use_case = CreateSessionUseCase(session_repo, patient_repo)
    session = await use_case.execute(
        CreateSessionRequest(
            doctor_name=body.doctor_name,
            patient_id=body.patient_id,
            doctor_id=body.doctor_id,
            session_type=body.session_type,
            department=body.department,
            priority=body.priority,
            notes=body.notes,
        )
    )
    return ok(request, data=session_to_dict(session), message="Session created successfully")


@router.get("", response_model=ApiResponse[dict])
async def list_sessions(
    request: Request,
    session_repo: SessionRepositoryDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: Optional[SessionStatus] = Query(None, alias="status"),
    doctor_id: Optional[str] = Query(None, alias="doctorId"),
    session_type: Optional[SessionType] = Query(None, alias="sessionType"),
    priority: Optional[Priority] = Query(None),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    search: Optional[str] = Query(None, max_length=100),
):
    query = SessionQuery(
        status=status_filter.value if status_filter else None,
        doctor_id=doctor_id,
        session_type=session_type.value if session_type else None,
        priority=priority.value if priority else None,
        start_date=start_date,
        end_date=end_date,
        search=search.strip() if search else None,
    )
    data = await ListSessionsUseCase(session_repo).execute(query, page=page, limit=limit)
    return ok(request, data=data, message="Sessions retrieved")


@router.get("/{session_id}", response_model=ApiResponse[dict], responses=NOT_FOUND)
async def get_session(
    request: Request,
    session_id: str,
    session_repo: SessionRepositoryDep,
    patient_repo: PatientRepositoryDep,
    transcription_repo: TranscriptionRepositoryDep,
    summary_repo: SummaryRepositoryDep,
    cache: CacheDep,
):
    use_case = GetSessionUseCase(session_repo, patient_repo, transcription_repo, summary_repo, cache)
    return ok(request, data=await use_case.execute(session_id), message="Session retrieved")


@router.put("/{session_id}", response_model=ApiResponse[dict], responses=NOT_FOUND)
async def update_session(
    request: Request,
    session_id: str,
    body: UpdateSessionSchema,
    session_repo: SessionRepositoryDep,
    cache: CacheDep,
):
    session = await UpdateSessionUseCase(session_repo, cache).execute(session_id, body.to_changes())
    return ok(request, data=session_to_dict(session), message="Session updated successfully")


@router.post("/{session_id}/end", response_model=ApiResponse[dict], responses=NOT_FOUND)
async def end_session(
    request: Request,
    session_id: str,
    session_repo: SessionRepositoryDep,
    cache: CacheDep,
    body: Optional[EndSessionSchema] = None,
):
    notes = body.notes if body else None
    session = await EndSessionUseCase(session_repo, cache).execute(session_id, notes)
    return ok(request, data=session_to_dict(session), message="Session ended successfully")


@router.delete("/{session_id}", response_model=ApiResponse[dict], responses=NOT_FOUND)
async def delete_session(
    request: Request,
    session_id: str,
    session_repo: SessionRepositoryDep,
    transcription_repo: TranscriptionRepositoryDep,
    summary_repo: SummaryRepositoryDep,
    cache: CacheDep,
):
    use_case = DeleteSessionUseCase(session_repo, transcription_repo, summary_repo, cache)
    await use_case.execute(session_id)
    return ok(request, data={"sessionId": session_id}, message="Session deleted successfully")


@router.get("/{session_id}/stats", response_model=ApiResponse[dict], responses=NOT_FOUND)
async def session_stats(
    request: Request,
    session_id: str,
    session_repo: SessionRepositoryDep,
    transcription_repo: TranscriptionRepositoryDep,
    summary_repo: SummaryRepositoryDep,
):
    data = await SessionStatsUseCase(session_repo, transcription_repo, summary_repo).execute(session_id)
    return ok(request, data=data, message="Session statistics retrieved")
