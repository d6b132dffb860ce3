"""Clinical summary endpoints."""

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Query, Request, status
from fastapi.responses import Response

from ...application.dto.summary_dto import (
    GenerateSummaryRequest,
    UpdateSummaryRequest,
    summary_to_dict,
)
from ...application.use_cases.generate_summary import GenerateSummaryUseCase
from ...application.use_cases.manage_summary import (
    ApproveSummaryUseCase,
    DeleteSummaryUseCase,
    ExportNotSupportedError,
    ExportSummaryUseCase,
    UpdateSummaryUseCase,
)
from ...domain.enums.status import SummaryStatus
from ...domain.errors import SessionNotFoundError, SummaryNotFoundError
from ..deps import (
    CacheDep,
    EventPublisherDep,
    SessionRepositoryDep,
    SummaryRepositoryDep,
    SummaryServiceDep,
    TranscriptionRepositoryDep,
)
from ..errors import NotImplementedFeatureError
from ..schemas.common import ApiResponse, ErrorResponse
from ..schemas.summaries import ApproveSummarySchema, GenerateSummarySchema, UpdateSummarySchema
from ..utils.responses import ok

router = APIRouter(prefix="/summaries", tags=["summaries"])
logger = logging.getLogger("ackomer")


@router.post(
    "/generate",
    response_model=ApiResponse[dict],
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        400: {"model": ErrorResponse, "description": "No transcriptions or summary already exists"},
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def generate_summary(
    request: Request,
    body: GenerateSummarySchema,
    background: BackgroundTasks,
    session_repo: SessionRepositoryDep,
    transcription_repo: TranscriptionRepositoryDep,
    summary_repo: SummaryRepositoryDep,
    summary_service: SummaryServiceDep,
    cache: CacheDep,
    publisher: EventPublisherDep,
):
    use_case = GenerateSummaryUseCase(
        session_repo, transcription_repo, summary_repo, summary_service, cache, publisher
    )
    job = await use_case.execute(
        GenerateSummaryRequest(session_id=body.session_id, regenerate=body.regenerate)
    )
    background.add_task(use_case.process, job)
    return ok(
        request,
        data={"summaryId": job.summary_id, "status": SummaryStatus.GENERATING.value},
        message="Summary generation started",
    )


@router.get("/session/{session_id}", response_model=ApiResponse[dict])
async def get_session_summary(
    request: Request,
    session_id: str,
    session_repo: SessionRepositoryDep,
    summary_repo: SummaryRepositoryDep,
):
    if not await session_repo.exists_by_id(session_id):
        raise SessionNotFoundError(session_id)
    summary = await summary_repo.find_by_session(session_id)
    if not summary:
        raise SummaryNotFoundError(session_id)
    return ok(request, data=summary_to_dict(summary, include_history=False), message="Summary retrieved")


@router.get("/{summary_id}", response_model=ApiResponse[dict])
async def get_summary(
    request: Request,
    summary_id: str,
    summary_repo: SummaryRepositoryDep,
    include_history: bool = Query(False, alias="includeHistory"),
):
    summary = await summary_repo.find_by_id(summary_id)
    if not summary:
        raise SummaryNotFoundError(summary_id)
    return ok(request, data=summary_to_dict(summary, include_history=include_history), message="Summary retrieved")


@router.put("/{summary_id}", response_model=ApiResponse[dict])
async def update_summary(
    request: Request,
    summary_id: str,
    body: UpdateSummarySchema,
    summary_repo: SummaryRepositoryDep,
    cache: CacheDep,
):
    summary = await UpdateSummaryUseCase(summary_repo, cache).execute(
        summary_id,
        UpdateSummaryRequest(
            content=body.content, review_notes=body.review_notes, reviewed_by=body.reviewed_by
        ),
    )
    return ok(request, data=summary_to_dict(summary, include_history=False), message="Summary updated successfully")


@router.post("/{summary_id}/approve", response_model=ApiResponse[dict])
async def approve_summary(
    request: Request,
    summary_id: str,
    body: ApproveSummarySchema,
    summary_repo: SummaryRepositoryDep,
    cache: CacheDep,
):
    summary = await ApproveSummaryUseCase(summary_repo, cache).execute(
        summary_id, body.approved_by, body.notes
    )
    return ok(request, data=summary_to_dict(summary, include_history=False), message="Summary approved successfully")


@router.get(
    "/{summary_id}/export",
    responses={
        200: {"description": "JSON document download"},
        400: {"model": ErrorResponse, "description": "Unknown format"},
        501: {"model": ErrorResponse, "description": "Format not implemented"},
    },
)
async def export_summary(
    summary_id: str,
    summary_repo: SummaryRepositoryDep,
    export_format: str = Query("json", alias="format"),
):
    try:
        document = await ExportSummaryUseCase(summary_repo).execute(summary_id, export_format)
    except ExportNotSupportedError as e:
        raise NotImplementedFeatureError(str(e), {"format": e.export_format.value})
    return Response(
        content=json.dumps(document, indent=2),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="summary-{summary_id}.json"'},
    )


@router.delete("/{summary_id}", response_model=ApiResponse[dict])
async def delete_summary(
    request: Request,
    summary_id: str,
    summary_repo: SummaryRepositoryDep,
    session_repo: SessionRepositoryDep,
    cache: CacheDep,
):
    await DeleteSummaryUseCase(summary_repo, session_repo, cache).execute(summary_id)
    return ok(request, data={"summaryId": summary_id}, message="Summary deleted successfully")
