"""Reflexive question endpoints."""

import logging

from fastapi import APIRouter, Request

from ...application.use_cases.generate_questions import (
    QUESTION_CATEGORIES,
    GenerateQuestionsByTypeUseCase,
    GenerateQuestionsUseCase,
)
from ..deps import QuestionServiceDep, SessionRepositoryDep, TranscriptionRepositoryDep
from ..schemas.common import ApiResponse, ErrorResponse
from ..utils.responses import ok

router = APIRouter(prefix="/questions", tags=["questions"])
logger = logging.getLogger("ackomer")

ERRORS = {
    400: {"model": ErrorResponse, "description": "No usable transcription text"},
    404: {"model": ErrorResponse, "description": "Session not found"},
    503: {"model": ErrorResponse, "description": "Generative API not configured"},
}


@router.get("/categories", response_model=ApiResponse[list])
async def question_categories(request: Request):
    return ok(request, data=QUESTION_CATEGORIES, message="Question categories")


@router.post("/sessions/{session_id}/generate", response_model=ApiResponse[dict], responses=ERRORS)
async def generate_questions(
    request: Request,
    session_id: str,
    session_repo: SessionRepositoryDep,
    transcription_repo: TranscriptionRepositoryDep,
    question_service: QuestionServiceDep,
):
    use_case = GenerateQuestionsUseCase(session_repo, transcription_repo, question_service)
    data = await use_case.execute(session_id)
    return ok(request, data=data, message="Questions generated successfully")


@router.post("/sessions/{session_id}/{question_type}", response_model=ApiResponse[dict], responses=ERRORS)
async def generate_questions_by_type(
    request: Request,
    session_id: str,
    question_type: str,
    session_repo: SessionRepositoryDep,
    transcription_repo: TranscriptionRepositoryDep,
    question_service: QuestionServiceDep,
):
    use_case = GenerateQuestionsByTypeUseCase(session_repo, transcription_repo, question_service)
    data = await use_case.execute(session_id, question_type)
    return ok(request, data=data, message=f"{data['type']} questions generated")
