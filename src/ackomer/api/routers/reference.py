"""Condition and symptom reference lookups."""

from typing import Optional

from fastapi import APIRouter, Query, Request

from ...application.dto.reference_dto import condition_to_dict, question_to_dict, symptom_to_dict
from ...domain.enums.reference import ConditionCategory, Severity, SymptomCategory, UrgencyLevel
from ...domain.errors import ConditionNotFoundError, SymptomNotFoundError
from ..deps import ConditionRepositoryDep, SymptomRepositoryDep
from ..schemas.common import ApiResponse, ErrorResponse
from ..utils.responses import ok

conditions_router = APIRouter(prefix="/conditions", tags=["reference"])
symptoms_router = APIRouter(prefix="/symptoms", tags=["reference"])


@conditions_router.get("/search", response_model=ApiResponse[list])
async def search_conditions(
    request: Request,
    condition_repo: ConditionRepositoryDep,
    q: str = Query(..., min_length=1),
    category: Optional[ConditionCategory] = None,
    severity: Optional[Severity] = None,
    limit: int = Query(20, ge=1, le=100),
):
    conditions = await condition_repo.search(
        q,
        category=category.value if category else None,
        severity=severity.value if severity else None,
        limit=limit,
    )
    return ok(request, data=[condition_to_dict(c) for c in conditions], message="Conditions found")


@conditions_router.get("/icd10/{code}", response_model=ApiResponse[dict], responses={404: {"model": ErrorResponse}})
async def condition_by_icd10(request: Request, code: str, condition_repo: ConditionRepositoryDep):
    condition = await condition_repo.find_by_icd10(code)
    if not condition:
        raise ConditionNotFoundError(code.upper())
    return ok(request, data=condition_to_dict(condition), message="Condition retrieved")


@symptoms_router.get("/search", response_model=ApiResponse[list])
async def search_symptoms(
    request: Request,
    symptom_repo: SymptomRepositoryDep,
    q: str = Query(..., min_length=1),
    category: Optional[SymptomCategory] = None,
    urgency_level: Optional[UrgencyLevel] = Query(None, alias="urgencyLevel"),
    limit: int = Query(20, ge=1, le=100),
):
    symptoms = await symptom_repo.search(
        q,
        category=category.value if category else None,
        urgency_level=urgency_level.value if urgency_level else None,
        limit=limit,
    )
    return ok(request, data=[symptom_to_dict(s) for s in symptoms], message="Symptoms found")


@symptoms_router.get("/body-part/{part}", response_model=ApiResponse[list])
async def symptoms_by_body_part(request: Request, part: str, symptom_repo: SymptomRepositoryDep):
    symptoms = await symptom_repo.find_by_body_part(part)
    return ok(request, data=[symptom_to_dict(s) for s in symptoms], message="Symptoms retrieved")


@symptoms_router.get("/{name}/questions", response_model=ApiResponse[dict], responses={404: {"model": ErrorResponse}})
async def symptom_questions(
    request: Request,
    name: str,
    symptom_repo: SymptomRepositoryDep,
    min_importance: int = Query(5, alias="minImportance", ge=1, le=10),
):
    symptom = await symptom_repo.find_by_name(name)
    if not symptom:
        raise SymptomNotFoundError(name)
    questions = [question_to_dict(q) for q in symptom.assessment_questions(min_importance)]
    return ok(
        request,
        data={"symptom": symptom.name, "isUrgent": symptom.is_urgent, "questions": questions},
        message="Assessment questions retrieved",
    )
