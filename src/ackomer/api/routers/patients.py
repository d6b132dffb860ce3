"""Patient registry endpoints."""

from typing import Optional

from fastapi import APIRouter, Query, Request, status

from ...application.dto._format import pagination
from ...application.dto.patient_dto import patient_to_dict
from ...application.use_cases.register_patient import RegisterPatientUseCase
from ...domain.errors import PatientNotFoundError
from ..deps import PatientRepositoryDep
from ..schemas.common import ApiResponse, ErrorResponse
from ..schemas.patients import RegisterPatientSchema
from ..utils.responses import ok

router = APIRouter(prefix="/patients", tags=["patients"])


@router.post(
    "",
    response_model=ApiResponse[dict],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Invalid input"}},
)
async def register_patient(request: Request, body: RegisterPatientSchema, patient_repo: PatientRepositoryDep):
    patient = await RegisterPatientUseCase(patient_repo).execute(body.to_fields())
    return ok(request, data=patient_to_dict(patient), message="Patient registered successfully")


@router.get("", response_model=ApiResponse[dict])
async def list_patients(
    request: Request,
    patient_repo: PatientRepositoryDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
):
    patients, total = await patient_repo.find_many(
        search=search.strip() if search else None, skip=(page - 1) * limit, limit=limit
    )
    return ok(
        request,
        data={"patients": [patient_to_dict(p) for p in patients], "pagination": pagination(page, limit, total)},
        message="Patients retrieved",
    )


@router.get("/{patient_id}", response_model=ApiResponse[dict], responses={404: {"model": ErrorResponse}})
async def get_patient(request: Request, patient_id: str, patient_repo: PatientRepositoryDep):
    patient = await patient_repo.find_by_id(patient_id)
    if not patient:
        raise PatientNotFoundError(patient_id)
    return ok(request, data=patient_to_dict(patient), message="Patient retrieved")
