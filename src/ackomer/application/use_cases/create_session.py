"""Create session use case."""

import logging

from ...domain.entities.session import Session
from ...domain.errors import PatientNotFoundError
from ..dto.session_dto import CreateSessionRequest
from ..ports.repositories.patient_repo import PatientRepository
from ..ports.repositories.session_repo import SessionRepository

logger = logging.getLogger("ackomer")


class CreateSessionUseCase:
    """Open a new consultation session, optionally linked to a patient."""

    def __init__(self, session_repository: SessionRepository, patient_repository: PatientRepository):
        self._session_repository = session_repository
        self._patient_repository = patient_repository

    async def execute(self, request: CreateSessionRequest) -> Session:
        if request.patient_id and not await self._patient_repository.exists_by_id(request.patient_id):
            raise PatientNotFoundError(request.patient_id)

        session = Session.start(
            request.doctor_name,
            patient_id=request.patient_id,
            doctor_id=request.doctor_id,
            session_type=request.session_type,
            department=request.department,
            priority=request.priority,
            notes=request.notes,
        )
        await self._session_repository.save(session)
        logger.info(f"Session created: {session.session_id}")
        return session
