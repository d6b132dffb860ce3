"""Register patient use case."""

import logging
from typing import Any, Dict

from ...domain.entities.patient import Patient
from ...domain.errors import DuplicatePatientError
from ..ports.repositories.patient_repo import PatientRepository

logger = logging.getLogger("ackomer")


class RegisterPatientUseCase:
    def __init__(self, patient_repository: PatientRepository):
        self._patient_repository = patient_repository

    async def execute(self, fields: Dict[str, Any]) -> Patient:
        """Register a patient under a client-supplied id, or a generated one."""
        patient = Patient.register(**fields)
        if await self._patient_repository.exists_by_id(patient.patient_id):
            raise DuplicatePatientError(patient.patient_id)
        await self._patient_repository.save(patient)
        logger.info(f"Patient registered: {patient.patient_id}")
        return patient
