"""
Patient repository interface for managing patient data.
"""

from typing import List, Optional, Tuple

from ackomer.domain.entities.patient import Patient


class PatientRepository:
    """Repository interface for managing patients."""

    async def save(self, patient: Patient) -> Patient:
        raise NotImplementedError

    async def find_by_id(self, patient_id: str) -> Optional[Patient]:
        raise NotImplementedError

    async def exists_by_id(self, patient_id: str) -> bool:
        raise NotImplementedError

    async def find_many(
        self, search: Optional[str] = None, skip: int = 0, limit: int = 20
    ) -> Tuple[List[Patient], int]:
        """Patients matching a name search, plus the total match count."""
        raise NotImplementedError
