"""
Repositories for clinical reference data. Lookups serve the API; saves load seed data.
"""

from typing import List, Optional

from ackomer.domain.entities.reference import Condition, Symptom


class ConditionRepository:
    """Lookup interface for conditions."""

    async def save(self, condition: Condition) -> Condition:
        """Insert or update by ICD-10 code."""
        raise NotImplementedError

    async def search(
        self,
        text: str,
        category: Optional[str] = None,
        severity: Optional[str] = None,
        limit: int = 20,
    ) -> List[Condition]:
        """Full-text search over name, description and synonyms, best match first."""
        raise NotImplementedError

    async def find_by_icd10(self, code: str) -> Optional[Condition]:
        raise NotImplementedError


class SymptomRepository:
    """Lookup interface for symptoms."""

    async def save(self, symptom: Symptom) -> Symptom:
        """Insert or update by name."""
        raise NotImplementedError

    async def search(
        self,
        text: str,
        category: Optional[str] = None,
        urgency_level: Optional[str] = None,
        limit: int = 20,
    ) -> List[Symptom]:
        raise NotImplementedError

    async def find_by_body_part(self, body_part: str) -> List[Symptom]:
        raise NotImplementedError

    async def find_by_name(self, name: str) -> Optional[Symptom]:
        raise NotImplementedError
