"""
MongoDB implementations of the reference data repositories.
"""

import logging
import re
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from ackomer.application.ports.repositories.reference_repo import (
    ConditionRepository,
    SymptomRepository,
)
from ackomer.domain.entities.reference import (
    AssessmentQuestion,
    Condition,
    RedFlag,
    Symptom,
)
from ackomer.domain.enums.reference import (
    ConditionCategory,
    Severity,
    SymptomCategory,
    UrgencyLevel,
)

from ..models.reference_m import (
    AssessmentQuestionMongo,
    ConditionMongo,
    RedFlagMongo,
    SymptomMongo,
)

logger = logging.getLogger("ackomer")

_TEXT_SCORE_SORT = [("score", {"$meta": "textScore"})]


def condition_document_fields(condition: Condition) -> Dict[str, Any]:
    """Stored fields of a condition document."""
    return {
        "name": condition.name,
        "icd10_code": condition.icd10_code,
        "category": condition.category.value,
        "description": condition.description,
        "synonyms": list(condition.synonyms),
        "symptoms": list(condition.symptoms),
        "risk_factors": list(condition.risk_factors),
        "common_treatments": list(condition.common_treatments),
        "severity": condition.severity.value,
        "prevalence": condition.prevalence,
        "is_active": condition.is_active,
        "updated_at": datetime.utcnow(),
    }


def symptom_document_fields(symptom: Symptom) -> Dict[str, Any]:
    """Stored fields of a symptom document."""
    return {
        "name": symptom.name,
        "category": symptom.category.value,
        "description": symptom.description,
        "synonyms": list(symptom.synonyms),
        "body_parts": list(symptom.body_parts),
        "urgency_level": symptom.urgency_level.value,
        "associated_conditions": list(symptom.associated_conditions),
        "red_flags": [RedFlagMongo(**asdict(r)) for r in symptom.red_flags],
        "questions": [AssessmentQuestionMongo(**asdict(q)) for q in symptom.questions],
        "chronic": symptom.chronic,
        "is_active": symptom.is_active,
        "updated_at": datetime.utcnow(),
    }


class MongoConditionRepository(ConditionRepository):
    """Condition lookups backed by a MongoDB text index."""

    async def save(self, condition: Condition) -> Condition:
        """Insert a condition or update the one stored under its ICD-10 code."""
        fields = condition_document_fields(condition)
        existing = await ConditionMongo.find_one(ConditionMongo.icd10_code == condition.icd10_code)
        if existing:
            await existing.set(fields)
        else:
            await ConditionMongo(**fields).insert()
        logger.debug(f"Saved condition {condition.icd10_code}")
        return condition

    async def search(
        self,
        text: str,
        category: Optional[str] = None,
        severity: Optional[str] = None,
        limit: int = 20,
    ) -> List[Condition]:
        mongo_filter: Dict[str, Any] = {"$text": {"$search": text}, "is_active": True}
        if category:
            mongo_filter["category"] = category
        if severity:
            mongo_filter["severity"] = severity
        items = (
            await ConditionMongo.find(mongo_filter)
            .sort(_TEXT_SCORE_SORT)
            .limit(limit)
            .to_list()
        )
        return [self._mongo_to_domain(c) for c in items]

    async def find_by_icd10(self, code: str) -> Optional[Condition]:
        condition_mongo = await ConditionMongo.find_one(
            ConditionMongo.icd10_code == code.strip().upper()
        )
        if not condition_mongo:
            return None
        return self._mongo_to_domain(condition_mongo)

    def _mongo_to_domain(self, condition_mongo: ConditionMongo) -> Condition:
        return Condition(
            name=condition_mongo.name,
            icd10_code=condition_mongo.icd10_code,
            category=ConditionCategory(condition_mongo.category),
            description=condition_mongo.description,
            synonyms=list(condition_mongo.synonyms),
            symptoms=list(condition_mongo.symptoms),
            risk_factors=list(condition_mongo.risk_factors),
            common_treatments=list(condition_mongo.common_treatments),
            severity=Severity(condition_mongo.severity),
            prevalence=condition_mongo.prevalence,
            is_active=condition_mongo.is_active,
        )


class MongoSymptomRepository(SymptomRepository):
    """Symptom lookups backed by a MongoDB text index."""

    async def save(self, symptom: Symptom) -> Symptom:
        """Insert a symptom or update the one stored under its name."""
        fields = symptom_document_fields(symptom)
        existing = await SymptomMongo.find_one(SymptomMongo.name == symptom.name)
        if existing:
            await existing.set(fields)
        else:
            await SymptomMongo(**fields).insert()
        logger.debug(f"Saved symptom {symptom.name}")
        return symptom

    async def search(
        self,
        text: str,
        category: Optional[str] = None,
        urgency_level: Optional[str] = None,
        limit: int = 20,
    ) -> List[Symptom]:
        mongo_filter: Dict[str, Any] = {"$text": {"$search": text}, "is_active": True}
        if category:
            mongo_filter["category"] = category
        if urgency_level:
            mongo_filter["urgency_level"] = urgency_level
        items = (
            await SymptomMongo.find(mongo_filter)
            .sort(_TEXT_SCORE_SORT)
            .limit(limit)
            .to_list()
        )
        return [self._mongo_to_domain(s) for s in items]

    async def find_by_body_part(self, body_part: str) -> List[Symptom]:
        items = await SymptomMongo.find(
            {"body_parts": body_part.strip().lower(), "is_active": True}
        ).to_list()
        return [self._mongo_to_domain(s) for s in items]

    async def find_by_name(self, name: str) -> Optional[Symptom]:
        symptom_mongo = await SymptomMongo.find_one(
            {"name": {"$regex": f"^{re.escape(name.strip())}$", "$options": "i"}}
        )
        if not symptom_mongo:
            return None
        return self._mongo_to_domain(symptom_mongo)

    def _mongo_to_domain(self, symptom_mongo: SymptomMongo) -> Symptom:
        return Symptom(
            name=symptom_mongo.name,
            category=SymptomCategory(symptom_mongo.category),
            description=symptom_mongo.description,
            synonyms=list(symptom_mongo.synonyms),
            body_parts=list(symptom_mongo.body_parts),
            urgency_level=UrgencyLevel(symptom_mongo.urgency_level),
            associated_conditions=list(symptom_mongo.associated_conditions),
            red_flags=[RedFlag(**r.model_dump()) for r in symptom_mongo.red_flags],
            questions=[AssessmentQuestion(**q.model_dump()) for q in symptom_mongo.questions],
            chronic=symptom_mongo.chronic,
            is_active=symptom_mongo.is_active,
        )
