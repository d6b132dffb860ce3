"""Reference data presenters."""

from typing import Any, Dict

from ...domain.entities.reference import AssessmentQuestion, Condition, Symptom
from ._format import enum_value, plain


def condition_to_dict(condition: Condition) -> Dict[str, Any]:
    return {
        "name": condition.name,
        "icd10Code": condition.icd10_code,
        "category": enum_value(condition.category),
        "description": condition.description,
        "synonyms": list(condition.synonyms),
        "symptoms": list(condition.symptoms),
        "riskFactors": list(condition.risk_factors),
        "commonTreatments": list(condition.common_treatments),
        "severity": enum_value(condition.severity),
        "prevalence": condition.prevalence,
    }


def question_to_dict(question: AssessmentQuestion) -> Dict[str, Any]:
    return {
        "question": question.question,
        "type": question.type,
        "options": list(question.options),
        "importance": question.importance,
    }


def symptom_to_dict(symptom: Symptom) -> Dict[str, Any]:
    return {
        "name": symptom.name,
        "category": enum_value(symptom.category),
        "description": symptom.description,
        "synonyms": list(symptom.synonyms),
        "bodyParts": list(symptom.body_parts),
        "urgencyLevel": enum_value(symptom.urgency_level),
        "associatedConditions": list(symptom.associated_conditions),
        "isUrgent": symptom.is_urgent,
        "redFlags": plain(symptom.red_flags),
        "questions": [question_to_dict(q) for q in symptom.questions],
        "chronic": symptom.chronic,
    }
