"""
Beanie document models.
"""

from .patient_m import PatientMongo
from .reference_m import ConditionMongo, SymptomMongo
from .session_m import SessionMongo, SummaryMongo, TranscriptionMongo

DOCUMENT_MODELS = [
    SessionMongo,
    TranscriptionMongo,
    SummaryMongo,
    PatientMongo,
    ConditionMongo,
    SymptomMongo,
]

__all__ = [
    "SessionMongo",
    "TranscriptionMongo",
    "SummaryMongo",
    "PatientMongo",
    "ConditionMongo",
    "SymptomMongo",
    "DOCUMENT_MODELS",
]
