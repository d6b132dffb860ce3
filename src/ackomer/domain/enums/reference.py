"""
Enums for clinical reference data (conditions and symptoms).
"""

from enum import Enum


class ConditionCategory(str, Enum):
    """ICD-10 chapter-style grouping."""

    INFECTIOUS_DISEASE = "infectious-disease"
    NEOPLASM = "neoplasm"
    BLOOD_DISORDER = "blood-disorder"
    ENDOCRINE_DISORDER = "endocrine-disorder"
    MENTAL_DISORDER = "mental-disorder"
    NERVOUS_SYSTEM = "nervous-system"
    EYE_DISORDER = "eye-disorder"
    EAR_DISORDER = "ear-disorder"
    CIRCULATORY_SYSTEM = "circulatory-system"
    RESPIRATORY_SYSTEM = "respiratory-system"
    DIGESTIVE_SYSTEM = "digestive-system"
    SKIN_DISORDER = "skin-disorder"
    MUSCULOSKELETAL = "musculoskeletal"
    GENITOURINARY = "genitourinary"
    PREGNANCY_RELATED = "pregnancy-related"
    PERINATAL = "perinatal"
    CONGENITAL = "congenital"
    INJURY_POISONING = "injury-poisoning"
    EXTERNAL_CAUSES = "external-causes"
    OTHER = "other"


class SymptomCategory(str, Enum):
    PAIN = "pain"
    NEUROLOGICAL = "neurological"
    RESPIRATORY = "respiratory"
    CARDIOVASCULAR = "cardiovascular"
    GASTROINTESTINAL = "gastrointestinal"
    MUSCULOSKELETAL = "musculoskeletal"
    DERMATOLOGICAL = "dermatological"
    PSYCHOLOGICAL = "psychological"
    UROLOGICAL = "urological"
    GYNECOLOGICAL = "gynecological"
    OPHTHALMIC = "ophthalmic"
    OTOLARYNGOLOGICAL = "otolaryngological"
    SYSTEMIC = "systemic"
    OTHER = "other"


class Severity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    CRITICAL = "critical"


class UrgencyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EMERGENCY = "emergency"
