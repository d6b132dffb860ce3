"""Clinical reference data: conditions and symptoms used for lookups."""

from dataclasses import dataclass, field
from typing import List, Optional

from ..enums.reference import ConditionCategory, Severity, SymptomCategory, UrgencyLevel


@dataclass
class Condition:
    name: str
    icd10_code: str
    category: ConditionCategory
    description: Optional[str] = None
    synonyms: List[str] = field(default_factory=list)
    symptoms: List[str] = field(default_factory=list)  # symptom names
    risk_factors: List[str] = field(default_factory=list)
    common_treatments: List[str] = field(default_factory=list)
    severity: Severity = Severity.MODERATE
    prevalence: Optional[str] = None
    is_active: bool = True

    def __post_init__(self) -> None:
        self.icd10_code = self.icd10_code.strip().upper()

    def add_synonym(self, synonym: str) -> bool:
        normalized = synonym.strip().lower()
        if normalized in self.synonyms:
            return False
        self.synonyms.append(normalized)
        return True


@dataclass
class AssessmentQuestion:
    question: str
    type: str = "boolean"  # boolean, scale, multiple-choice, text
    options: List[str] = field(default_factory=list)
    importance: int = 5  # 1-10


@dataclass
class RedFlag:
    description: str
    action: Optional[str] = None


@dataclass
class Symptom:
    name: str
    category: SymptomCategory
    description: Optional[str] = None
    synonyms: List[str] = field(default_factory=list)
    body_parts: List[str] = field(default_factory=list)
    urgency_level: UrgencyLevel = UrgencyLevel.MEDIUM
    associated_conditions: List[str] = field(default_factory=list)  # ICD-10 codes
    red_flags: List[RedFlag] = field(default_factory=list)
    questions: List[AssessmentQuestion] = field(default_factory=list)
    chronic: bool = False
    is_active: bool = True

    def __post_init__(self) -> None:
        self.body_parts = [part.strip().lower() for part in self.body_parts]
        self.associated_conditions = [code.strip().upper() for code in self.associated_conditions]

    @property
    def is_urgent(self) -> bool:
        return self.urgency_level in (UrgencyLevel.HIGH, UrgencyLevel.EMERGENCY)

    def assessment_questions(self, min_importance: int = 5) -> List[AssessmentQuestion]:
        """Questions at or above the importance threshold, most important first."""
        selected = [q for q in self.questions if q.importance >= min_importance]
        return sorted(selected, key=lambda q: q.importance, reverse=True)
