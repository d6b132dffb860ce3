"""
MongoDB Beanie models for clinical reference data.
"""

from datetime import datetime
from typing import List, Optional

import pymongo
from beanie import Document
from pydantic import BaseModel, Field, field_validator
from pymongo import IndexModel


class ConditionMongo(Document):
    """Condition lookup entry keyed by ICD-10 code."""

    name: str = Field(..., description="Condition name")
    icd10_code: str = Field(..., description="ICD-10 code, upper case")
    category: str = Field(..., description="Condition category")
    description: Optional[str] = None
    synonyms: List[str] = Field(default_factory=list)
    symptoms: List[str] = Field(default_factory=list, description="Symptom names")
    risk_factors: List[str] = Field(default_factory=list)
    common_treatments: List[str] = Field(default_factory=list)
    severity: str = Field(default="moderate")
    prevalence: Optional[str] = None
    is_active: bool = Field(default=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "conditions"
        indexes = [
            IndexModel([("icd10_code", pymongo.ASCENDING)], unique=True),
            IndexModel([("name", pymongo.ASCENDING)], unique=True),
            "category",
            "severity",
            IndexModel(
                [
                    ("name", pymongo.TEXT),
                    ("description", pymongo.TEXT),
                    ("synonyms", pymongo.TEXT),
                ],
                name="condition_text",
            ),
        ]


class AssessmentQuestionMongo(BaseModel):
    question: str
    type: str = Field(default="boolean", description="boolean, scale, multiple-choice, text")
    options: List[str] = Field(default_factory=list)
    importance: int = Field(default=5, ge=1, le=10)


class RedFlagMongo(BaseModel):
    description: str
    action: Optional[str] = None


class SymptomMongo(Document):
    """Symptom lookup entry with assessment questions."""

    name: str = Field(..., description="Symptom name")
    category: str = Field(..., description="Symptom category")
    description: Optional[str] = None
    synonyms: List[str] = Field(default_factory=list)
    body_parts: List[str] = Field(default_factory=list)
    urgency_level: str = Field(default="medium", description="low, medium, high, emergency")
    associated_conditions: List[str] = Field(default_factory=list, description="ICD-10 codes")
    red_flags: List[RedFlagMongo] = Field(default_factory=list)
    questions: List[AssessmentQuestionMongo] = Field(default_factory=list)
    chronic: bool = Field(default=False)
    is_active: bool = Field(default=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("body_parts")
    @classmethod
    def _lowercase_body_parts(cls, value: List[str]) -> List[str]:
        return [part.strip().lower() for part in value]

    class Settings:
        name = "symptoms"
        indexes = [
            IndexModel([("name", pymongo.ASCENDING)], unique=True),
            "category",
            "urgency_level",
            "body_parts",
            IndexModel(
                [
                    ("name", pymongo.TEXT),
                    ("description", pymongo.TEXT),
                    ("synonyms", pymongo.TEXT),
                ],
                name="symptom_text",
            ),
        ]
