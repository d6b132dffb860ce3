"""
MongoDB Beanie model for patients.
"""

from datetime import date, datetime
from typing import List, Optional

from beanie import Document
from pydantic import BaseModel, Field


class AddressMongo(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


class ContactInfoMongo(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    address: AddressMongo = Field(default_factory=AddressMongo)


class MedicalHistoryMongo(BaseModel):
    condition: str
    # BSON has no date type; stored as datetime at midnight
    diagnosed_date: Optional[datetime] = None
    status: str = Field(default="active", description="active, resolved, chronic")
    notes: Optional[str] = None


class AllergyMongo(BaseModel):
    allergen: str
    severity: str = Field(default="mild", description="mild, moderate, severe")
    reaction: Optional[str] = None


class MedicationMongo(BaseModel):
    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    prescribed_date: Optional[datetime] = None
    is_active: bool = True


class EmergencyContactMongo(BaseModel):
    name: Optional[str] = None
    relationship: Optional[str] = None
    phone: Optional[str] = None


class PatientMongo(Document):
    """MongoDB model for patient data."""

    patient_id: str = Field(..., description="Public patient ID")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    date_of_birth: datetime = Field(..., description="Date of birth")
    gender: str = Field(..., description="male, female, other")
    contact_info: ContactInfoMongo = Field(default_factory=ContactInfoMongo)
    medical_history: List[MedicalHistoryMongo] = Field(default_factory=list)
    allergies: List[AllergyMongo] = Field(default_factory=list)
    medications: List[MedicationMongo] = Field(default_factory=list)
    emergency_contact: EmergencyContactMongo = Field(default_factory=EmergencyContactMongo)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "patients"
        indexes = [
            "patient_id",
            [("first_name", 1), ("last_name", 1)],
            "contact_info.email",
        ]


def to_datetime(value: Optional[date]) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def to_date(value: Optional[datetime]) -> Optional[date]:
    if value is None:
        return None
    return value.date() if isinstance(value, datetime) else value
