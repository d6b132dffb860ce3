"""Patient request schemas."""

from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ...domain.entities.patient import (
    Address,
    Allergy,
    ContactInfo,
    EmergencyContact,
    MedicalHistoryEntry,
    Medication,
)
from .common import CamelModel


class AddressSchema(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = Field(None, alias="zipCode")
    country: Optional[str] = None


class ContactInfoSchema(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    address: AddressSchema = Field(default_factory=AddressSchema)


class MedicalHistorySchema(CamelModel):
    condition: str = Field(..., min_length=1)
    diagnosed_date: Optional[date] = Field(None, alias="diagnosedDate")
    status: Literal["active", "resolved", "chronic"] = "active"
    notes: Optional[str] = None


class AllergySchema(BaseModel):
    allergen: str = Field(..., min_length=1)
    severity: Literal["mild", "moderate", "severe"] = "mild"
    reaction: Optional[str] = None


class MedicationSchema(CamelModel):
    name: str = Field(..., min_length=1)
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    prescribed_date: Optional[date] = Field(None, alias="prescribedDate")
    is_active: bool = Field(True, alias="isActive")


class EmergencyContactSchema(BaseModel):
    name: Optional[str] = None
    relationship: Optional[str] = None
    phone: Optional[str] = None


class RegisterPatientSchema(CamelModel):
    patient_id: Optional[str] = Field(
        None, alias="patientId", min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_-]+$"
    )
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=50)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=50)
    date_of_birth: date = Field(..., alias="dateOfBirth")
    gender: Literal["male", "female", "other"]
    contact_info: ContactInfoSchema = Field(default_factory=ContactInfoSchema, alias="contactInfo")
    medical_history: List[MedicalHistorySchema] = Field(default_factory=list, alias="medicalHistory")
    allergies: List[AllergySchema] = Field(default_factory=list)
    medications: List[MedicationSchema] = Field(default_factory=list)
    emergency_contact: EmergencyContactSchema = Field(
        default_factory=EmergencyContactSchema, alias="emergencyContact"
    )

    def to_fields(self) -> Dict[str, Any]:
        contact = self.contact_info
        return {
            "patient_id": self.patient_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "date_of_birth": self.date_of_birth,
            "gender": self.gender,
            "contact_info": ContactInfo(
                phone=contact.phone,
                email=contact.email,
                address=Address(**contact.address.model_dump()),
            ),
            "medical_history": [MedicalHistoryEntry(**m.model_dump()) for m in self.medical_history],
            "allergies": [Allergy(**a.model_dump()) for a in self.allergies],
            "medications": [Medication(**m.model_dump()) for m in self.medications],
            "emergency_contact": EmergencyContact(**self.emergency_contact.model_dump()),
        }
