"""Patient domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from ..value_objects.entity_id import PatientId


@dataclass
class Address:
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


@dataclass
class ContactInfo:
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Address = field(default_factory=Address)


@dataclass
class MedicalHistoryEntry:
    condition: str
    diagnosed_date: Optional[date] = None
    status: str = "active"  # active, resolved, chronic
    notes: Optional[str] = None


@dataclass
class Allergy:
    allergen: str
    severity: str = "mild"  # mild, moderate, severe
    reaction: Optional[str] = None


@dataclass
class Medication:
    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    prescribed_date: Optional[date] = None
    is_active: bool = True


@dataclass
class EmergencyContact:
    name: Optional[str] = None
    relationship: Optional[str] = None
    phone: Optional[str] = None


@dataclass
class Patient:
    """Patient demographic and history record."""

    patient_id: str
    first_name: str
    last_name: str
    date_of_birth: date
    gender: str  # male, female, other
    contact_info: ContactInfo = field(default_factory=ContactInfo)
    medical_history: List[MedicalHistoryEntry] = field(default_factory=list)
    allergies: List[Allergy] = field(default_factory=list)
    medications: List[Medication] = field(default_factory=list)
    emergency_contact: EmergencyContact = field(default_factory=EmergencyContact)
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self.first_name = (self.first_name or "").strip()
        self.last_name = (self.last_name or "").strip()
        if not self.first_name or not self.last_name:
            raise ValueError("First and last name are required")
        if self.gender not in ("male", "female", "other"):
            raise ValueError("Gender must be one of: male, female, other")
        if self.contact_info.email:
            self.contact_info.email = self.contact_info.email.strip().lower()

    @classmethod
    def register(cls, **kwargs) -> "Patient":
        patient_id = kwargs.pop("patient_id", None) or PatientId.generate().value
        return cls(patient_id=patient_id, **kwargs)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def age(self, today: Optional[date] = None) -> int:
        """Whole years since birth."""
        today = today or date.today()
        years = today.year - self.date_of_birth.year
        if (today.month, today.day) < (self.date_of_birth.month, self.date_of_birth.day):
            years -= 1
        return years
