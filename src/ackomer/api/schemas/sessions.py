"""Session request schemas."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ...domain.entities.session import Diagnosis, Prescription, SessionMetadata
from ...domain.enums.status import Priority, SessionStatus, SessionType
from .common import CamelModel


class DiagnosisSchema(BaseModel):
    condition: str = Field(..., min_length=1)
    confidence: Optional[float] = Field(None, ge=0, le=100)
    notes: Optional[str] = None


class PrescriptionSchema(BaseModel):
    medication: str = Field(..., min_length=1)
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    duration: Optional[str] = None
    instructions: Optional[str] = None


class SessionMetadataSchema(CamelModel):
    recording_quality: Optional[str] = Field(None, alias="recordingQuality")
    background_noise: Optional[str] = Field(None, alias="backgroundNoise")
    speaker_count: Optional[int] = Field(None, alias="speakerCount", ge=0)
    language: str = "en"


class CreateSessionSchema(CamelModel):
    doctor_name: str = Field(..., alias="doctorName", min_length=2, max_length=100)
    patient_id: Optional[str] = Field(None, alias="patientId")
    doctor_id: Optional[str] = Field(None, alias="doctorId")
    session_type: SessionType = Field(SessionType.CONSULTATION, alias="sessionType")
    department: Optional[str] = Field(None, max_length=50)
    priority: Priority = Priority.NORMAL
    notes: Optional[str] = Field(None, max_length=1000)


class UpdateSessionSchema(CamelModel):
    """Mutable session fields; anything else in the body is ignored."""

    doctor_name: Optional[str] = Field(None, alias="doctorName", min_length=2, max_length=100)
    doctor_id: Optional[str] = Field(None, alias="doctorId")
    status: Optional[SessionStatus] = None
    session_type: Optional[SessionType] = Field(None, alias="sessionType")
    department: Optional[str] = Field(None, max_length=50)
    priority: Optional[Priority] = None
    notes: Optional[str] = Field(None, max_length=1000)
    follow_up_required: Optional[bool] = Field(None, alias="followUpRequired")
    follow_up_date: Optional[datetime] = Field(None, alias="followUpDate")
    diagnosis: Optional[List[DiagnosisSchema]] = None
    prescriptions: Optional[List[PrescriptionSchema]] = None
    metadata: Optional[SessionMetadataSchema] = None

    def to_changes(self) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if name == "diagnosis":
                value = [Diagnosis(**d.model_dump()) for d in value or []]
            elif name == "prescriptions":
                value = [Prescription(**p.model_dump()) for p in value or []]
            elif name == "metadata":
                value = SessionMetadata(**value.model_dump()) if value else SessionMetadata()
            elif value is None and name in ("doctor_name", "status", "session_type", "priority"):
                continue
            changes[name] = value
        return changes


class EndSessionSchema(BaseModel):
    notes: Optional[str] = Field(None, max_length=1000)
