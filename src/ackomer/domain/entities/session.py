"""Session domain entity: one doctor-patient consultation.

A session aggregates the transcriptions recorded during the consultation and
at most one clinical summary.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..enums.status import Priority, SessionStatus, SessionType
from ..errors import SessionAlreadyCompletedError
from ..value_objects.entity_id import SessionId

DOCTOR_NAME_MIN = 2
DOCTOR_NAME_MAX = 100
DEPARTMENT_MAX = 50
NOTES_MAX = 1000

# Fields that callers may not overwrite through a generic update.
PROTECTED_FIELDS = frozenset(
    {"session_id", "start_time", "transcription_ids", "summary_id", "created_at"}
)


@dataclass
class Diagnosis:
    condition: str
    confidence: Optional[float] = None
    notes: Optional[str] = None


@dataclass
class Prescription:
    medication: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    duration: Optional[str] = None
    instructions: Optional[str] = None


@dataclass
class SessionMetadata:
    recording_quality: Optional[str] = None  # excellent, good, fair, poor
    background_noise: Optional[str] = None  # none, minimal, moderate, high
    speaker_count: Optional[int] = None
    language: str = "en"


@dataclass
class Session:
    """Consultation session aggregate."""

    session_id: str
    doctor_name: str
    doctor_id: Optional[str] = None
    patient_id: Optional[str] = None
    status: SessionStatus = SessionStatus.ACTIVE
    start_time: datetime = field(default_factory=datetime.utcnow)
    end_time: Optional[datetime] = None
    duration: Optional[int] = None  # minutes
    session_type: SessionType = SessionType.CONSULTATION
    department: Optional[str] = None
    priority: Priority = Priority.NORMAL
    notes: Optional[str] = None
    transcription_ids: List[str] = field(default_factory=list)
    summary_id: Optional[str] = None
    symptom_ids: List[str] = field(default_factory=list)
    follow_up_required: bool = False
    follow_up_date: Optional[datetime] = None
    diagnosis: List[Diagnosis] = field(default_factory=list)
    prescriptions: List[Prescription] = field(default_factory=list)
    metadata: SessionMetadata = field(default_factory=SessionMetadata)
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self.doctor_name = (self.doctor_name or "").strip()
        if not DOCTOR_NAME_MIN <= len(self.doctor_name) <= DOCTOR_NAME_MAX:
            raise ValueError(
                f"Doctor name must be between {DOCTOR_NAME_MIN} and {DOCTOR_NAME_MAX} characters"
            )
        if self.department and len(self.department) > DEPARTMENT_MAX:
            raise ValueError(f"Department must be at most {DEPARTMENT_MAX} characters")
        if self.notes and len(self.notes) > NOTES_MAX:
            raise ValueError(f"Notes must be at most {NOTES_MAX} characters")

    @classmethod
    def start(
        cls,
        doctor_name: str,
        *,
        patient_id: Optional[str] = None,
        doctor_id: Optional[str] = None,
        session_type: SessionType = SessionType.CONSULTATION,
        department: Optional[str] = None,
        priority: Priority = Priority.NORMAL,
        notes: Optional[str] = None,
    ) -> "Session":
        """Open a new active session starting now."""
        return cls(
            session_id=SessionId.generate().value,
            doctor_name=doctor_name,
            doctor_id=doctor_id,
            patient_id=patient_id,
            status=SessionStatus.ACTIVE,
            start_time=datetime.utcnow(),
            session_type=session_type,
            department=department.strip() if department else None,
            priority=priority,
            notes=notes.strip() if notes else None,
        )

    @property
    def is_completed(self) -> bool:
        return self.status == SessionStatus.COMPLETED

    def end(self, notes: Optional[str] = None) -> None:
        """Close the session and record its duration in whole minutes."""
        if self.is_completed:
            raise SessionAlreadyCompletedError(self.session_id)
        self.end_time = datetime.utcnow()
        self.status = SessionStatus.COMPLETED
        self.duration = round((self.end_time - self.start_time).total_seconds() / 60)
        if notes:
            if len(notes) > NOTES_MAX:
                raise ValueError(f"Notes must be at most {NOTES_MAX} characters")
            self.notes = notes
        self.touch()

    def add_transcription(self, transcription_id: str) -> None:
        if transcription_id not in self.transcription_ids:
            self.transcription_ids.append(transcription_id)
            self.touch()

    def remove_transcription(self, transcription_id: str) -> None:
        if transcription_id in self.transcription_ids:
            self.transcription_ids.remove(transcription_id)
            self.touch()

    def attach_summary(self, summary_id: str) -> None:
        self.summary_id = summary_id
        self.touch()

    def detach_summary(self) -> None:
        self.summary_id = None
        self.touch()

    def apply_update(self, changes: Dict[str, Any]) -> List[str]:
        """Apply a partial update, skipping protected and unknown fields.

        Returns the names of the fields that were changed.
        """
        applied: List[str] = []
        for name, value in changes.items():
            if name in PROTECTED_FIELDS or not hasattr(self, name):
                continue
            setattr(self, name, value)
            applied.append(name)
        if applied:
            # Re-run field validation on the updated values.
            self.__post_init__()
            self.touch()
        return applied

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
