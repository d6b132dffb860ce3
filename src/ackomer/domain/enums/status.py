"""
Status and classification enums for sessions, transcriptions and summaries.
"""

from enum import Enum


class SessionStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SessionType(str, Enum):
    CONSULTATION = "consultation"
    FOLLOW_UP = "follow-up"
    EMERGENCY = "emergency"
    ROUTINE_CHECKUP = "routine-checkup"
    SPECIALIST = "specialist"


class Priority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class TranscriptionStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    REVIEWING = "reviewing"


class Speaker(str, Enum):
    DOCTOR = "doctor"
    PATIENT = "patient"
    UNKNOWN = "unknown"


class SummaryStatus(str, Enum):
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"
    REVIEWING = "reviewing"


class QuestionType(str, Enum):
    """Reflexive question categories."""

    CLINICAL = "clinical"
    FOLLOWUP = "followup"
    DIFFERENTIAL = "differential"
    EDUCATION = "education"


class ExportFormat(str, Enum):
    PDF = "pdf"
    WORD = "word"
    JSON = "json"
