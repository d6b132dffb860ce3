"""
MongoDB Beanie models for sessions, transcriptions and summaries.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from beanie import Document
from pydantic import BaseModel, Field


class DiagnosisMongo(BaseModel):
    condition: str = Field(..., description="Diagnosed condition")
    confidence: Optional[float] = Field(None, ge=0, le=100)
    notes: Optional[str] = None


class PrescriptionMongo(BaseModel):
    medication: str = Field(..., description="Medication name")
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    duration: Optional[str] = None
    instructions: Optional[str] = None


class SessionMetadataMongo(BaseModel):
    recording_quality: Optional[str] = Field(None, description="excellent, good, fair, poor")
    background_noise: Optional[str] = Field(None, description="none, minimal, moderate, high")
    speaker_count: Optional[int] = None
    language: str = Field(default="en")


class SessionMongo(Document):
    """MongoDB model for a consultation session."""

    session_id: str = Field(..., description="Public session ID (sess_...)")
    doctor_name: str = Field(..., description="Doctor conducting the session")
    doctor_id: Optional[str] = Field(None, description="Doctor identifier")
    patient_id: Optional[str] = Field(None, description="Patient ID reference")
    status: str = Field(default="active", description="active, paused, completed, cancelled")
    start_time: datetime = Field(default_factory=datetime.utcnow)
    end_time: Optional[datetime] = None
    duration: Optional[int] = Field(None, description="Duration in minutes")
    session_type: str = Field(default="consultation")
    department: Optional[str] = None
    priority: str = Field(default="normal")
    notes: Optional[str] = None
    transcription_ids: List[str] = Field(default_factory=list)
    summary_id: Optional[str] = None
    symptom_ids: List[str] = Field(default_factory=list)
    follow_up_required: bool = Field(default=False)
    follow_up_date: Optional[datetime] = None
    diagnosis: List[DiagnosisMongo] = Field(default_factory=list)
    prescriptions: List[PrescriptionMongo] = Field(default_factory=list)
    metadata: SessionMetadataMongo = Field(default_factory=SessionMetadataMongo)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "sessions"
        indexes = [
            "session_id",
            "patient_id",
            "doctor_id",
            "status",
            [("start_time", -1)],
        ]


class AudioFileMongo(BaseModel):
    original_name: Optional[str] = None
    filename: Optional[str] = None
    path: Optional[str] = None
    size: Optional[int] = None
    mime_type: Optional[str] = None


class SpeakerSegmentMongo(BaseModel):
    text: str
    start_time: float = 0.0
    end_time: float = 0.0
    speaker: int = 0


class TimeRangeMongo(BaseModel):
    start: Optional[float] = None
    end: Optional[float] = None


class ProcessingMetadataMongo(BaseModel):
    model: Optional[str] = None
    processing_time: Optional[float] = None
    token_usage: Optional[int] = None


class EditRecordMongo(BaseModel):
    original_text: str
    edited_text: str
    edited_at: datetime
    edited_by: str = "unknown"


class TranscriptionMongo(Document):
    """MongoDB model for a transcription."""

    transcription_id: str = Field(..., description="Public transcription ID (trans_...)")
    session_id: str = Field(..., description="Owning session ID")
    audio_file: AudioFileMongo = Field(default_factory=AudioFileMongo)
    text: str = Field(default="", description="Current (possibly edited) transcript text")
    original_text: Optional[str] = Field(None, description="Text as returned by the speech API")
    confidence: float = Field(default=0.0, ge=0, le=100)
    language: str = Field(default="en")
    speaker: str = Field(default="unknown", description="doctor, patient, unknown")
    timestamp: TimeRangeMongo = Field(default_factory=TimeRangeMongo)
    processing_metadata: ProcessingMetadataMongo = Field(default_factory=ProcessingMetadataMongo)
    segments: List[SpeakerSegmentMongo] = Field(default_factory=list)
    speaker_count: int = Field(default=0)
    status: str = Field(default="processing", description="processing, completed, failed, reviewing")
    error_message: Optional[str] = None
    is_edited: bool = Field(default=False)
    edit_history: List[EditRecordMongo] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "transcriptions"
        indexes = [
            "transcription_id",
            "session_id",
            "status",
            [("session_id", 1), ("created_at", 1)],
        ]


class SummaryContentMongo(BaseModel):
    chief_complaint: str = ""
    history_of_present_illness: str = ""
    past_medical_history: str = ""
    medications: str = ""
    allergies: str = ""
    social_history: str = ""
    family_history: str = ""
    review_of_systems: str = ""
    physical_examination: str = ""
    assessment: str = ""
    plan: str = ""
    follow_up: str = ""


class KeyPointMongo(BaseModel):
    category: str = Field(..., description="symptom, diagnosis, treatment, followup, medication, other")
    point: str
    confidence: float = Field(default=80.0, ge=0, le=100)


class ExtractedDataMongo(BaseModel):
    symptoms: List[Dict[str, Any]] = Field(default_factory=list)
    diagnoses: List[Dict[str, Any]] = Field(default_factory=list)
    medications: List[Dict[str, Any]] = Field(default_factory=list)
    procedures: List[Dict[str, Any]] = Field(default_factory=list)
    vital_signs: Dict[str, Any] = Field(default_factory=dict)


class GenerationMetadataMongo(BaseModel):
    model: Optional[str] = None
    prompt_version: str = "1.0"
    processing_time: Optional[float] = None
    token_usage: Dict[str, int] = Field(default_factory=dict)
    confidence: float = 85.0


class SummaryVersionMongo(BaseModel):
    version: int
    content: SummaryContentMongo
    generated_at: datetime
    generated_by: str = "system"


class SummaryMongo(Document):
    """MongoDB model for a clinical summary."""

    summary_id: str = Field(..., description="Public summary ID (sum_...)")
    session_id: str = Field(..., description="Owning session ID")
    content: SummaryContentMongo = Field(default_factory=SummaryContentMongo)
    key_points: List[KeyPointMongo] = Field(default_factory=list)
    extracted_data: ExtractedDataMongo = Field(default_factory=ExtractedDataMongo)
    generation_metadata: GenerationMetadataMongo = Field(default_factory=GenerationMetadataMongo)
    status: str = Field(default="generating", description="generating, completed, failed, reviewing")
    version: int = Field(default=1)
    previous_versions: List[SummaryVersionMongo] = Field(default_factory=list)
    error_message: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    is_approved: bool = Field(default=False)
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "summaries"
        indexes = [
            "summary_id",
            "session_id",
            "status",
            [("created_at", -1)],
        ]
