"""Session DTOs for API communication."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...domain.entities.patient import Patient
from ...domain.entities.session import Session
from ...domain.entities.summary import Summary
from ...domain.entities.transcription import Transcription
from ...domain.enums.status import Priority, SessionType
from ._format import enum_value, iso, plain
from .patient_dto import patient_to_dict
from .summary_dto import summary_to_dict
from .transcription_dto import transcription_to_dict


@dataclass
class CreateSessionRequest:
    doctor_name: str
    patient_id: Optional[str] = None
    doctor_id: Optional[str] = None
    session_type: SessionType = SessionType.CONSULTATION
    department: Optional[str] = None
    priority: Priority = Priority.NORMAL
    notes: Optional[str] = None


@dataclass
class SessionStats:
    session: Session
    total_transcriptions: int
    completed: int
    processing: int
    failed: int
    summary: Optional[Summary] = None


def session_to_dict(
    session: Session,
    *,
    patient: Optional[Patient] = None,
    transcriptions: Optional[List[Transcription]] = None,
    summary: Optional[Summary] = None,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "sessionId": session.session_id,
        "doctorName": session.doctor_name,
        "doctorId": session.doctor_id,
        "patientId": session.patient_id,
        "status": enum_value(session.status),
        "startTime": iso(session.start_time),
        "endTime": iso(session.end_time),
        "duration": session.duration,
        "sessionType": enum_value(session.session_type),
        "department": session.department,
        "priority": enum_value(session.priority),
        "notes": session.notes,
        "transcriptions": list(session.transcription_ids),
        "summary": session.summary_id,
        "symptoms": list(session.symptom_ids),
        "followUpRequired": session.follow_up_required,
        "followUpDate": iso(session.follow_up_date),
        "diagnosis": plain(session.diagnosis),
        "prescriptions": plain(session.prescriptions),
        "metadata": plain(session.metadata),
        "isActive": session.is_active,
        "createdAt": iso(session.created_at),
        "updatedAt": iso(session.updated_at),
    }
    if patient is not None:
        data["patient"] = patient_to_dict(patient)
    if transcriptions is not None:
        data["transcriptions"] = [transcription_to_dict(t) for t in transcriptions]
    if summary is not None:
        data["summary"] = summary_to_dict(summary)
    return data


def session_stats_to_dict(stats: SessionStats) -> Dict[str, Any]:
    session = stats.session
    return {
        "sessionInfo": {
            "id": session.session_id,
            "doctorName": session.doctor_name,
            "status": enum_value(session.status),
            "duration": session.duration,
            "startTime": iso(session.start_time),
            "endTime": iso(session.end_time),
        },
        "transcriptions": {
            "total": stats.total_transcriptions,
            "completed": stats.completed,
            "processing": stats.processing,
            "failed": stats.failed,
        },
        "summary": {
            "exists": stats.summary is not None,
            "status": enum_value(stats.summary.status) if stats.summary else None,
            "wordCount": stats.summary.word_count if stats.summary else 0,
        },
    }
