"""
Domain-specific error types for business rule violations.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class SessionNotFoundError(DomainError):
    """Session not found."""

    def __init__(self, session_id: str) -> None:
        message = "Session not found"
        super().__init__(message, "SESSION_NOT_FOUND", {"session_id": session_id})


class SessionAlreadyCompletedError(DomainError):
    """Session has already been ended."""

    def __init__(self, session_id: str) -> None:
        message = "Session already completed"
        super().__init__(message, "SESSION_ALREADY_COMPLETED", {"session_id": session_id})


class PatientNotFoundError(DomainError):
    """Patient not found."""

    def __init__(self, patient_id: str) -> None:
        message = "Patient not found"
        super().__init__(message, "PATIENT_NOT_FOUND", {"patient_id": patient_id})


class DuplicatePatientError(DomainError):
    """Patient already exists."""

    def __init__(self, patient_id: str) -> None:
        message = f"Patient with ID '{patient_id}' already exists"
        super().__init__(message, "DUPLICATE_PATIENT", {"patient_id": patient_id})


class TranscriptionNotFoundError(DomainError):
    """Transcription not found."""

    def __init__(self, transcription_id: str) -> None:
        message = "Transcription not found"
        super().__init__(
            message, "TRANSCRIPTION_NOT_FOUND", {"transcription_id": transcription_id}
        )


class InvalidAudioFileError(DomainError):
    """Uploaded file is missing, too large or not an accepted audio type."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "INVALID_AUDIO_FILE", details)


class SummaryNotFoundError(DomainError):
    """Summary not found."""

    def __init__(self, summary_id: str) -> None:
        message = "Summary not found"
        super().__init__(message, "SUMMARY_NOT_FOUND", {"summary_id": summary_id})


class SummaryAlreadyExistsError(DomainError):
    """A summary exists and regeneration was not requested."""

    def __init__(self, summary_id: str) -> None:
        message = "Summary already exists. Use regenerate=true to create a new version."
        super().__init__(message, "SUMMARY_ALREADY_EXISTS", {"summary_id": summary_id})


class NoTranscriptionsError(DomainError):
    """Session has no transcriptions to work from."""

    def __init__(self, session_id: str) -> None:
        message = "No transcriptions found for this session"
        super().__init__(message, "NO_TRANSCRIPTIONS", {"session_id": session_id})


class NoCompletedTranscriptionTextError(DomainError):
    """Session has transcriptions but none finished with text."""

    def __init__(self, session_id: str) -> None:
        message = "No completed transcription text available"
        super().__init__(message, "NO_TRANSCRIPTION_TEXT", {"session_id": session_id})


class ConditionNotFoundError(DomainError):
    """Reference condition not found."""

    def __init__(self, icd10_code: str) -> None:
        message = f"Condition with ICD-10 code '{icd10_code}' not found"
        super().__init__(message, "CONDITION_NOT_FOUND", {"icd10_code": icd10_code})


class SymptomNotFoundError(DomainError):
    """Reference symptom not found."""

    def __init__(self, name: str) -> None:
        message = f"Symptom '{name}' not found"
        super().__init__(message, "SYMPTOM_NOT_FOUND", {"name": name})
