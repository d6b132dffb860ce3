"""Transcription DTOs for API communication."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...domain.entities.transcription import Transcription
from ._format import enum_value, iso


@dataclass
class UploadAudioRequest:
    session_id: str
    content: bytes
    filename: Optional[str] = None
    mime_type: Optional[str] = None
    language: str = "en"


@dataclass
class StreamChunkRequest:
    session_id: str
    content: bytes
    recording_id: Optional[str] = None
    is_live: bool = True
    filename: Optional[str] = None
    mime_type: Optional[str] = None
    language: str = "en"


@dataclass
class EditTranscriptionRequest:
    text: Optional[str] = None
    speaker: Optional[str] = None
    edited_by: Optional[str] = None


def transcription_to_dict(transcription: Transcription) -> Dict[str, Any]:
    audio = transcription.audio_file
    return {
        "transcriptionId": transcription.transcription_id,
        "sessionId": transcription.session_id,
        "text": transcription.text,
        "originalText": transcription.original_text,
        "confidence": transcription.confidence,
        "language": transcription.language,
        "speaker": enum_value(transcription.speaker),
        "timestamp": {"start": transcription.timestamp.start, "end": transcription.timestamp.end},
        "audioFile": {
            "originalName": audio.original_name,
            "filename": audio.filename,
            "size": audio.size,
            "mimeType": audio.mime_type,
        },
        "processingMetadata": {
            "model": transcription.processing_metadata.model,
            "processingTime": transcription.processing_metadata.processing_time,
            "tokenUsage": transcription.processing_metadata.token_usage,
        },
        "segments": [
            {
                "text": s.text,
                "startTime": s.start_time,
                "endTime": s.end_time,
                "speaker": s.speaker,
            }
            for s in transcription.segments
        ],
        "speakerCount": transcription.speaker_count,
        "status": enum_value(transcription.status),
        "errorMessage": transcription.error_message,
        "isEdited": transcription.is_edited,
        "editHistory": [
            {
                "originalText": e.original_text,
                "editedText": e.edited_text,
                "editedAt": iso(e.edited_at),
                "editedBy": e.edited_by,
            }
            for e in transcription.edit_history
        ],
        "createdAt": iso(transcription.created_at),
        "updatedAt": iso(transcription.updated_at),
    }
