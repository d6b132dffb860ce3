"""Transcription domain entity: speech-to-text output for one audio upload."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..enums.status import Speaker, TranscriptionStatus
from ..value_objects.entity_id import TranscriptionId


@dataclass
class AudioFileInfo:
    original_name: Optional[str] = None
    filename: Optional[str] = None
    path: Optional[str] = None
    size: Optional[int] = None
    mime_type: Optional[str] = None


@dataclass
class SpeakerSegment:
    """A run of consecutive speech attributed to one speaker."""

    text: str
    start_time: float = 0.0
    end_time: float = 0.0
    speaker: int = 0


@dataclass
class TimeRange:
    start: Optional[float] = None  # seconds from session start
    end: Optional[float] = None


@dataclass
class ProcessingMetadata:
    model: Optional[str] = None
    processing_time: Optional[float] = None  # milliseconds
    token_usage: Optional[int] = None


@dataclass
class EditRecord:
    original_text: str
    edited_text: str
    edited_at: datetime
    edited_by: str = "unknown"


@dataclass
class Transcription:
    """Transcription of one audio file within a session."""

    transcription_id: str
    session_id: str
    audio_file: AudioFileInfo = field(default_factory=AudioFileInfo)
    text: str = ""
    original_text: Optional[str] = None
    confidence: float = 0.0
    language: str = "en"
    speaker: Speaker = Speaker.UNKNOWN
    timestamp: TimeRange = field(default_factory=TimeRange)
    processing_metadata: ProcessingMetadata = field(default_factory=ProcessingMetadata)
    segments: List[SpeakerSegment] = field(default_factory=list)
    speaker_count: int = 0
    status: TranscriptionStatus = TranscriptionStatus.PROCESSING
    error_message: Optional[str] = None
    is_edited: bool = False
    edit_history: List[EditRecord] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        if not 0 <= self.confidence <= 100:
            raise ValueError("Confidence must be between 0 and 100")

    @classmethod
    def pending(
        cls, session_id: str, audio_file: AudioFileInfo, language: str = "en"
    ) -> "Transcription":
        """New record for an upload whose transcription has not run yet."""
        return cls(
            transcription_id=TranscriptionId.generate().value,
            session_id=session_id,
            audio_file=audio_file,
            language=language,
            status=TranscriptionStatus.PROCESSING,
        )

    def complete(
        self,
        text: str,
        confidence: float,
        language: str,
        segments: Optional[List[SpeakerSegment]] = None,
        speaker_count: int = 0,
        model: Optional[str] = None,
        processing_time: Optional[float] = None,
    ) -> None:
        self.text = text
        self.original_text = text
        self.confidence = max(0.0, min(100.0, confidence))
        self.language = language
        self.segments = list(segments or [])
        self.speaker_count = speaker_count
        self.processing_metadata = ProcessingMetadata(
            model=model, processing_time=processing_time
        )
        self.status = TranscriptionStatus.COMPLETED
        self.error_message = None
        self.touch()

    def fail(self, message: str) -> None:
        self.status = TranscriptionStatus.FAILED
        self.error_message = message
        self.touch()

    def edit(self, new_text: str, edited_by: Optional[str] = None) -> bool:
        """Replace the text, keeping an audit trail. Returns False if unchanged."""
        if new_text == self.text:
            return False
        self.edit_history.append(
            EditRecord(
                original_text=self.text,
                edited_text=new_text,
                edited_at=datetime.utcnow(),
                edited_by=edited_by or "unknown",
            )
        )
        self.text = new_text
        self.is_edited = True
        self.touch()
        return True

    @property
    def has_text(self) -> bool:
        return self.status == TranscriptionStatus.COMPLETED and bool(self.text.strip())

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
