"""
Speech recognition service interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from ackomer.domain.entities.transcription import SpeakerSegment


@dataclass
class SpeechTranscript:
    """Result of one speech recognition call."""

    text: str
    confidence: float  # 0-100
    language: str
    segments: List[SpeakerSegment] = field(default_factory=list)
    speaker_count: int = 1
    model: Optional[str] = None
    processing_time: Optional[float] = None  # milliseconds
    duration: Optional[float] = None  # seconds of audio


class SpeechService(ABC):
    """Abstract service for audio transcription."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials for the speech API are present."""
        pass

    @abstractmethod
    async def transcribe(
        self,
        audio: bytes,
        *,
        language: str = "en",
        mime_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> SpeechTranscript:
        """
        Transcribe raw audio bytes.

        Args:
            audio: Audio file content
            language: Short language code (e.g. "en", "hi")
            mime_type: Content type of the audio
            filename: Original file name, if known

        Returns:
            SpeechTranscript with text, confidence and speaker segments

        Raises:
            TranscriptionError: If the speech API call fails
        """
        pass
