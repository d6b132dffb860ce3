"""Assemble the consultation transcript from a session's transcriptions."""

from typing import List

from ...domain.entities.transcription import Transcription
from ...domain.errors import NoCompletedTranscriptionTextError, NoTranscriptionsError
from ..ports.repositories.transcription_repo import TranscriptionRepository

TRANSCRIPT_SEPARATOR = "\n\n"


def join_transcript(transcriptions: List[Transcription]) -> str:
    """Completed transcription texts in recording order, separated by a blank line."""
    return TRANSCRIPT_SEPARATOR.join(t.text.strip() for t in transcriptions if t.has_text)


async def load_session_transcript(
    transcription_repository: TranscriptionRepository, session_id: str
) -> str:
    """
    Raises:
        NoTranscriptionsError: The session has no transcriptions at all.
        NoCompletedTranscriptionTextError: None of them finished with text.
    """
    transcriptions, total = await transcription_repository.find_by_session(session_id)
    if total == 0:
        raise NoTranscriptionsError(session_id)
    transcript = join_transcript(transcriptions)
    if not transcript:
        raise NoCompletedTranscriptionTextError(session_id)
    return transcript
