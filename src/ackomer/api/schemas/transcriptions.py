"""Transcription request schemas."""

from typing import Optional

from pydantic import AliasChoices, Field

from ...domain.enums.status import Speaker
from .common import CamelModel


class EditTranscriptionSchema(CamelModel):
    text: Optional[str] = Field(
        None, validation_alias=AliasChoices("text", "transcriptionText"), min_length=1
    )
    speaker: Optional[Speaker] = None
    edited_by: Optional[str] = Field(None, alias="editedBy")
