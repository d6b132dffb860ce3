"""
Domain entities package.
"""

from .patient import Patient
from .reference import Condition, Symptom
from .session import Session
from .summary import GeneratedSummary, Summary, SummaryContent
from .transcription import SpeakerSegment, Transcription

__all__ = [
    "Patient",
    "Session",
    "Transcription",
    "SpeakerSegment",
    "Summary",
    "SummaryContent",
    "GeneratedSummary",
    "Condition",
    "Symptom",
]
