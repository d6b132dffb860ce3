"""
Domain enums.
"""

from .reference import ConditionCategory, Severity, SymptomCategory, UrgencyLevel
from .status import (
    ExportFormat,
    Priority,
    QuestionType,
    SessionStatus,
    SessionType,
    Speaker,
    SummaryStatus,
    TranscriptionStatus,
)

__all__ = [
    "SessionStatus",
    "SessionType",
    "Priority",
    "TranscriptionStatus",
    "Speaker",
    "SummaryStatus",
    "QuestionType",
    "ExportFormat",
    "ConditionCategory",
    "SymptomCategory",
    "Severity",
    "UrgencyLevel",
]
