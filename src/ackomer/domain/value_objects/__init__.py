"""
Value objects package for domain layer.
"""

from .entity_id import EntityId, PatientId, SessionId, SummaryId, TranscriptionId

__all__ = [
    "EntityId",
    "SessionId",
    "TranscriptionId",
    "SummaryId",
    "PatientId",
]
