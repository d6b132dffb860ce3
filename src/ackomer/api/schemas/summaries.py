"""Summary request schemas."""

from typing import Any, Dict, Optional

from pydantic import Field

from .common import CamelModel


class GenerateSummarySchema(CamelModel):
    session_id: str = Field(..., alias="sessionId", min_length=1)
    regenerate: bool = False


class UpdateSummarySchema(CamelModel):
    content: Optional[Dict[str, Any]] = None
    review_notes: Optional[str] = Field(None, alias="reviewNotes")
    reviewed_by: Optional[str] = Field(None, alias="reviewedBy")


class ApproveSummarySchema(CamelModel):
    approved_by: str = Field(..., alias="approvedBy", min_length=1)
    notes: Optional[str] = None
