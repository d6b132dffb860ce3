"""Summary DTOs for API communication."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ...domain.entities.summary import Summary, SummaryContent
from ._format import enum_value, iso, plain


@dataclass
class GenerateSummaryRequest:
    session_id: str
    regenerate: bool = False


@dataclass
class UpdateSummaryRequest:
    content: Optional[Dict[str, Any]] = None
    review_notes: Optional[str] = None
    reviewed_by: Optional[str] = None


def content_to_dict(content: SummaryContent) -> Dict[str, str]:
    return asdict(content)


def summary_to_dict(summary: Summary, include_history: bool = True) -> Dict[str, Any]:
    meta = summary.generation_metadata
    data: Dict[str, Any] = {
        "summaryId": summary.summary_id,
        "sessionId": summary.session_id,
        "content": content_to_dict(summary.content),
        "keyPoints": plain(summary.key_points),
        "extractedData": {
            "symptoms": summary.extracted_data.symptoms,
            "diagnoses": summary.extracted_data.diagnoses,
            "medications": summary.extracted_data.medications,
            "procedures": summary.extracted_data.procedures,
            "vitalSigns": summary.extracted_data.vital_signs,
        },
        "generationMetadata": {
            "model": meta.model,
            "promptVersion": meta.prompt_version,
            "processingTime": meta.processing_time,
            "tokenUsage": meta.token_usage,
            "confidence": meta.confidence,
        },
        "status": enum_value(summary.status),
        "version": summary.version,
        "wordCount": summary.word_count,
        "errorMessage": summary.error_message,
        "isApproved": summary.is_approved,
        "approvedBy": summary.approved_by,
        "approvedAt": iso(summary.approved_at),
        "reviewNotes": summary.review_notes,
        "reviewedBy": summary.reviewed_by,
        "reviewedAt": iso(summary.reviewed_at),
        "createdAt": iso(summary.created_at),
        "updatedAt": iso(summary.updated_at),
    }
    if include_history:
        data["previousVersions"] = [
            {
                "version": v.version,
                "content": content_to_dict(v.content),
                "createdAt": iso(v.generated_at),
                "createdBy": v.generated_by,
            }
            for v in summary.previous_versions
        ]
    return data


def summary_export_to_dict(summary: Summary) -> Dict[str, Any]:
    """Document offered for download by the JSON export."""
    return {
        "summaryId": summary.summary_id,
        "sessionId": summary.session_id,
        "version": summary.version,
        "status": enum_value(summary.status),
        "content": content_to_dict(summary.content),
        "keyPoints": plain(summary.key_points),
        "extractedData": plain(summary.extracted_data),
        "isApproved": summary.is_approved,
        "approvedBy": summary.approved_by,
        "approvedAt": iso(summary.approved_at),
        "generatedAt": iso(summary.updated_at),
    }
