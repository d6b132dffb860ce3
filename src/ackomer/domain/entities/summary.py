"""Summary domain entity: a versioned, reviewable clinical note for a session."""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..enums.status import SummaryStatus
from ..value_objects.entity_id import SummaryId

MANUAL_EDIT = "manual-edit"
KEY_POINT_CATEGORIES = ("symptom", "diagnosis", "treatment", "followup", "medication", "other")


@dataclass
class SummaryContent:
    """Structured clinical note sections."""

    chief_complaint: str = ""
    history_of_present_illness: str = ""
    past_medical_history: str = ""
    medications: str = ""
    allergies: str = ""
    social_history: str = ""
    family_history: str = ""
    review_of_systems: str = ""
    physical_examination: str = ""
    assessment: str = ""
    plan: str = ""
    follow_up: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SummaryContent":
        """Build from a loose mapping, ignoring unknown keys and coercing to str."""
        data = data or {}
        values = {}
        for f in fields(cls):
            raw = data.get(f.name)
            if raw is None:
                continue
            if isinstance(raw, list):
                raw = "\n".join(str(item) for item in raw)
            values[f.name] = str(raw).strip()
        return cls(**values)

    def merged_with(self, patch: Dict[str, Any]) -> "SummaryContent":
        current = asdict(self)
        current.update({k: v for k, v in patch.items() if k in current and v is not None})
        return SummaryContent.from_dict(current)

    def word_count(self) -> int:
        return sum(len(value.split()) for value in asdict(self).values() if isinstance(value, str))


@dataclass
class KeyPoint:
    category: str
    point: str
    confidence: float = 80.0


@dataclass
class ExtractedData:
    """Entities pulled out of the transcript; items are loose mappings."""

    symptoms: List[Dict[str, Any]] = field(default_factory=list)
    diagnoses: List[Dict[str, Any]] = field(default_factory=list)
    medications: List[Dict[str, Any]] = field(default_factory=list)
    procedures: List[Dict[str, Any]] = field(default_factory=list)
    vital_signs: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GenerationMetadata:
    model: Optional[str] = None
    prompt_version: str = "1.0"
    processing_time: Optional[float] = None  # milliseconds
    token_usage: Dict[str, int] = field(default_factory=dict)
    confidence: float = 85.0


@dataclass
class GeneratedSummary:
    """Output of one summary generation run."""

    content: SummaryContent
    key_points: List[KeyPoint] = field(default_factory=list)
    extracted_data: ExtractedData = field(default_factory=ExtractedData)
    metadata: GenerationMetadata = field(default_factory=GenerationMetadata)


@dataclass
class SummaryVersion:
    version: int
    content: SummaryContent
    generated_at: datetime
    generated_by: str = "system"


@dataclass
class Summary:
    """Clinical summary aggregate."""

    summary_id: str
    session_id: str
    content: SummaryContent = field(default_factory=SummaryContent)
    key_points: List[KeyPoint] = field(default_factory=list)
    extracted_data: ExtractedData = field(default_factory=ExtractedData)
    generation_metadata: GenerationMetadata = field(default_factory=GenerationMetadata)
    status: SummaryStatus = SummaryStatus.GENERATING
    version: int = 1
    previous_versions: List[SummaryVersion] = field(default_factory=list)
    error_message: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    is_approved: bool = False
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def for_session(cls, session_id: str) -> "Summary":
        """New summary in the generating state."""
        return cls(summary_id=SummaryId.generate().value, session_id=session_id)

    @property
    def word_count(self) -> int:
        return self.content.word_count()

    def start_generation(self) -> None:
        self.status = SummaryStatus.GENERATING
        self.error_message = None
        self.touch()

    def complete(self, generated: GeneratedSummary) -> None:
        self.content = generated.content
        self.key_points = list(generated.key_points)
        self.extracted_data = generated.extracted_data
        self.generation_metadata = generated.metadata
        self.status = SummaryStatus.COMPLETED
        self.error_message = None
        self.touch()

    def create_new_version(self, generated: GeneratedSummary, generated_by: str = "system") -> None:
        """Archive the current content and replace it with a freshly generated one."""
        self._archive(generated_by)
        self.version += 1
        self.is_approved = False
        self.complete(generated)

    def revise(self, content_patch: Dict[str, Any]) -> None:
        """Hand edit of one or more sections; creates a new version."""
        self._archive(MANUAL_EDIT)
        self.content = self.content.merged_with(content_patch)
        self.version += 1
        self.is_approved = False
        self.touch()

    def review(self, reviewed_by: Optional[str] = None, notes: Optional[str] = None) -> None:
        if notes is not None:
            self.review_notes = notes
        if reviewed_by:
            self.reviewed_by = reviewed_by
            self.reviewed_at = datetime.utcnow()
        self.touch()

    def approve(self, approved_by: str, notes: Optional[str] = None) -> None:
        now = datetime.utcnow()
        self.is_approved = True
        self.approved_by = approved_by
        self.approved_at = now
        self.reviewed_by = approved_by
        self.reviewed_at = now
        if notes is not None:
            self.review_notes = notes
        self.touch()

    def fail(self, message: str) -> None:
        self.status = SummaryStatus.FAILED
        self.error_message = message
        self.touch()

    def _archive(self, generated_by: str) -> None:
        self.previous_versions.append(
            SummaryVersion(
                version=self.version,
                content=self.content,
                generated_at=self.updated_at,
                generated_by=generated_by,
            )
        )

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
