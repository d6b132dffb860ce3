"""
In-memory stand-ins for the repositories and external services.
"""

import copy
from typing import Any, Dict, List, Optional, Tuple

from ackomer.application.ports.repositories.patient_repo import PatientRepository
from ackomer.application.ports.repositories.reference_repo import ConditionRepository, SymptomRepository
from ackomer.application.ports.repositories.session_repo import SessionQuery, SessionRepository
from ackomer.application.ports.repositories.summary_repo import SummaryRepository
from ackomer.application.ports.repositories.transcription_repo import TranscriptionRepository
from ackomer.application.ports.services.cache_service import CacheService
from ackomer.application.ports.services.event_publisher import EventPublisher
from ackomer.application.ports.services.question_service import QuestionService
from ackomer.application.ports.services.speech_service import SpeechService, SpeechTranscript
from ackomer.application.ports.services.summary_service import SummaryService
from ackomer.core.exceptions import GenerationError, TranscriptionError
from ackomer.domain.entities.summary import (
    ExtractedData,
    GeneratedSummary,
    GenerationMetadata,
    KeyPoint,
    SummaryContent,
)
from ackomer.domain.entities.transcription import SpeakerSegment
from ackomer.domain.enums.status import QuestionType


class InMemorySessionRepository(SessionRepository):
    def __init__(self):
        self.items = {}

    async def save(self, session):
        self.items[session.session_id] = copy.deepcopy(session)
        return session

    async def find_by_id(self, session_id):
        item = self.items.get(session_id)
        return copy.deepcopy(item) if item else None

    async def exists_by_id(self, session_id):
        return session_id in self.items

    async def find_many(self, query: SessionQuery, skip=0, limit=20):
        def matches(s):
            if query.status and s.status.value != query.status:
                return False
            if query.doctor_id and s.doctor_id != query.doctor_id:
                return False
            if query.session_type and s.session_type.value != query.session_type:
                return False
            if query.priority and s.priority.value != query.priority:
                return False
            if query.start_date and s.start_time < query.start_date:
                return False
            if query.end_date and s.start_time > query.end_date:
                return False
            if query.search:
                needle = query.search.lower()
                haystack = f"{s.doctor_name} {s.notes or ''}".lower()
                if needle not in haystack:
                    return False
            return True

        found = sorted(
            (s for s in self.items.values() if matches(s)),
            key=lambda s: s.start_time,
            reverse=True,
        )
        return [copy.deepcopy(s) for s in found[skip : skip + limit]], len(found)

    async def delete(self, session_id):
        return self.items.pop(session_id, None) is not None


class InMemoryTranscriptionRepository(TranscriptionRepository):
    def __init__(self):
        self.items = {}

    async def save(self, transcription):
        self.items[transcription.transcription_id] = copy.deepcopy(transcription)
        return transcription

    async def find_by_id(self, transcription_id):
        item = self.items.get(transcription_id)
        return copy.deepcopy(item) if item else None

    async def find_by_session(self, session_id, status=None, skip=0, limit=None):
        found = [
            t
            for t in sorted(self.items.values(), key=lambda t: t.created_at)
            if t.session_id == session_id and (status is None or t.status.value == status)
        ]
        page = found[skip : skip + limit] if limit else found[skip:]
        return [copy.deepcopy(t) for t in page], len(found)

    async def delete(self, transcription_id):
        return self.items.pop(transcription_id, None) is not None

    async def delete_by_session(self, session_id):
        doomed = [k for k, t in self.items.items() if t.session_id == session_id]
        for key in doomed:
            del self.items[key]
        return len(doomed)


class InMemorySummaryRepository(SummaryRepository):
    def __init__(self):
        self.items = {}

    async def save(self, summary):
        self.items[summary.summary_id] = copy.deepcopy(summary)
        return summary

    async def find_by_id(self, summary_id):
        item = self.items.get(summary_id)
        return copy.deepcopy(item) if item else None

    async def find_by_session(self, session_id):
        found = sorted(
            (s for s in self.items.values() if s.session_id == session_id),
            key=lambda s: s.created_at,
            reverse=True,
        )
        return copy.deepcopy(found[0]) if found else None

    async def delete(self, summary_id):
        return self.items.pop(summary_id, None) is not None


class InMemoryPatientRepository(PatientRepository):
    def __init__(self):
        self.items = {}

    async def save(self, patient):
        self.items[patient.patient_id] = copy.deepcopy(patient)
        return patient

    async def find_by_id(self, patient_id):
        item = self.items.get(patient_id)
        return copy.deepcopy(item) if item else None

    async def exists_by_id(self, patient_id):
        return patient_id in self.items

    async def find_many(self, search=None, skip=0, limit=20):
        found = [
            p
            for p in self.items.values()
            if not search or search.lower() in p.full_name.lower()
        ]
        return [copy.deepcopy(p) for p in found[skip : skip + limit]], len(found)


class FakeSpeechService(SpeechService):
    def __init__(self, text: str = "Doctor: How are you feeling? Patient: I have a headache.", configured: bool = True):
        self.text = text
        self.configured = configured
        self.error: Optional[Exception] = None
        self.calls: List[Dict[str, Any]] = []

    def is_configured(self):
        return self.configured

    async def transcribe(self, audio, *, language="en", mime_type=None, filename=None):
        self.calls.append({"size": len(audio), "language": language, "mime_type": mime_type})
        if self.error:
            raise self.error
        return SpeechTranscript(
            text=self.text,
            confidence=92.5,
            language="en-US",
            segments=[SpeakerSegment(text=self.text, start_time=0.0, end_time=3.2, speaker=0)],
            speaker_count=1,
            model="fake-speech",
            processing_time=12.0,
        )


def failing_speech_service(message: str = "Invalid audio format") -> FakeSpeechService:
    service = FakeSpeechService()
    service.error = TranscriptionError(message)
    return service


class FakeSummaryService(SummaryService):
    def __init__(self):
        self.error: Optional[Exception] = None
        self.transcripts: List[str] = []

    async def generate_summary(self, transcript):
        self.transcripts.append(transcript)
        if self.error:
            raise self.error
        return GeneratedSummary(
            content=SummaryContent(
                chief_complaint="Headache for three days",
                assessment="Tension-type headache",
                plan="Paracetamol as needed, hydration",
            ),
            key_points=[KeyPoint(category="symptom", point="Headache", confidence=90)],
            extracted_data=ExtractedData(symptoms=[{"name": "headache", "severity": "moderate"}]),
            metadata=GenerationMetadata(model="fake-llm", processing_time=5.0),
        )


def failing_summary_service() -> FakeSummaryService:
    service = FakeSummaryService()
    service.error = GenerationError("model reply was not valid JSON")
    return service


class FakeQuestionService(QuestionService):
    def __init__(self, configured: bool = True):
        self.configured = configured
        self.requested: List[QuestionType] = []

    @property
    def model_name(self) -> str:
        return "fake-llm"

    def is_configured(self) -> bool:
        return self.configured

    async def generate_questions(self, transcript, question_type):
        self.requested.append(question_type)
        return [{"question": f"{question_type.value} question?", "priority": 3}]


class DictCache(CacheService):
    """Connected cache backed by a dict; TTLs are recorded, not enforced."""

    def __init__(self):
        self.sessions: Dict[str, Dict[str, Any]] = {}
        self.statuses: Dict[str, str] = {}
        self.invalidated: List[str] = []
        self.hits: Dict[str, int] = {}

    async def cache_session(self, session_id, data, ttl=None):
        self.sessions[session_id] = data
        return True

    async def get_cached_session(self, session_id):
        return self.sessions.get(session_id)

    async def invalidate_session(self, session_id):
        self.invalidated.append(session_id)
        return self.sessions.pop(session_id, None) is not None

    async def cache_transcription_status(self, transcription_id, status, ttl=None):
        self.statuses[transcription_id] = status
        return True

    async def get_transcription_status(self, transcription_id):
        return self.statuses.get(transcription_id)

    async def check_rate_limit(self, identifier, limit=100, window=900):
        self.hits[identifier] = self.hits.get(identifier, 0) + 1
        current = self.hits[identifier]
        return {"allowed": current <= limit, "remaining": max(0, limit - current), "reset_time": None}


class RecordingPublisher(EventPublisher):
    def __init__(self):
        self.events: List[Tuple[str, str, Dict[str, Any]]] = []

    async def emit(self, room, event, data):
        self.events.append((room, event, data))
        return 1

    def names(self) -> List[str]:
        return [event for _, event, _ in self.events]


class InMemoryConditionRepository(ConditionRepository):
    def __init__(self, conditions=None):
        self.conditions = list(conditions or [])

    async def save(self, condition):
        self.conditions = [c for c in self.conditions if c.icd10_code != condition.icd10_code]
        self.conditions.append(condition)
        return condition

    async def search(self, text, category=None, severity=None, limit=20):
        needle = text.lower()
        found = [
            c
            for c in self.conditions
            if (needle in c.name.lower() or any(needle in s for s in c.synonyms))
            and (category is None or c.category.value == category)
            and (severity is None or c.severity.value == severity)
        ]
        return found[:limit]

    async def find_by_icd10(self, code):
        return next((c for c in self.conditions if c.icd10_code == code.upper()), None)


class InMemorySymptomRepository(SymptomRepository):
    def __init__(self, symptoms=None):
        self.symptoms = list(symptoms or [])

    async def save(self, symptom):
        self.symptoms = [s for s in self.symptoms if s.name != symptom.name]
        self.symptoms.append(symptom)
        return symptom

    async def search(self, text, category=None, urgency_level=None, limit=20):
        needle = text.lower()
        found = [
            s
            for s in self.symptoms
            if needle in s.name.lower()
            and (category is None or s.category.value == category)
            and (urgency_level is None or s.urgency_level.value == urgency_level)
        ]
        return found[:limit]

    async def find_by_body_part(self, body_part):
        return [s for s in self.symptoms if body_part.strip().lower() in s.body_parts]

    async def find_by_name(self, name):
        return next((s for s in self.symptoms if s.name.lower() == name.lower()), None)
