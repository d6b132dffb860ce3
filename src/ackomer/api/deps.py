"""FastAPI dependency providers."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from ..adapters.cache.redis_cache_service import get_cache_service as _get_cache_service
from ..adapters.db.mongo.repositories.patient_repository import MongoPatientRepository
from ..adapters.db.mongo.repositories.reference_repository import (
    MongoConditionRepository,
    MongoSymptomRepository,
)
from ..adapters.db.mongo.repositories.session_repository import MongoSessionRepository
from ..adapters.db.mongo.repositories.summary_repository import MongoSummaryRepository
from ..adapters.db.mongo.repositories.transcription_repository import (
    MongoTranscriptionRepository,
)
from ..adapters.external.question_service_openai import OpenAIQuestionService
from ..adapters.external.speech_service_azure import AzureSpeechService
from ..adapters.external.summary_service_openai import OpenAISummaryService
from ..application.ports.repositories.patient_repo import PatientRepository
from ..application.ports.repositories.reference_repo import (
    ConditionRepository,
    SymptomRepository,
)
from ..application.ports.repositories.session_repo import SessionRepository
from ..application.ports.repositories.summary_repo import SummaryRepository
from ..application.ports.repositories.transcription_repo import TranscriptionRepository
from ..application.ports.services.cache_service import CacheService
from ..application.ports.services.event_publisher import EventPublisher
from ..application.ports.services.question_service import QuestionService
from ..application.ports.services.speech_service import SpeechService
from ..application.ports.services.summary_service import SummaryService
from ..core.config import Settings
from ..core.config import get_settings as _get_settings
from ..realtime.rooms import get_connection_manager


@lru_cache()
def get_session_repository() -> SessionRepository:
    return MongoSessionRepository()


@lru_cache()
def get_transcription_repository() -> TranscriptionRepository:
    return MongoTranscriptionRepository()


@lru_cache()
def get_summary_repository() -> SummaryRepository:
    return MongoSummaryRepository()


@lru_cache()
def get_patient_repository() -> PatientRepository:
    return MongoPatientRepository()


@lru_cache()
def get_condition_repository() -> ConditionRepository:
    return MongoConditionRepository()


@lru_cache()
def get_symptom_repository() -> SymptomRepository:
    return MongoSymptomRepository()


@lru_cache()
def get_speech_service() -> SpeechService:
    """Azure Speech client; use cases check is_configured() after validating input."""
    return AzureSpeechService()


@lru_cache()
def get_summary_service() -> SummaryService:
    return OpenAISummaryService()


@lru_cache()
def get_question_service() -> QuestionService:
    return OpenAIQuestionService()


def get_cache() -> CacheService:
    return _get_cache_service()


def get_event_publisher() -> EventPublisher:
    return get_connection_manager()


def get_app_settings() -> Settings:
    return _get_settings()


SessionRepositoryDep = Annotated[SessionRepository, Depends(get_session_repository)]
TranscriptionRepositoryDep = Annotated[TranscriptionRepository, Depends(get_transcription_repository)]
SummaryRepositoryDep = Annotated[SummaryRepository, Depends(get_summary_repository)]
PatientRepositoryDep = Annotated[PatientRepository, Depends(get_patient_repository)]
ConditionRepositoryDep = Annotated[ConditionRepository, Depends(get_condition_repository)]
SymptomRepositoryDep = Annotated[SymptomRepository, Depends(get_symptom_repository)]
SpeechServiceDep = Annotated[SpeechService, Depends(get_speech_service)]
SummaryServiceDep = Annotated[SummaryService, Depends(get_summary_service)]
QuestionServiceDep = Annotated[QuestionService, Depends(get_question_service)]
CacheDep = Annotated[CacheService, Depends(get_cache)]
EventPublisherDep = Annotated[EventPublisher, Depends(get_event_publisher)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
