"""
Shared fixtures: the app wired to in-memory repositories and fake services.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("REDIS_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from ackomer.api import deps
from ackomer.app import app
from ackomer.core.config import FileStorageSettings, get_settings

from tests.fakes import (
    DictCache,
    FakeQuestionService,
    FakeSpeechService,
    FakeSummaryService,
    InMemoryConditionRepository,
    InMemoryPatientRepository,
    InMemorySessionRepository,
    InMemorySummaryRepository,
    InMemorySymptomRepository,
    InMemoryTranscriptionRepository,
    RecordingPublisher,
)


class Backend:
    """Everything the routers talk to, exposed so tests can inspect state."""

    def __init__(self, storage_path: str):
        self.sessions = InMemorySessionRepository()
        self.transcriptions = InMemoryTranscriptionRepository()
        self.summaries = InMemorySummaryRepository()
        self.patients = InMemoryPatientRepository()
        self.conditions = InMemoryConditionRepository()
        self.symptoms = InMemorySymptomRepository()
        self.speech = FakeSpeechService()
        self.summary_service = FakeSummaryService()
        self.question_service = FakeQuestionService()
        self.cache = DictCache()
        self.publisher = RecordingPublisher()
        self.settings = get_settings().model_copy(
            update={"file_storage": FileStorageSettings(audio_storage_path=storage_path)}
        )


@pytest.fixture
def backend(tmp_path):
    b = Backend(str(tmp_path / "uploads"))
    app.dependency_overrides.update(
        {
            deps.get_session_repository: lambda: b.sessions,
            deps.get_transcription_repository: lambda: b.transcriptions,
            deps.get_summary_repository: lambda: b.summaries,
            deps.get_patient_repository: lambda: b.patients,
            deps.get_condition_repository: lambda: b.conditions,
            deps.get_symptom_repository: lambda: b.symptoms,
            deps.get_speech_service: lambda: b.speech,
            deps.get_summary_service: lambda: b.summary_service,
            deps.get_question_service: lambda: b.question_service,
            deps.get_cache: lambda: b.cache,
            deps.get_event_publisher: lambda: b.publisher,
            deps.get_app_settings: lambda: b.settings,
        }
    )
    yield b
    app.dependency_overrides.clear()


@pytest.fixture
def client(backend):
    """Test client; the lifespan is not entered, so no database is needed."""
    return TestClient(app)


@pytest.fixture
def create_session(client):
    def _create(**overrides):
        body = {"doctorName": "Dr. Asha Rao"}
        body.update(overrides)
        response = client.post("/api/sessions", json=body)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
