"""
Audio upload, live chunk and transcription management tests.
"""

import asyncio
import os

from ackomer.application.dto.transcription_dto import UploadAudioRequest
from ackomer.application.use_cases.transcribe_audio import UploadAudioUseCase
from ackomer.core.config import AudioSettings

from tests.fakes import FakeSpeechService, failing_speech_service

WAV = ("visit.wav", b"RIFF\x00\x00\x00\x00WAVEfmt fake audio", "audio/wav")


def upload(client, session_id, file=WAV, **form):
    data = {"sessionId": session_id}
    data.update(form)
    return client.post("/api/transcriptions/upload", files={"audio": file}, data=data)


def test_upload_accepts_audio_and_completes_in_background(client, backend, create_session):
    session_id = create_session()["sessionId"]

    response = upload(client, session_id, language="en")
    assert response.status_code == 202
    data = response.json()["data"]
    assert data["status"] == "processing"
    transcription_id = data["transcriptionId"]
    assert transcription_id.startswith("trans_")

    stored = backend.transcriptions.items[transcription_id]
    assert stored.status.value == "completed"
    assert stored.text == backend.speech.text
    assert stored.audio_file.original_name == "visit.wav"
    assert not os.path.exists(stored.audio_file.path)

    assert backend.sessions.items[session_id].transcription_ids == [transcription_id]
    assert backend.cache.statuses[transcription_id] == "completed"
    room, event, payload = backend.publisher.events[-1]
    assert (room, event) == (session_id, "transcription-completed")
    assert payload["transcriptionId"] == transcription_id
    assert payload["confidence"] == 92.5


def test_upload_failure_marks_transcription_failed(client, backend, create_session):
    backend.speech.error = failing_speech_service().error
    session_id = create_session()["sessionId"]

    response = upload(client, session_id)
    assert response.status_code == 202
    transcription_id = response.json()["data"]["transcriptionId"]

    stored = backend.transcriptions.items[transcription_id]
    assert stored.status.value == "failed"
    assert "Invalid audio format" in stored.error_message
    assert backend.sessions.items[session_id].transcription_ids == []
    assert backend.publisher.names() == ["transcription-failed"]


def test_upload_rejects_non_audio_file(client, create_session):
    session_id = create_session()["sessionId"]
    response = upload(client, session_id, file=("notes.txt", b"hello", "text/plain"))
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "INVALID_AUDIO_FILE"
    assert body["message"] == "Invalid file type. Only audio files are allowed."


def test_upload_requires_session_id(client):
    response = client.post("/api/transcriptions/upload", files={"audio": WAV})
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_INPUT"


def test_upload_to_unknown_session_removes_stored_file(client, backend):
    response = upload(client, "sess_unknown")
    assert response.status_code == 404
    storage = backend.settings.file_storage.audio_storage_path
    assert not os.path.exists(storage) or os.listdir(storage) == []
    assert backend.transcriptions.items == {}


def test_stream_chunk_emits_live_transcription(client, backend, create_session):
    session_id = create_session()["sessionId"]
    response = client.post(
        "/api/transcriptions/stream",
        files={"audio": ("chunk.webm", b"webm-bytes", "audio/webm;codecs=opus")},
        data={"sessionId": session_id, "recordingId": "rec-1"},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["recordingId"] == "rec-1"
    assert data["text"] == backend.speech.text
    room, event, payload = backend.publisher.events[-1]
    assert (room, event) == (session_id, "live-transcription")
    assert payload["isLive"] is True


def test_stream_chunk_for_unknown_session_is_404(client):
    response = client.post(
        "/api/transcriptions/stream",
        files={"audio": WAV},
        data={"sessionId": "sess_unknown"},
    )
    assert response.status_code == 404


def test_stream_chunk_speech_failure_is_bad_gateway(client, backend, create_session):
    backend.speech.error = failing_speech_service().error
    session_id = create_session()["sessionId"]
    response = client.post(
        "/api/transcriptions/stream", files={"audio": WAV}, data={"sessionId": session_id}
    )
    assert response.status_code == 502
    assert response.json()["error"] == "TRANSCRIPTION_ERROR"


def test_list_session_transcriptions(client, create_session):
    session_id = create_session()["sessionId"]
    upload(client, session_id)
    upload(client, session_id)

    response = client.get(f"/api/transcriptions/session/{session_id}", params={"status": "completed"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["transcriptions"]) == 2
    assert data["pagination"]["total"] == 2

    assert client.get("/api/transcriptions/session/sess_unknown").status_code == 404


def test_get_transcription_prefers_cached_status(client, backend, create_session):
    session_id = create_session()["sessionId"]
    transcription_id = upload(client, session_id).json()["data"]["transcriptionId"]
    backend.cache.statuses[transcription_id] = "reviewing"

    response = client.get(f"/api/transcriptions/{transcription_id}")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "reviewing"
    assert client.get("/api/transcriptions/trans_unknown").status_code == 404


def test_edit_transcription_keeps_history(client, create_session):
    session_id = create_session()["sessionId"]
    transcription_id = upload(client, session_id).json()["data"]["transcriptionId"]

    response = client.put(
        f"/api/transcriptions/{transcription_id}",
        json={"transcriptionText": "Corrected text", "speaker": "doctor", "editedBy": "Dr. Rao"},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["text"] == "Corrected text"
    assert data["speaker"] == "doctor"
    assert data["isEdited"] is True
    assert data["editHistory"][0]["editedBy"] == "Dr. Rao"
    assert data["originalText"] != "Corrected text"


def test_delete_transcription_unlinks_from_session(client, backend, create_session):
    session_id = create_session()["sessionId"]
    transcription_id = upload(client, session_id).json()["data"]["transcriptionId"]

    response = client.delete(f"/api/transcriptions/{transcription_id}")
    assert response.status_code == 200
    assert backend.sessions.items[session_id].transcription_ids == []
    assert transcription_id not in backend.transcriptions.items


def test_upload_over_size_limit_is_rejected(client, backend, create_session):
    backend.settings = backend.settings.model_copy(
        update={"audio": AudioSettings(max_size_mb=1, stream_chunk_max_mb=1)}
    )
    session_id = create_session()["sessionId"]
    too_big = ("long.wav", b"\x00" * (1024 * 1024 + 1), "audio/wav")

    response = upload(client, session_id, file=too_big)
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "INVALID_AUDIO_FILE"
    assert body["message"] == "File too large. Maximum size is 1MB"
    assert body["details"]["max_size"] == 1024 * 1024
    assert backend.transcriptions.items == {}
    assert backend.speech.calls == []


def test_stream_chunk_over_size_limit_is_rejected(client, backend, create_session):
    backend.settings = backend.settings.model_copy(
        update={"audio": AudioSettings(max_size_mb=5, stream_chunk_max_mb=1)}
    )
    session_id = create_session()["sessionId"]
    response = client.post(
        "/api/transcriptions/stream",
        files={"audio": ("chunk.webm", b"\x00" * (1024 * 1024 + 1), "audio/webm")},
        data={"sessionId": session_id},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "File too large. Maximum size is 1MB"
    assert backend.speech.calls == []


def test_default_audio_limits():
    settings = AudioSettings()
    assert settings.max_size_bytes == 50 * 1024 * 1024
    assert settings.stream_chunk_max_bytes == 10 * 1024 * 1024


def test_unconfigured_speech_still_validates_input_first(client, backend, create_session):
    backend.speech = FakeSpeechService(configured=False)
    session_id = create_session()["sessionId"]

    response = upload(client, session_id, file=("notes.txt", b"hello", "text/plain"))
    assert response.status_code == 400
    assert upload(client, "sess_unknown").status_code == 404

    response = upload(client, session_id)
    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"
    storage = backend.settings.file_storage.audio_storage_path
    assert not os.path.exists(storage) or os.listdir(storage) == []
    assert backend.transcriptions.items == {}

    response = client.post(
        "/api/transcriptions/stream", files={"audio": WAV}, data={"sessionId": session_id}
    )
    assert response.status_code == 503


def test_failed_transcription_refreshes_cached_session(client, backend, create_session):
    backend.speech.error = failing_speech_service().error
    session_id = create_session()["sessionId"]
    use_case = UploadAudioUseCase(
        backend.sessions,
        backend.transcriptions,
        backend.speech,
        backend.cache,
        backend.publisher,
        backend.settings.audio,
        backend.settings.file_storage.audio_storage_path,
    )

    def cached_statuses():
        data = client.get(f"/api/sessions/{session_id}").json()["data"]
        return [t["status"] for t in data["transcriptions"]]

    assert cached_statuses() == []
    transcription = asyncio.run(
        use_case.execute(
            UploadAudioRequest(session_id=session_id, content=WAV[1], filename=WAV[0], mime_type=WAV[2])
        )
    )
    assert cached_statuses() == ["processing"]

    asyncio.run(use_case.process(transcription.transcription_id))
    assert cached_statuses() == ["failed"]
