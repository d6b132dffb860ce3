"""
Session endpoint tests.
"""

import asyncio

from ackomer.domain.entities.transcription import AudioFileInfo, Transcription


def test_create_session_returns_active_session(client):
    response = client.post(
        "/api/sessions",
        json={"doctorName": "  Dr. Asha Rao  ", "sessionType": "follow-up", "priority": "high"},
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["sessionId"].startswith("sess_")
    assert data["doctorName"] == "Dr. Asha Rao"
    assert data["status"] == "active"
    assert data["sessionType"] == "follow-up"
    assert data["priority"] == "high"
    assert data["endTime"] is None


def test_create_session_requires_doctor_name(client):
    response = client.post("/api/sessions", json={})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "INVALID_INPUT"


def test_create_session_rejects_short_doctor_name(client):
    response = client.post("/api/sessions", json={"doctorName": "A"})
    assert response.status_code == 400


def test_create_session_with_unknown_patient_is_404(client):
    response = client.post("/api/sessions", json={"doctorName": "Dr. Rao", "patientId": "pat_missing"})
    assert response.status_code == 404
    assert response.json()["error"] == "PATIENT_NOT_FOUND"


def test_get_session_populates_and_caches(client, backend, create_session):
    session = create_session()
    response = client.get(f"/api/sessions/{session['sessionId']}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["sessionId"] == session["sessionId"]
    assert data["transcriptions"] == []
    assert data["summary"] is None
    assert session["sessionId"] in backend.cache.sessions


def test_get_unknown_session_is_404(client):
    response = client.get("/api/sessions/sess_unknown")
    assert response.status_code == 404
    assert response.json()["error"] == "SESSION_NOT_FOUND"


def test_update_session_ignores_protected_fields_and_invalidates_cache(client, backend, create_session):
    session = create_session()
    session_id = session["sessionId"]
    client.get(f"/api/sessions/{session_id}")

    response = client.put(
        f"/api/sessions/{session_id}",
        json={"notes": "Patient anxious", "sessionId": "sess_other", "followUpRequired": True},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["sessionId"] == session_id
    assert data["notes"] == "Patient anxious"
    assert data["followUpRequired"] is True
    assert session_id not in backend.cache.sessions


def test_end_session_sets_end_time_and_duration(client, create_session):
    session = create_session()
    response = client.post(f"/api/sessions/{session['sessionId']}/end", json={"notes": "Done"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "completed"
    assert data["endTime"] is not None
    assert data["duration"] == 0
    assert data["notes"] == "Done"


def test_end_session_twice_is_rejected(client, create_session):
    session = create_session()
    client.post(f"/api/sessions/{session['sessionId']}/end")
    response = client.post(f"/api/sessions/{session['sessionId']}/end")
    assert response.status_code == 400
    assert response.json()["error"] == "SESSION_ALREADY_COMPLETED"


def test_list_sessions_filters_and_paginates(client, create_session):
    create_session(doctorName="Dr. Asha Rao")
    create_session(doctorName="Dr. Vikram Shah", priority="urgent")
    create_session(doctorName="Dr. Vikram Shah")

    response = client.get("/api/sessions", params={"limit": 2})
    data = response.json()["data"]
    assert len(data["sessions"]) == 2
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

    response = client.get("/api/sessions", params={"priority": "urgent"})
    assert [s["priority"] for s in response.json()["data"]["sessions"]] == ["urgent"]

    response = client.get("/api/sessions", params={"search": "vikram"})
    assert response.json()["data"]["pagination"]["total"] == 2


def test_list_sessions_rejects_unknown_status(client):
    response = client.get("/api/sessions", params={"status": "sleeping"})
    assert response.status_code == 400


def test_delete_session_cascades(client, backend, create_session):
    session = create_session()
    session_id = session["sessionId"]
    transcription = Transcription.pending(session_id, AudioFileInfo(original_name="a.wav"))
    asyncio.run(backend.transcriptions.save(transcription))

    response = client.delete(f"/api/sessions/{session_id}")
    assert response.status_code == 200
    assert backend.sessions.items == {}
    assert backend.transcriptions.items == {}
    assert client.get(f"/api/sessions/{session_id}").status_code == 404


def test_session_stats_counts_transcriptions(client, backend, create_session):
    session = create_session()
    session_id = session["sessionId"]
    done = Transcription.pending(session_id, AudioFileInfo())
    done.complete("hello", 90.0, "en-US")
    failed = Transcription.pending(session_id, AudioFileInfo())
    failed.fail("bad audio")
    for t in (done, failed, Transcription.pending(session_id, AudioFileInfo())):
        asyncio.run(backend.transcriptions.save(t))

    response = client.get(f"/api/sessions/{session_id}/stats")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["sessionInfo"]["id"] == session_id
    assert data["transcriptions"] == {"total": 3, "completed": 1, "processing": 1, "failed": 1}
    assert data["summary"]["exists"] is False
