"""
Domain entity behaviour: sessions, transcriptions, summaries and identifiers.
"""

from datetime import date, datetime, timedelta

import pytest

from ackomer.domain.entities.patient import Patient
from ackomer.domain.entities.session import Session
from ackomer.domain.entities.summary import GeneratedSummary, Summary, SummaryContent
from ackomer.domain.entities.transcription import AudioFileInfo, Transcription
from ackomer.domain.enums.status import SessionStatus, SummaryStatus
from ackomer.domain.errors import SessionAlreadyCompletedError
from ackomer.domain.value_objects.entity_id import SessionId, SummaryId, TranscriptionId


def test_generated_ids_follow_prefix_format():
    assert SessionId.is_valid(SessionId.generate().value)
    assert TranscriptionId.generate().value.startswith("trans_")
    assert SummaryId.generate().value.startswith("sum_")
    with pytest.raises(ValueError):
        SessionId("trans_1718000000000_abcdefghi")


def test_session_validates_doctor_name():
    with pytest.raises(ValueError):
        Session.start(" A ")
    assert Session.start("  Dr. Rao ").doctor_name == "Dr. Rao"


def test_end_session_computes_duration_in_minutes():
    session = Session.start("Dr. Rao")
    session.start_time = datetime.utcnow() - timedelta(minutes=25, seconds=10)
    session.end("Follow up in a week")
    assert session.status == SessionStatus.COMPLETED
    assert session.duration == 25
    assert session.notes == "Follow up in a week"
    with pytest.raises(SessionAlreadyCompletedError):
        session.end()


def test_apply_update_skips_protected_fields():
    session = Session.start("Dr. Rao")
    original_id = session.session_id
    applied = session.apply_update({"session_id": "sess_x", "notes": "n", "bogus": 1})
    assert applied == ["notes"]
    assert session.session_id == original_id


def test_apply_update_revalidates():
    session = Session.start("Dr. Rao")
    with pytest.raises(ValueError):
        session.apply_update({"doctor_name": "X"})


def test_transcription_edit_keeps_audit_trail():
    transcription = Transcription.pending("sess_1", AudioFileInfo())
    transcription.complete("original", 150.0, "en-US")
    assert transcription.confidence == 100.0
    assert transcription.edit("original") is False
    assert transcription.edit("fixed", "Dr. Rao") is True
    assert transcription.original_text == "original"
    assert transcription.edit_history[0].original_text == "original"
    assert transcription.is_edited is True


def test_transcription_rejects_out_of_range_confidence():
    with pytest.raises(ValueError):
        Transcription(transcription_id="t", session_id="s", confidence=101)


def test_summary_versions_are_archived():
    summary = Summary.for_session("sess_1")
    summary.complete(GeneratedSummary(content=SummaryContent(plan="Rest")))
    summary.approve("Dr. Rao")

    summary.create_new_version(GeneratedSummary(content=SummaryContent(plan="Rest and fluids")))
    assert summary.version == 2
    assert summary.is_approved is False
    assert summary.status == SummaryStatus.COMPLETED
    assert summary.previous_versions[0].content.plan == "Rest"

    summary.revise({"assessment": "Viral fever", "unknown": "x"})
    assert summary.version == 3
    assert summary.content.plan == "Rest and fluids"
    assert summary.content.assessment == "Viral fever"
    assert summary.previous_versions[-1].generated_by == "manual-edit"
    assert summary.previous_versions[-1].content.assessment == ""


def test_summary_content_from_loose_mapping():
    content = SummaryContent.from_dict({"plan": ["a", "b"], "assessment": 42, "junk": "x"})
    assert content.plan == "a\nb"
    assert content.assessment == "42"
    assert content.word_count() == 3


def test_patient_age_and_normalization():
    patient = Patient.register(
        first_name=" Meera ", last_name="Iyer", date_of_birth=date(1990, 6, 15), gender="female"
    )
    assert patient.patient_id.startswith("pat_")
    assert patient.full_name == "Meera Iyer"
    assert patient.age(today=date(2024, 6, 14)) == 33
    assert patient.age(today=date(2024, 6, 15)) == 34
