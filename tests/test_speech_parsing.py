"""
Azure Speech response parsing tests.
"""

import pytest

from ackomer.adapters.external.speech_service_azure import (
    AzureSpeechService,
    average_confidence,
    describe_http_error,
    extract_speaker_segments,
    get_candidate_locales,
    get_locale,
)
from ackomer.core.config import AzureSpeechSettings
from ackomer.core.exceptions import ConfigurationError, TranscriptionError

PAYLOAD = {
    "durationMilliseconds": 6400,
    "combinedPhrases": [{"text": "How are you feeling today? I have had a headache since Monday."}],
    "phrases": [
        {"speaker": 1, "offsetMilliseconds": 0, "durationMilliseconds": 1500,
         "text": "How are you feeling today?", "confidence": 0.9, "locale": "en-US"},
        {"speaker": 2, "offsetMilliseconds": 1800, "durationMilliseconds": 2000,
         "text": "I have had a headache", "confidence": 0.8},
        {"speaker": 2, "offsetMilliseconds": 3900, "durationMilliseconds": 1000,
         "text": "since Monday.", "confidence": 0.7},
    ],
}


@pytest.fixture
def service():
    return AzureSpeechService(AzureSpeechSettings(subscription_key="key", region="eastus"))


def test_locale_mapping():
    assert get_locale("hi") == "hi-IN"
    assert get_locale("xx") == "en-US"
    assert get_locale(None) == "en-US"
    assert get_candidate_locales("en") == ["en-US", "en-GB"]


def test_consecutive_phrases_of_a_speaker_are_merged():
    segments = extract_speaker_segments(PAYLOAD["phrases"])
    assert [(s.speaker, s.text) for s in segments] == [
        (0, "How are you feeling today?"),
        (1, "I have had a headache since Monday."),
    ]
    assert segments[1].start_time == 1.8
    assert segments[1].end_time == pytest.approx(4.9)


def test_text_without_phrases_becomes_one_segment():
    segments = extract_speaker_segments([], "  Just text  ")
    assert len(segments) == 1
    assert segments[0].speaker == 0
    assert segments[0].text == "Just text"


def test_average_confidence_is_a_percentage():
    assert average_confidence(PAYLOAD["phrases"]) == 80.0
    assert average_confidence([{"text": "no score"}]) == 0.0


def test_parse_response(service):
    result = service.parse_response(PAYLOAD, "en", processing_time=12.5)
    assert result.text.startswith("How are you feeling")
    assert result.speaker_count == 2
    assert result.language == "en-US"
    assert result.duration == 6.4
    assert result.processing_time == 12.5


def test_empty_response_is_a_transcription_error(service):
    with pytest.raises(TranscriptionError):
        service.parse_response({"phrases": []}, "en")


def test_definition_enables_diarization(service):
    definition = service.build_definition("bn")
    assert definition["locales"] == ["bn-IN", "bn-BD"]
    assert definition["diarization"] == {"enabled": True, "maxSpeakers": 2}
    assert service.transcribe_url.startswith("https://eastus.api.cognitive.microsoft.com/")


def test_http_errors_are_described():
    assert "credentials" in describe_http_error(401, "")
    assert "quota" in describe_http_error(429, "")
    assert "(418)" in describe_http_error(418, "teapot")


@pytest.mark.asyncio
async def test_missing_credentials_are_a_configuration_error():
    no_key = AzureSpeechService(AzureSpeechSettings(subscription_key="", region="eastus"))
    no_region = AzureSpeechService(AzureSpeechSettings(subscription_key="key", region="", endpoint=""))
    for service in (no_key, no_region):
        assert service.is_configured() is False
        with pytest.raises(ConfigurationError):
            await service.transcribe(b"RIFF", mime_type="audio/wav")
