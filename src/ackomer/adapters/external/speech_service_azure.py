"""
Azure Speech fast transcription with speaker diarization.

Calls the synchronous ``transcriptions:transcribe`` REST endpoint, which
accepts the audio inline and returns phrases with speaker labels, so no
storage upload or job polling is needed.
"""

import asyncio
import json
import logging
import time
from typing import Any, Dict, List, Optional

import aiohttp

from ackomer.application.ports.services.speech_service import SpeechService, SpeechTranscript
from ackomer.core.config import AzureSpeechSettings, get_settings
from ackomer.core.exceptions import ConfigurationError, TranscriptionError
from ackomer.domain.entities.transcription import SpeakerSegment

logger = logging.getLogger("ackomer")

MODEL_NAME = "azure-speech-fast-transcription"

LOCALE_MAP: Dict[str, str] = {
    "en": "en-US",
    "hi": "hi-IN",
    "bn": "bn-IN",
    "te": "te-IN",
    "mr": "mr-IN",
    "ta": "ta-IN",
    "gu": "gu-IN",
    "kn": "kn-IN",
}

ALTERNATIVE_LOCALES: Dict[str, List[str]] = {
    "en": ["en-US", "en-GB"],
    "hi": ["hi-IN"],
    "bn": ["bn-IN", "bn-BD"],
    "te": ["te-IN"],
    "mr": ["mr-IN"],
    "ta": ["ta-IN", "ta-LK"],
    "gu": ["gu-IN"],
    "kn": ["kn-IN"],
}

DEFAULT_LOCALE = "en-US"


def get_locale(language: Optional[str]) -> str:
    """Map a short language code to the primary speech locale."""
    return LOCALE_MAP.get((language or "").lower(), DEFAULT_LOCALE)


def get_candidate_locales(language: Optional[str]) -> List[str]:
    """Locales offered to the recognizer for language identification."""
    return list(ALTERNATIVE_LOCALES.get((language or "").lower(), [DEFAULT_LOCALE]))


def _speaker_index(phrase: Dict[str, Any]) -> int:
    # Azure numbers diarized speakers from 1; 0 or missing means unassigned.
    speaker = phrase.get("speaker")
    if isinstance(speaker, int) and speaker > 0:
        return speaker - 1
    return 0


def extract_speaker_segments(phrases: List[Dict[str, Any]], full_text: str = "") -> List[SpeakerSegment]:
    """Group consecutive phrases of the same speaker into segments.

    Without any phrase information the whole text becomes one segment for
    speaker 0.
    """
    segments: List[SpeakerSegment] = []
    current: Optional[SpeakerSegment] = None

    for phrase in phrases:
        text = (phrase.get("text") or "").strip()
        if not text:
            continue
        speaker = _speaker_index(phrase)
        start = (phrase.get("offsetMilliseconds") or 0) / 1000.0
        end = start + (phrase.get("durationMilliseconds") or 0) / 1000.0

        if current is not None and current.speaker == speaker:
            current.text = f"{current.text} {text}"
            current.end_time = end
            continue

        if current is not None:
            segments.append(current)
        current = SpeakerSegment(text=text, start_time=start, end_time=end, speaker=speaker)

    if current is not None:
        segments.append(current)

    if not segments and full_text.strip():
        segments.append(SpeakerSegment(text=full_text.strip(), start_time=0.0, end_time=0.0, speaker=0))

    return segments


def average_confidence(phrases: List[Dict[str, Any]]) -> float:
    """Mean phrase confidence on a 0-100 scale."""
    values = [p["confidence"] for p in phrases if isinstance(p.get("confidence"), (int, float))]
    if not values:
        return 0.0
    return round(sum(values) / len(values) * 100, 2)


def describe_http_error(status: int, body: str) -> str:
    """Human-readable message for a failed speech API call."""
    if status in (400, 415, 422):
        return "Invalid audio file format or configuration."
    if status in (401, 403):
        return "Invalid Azure Speech credentials."
    if status == 429:
        return "Azure Speech API quota exceeded."
    if status >= 500:
        return "Azure Speech internal error."
    return f"Azure Speech API error ({status}): {body[:200]}"


class AzureSpeechService(SpeechService):
    """
    Azure Speech Service transcription with speaker diarization.

    Missing credentials are reported by ``is_configured()`` and raised as
    ConfigurationError when transcribing.
    """

    def __init__(self, settings: Optional[AzureSpeechSettings] = None) -> None:
        self._settings = settings or get_settings().azure_speech
        if self.is_configured():
            logger.info(f"Azure Speech Service initialized (endpoint: {self.endpoint})")
        else:
            logger.warning("Azure Speech Service credentials are not configured")

    def is_configured(self) -> bool:
        return bool(self._settings.subscription_key) and bool(
            self._settings.region or self._settings.endpoint
        )

    def _require_configuration(self) -> None:
        if not self._settings.subscription_key:
            raise ConfigurationError(
                "Azure Speech Service subscription key is required. "
                "Please set AZURE_SPEECH_SUBSCRIPTION_KEY environment variable."
            )
        if not self._settings.region and not self._settings.endpoint:
            raise ConfigurationError(
                "Azure Speech Service region is required unless AZURE_SPEECH_ENDPOINT is provided. "
                "Please set AZURE_SPEECH_REGION environment variable (e.g., 'eastus', 'westus2')."
            )

    @property
    def endpoint(self) -> str:
        # Explicit override wins over the regional endpoint
        return (
            self._settings.endpoint
            or f"https://{self._settings.region}.api.cognitive.microsoft.com"
        ).rstrip("/")

    @property
    def transcribe_url(self) -> str:
        return (
            f"{self.endpoint}/speechtotext/transcriptions:transcribe"
            f"?api-version={self._settings.api_version}"
        )

    def build_definition(self, language: str) -> Dict[str, Any]:
        definition: Dict[str, Any] = {"locales": get_candidate_locales(language)}
        if self._settings.enable_speaker_diarization:
            definition["diarization"] = {
                "enabled": True,
                "maxSpeakers": self._settings.max_speakers,
            }
        return definition

    async def transcribe(
        self,
        audio: bytes,
        *,
        language: str = "en",
        mime_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> SpeechTranscript:
        self._require_configuration()
        start = time.perf_counter()
        locale = get_locale(language)
        logger.info(f"Starting Azure Speech transcription: {len(audio)} bytes, locale: {locale}")

        form = aiohttp.FormData()
        form.add_field(
            "audio",
            audio,
            filename=filename or "audio",
            content_type=mime_type or "application/octet-stream",
        )
        form.add_field(
            "definition",
            json.dumps(self.build_definition(language)),
            content_type="application/json",
        )
        headers = {"Ocp-Apim-Subscription-Key": self._settings.subscription_key}

        try:
            timeout = aiohttp.ClientTimeout(total=self._settings.request_timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.transcribe_url, data=form, headers=headers) as response:
                    if response.status != 200:
                        body = await response.text()
                        logger.error(f"Azure Speech transcription failed: {response.status} {body[:500]}")
                        raise TranscriptionError(
                            describe_http_error(response.status, body),
                            {"status": response.status},
                        )
                    payload = await response.json()
        except TranscriptionError:
            raise
        except aiohttp.ClientError as e:
            logger.error(f"Azure Speech request error: {e}", exc_info=True)
            raise TranscriptionError(f"Transcription failed: {e}")
        except asyncio.TimeoutError:
            raise TranscriptionError(
                f"Transcription failed: timeout after {self._settings.request_timeout}s"
            )

        processing_time = round((time.perf_counter() - start) * 1000, 2)
        result = self.parse_response(payload, language, processing_time)
        logger.info(
            f"Transcription completed in {processing_time}ms: "
            f"{len(result.text)} chars, {len(result.segments)} segments"
        )
        return result

    def parse_response(
        self, payload: Dict[str, Any], language: str, processing_time: Optional[float] = None
    ) -> SpeechTranscript:
        """Convert a fast-transcription response body into a SpeechTranscript."""
        phrases = payload.get("phrases") or []
        combined = payload.get("combinedPhrases") or []
        text = " ".join(
            (c.get("text") or "").strip() for c in combined if (c.get("text") or "").strip()
        )
        if not text:
            text = " ".join((p.get("text") or "").strip() for p in phrases).strip()
        if not text:
            raise TranscriptionError("No transcription results returned")

        segments = extract_speaker_segments(phrases, text)
        speaker_count = max((s.speaker for s in segments), default=0) + 1
        detected = next((p.get("locale") for p in phrases if p.get("locale")), None)
        duration_ms = payload.get("durationMilliseconds")

        return SpeechTranscript(
            text=text,
            confidence=average_confidence(phrases),
            language=detected or get_locale(language),
            segments=segments,
            speaker_count=speaker_count,
            model=MODEL_NAME,
            processing_time=processing_time,
            duration=duration_ms / 1000.0 if duration_ms else None,
        )
