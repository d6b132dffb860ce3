"""
Azure OpenAI implementation of SummaryService.
"""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

from ackomer.application.ports.services.summary_service import SummaryService
from ackomer.core.ai_client import AzureAIClient
from ackomer.core.ai_factory import get_ai_client
from ackomer.core.config import SummarySettings, get_settings
from ackomer.core.exceptions import ConfigurationError, GenerationError
from ackomer.core.utils.json_utils import extract_json_array, extract_json_object
from ackomer.domain.entities.summary import (
    KEY_POINT_CATEGORIES,
    ExtractedData,
    GeneratedSummary,
    GenerationMetadata,
    KeyPoint,
    SummaryContent,
)

from .prompts import (
    KEY_POINTS_PROMPT,
    MEDICAL_DATA_PROMPT,
    SCRIBE_SYSTEM_PROMPT,
    STRUCTURED_SUMMARY_PROMPT,
)

logger = logging.getLogger("ackomer")

FALLBACK_KEY_POINTS = [
    KeyPoint(category="symptom", point="Unable to extract key points automatically", confidence=0)
]


def _clamp_confidence(value: Any, default: float = 80.0) -> float:
    try:
        return max(0.0, min(100.0, float(value)))
    except (TypeError, ValueError):
        return default


def parse_key_points(items: Optional[List[Any]]) -> List[KeyPoint]:
    """Normalize model output into KeyPoints; unknown categories become 'other'."""
    points: List[KeyPoint] = []
    for item in items or []:
        if not isinstance(item, dict) or not str(item.get("point") or "").strip():
            continue
        category = str(item.get("category") or "other").lower()
        if category not in KEY_POINT_CATEGORIES:
            category = "other"
        points.append(
            KeyPoint(
                category=category,
                point=str(item["point"]).strip(),
                confidence=_clamp_confidence(item.get("confidence")),
            )
        )
    return points


def parse_medical_data(data: Optional[Dict[str, Any]]) -> ExtractedData:
    data = data or {}

    def _list(key: str) -> List[Dict[str, Any]]:
        value = data.get(key) or []
        return [v for v in value if isinstance(v, dict)] if isinstance(value, list) else []

    vitals = data.get("vitalSigns") or data.get("vital_signs") or {}
    return ExtractedData(
        symptoms=_list("symptoms"),
        diagnoses=_list("diagnoses"),
        medications=_list("medications"),
        procedures=_list("procedures"),
        vital_signs=vitals if isinstance(vitals, dict) else {},
    )


class OpenAISummaryService(SummaryService):
    """Generates clinical summaries with three prompts: note, key points, entities."""

    def __init__(
        self,
        ai_client: Optional[AzureAIClient] = None,
        settings: Optional[SummarySettings] = None,
    ) -> None:
        self._client = ai_client
        self._settings = settings or get_settings().summary

    def _get_client(self) -> AzureAIClient:
        if self._client is None:
            self._client = get_ai_client()
        return self._client

    async def generate_summary(self, transcript: str) -> GeneratedSummary:
        start = time.perf_counter()
        if not transcript.strip():
            raise GenerationError("No completed transcriptions found")

        content_task = self._generate_structured_note(transcript)
        key_points_task = self._extract_key_points(transcript)
        medical_data_task = self._extract_medical_data(transcript)
        (content, token_usage), key_points, extracted = await asyncio.gather(
            content_task, key_points_task, medical_data_task
        )

        processing_time = round((time.perf_counter() - start) * 1000, 2)
        logger.info(f"Summary generated in {processing_time}ms ({content.word_count()} words)")
        return GeneratedSummary(
            content=content,
            key_points=key_points,
            extracted_data=extracted,
            metadata=GenerationMetadata(
                model=self._get_client().deployment_name,
                prompt_version=self._settings.prompt_version,
                processing_time=processing_time,
                token_usage=token_usage,
                confidence=85.0,
            ),
        )

    async def _generate_structured_note(self, transcript: str):
        prompt = STRUCTURED_SUMMARY_PROMPT.format(
            transcript=transcript[: self._settings.structured_char_limit]
        )
        try:
            text, token_usage = await self._get_client().complete_text(
                prompt,
                system_prompt=SCRIBE_SYSTEM_PROMPT,
                temperature=self._settings.temperature,
                max_tokens=self._settings.max_tokens,
            )
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Structured summary generation failed: {e}", exc_info=True)
            raise GenerationError(f"Summary generation failed: {e}")

        parsed = extract_json_object(text)
        if parsed is None:
            logger.error(f"Structured summary reply was not JSON: {text[:200]}")
            raise GenerationError("Summary generation failed: model reply was not valid JSON")
        return SummaryContent.from_dict(parsed), token_usage

    async def _extract_key_points(self, transcript: str) -> List[KeyPoint]:
        prompt = KEY_POINTS_PROMPT.format(
            transcript=transcript[: self._settings.extraction_char_limit]
        )
        try:
            text, _ = await self._get_client().complete_text(
                prompt, system_prompt=SCRIBE_SYSTEM_PROMPT, temperature=self._settings.temperature
            )
        except Exception as e:
            logger.warning(f"Key points extraction failed: {e}")
            return list(FALLBACK_KEY_POINTS)
        points = parse_key_points(extract_json_array(text))
        return points or list(FALLBACK_KEY_POINTS)

    async def _extract_medical_data(self, transcript: str) -> ExtractedData:
        prompt = MEDICAL_DATA_PROMPT.format(
            transcript=transcript[: self._settings.extraction_char_limit]
        )
        try:
            text, _ = await self._get_client().complete_text(
                prompt, system_prompt=SCRIBE_SYSTEM_PROMPT, temperature=self._settings.temperature
            )
        except Exception as e:
            logger.warning(f"Medical data extraction failed: {e}")
            return ExtractedData()
        return parse_medical_data(extract_json_object(text))
