"""
Azure OpenAI implementation of QuestionService.
"""

import logging
from typing import Any, Dict, List, Optional

from ackomer.application.ports.services.question_service import QuestionService
from ackomer.core.ai_client import AzureAIClient
from ackomer.core.ai_factory import get_ai_client, is_ai_configured
from ackomer.core.config import QuestionSettings, get_settings
from ackomer.core.utils.json_utils import extract_json_array
from ackomer.domain.enums.status import QuestionType

from .prompts import FALLBACK_QUESTIONS, QUESTION_PROMPTS, QUESTIONS_SYSTEM_PROMPT

logger = logging.getLogger("ackomer")


def fallback_questions(question_type: QuestionType) -> List[Dict[str, Any]]:
    return [dict(FALLBACK_QUESTIONS[question_type])]


def normalize_questions(items: List[Any]) -> List[Dict[str, Any]]:
    """Keep objects that carry a question; bare strings become question objects."""
    questions = []
    for item in items:
        if isinstance(item, str) and item.strip():
            questions.append({"question": item.strip()})
        elif isinstance(item, dict) and item.get("question"):
            questions.append(item)
    return questions


class OpenAIQuestionService(QuestionService):
    """Reflexive question generation, one prompt per category."""

    def __init__(
        self,
        ai_client: Optional[AzureAIClient] = None,
        settings: Optional[QuestionSettings] = None,
    ) -> None:
        self._client = ai_client
        self._settings = settings or get_settings().questions

    @property
    def model_name(self) -> str:
        if self._client is not None:
            return self._client.deployment_name
        return get_settings().azure_openai.deployment_name

    def is_configured(self) -> bool:
        return self._client is not None or is_ai_configured()

    def _get_client(self) -> AzureAIClient:
        if self._client is None:
            self._client = get_ai_client()
        return self._client

    async def generate_questions(
        self, transcript: str, question_type: QuestionType
    ) -> List[Dict[str, Any]]:
        prompt = QUESTION_PROMPTS[question_type].format(
            transcript=transcript[: self._settings.transcript_char_limit]
        )
        try:
            text, _ = await self._get_client().complete_text(
                prompt,
                system_prompt=QUESTIONS_SYSTEM_PROMPT,
                temperature=self._settings.temperature,
                max_tokens=self._settings.max_tokens,
            )
        except Exception as e:
            logger.error(f"{question_type.value} question generation failed: {e}")
            return fallback_questions(question_type)

        questions = extract_json_array(text)
        if questions is None:
            logger.warning(f"{question_type.value} question reply was not a JSON array")
            return fallback_questions(question_type)
        normalized = normalize_questions(questions)
        if not normalized:
            logger.warning(f"{question_type.value} question reply held no questions")
            return fallback_questions(question_type)
        return normalized
