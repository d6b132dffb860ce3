"""Reflexive question generation use cases."""

import asyncio
import logging
import time
from datetime import datetime
from typing import Any, Dict

from ...core.exceptions import ConfigurationError
from ...domain.enums.status import QuestionType
from ...domain.errors import SessionNotFoundError
from ..ports.repositories.session_repo import SessionRepository
from ..ports.repositories.transcription_repo import TranscriptionRepository
from ..ports.services.question_service import QuestionService
from ..utils.transcript import load_session_transcript

logger = logging.getLogger("ackomer")

QUESTION_CATEGORIES = [
    {
        "type": QuestionType.CLINICAL.value,
        "name": "Clinical Assessment",
        "description": "Questions to explore missing symptoms, history, risk factors and examination findings",
        "fields": ["question", "category", "priority", "rationale"],
    },
    {
        "type": QuestionType.FOLLOWUP.value,
        "name": "Follow-up Care",
        "description": "Questions for monitoring treatment response, adherence and warning signs",
        "fields": ["question", "category", "timeframe", "importance"],
    },
    {
        "type": QuestionType.DIFFERENTIAL.value,
        "name": "Differential Diagnosis",
        "description": "Questions that distinguish between possible diagnoses or rule out serious conditions",
        "fields": ["question", "purpose", "urgency", "diagnostic_value"],
    },
    {
        "type": QuestionType.EDUCATION.value,
        "name": "Patient Education",
        "description": "Questions that check the patient's understanding and support adherence",
        "fields": ["question", "educational_goal", "patient_benefit"],
    },
]


class _QuestionUseCaseBase:
    def __init__(
        self,
        session_repository: SessionRepository,
        transcription_repository: TranscriptionRepository,
        question_service: QuestionService,
    ):
        self._session_repository = session_repository
        self._transcription_repository = transcription_repository
        self._question_service = question_service

    async def _transcript(self, session_id: str) -> str:
        if not await self._session_repository.exists_by_id(session_id):
            raise SessionNotFoundError(session_id)
        transcript = await load_session_transcript(self._transcription_repository, session_id)
        if not self._question_service.is_configured():
            raise ConfigurationError("Question generation service is not configured")
        return transcript


class GenerateQuestionsUseCase(_QuestionUseCaseBase):
    """Clinical, follow-up and differential questions generated concurrently."""

    async def execute(self, session_id: str) -> Dict[str, Any]:
        transcript = await self._transcript(session_id)
        start = time.perf_counter()
        clinical, follow_up, differential = await asyncio.gather(
            self._question_service.generate_questions(transcript, QuestionType.CLINICAL),
            self._question_service.generate_questions(transcript, QuestionType.FOLLOWUP),
            self._question_service.generate_questions(transcript, QuestionType.DIFFERENTIAL),
        )
        processing_time = round((time.perf_counter() - start) * 1000, 2)
        logger.info(f"Question generation completed in {processing_time}ms for session: {session_id}")
        return {
            "clinical": clinical,
            "followUp": follow_up,
            "differential": differential,
            "metadata": {
                "model": self._question_service.model_name,
                "processingTime": processing_time,
                "generatedAt": datetime.utcnow().isoformat(),
            },
        }


class GenerateQuestionsByTypeUseCase(_QuestionUseCaseBase):
    async def execute(self, session_id: str, question_type: str) -> Dict[str, Any]:
        try:
            qtype = QuestionType(question_type.lower())
        except ValueError:
            valid = ", ".join(t.value for t in QuestionType)
            raise ValueError(f"Invalid question type. Must be one of: {valid}")
        transcript = await self._transcript(session_id)
        questions = await self._question_service.generate_questions(transcript, qtype)
        return {"type": qtype.value, "questions": questions, "count": len(questions)}
