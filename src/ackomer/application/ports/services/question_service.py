"""
Reflexive question generation service interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ackomer.domain.enums.status import QuestionType


class QuestionService(ABC):
    """Abstract service for generating clinician-facing questions from a transcript."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Identifier of the model used, reported in response metadata."""
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the backing model can be called at all."""
        pass

    @abstractmethod
    async def generate_questions(
        self, transcript: str, question_type: QuestionType
    ) -> List[Dict[str, Any]]:
        """
        Generate questions of one category.

        Never raises for model failures: a single fallback question for the
        category is returned instead.
        """
        pass
