"""
Clinical summary generation service interface.
"""

from abc import ABC, abstractmethod

from ackomer.domain.entities.summary import GeneratedSummary


class SummaryService(ABC):
    """Abstract service that turns a consultation transcript into a clinical note."""

    @abstractmethod
    async def generate_summary(self, transcript: str) -> GeneratedSummary:
        """
        Generate a structured clinical summary.

        Args:
            transcript: Consultation transcript text

        Returns:
            GeneratedSummary with content sections, key points and extracted data

        Raises:
            GenerationError: If the structured note cannot be produced
        """
        pass
