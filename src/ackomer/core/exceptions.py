"""
Exception classes for infrastructure failures.

Business rule violations live in ``ackomer.domain.errors``; these cover
configuration problems and calls to external services (speech, LLM, cache).
"""

from typing import Any, Dict, Optional


class AckoMerException(Exception):
    """Base exception class for the application."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(AckoMerException):
    """Raised when a required external service is not configured."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "CONFIG_ERROR", details)


class ExternalServiceError(AckoMerException):
    """Raised when there's an external service error."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "EXTERNAL_SERVICE_ERROR",
    ) -> None:
        self.service = service
        self.reason = message
        full_message = f"{service} service error: {message}"
        super().__init__(full_message, error_code, details)


class TranscriptionError(ExternalServiceError):
    """Raised when audio transcription fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("Speech", message, details, "TRANSCRIPTION_ERROR")


class GenerationError(ExternalServiceError):
    """Raised when an LLM generation (summary, questions) fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("Azure OpenAI", message, details, "GENERATION_ERROR")
