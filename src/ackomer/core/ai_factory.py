"""
AI client factory.

Centralizes creation of the Azure OpenAI client used by the backend.
"""

from __future__ import annotations

from typing import Optional

from .ai_client import AzureAIClient
from .config import get_settings

_client: Optional[AzureAIClient] = None


def is_ai_configured() -> bool:
    """True when endpoint, key and deployment are all set."""
    return get_settings().azure_openai.is_configured


def get_ai_client() -> AzureAIClient:
    """
    Get the shared AI client, creating it on first use.

    Raises:
        ConfigurationError: If Azure OpenAI is not configured.
    """
    global _client
    if _client is None:
        _client = AzureAIClient()
    return _client


__all__ = ["get_ai_client", "is_ai_configured", "AzureAIClient"]
