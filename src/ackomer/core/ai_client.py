"""
Azure OpenAI client wrapper shared by the summary and question services.

Connects directly to Azure OpenAI via AsyncAzureOpenAI using deployment
names from configuration. Retries and prompt handling live in the callers.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from openai import AsyncAzureOpenAI

from .config import get_settings
from .exceptions import ConfigurationError


class AzureAIClient:
    """
    Thin wrapper around AsyncAzureOpenAI for chat completions.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        api_key: Optional[str] = None,
        api_version: Optional[str] = None,
        deployment_name: Optional[str] = None,
    ) -> None:
        """
        Initialize AzureAIClient.

        If arguments are omitted, values are loaded from application settings.

        Raises:
            ConfigurationError: If endpoint, key or deployment are missing.
        """
        settings = get_settings()

        endpoint = endpoint or settings.azure_openai.endpoint
        api_key = api_key or settings.azure_openai.api_key
        api_version = api_version or settings.azure_openai.api_version
        deployment_name = deployment_name or settings.azure_openai.deployment_name

        if not endpoint or not api_key:
            raise ConfigurationError(
                "Azure OpenAI endpoint and API key must be configured. "
                "Set AZURE_OPENAI_ENDPOINT and AZURE_OPENAI_API_KEY."
            )

        if not deployment_name:
            raise ConfigurationError(
                "Azure OpenAI deployment name is required. "
                "Set AZURE_OPENAI_DEPLOYMENT_NAME."
            )

        self._deployment_name = deployment_name
        self._client = AsyncAzureOpenAI(
            api_key=api_key,
            api_version=api_version,
            # Azure SDK does not expect a trailing slash
            azure_endpoint=endpoint.rstrip("/"),
        )

    @property
    def deployment_name(self) -> str:
        return self._deployment_name

    async def chat(
        self,
        messages: Sequence[Dict[str, str]],
        *,
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs: Any,
    ):
        """
        Generic chat completion helper.

        Args:
            messages: OpenAI chat messages list.
            model: Optional deployment name override. Defaults to configured deployment.
            temperature: Sampling temperature.
            max_tokens: Optional max tokens for the response.
            **kwargs: Passed directly to Azure OpenAI SDK.
        """
        deployment = model or self._deployment_name
        return await self._client.chat.completions.create(
            model=deployment,
            messages=list(messages),
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )

    async def complete_text(
        self,
        prompt: str,
        *,
        system_prompt: Optional[str] = None,
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
    ) -> tuple[str, Dict[str, int]]:
        """Single-prompt completion returning the reply text and token usage."""
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        response = await self.chat(messages, temperature=temperature, max_tokens=max_tokens)
        text = (response.choices[0].message.content or "").strip()
        usage = getattr(response, "usage", None)
        token_usage: Dict[str, int] = {}
        if usage:
            token_usage = {
                "prompt": usage.prompt_tokens or 0,
                "completion": usage.completion_tokens or 0,
                "total": usage.total_tokens or 0,
            }
        return text, token_usage


__all__ = ["AzureAIClient"]
