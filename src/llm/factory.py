"""LLM provider factory.

One provider per process, selected by settings.llm_provider. Each call is a
single attempt: there is no retry and no fallback provider.
"""

import logging
from typing import Optional

from src.config.settings import settings

from .base import BaseLLMProvider, LLMResponse
from .gemini_provider import GeminiProvider
from .openai_provider import OpenAIProvider

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("gemini", "openai")


def create_provider(provider_name: str) -> BaseLLMProvider:
    """Instantiate a provider by name using its settings."""
    if provider_name == "gemini":
        return GeminiProvider(
            model=settings.gemini_model,
            temperature=settings.gemini_temperature,
            max_tokens=settings.gemini_max_tokens,
        )
    if provider_name == "openai":
        return OpenAIProvider(
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
        )
    raise ValueError(
        f"Unknown LLM provider: {provider_name} (expected one of {', '.join(SUPPORTED_PROVIDERS)})"
    )


class LLMClient:
    """Lazily-created provider behind a stable client interface."""

    def __init__(self, provider_name: Optional[str] = None):
        self._provider_name = provider_name or settings.llm_provider
        self._provider: Optional[BaseLLMProvider] = None
        logger.info("LLM client created with provider=%s", self._provider_name)

    @property
    def provider(self) -> BaseLLMProvider:
        """Lazy-initialize the provider (raises ValueError when misconfigured)."""
        if self._provider is None:
            self._provider = create_provider(self._provider_name)
        return self._provider

    async def complete(self, system_prompt: str, user_prompt: str, **kwargs) -> LLMResponse:
        response = await self.provider.complete(system_prompt, user_prompt, **kwargs)
        logger.info(
            "LLM request succeeded: provider=%s, model=%s, tokens=%s",
            response.provider,
            response.model,
            response.usage.get("total_tokens", 0),
        )
        return response

    async def health_check(self) -> dict:
        try:
            provider = self.provider
        except ValueError as e:
            logger.warning("LLM provider not configured: %s", e)
            return {
                "status": "unhealthy",
                "provider": self.provider_name,
                "model": self.model_name,
                "error": str(e),
            }
        return await provider.health_check()

    @property
    def provider_name(self) -> str:
        return self._provider_name

    @property
    def model_name(self) -> str:
        if self._provider is not None:
            return self._provider.model_name
        if self._provider_name == "openai":
            return settings.openai_model
        return settings.gemini_model


# Singleton instance
llm_client = LLMClient()
