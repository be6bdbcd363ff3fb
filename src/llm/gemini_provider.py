"""Gemini LLM provider using LangChain."""

import logging
from typing import Any, Dict, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from src.config.settings import settings

from .base import BaseLLMProvider, LLMResponse, extract_text, usage_from_metadata

logger = logging.getLogger(__name__)


class GeminiProvider(BaseLLMProvider):
    """Gemini LLM provider using LangChain."""

    def __init__(
        self,
        api_key: str = None,
        model: str = None,
        temperature: float = None,
        max_tokens: int = None,
    ):
        self.api_key = api_key or settings.gemini_api_key
        self._model = model or settings.gemini_model
        self._temperature = temperature if temperature is not None else settings.gemini_temperature
        self._max_tokens = max_tokens if max_tokens is not None else settings.gemini_max_tokens

        if not self.api_key:
            raise ValueError("GEMINI_API_KEY not provided (set via environment or .env file)")

        logger.info(f"Initialized Gemini provider with model: {self._model}")

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def model_name(self) -> str:
        return self._model

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """
        Generate a completion using Gemini via LangChain.

        LangChain maps the system message onto Gemini's system instruction
        and normalizes usage metadata.
        """
        try:
            messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]

            client = ChatGoogleGenerativeAI(
                model=self._model,
                google_api_key=self.api_key,
                temperature=temperature if temperature is not None else self._temperature,
                max_output_tokens=max_tokens if max_tokens is not None else self._max_tokens,
            )

            logger.debug("Calling Gemini: model=%s", self._model)
            response = await client.ainvoke(messages)

            usage = usage_from_metadata(response.usage_metadata)
            logger.debug(f"Gemini response: tokens={usage['total_tokens']}")

            return LLMResponse(
                content=extract_text(response.content),
                model=self._model,
                provider="gemini",
                usage=usage,
                raw_response={"response_metadata": response.response_metadata}
                if hasattr(response, "response_metadata")
                else None,
            )

        except Exception as e:
            logger.error(f"Gemini provider error: {e}")
            raise

    async def health_check(self) -> Dict[str, Any]:
        """Check Gemini service health."""
        try:
            response = await self.complete(
                system_prompt="You are a test assistant.",
                user_prompt="Reply with 'OK'",
                max_tokens=10,
            )
            return {
                "status": "healthy",
                "provider": "gemini",
                "model": self._model,
                "test_response": response.content[:20],
            }
        except Exception as e:
            logger.error(f"Gemini health check failed: {e}")
            return {
                "status": "unhealthy",
                "provider": "gemini",
                "model": self._model,
                "error": str(e),
            }
