"""OpenAI LLM provider using LangChain."""

import logging
from typing import Any, Dict, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from openai import LengthFinishReasonError

from src.config.settings import settings

from .base import BaseLLMProvider, LLMResponse, extract_text, usage_from_metadata

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseLLMProvider):
    """OpenAI LLM provider using LangChain."""

    def __init__(
        self,
        api_key: str = None,
        model: str = None,
        temperature: float = None,
        max_tokens: int = None,
    ):
        self.api_key = api_key or settings.openai_api_key
        self._model = model or settings.openai_model
        self._temperature = temperature if temperature is not None else settings.openai_temperature
        self._max_tokens = max_tokens if max_tokens is not None else settings.openai_max_tokens

        if not self.api_key:
            raise ValueError("OPENAI_API_KEY not provided (set via environment or .env file)")

        logger.info(f"Initialized OpenAI provider with model: {self._model}")

    @property
    def provider_name(self) -> str:
        return "openai"

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
        """Generate a completion using OpenAI via LangChain."""
        effective_max = max_tokens if max_tokens is not None else self._max_tokens
        try:
            messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]

            client = ChatOpenAI(
                model=self._model,
                openai_api_key=self.api_key,
                temperature=temperature if temperature is not None else self._temperature,
                max_tokens=effective_max,
            )

            logger.debug("Calling OpenAI: model=%s", self._model)
            response = await client.ainvoke(messages)

            usage = usage_from_metadata(response.usage_metadata)
            logger.debug(f"OpenAI response: tokens={usage['total_tokens']}")

            return LLMResponse(
                content=extract_text(response.content),
                model=self._model,
                provider="openai",
                usage=usage,
                raw_response={"response_metadata": response.response_metadata}
                if hasattr(response, "response_metadata")
                else None,
            )

        except LengthFinishReasonError as e:
            logger.error(
                "OpenAI output truncated: model=%s exhausted max_tokens=%d",
                self._model,
                effective_max,
            )
            raise ValueError(
                f"OpenAI model '{self._model}' exhausted max_tokens={effective_max}. "
                f"Increase openai_max_tokens in settings."
            ) from e

        except Exception as e:
            logger.error(f"OpenAI provider error: {e}")
            raise

    async def health_check(self) -> Dict[str, Any]:
        """Check OpenAI service health."""
        try:
            response = await self.complete(
                system_prompt="You are a test assistant.",
                user_prompt="Reply with 'OK'",
                max_tokens=10,
            )
            return {
                "status": "healthy",
                "provider": "openai",
                "model": self._model,
                "test_response": response.content[:20],
            }
        except Exception as e:
            logger.error(f"OpenAI health check failed: {e}")
            return {
                "status": "unhealthy",
                "provider": "openai",
                "model": self._model,
                "error": str(e),
            }
