"""Uniform call interface to the OpenAI, Gemini and Claude APIs.

The gateway builds the provider-native request body, sends it through the
provider's transport and extracts the text of the single top completion.
Provider responses are wrapped in one ``ProviderResponse`` variant per
provider; the gateway only ever asks a variant two questions:
``extract_text()`` and ``is_truncated()``.

Retry policy: when a response reports truncation at the output-token limit
and the model used is not the provider's fallback model, the same call is
issued once more against the fallback model. Nothing else is retried.
"""

import logging
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, ClassVar, Optional, Protocol

from tenant_research.domain.enums import AIProvider
from tenant_research.domain.errors import EmptyResponseError, UpstreamError

logger = logging.getLogger(__name__)

ANALYST_SYSTEM_PROMPT = (
    "You are an expert industrial real estate analyst with deep knowledge of "
    "tenant requirements, market trends, and property valuation."
)

DEFAULT_TEMPERATURE = 0.3


# ---------------------------------------------------------------------------
# Provider response variants
# ---------------------------------------------------------------------------


@dataclass
class ProviderResponse:
    """Provider-native response envelope."""

    provider: ClassVar[AIProvider]
    raw: dict

    def extract_text(self) -> Optional[str]:
        raise NotImplementedError

    def is_truncated(self) -> bool:
        raise NotImplementedError


@dataclass
class OpenAIResponse(ProviderResponse):
    provider: ClassVar[AIProvider] = AIProvider.OPENAI

    def _first_choice(self) -> dict:
        choices = self.raw.get("choices") or []
        return choices[0] if choices else {}

    def extract_text(self) -> Optional[str]:
        message = self._first_choice().get("message") or {}
        return message.get("content") or None

    def is_truncated(self) -> bool:
        return self._first_choice().get("finish_reason") == "length"


@dataclass
class GeminiResponse(ProviderResponse):
    provider: ClassVar[AIProvider] = AIProvider.GEMINI

    def _first_candidate(self) -> dict:
        candidates = self.raw.get("candidates") or []
        return candidates[0] if candidates else {}

    def extract_text(self) -> Optional[str]:
        content = self._first_candidate().get("content") or {}
        for part in content.get("parts") or []:
            # Thinking models emit thought parts ahead of the answer
            if part.get("thought"):
                continue
            if part.get("text"):
                return part["text"]
        return None

    def is_truncated(self) -> bool:
        return self._first_candidate().get("finish_reason") == "MAX_TOKENS"


@dataclass
class ClaudeResponse(ProviderResponse):
    provider: ClassVar[AIProvider] = AIProvider.CLAUDE

    def extract_text(self) -> Optional[str]:
        for block in self.raw.get("content") or []:
            if block.get("type") == "text" and block.get("text"):
                return block["text"]
        return None

    def is_truncated(self) -> bool:
        return self.raw.get("stop_reason") == "max_tokens"


RESPONSE_TYPES: dict[AIProvider, type[ProviderResponse]] = {
    AIProvider.OPENAI: OpenAIResponse,
    AIProvider.GEMINI: GeminiResponse,
    AIProvider.CLAUDE: ClaudeResponse,
}


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------


class Transport(Protocol):
    async def send(self, body: dict) -> dict: ...


@dataclass(frozen=True)
class ModelChoice:
    """Default and fallback model identifiers for one provider."""

    default: str
    fallback: str


class AIGateway:
    """Single entry point for every generative-AI call made by the service."""

    def __init__(
        self,
        transports: dict[AIProvider, Transport],
        models: dict[AIProvider, ModelChoice],
    ):
        self._transports = transports
        self._models = models

    @classmethod
    def from_settings(cls, settings) -> "AIGateway":
        """Build a gateway wired to the real provider SDKs."""
        from tenant_research.infra.ai_transports import (
            ClaudeTransport,
            GeminiTransport,
            OpenAITransport,
        )

        timeout = settings.ai_timeout_seconds
        return cls(
            transports={
                AIProvider.OPENAI: OpenAITransport(settings.openai_api_key, timeout),
                AIProvider.GEMINI: GeminiTransport(settings.gemini_api_key, timeout),
                AIProvider.CLAUDE: ClaudeTransport(settings.anthropic_api_key, timeout),
            },
            models={
                AIProvider.OPENAI: ModelChoice(settings.openai_model, settings.openai_fallback_model),
                AIProvider.GEMINI: ModelChoice(settings.gemini_model, settings.gemini_fallback_model),
                AIProvider.CLAUDE: ModelChoice(settings.claude_model, settings.claude_fallback_model),
            },
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def call_openai(
        self,
        prompt: str,
        *,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = 1500,
    ) -> str:
        """Send *prompt* to the Chat Completions API and return the reply text."""

        def build(model_name: str) -> dict:
            return {
                "model": model_name,
                "messages": [
                    {"role": "system", "content": ANALYST_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                "max_tokens": max_tokens,
                "temperature": temperature,
            }

        return await self._complete(AIProvider.OPENAI, model, build, len(prompt))

    async def call_gemini(
        self,
        prompt: str,
        *,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_output_tokens: int = 1000,
    ) -> str:
        """Send *prompt* to Gemini generateContent and return the reply text."""

        def build(model_name: str) -> dict:
            return {
                "model": model_name,
                "contents": [{"role": "user", "parts": [{"text": prompt}]}],
                "config": {
                    "temperature": temperature,
                    "max_output_tokens": max_output_tokens,
                },
            }

        return await self._complete(AIProvider.GEMINI, model, build, len(prompt))

    async def call_claude(
        self,
        prompt: str,
        *,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = 4000,
        system: Optional[str] = None,
        tools: Optional[list[dict]] = None,
    ) -> str:
        """Send *prompt* to the Claude Messages API and return the first text block."""

        def build(model_name: str) -> dict:
            body: dict[str, Any] = {
                "model": model_name,
                "system": system or ANALYST_SYSTEM_PROMPT,
                "messages": [{"role": "user", "content": prompt}],
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
            if tools:
                body["tools"] = tools
            return body

        return await self._complete(AIProvider.CLAUDE, model, build, len(prompt))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _complete(
        self,
        provider: AIProvider,
        model: Optional[str],
        build_body: Callable[[str], dict],
        prompt_length: int,
    ) -> str:
        choice = self._models[provider]
        model_name = model or choice.default

        response = await self._send(provider, model_name, build_body(model_name), prompt_length)

        if response.is_truncated() and model_name != choice.fallback:
            logger.warning(
                "[%s] MAX_TOKENS reached on %s, retrying with %s",
                provider.value,
                model_name,
                choice.fallback,
            )
            model_name = choice.fallback
            response = await self._send(provider, model_name, build_body(model_name), prompt_length)

        if response.is_truncated():
            raise EmptyResponseError(provider.value, model_name, "truncated at output token limit")

        text = response.extract_text()
        if not text:
            raise EmptyResponseError(provider.value, model_name)

        logger.info(
            "[%s] Call succeeded: model=%s, response_length=%d",
            provider.value,
            model_name,
            len(text),
        )
        return text

    async def _send(
        self,
        provider: AIProvider,
        model_name: str,
        body: dict,
        prompt_length: int,
    ) -> ProviderResponse:
        logger.info(
            "[%s] Calling model=%s, prompt_length=%d",
            provider.value,
            model_name,
            prompt_length,
        )
        start_time = time.time()
        try:
            raw = await self._transports[provider].send(body)
        except UpstreamError as exc:
            latency_ms = int((time.time() - start_time) * 1000)
            logger.error(
                "[%s] Call failed after %dms: model=%s, error=%s",
                provider.value,
                latency_ms,
                model_name,
                exc.message,
            )
            raise

        latency_ms = int((time.time() - start_time) * 1000)
        logger.debug("[%s] Response received in %dms", provider.value, latency_ms)
        return RESPONSE_TYPES[provider](raw=raw or {})


@lru_cache
def get_ai_gateway() -> AIGateway:
    """Return the process-wide gateway configured from settings."""
    from tenant_research.app.config import get_settings

    return AIGateway.from_settings(get_settings())
