"""Provider transports for the AI gateway.

Each transport takes a provider-native request body, sends it with the
provider's SDK and returns the provider-native response as a plain dict.
Transport-level failures are raised as ``UpstreamError``. The SDKs' own
retry loops are disabled; the gateway owns the only retry.
"""

import asyncio
from typing import Optional

import anthropic
import httpx
import openai
from google import genai
from google.genai import errors as genai_errors

from tenant_research.domain.enums import AIProvider
from tenant_research.domain.errors import UpstreamError


class OpenAITransport:
    """Chat Completions transport backed by ``openai.AsyncOpenAI``."""

    provider = AIProvider.OPENAI

    def __init__(self, api_key: str, timeout: float = 120.0):
        self._api_key = api_key
        self._timeout = timeout
        self._client: Optional[openai.AsyncOpenAI] = None

    def _get_client(self) -> openai.AsyncOpenAI:
        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    async def send(self, body: dict) -> dict:
        try:
            completion = await self._get_client().chat.completions.create(**body)
        except openai.APIError as exc:
            raise UpstreamError(self.provider.value, str(exc), payload=getattr(exc, "body", None)) from exc
        return completion.model_dump(mode="json")


class GeminiTransport:
    """generateContent transport backed by the ``google-genai`` client."""

    provider = AIProvider.GEMINI

    def __init__(self, api_key: str, timeout: float = 120.0):
        self._api_key = api_key
        self._timeout = timeout
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def send(self, body: dict) -> dict:
        try:
            response = await asyncio.wait_for(
                self._get_client().aio.models.generate_content(
                    model=body["model"],
                    contents=body["contents"],
                    config=body.get("config"),
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as exc:
            raise UpstreamError(
                self.provider.value, f"timed out after {self._timeout:.0f}s"
            ) from exc
        except genai_errors.APIError as exc:
            raise UpstreamError(self.provider.value, str(exc), payload=exc.details) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(self.provider.value, str(exc)) from exc
        return response.model_dump(mode="json")


class ClaudeTransport:
    """Messages API transport backed by ``anthropic.AsyncAnthropic``."""

    provider = AIProvider.CLAUDE

    def __init__(self, api_key: str, timeout: float = 120.0):
        self._api_key = api_key
        self._timeout = timeout
        self._client: Optional[anthropic.AsyncAnthropic] = None

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    async def send(self, body: dict) -> dict:
        try:
            message = await self._get_client().messages.create(**body)
        except anthropic.APIError as exc:
            raise UpstreamError(self.provider.value, str(exc), payload=getattr(exc, "body", None)) from exc
        return message.model_dump(mode="json")
