"""Tests for tenant_research.infra.ai_gateway.

Transports are replaced by FakeTransport doubles; no provider SDK is called.
"""

import pytest

from conftest import FakeTransport, claude_raw, gemini_raw, openai_raw
from tenant_research.domain.errors import EmptyResponseError, UpstreamError
from tenant_research.infra.ai_gateway import (
    ANALYST_SYSTEM_PROMPT,
    ClaudeResponse,
    GeminiResponse,
    OpenAIResponse,
)


# ---------------------------------------------------------------------------
# Response variants
# ---------------------------------------------------------------------------


class TestProviderResponses:
    def test_openai_extracts_first_choice(self):
        response = OpenAIResponse(raw=openai_raw("hello"))
        assert response.extract_text() == "hello"
        assert response.is_truncated() is False

    def test_openai_length_is_truncation(self):
        assert OpenAIResponse(raw=openai_raw("partial", "length")).is_truncated() is True

    def test_openai_empty_envelope(self):
        response = OpenAIResponse(raw={})
        assert response.extract_text() is None
        assert response.is_truncated() is False

    def test_gemini_skips_thought_parts(self):
        raw = {
            "candidates": [
                {
                    "content": {
                        "parts": [
                            {"text": "thinking...", "thought": True},
                            {"text": "answer"},
                        ]
                    },
                    "finish_reason": "STOP",
                }
            ]
        }
        assert GeminiResponse(raw=raw).extract_text() == "answer"

    def test_gemini_max_tokens_is_truncation(self):
        assert GeminiResponse(raw=gemini_raw("cut", "MAX_TOKENS")).is_truncated() is True

    def test_claude_first_text_block(self):
        raw = {
            "content": [
                {"type": "tool_use", "id": "t1", "name": "search", "input": {}},
                {"type": "text", "text": "result"},
            ],
            "stop_reason": "end_turn",
        }
        response = ClaudeResponse(raw=raw)
        assert response.extract_text() == "result"
        assert response.is_truncated() is False

    def test_claude_max_tokens_is_truncation(self):
        assert ClaudeResponse(raw=claude_raw("cut", "max_tokens")).is_truncated() is True


# ---------------------------------------------------------------------------
# Request shapes
# ---------------------------------------------------------------------------


class TestRequestShapes:
    async def test_openai_message_list(self, make_gateway):
        transport = FakeTransport(openai_raw("ok"))
        gateway = make_gateway(openai=transport)

        text = await gateway.call_openai("Find tenants", max_tokens=3000)

        assert text == "ok"
        body = transport.bodies[0]
        assert body["model"] == "gpt-4o"
        assert body["messages"] == [
            {"role": "system", "content": ANALYST_SYSTEM_PROMPT},
            {"role": "user", "content": "Find tenants"},
        ]
        assert body["max_tokens"] == 3000
        assert body["temperature"] == 0.3

    async def test_gemini_contents_parts(self, make_gateway):
        transport = FakeTransport(gemini_raw("ok"))
        gateway = make_gateway(gemini=transport)

        await gateway.call_gemini("Describe building", max_output_tokens=4500, temperature=0.2)

        body = transport.bodies[0]
        assert body["contents"] == [{"role": "user", "parts": [{"text": "Describe building"}]}]
        assert body["config"] == {"temperature": 0.2, "max_output_tokens": 4500}

    async def test_claude_system_and_tools(self, make_gateway):
        transport = FakeTransport(claude_raw("ok"))
        gateway = make_gateway(claude=transport)
        tools = [{"name": "web_search", "description": "search", "input_schema": {"type": "object"}}]

        await gateway.call_claude("Recommend", system="Be brief", tools=tools)

        body = transport.bodies[0]
        assert body["system"] == "Be brief"
        assert body["messages"] == [{"role": "user", "content": "Recommend"}]
        assert body["tools"] == tools
        assert body["max_tokens"] == 4000

    async def test_claude_without_tools_omits_key(self, make_gateway):
        transport = FakeTransport(claude_raw("ok"))
        gateway = make_gateway(claude=transport)

        await gateway.call_claude("Recommend")

        assert "tools" not in transport.bodies[0]
        assert transport.bodies[0]["system"] == ANALYST_SYSTEM_PROMPT

    async def test_explicit_model_override(self, make_gateway):
        transport = FakeTransport(openai_raw("ok"))
        gateway = make_gateway(openai=transport)

        await gateway.call_openai("x", model="o3-mini")

        assert transport.models == ["o3-mini"]


# ---------------------------------------------------------------------------
# Truncation retry
# ---------------------------------------------------------------------------


class TestTruncationRetry:
    async def test_gemini_truncation_retries_once_on_fallback(self, make_gateway):
        transport = FakeTransport(
            gemini_raw("partial", "MAX_TOKENS"),
            gemini_raw("complete answer"),
        )
        gateway = make_gateway(gemini=transport)

        text = await gateway.call_gemini("Describe building")

        assert text == "complete answer"
        assert transport.models == ["gemini-2.5-flash", "gemini-2.0-flash"]
        # Same prompt and options on the retry
        assert transport.bodies[0]["contents"] == transport.bodies[1]["contents"]
        assert transport.bodies[0]["config"] == transport.bodies[1]["config"]

    async def test_gemini_second_truncation_is_empty_response(self, make_gateway):
        transport = FakeTransport(
            gemini_raw("partial", "MAX_TOKENS"),
            gemini_raw("still partial", "MAX_TOKENS"),
        )
        gateway = make_gateway(gemini=transport)

        with pytest.raises(EmptyResponseError) as exc_info:
            await gateway.call_gemini("Describe building")

        assert exc_info.value.model == "gemini-2.0-flash"
        assert len(transport.bodies) == 2

    async def test_no_retry_when_already_on_fallback(self, make_gateway):
        transport = FakeTransport(gemini_raw("partial", "MAX_TOKENS"))
        gateway = make_gateway(gemini=transport)

        with pytest.raises(EmptyResponseError):
            await gateway.call_gemini("Describe building", model="gemini-2.0-flash")

        assert transport.models == ["gemini-2.0-flash"]

    async def test_openai_length_retries_on_fallback(self, make_gateway):
        transport = FakeTransport(openai_raw("cut", "length"), openai_raw("full"))
        gateway = make_gateway(openai=transport)

        assert await gateway.call_openai("x") == "full"
        assert transport.models == ["gpt-4o", "gpt-4o-mini"]

    async def test_claude_max_tokens_retries_on_fallback(self, make_gateway):
        transport = FakeTransport(claude_raw("cut", "max_tokens"), claude_raw("full"))
        gateway = make_gateway(claude=transport)

        assert await gateway.call_claude("x") == "full"
        assert transport.models == ["claude-sonnet-4-20250514", "claude-3-5-haiku-latest"]


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    async def test_empty_content_raises(self, make_gateway):
        gateway = make_gateway(openai=FakeTransport(openai_raw(None)))

        with pytest.raises(EmptyResponseError):
            await gateway.call_openai("x")

    async def test_empty_gemini_parts_raises(self, make_gateway):
        gateway = make_gateway(gemini=FakeTransport(gemini_raw(None)))

        with pytest.raises(EmptyResponseError):
            await gateway.call_gemini("x")

    async def test_upstream_error_propagates_without_retry(self, make_gateway):
        error = UpstreamError("openai", "429 rate limited", payload={"error": {"code": "rate_limit"}})
        transport = FakeTransport(error, openai_raw("never used"))
        gateway = make_gateway(openai=transport)

        with pytest.raises(UpstreamError) as exc_info:
            await gateway.call_openai("x")

        assert exc_info.value.payload == {"error": {"code": "rate_limit"}}
        assert len(transport.bodies) == 1
