"""Base agent class for the tenant research AI stages.

Every analysis agent (building configuration, market trends, tenant
discovery, tenant scoring, building rate) inherits from BaseAgent, which
provides:

- Provider access via the infra.ai_gateway wrapper
- A standard AgentResult return type (Result pattern)
- Automatic latency measurement and logging
- JSON extraction from free-text model output
"""

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Optional

from tenant_research.domain.enums import AIProvider
from tenant_research.domain.errors import ResponseParseError, TenantResearchError
from tenant_research.infra.ai_gateway import AIGateway

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

@dataclass
class AgentResult:
    """Standard result type for all agent operations.

    Follows the Result pattern: every agent call returns an AgentResult
    instead of raising exceptions. Callers check ``result.ok`` to
    determine success or failure.

    Attributes:
        ok: True if the operation succeeded.
        data: The response payload (text, parsed JSON, etc.).
        error: Human-readable error description when ``ok`` is False.
        latency_ms: Wall-clock time for the operation in milliseconds.
    """

    ok: bool
    data: Any = None
    error: Optional[str] = None
    latency_ms: int = 0

    @classmethod
    def success(cls, data: Any, latency_ms: int = 0) -> "AgentResult":
        """Create a successful result."""
        return cls(ok=True, data=data, latency_ms=latency_ms)

    @classmethod
    def failure(cls, error: str, latency_ms: int = 0) -> "AgentResult":
        """Create a failure result."""
        return cls(ok=False, error=error, latency_ms=latency_ms)


# ---------------------------------------------------------------------------
# JSON extraction
# ---------------------------------------------------------------------------

_TAGGED_JSON = re.compile(r"<json>\s*([\s\S]*?)\s*</json>")
_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
_BARE_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json_object(text: Optional[str]) -> dict:
    """Locate and parse the JSON object embedded in a model response.

    Looks for a ``<json>...</json>`` block, then a fenced code block, then
    the outermost ``{...}`` span.

    Raises:
        ResponseParseError: no JSON object could be found or decoded.
    """
    if not text:
        raise ResponseParseError("Empty response text", raw_text="")

    candidates = []
    for pattern in (_TAGGED_JSON, _FENCED_JSON):
        match = pattern.search(text)
        if match:
            candidates.append(match.group(1))
    bare = _BARE_OBJECT.search(text)
    if bare:
        candidates.append(bare.group(0))

    if not candidates:
        raise ResponseParseError("No JSON found in response", raw_text=text)

    last_error: Optional[Exception] = None
    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as exc:
            last_error = exc
            continue
        if isinstance(parsed, dict):
            return parsed

    raise ResponseParseError(f"JSON parse error: {last_error}", raw_text=text)


# ---------------------------------------------------------------------------
# Base agent
# ---------------------------------------------------------------------------

class BaseAgent:
    """Base class for all tenant research agents.

    Subclasses assemble a domain prompt and call ``generate`` or
    ``generate_json``; provider selection and token limits are fixed per
    agent at construction time.

    Example::

        class BuildingConfigAgent(BaseAgent):
            def __init__(self, gateway):
                super().__init__("building_config", gateway, provider=AIProvider.GEMINI)

            async def analyze(self, property_data) -> AgentResult:
                return await self.generate_json(build_prompt(property_data))
    """

    def __init__(
        self,
        agent_name: str,
        gateway: AIGateway,
        provider: AIProvider = AIProvider.OPENAI,
        model_name: Optional[str] = None,
        temperature: float = 0.3,
        max_tokens: int = 1500,
    ):
        """Initialise the agent.

        Args:
            agent_name: A short, unique name for this agent (used in logs).
            gateway: The AI gateway used for every call.
            provider: Which provider this agent talks to.
            model_name: Provider model override; ``None`` uses the gateway default.
            temperature: Generation temperature.
            max_tokens: Output token limit passed to the provider.
        """
        self.agent_name = agent_name
        self.gateway = gateway
        self.provider = provider
        self.model_name = model_name
        self.temperature = temperature
        self.max_tokens = max_tokens

    # ------------------------------------------------------------------
    # Core generation
    # ------------------------------------------------------------------

    async def _call_provider(self, prompt: str, max_tokens: int) -> str:
        if self.provider == AIProvider.GEMINI:
            return await self.gateway.call_gemini(
                prompt,
                model=self.model_name,
                temperature=self.temperature,
                max_output_tokens=max_tokens,
            )
        if self.provider == AIProvider.CLAUDE:
            return await self.gateway.call_claude(
                prompt,
                model=self.model_name,
                temperature=self.temperature,
                max_tokens=max_tokens,
            )
        return await self.gateway.call_openai(
            prompt,
            model=self.model_name,
            temperature=self.temperature,
            max_tokens=max_tokens,
        )

    async def generate(self, prompt: str, max_tokens: Optional[int] = None) -> AgentResult:
        """Generate a single-turn response.

        Args:
            prompt: The user prompt to send.
            max_tokens: Per-call override of the agent's token limit.

        Returns:
            An ``AgentResult`` with the response text in ``data``.
        """
        start_time = time.time()
        try:
            response_text = await self._call_provider(prompt, max_tokens or self.max_tokens)
        except TenantResearchError as exc:
            latency_ms = int((time.time() - start_time) * 1000)
            logger.error(
                "[%s] Generation failed after %dms: %s",
                self.agent_name,
                latency_ms,
                exc,
            )
            return AgentResult.failure(str(exc), latency_ms=latency_ms)

        latency_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "[%s] Generation succeeded: provider=%s, latency=%dms",
            self.agent_name,
            self.provider.value,
            latency_ms,
        )
        return AgentResult.success(data=response_text, latency_ms=latency_ms)

    # ------------------------------------------------------------------
    # JSON generation convenience
    # ------------------------------------------------------------------

    async def generate_json(self, prompt: str, max_tokens: Optional[int] = None) -> AgentResult:
        """Generate a response and parse the embedded JSON object.

        Returns:
            An ``AgentResult`` whose ``data`` field contains the parsed
            dict, or a failure carrying the parse error.
        """
        result = await self.generate(prompt, max_tokens=max_tokens)
        if not result.ok:
            return result

        try:
            parsed = extract_json_object(result.data)
        except ResponseParseError as exc:
            logger.warning(
                "[%s] JSON parse failed: %s; raw text: %.200s",
                self.agent_name,
                exc,
                result.data,
            )
            return AgentResult.failure(str(exc), latency_ms=result.latency_ms)

        return AgentResult.success(data=parsed, latency_ms=result.latency_ms)
