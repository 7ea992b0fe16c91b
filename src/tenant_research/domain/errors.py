"""Exception hierarchy for tenant research.

Gateway and adapter failures raise these; agents convert them into
``AgentResult`` failures and routes translate them into HTTP responses.
"""

from typing import Any, Optional


class TenantResearchError(Exception):
    """Base class for every error raised by this service."""


class UpstreamError(TenantResearchError):
    """An AI provider or external data source failed at the transport level."""

    def __init__(self, provider: str, message: str, payload: Any = None):
        self.provider = provider
        self.message = message
        self.payload = payload
        super().__init__(f"{provider} request failed: {message}")


class EmptyResponseError(TenantResearchError):
    """The provider answered but no usable content could be extracted."""

    def __init__(self, provider: str, model: str, reason: Optional[str] = None):
        self.provider = provider
        self.model = model
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"No content received from {provider} model {model}{detail}")


class ResponseParseError(TenantResearchError):
    """Expected JSON could not be located or parsed in a model response."""

    def __init__(self, message: str, raw_text: str = ""):
        self.raw_text = raw_text
        super().__init__(message)


class PropertyValidationError(TenantResearchError):
    """Caller-supplied property data is missing required fields."""

    def __init__(self, missing_fields: list[str], message: Optional[str] = None):
        self.missing_fields = missing_fields
        super().__init__(message or f"Missing required fields: {', '.join(missing_fields)}")


class SessionNotFoundError(TenantResearchError):
    """Progress poll for an unknown or expired session."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class AnalysisFailedError(TenantResearchError):
    """The analysis pipeline failed outside of its per-stage handlers."""

    def __init__(self, message: str, session_id: Optional[str] = None):
        self.session_id = session_id
        super().__init__(message)
