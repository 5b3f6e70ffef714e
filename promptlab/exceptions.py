from typing import Optional


class PromptLabError(Exception):
    """Base error for failures surfaced to API callers"""

    user_message: Optional[str] = None


class ConfigurationError(PromptLabError):
    """Server-side configuration is missing or invalid"""

    user_message = "API key not configured properly"


class UpstreamError(PromptLabError):
    """The model provider call failed"""


class RateLimitError(UpstreamError):
    """Provider answered with HTTP 429"""

    user_message = "Rate limit exceeded. Please wait a moment and try again."


class UpstreamTransportError(UpstreamError):
    """Connection-level failure talking to the provider"""

    user_message = "Network error. Please check your connection and try again."


class UpstreamAPIError(UpstreamError):
    """Provider answered with a non-retryable error status"""

    def __init__(self, status_code: Optional[int], body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Gemini API error: {status_code} - {body}")


def user_message_for(exc: Exception, default: str) -> str:
    """Message safe to show end users; falls back to `default`"""
    return getattr(exc, "user_message", None) or default
