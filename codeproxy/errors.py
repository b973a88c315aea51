"""Errors raised by the proxy."""

from __future__ import annotations


class ProxyError(Exception):
    """Base class for every error the proxy reports."""

    label = "Proxy error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class InvalidClaudeRequest(ProxyError):
    """The incoming Claude request is malformed or violates API rules."""

    label = "Invalid Claude request"


class InvalidGeminiResponse(ProxyError):
    """The upstream Gemini response could not be understood."""

    label = "Invalid Gemini response"


class TransformationError(ProxyError):
    """A request or response could not be converted between formats."""

    label = "Transformation error"


class ConfigError(ProxyError):
    """The proxy configuration is missing or invalid."""

    label = "Configuration error"


class InternalError(ProxyError):
    """An unexpected failure inside the proxy."""

    label = "Internal error"


class UpstreamError(ProxyError):
    """The upstream provider failed or returned an error status."""

    label = "Upstream error"