"""Interface of the upstream model providers the proxy can forward to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator


class Provider(ABC):
    """An AI provider client that streams generated content.

    Implementations raise :class:`codeproxy.errors.ProxyError` subclasses when
    the request cannot be sent or the provider answers with an error.
    """

    @abstractmethod
    async def stream_generate_content(self, model: str, body: bytes) -> AsyncIterator[bytes]:
        """Send ``body`` for ``model`` and return an async iterator over the response bytes."""

    @abstractmethod
    def needs_transformation(self) -> bool:
        """True if Claude requests must be converted before being sent to this provider."""

    @abstractmethod
    def name(self) -> str:
        """Provider name used in log messages."""