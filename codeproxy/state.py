"""Conversation state: remembers tool calls so tool results can be routed back."""

from __future__ import annotations

import itertools
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_SECONDS = 3600.0


@dataclass(frozen=True)
class ToolCallMetadata:
    """What is known about one tool call issued by the model."""

    function_name: str
    thought_signature: str | None
    args: Any
    timestamp: float
    request_index: int
    conversation_id: str
    original_id: str


class ConversationState:
    """Thread-safe mapping from tool_use ids to the function call they came from.

    Claude refers to tool calls by id when it sends results back, while Gemini
    needs the function name (and any thought signature) for a function response.
    Share one instance between threads to share the mappings.
    """

    def __init__(self, retention: float = DEFAULT_RETENTION_SECONDS) -> None:
        """Create an empty state; entries older than ``retention`` seconds may be cleaned up."""
        self.retention = retention
        self._lock = threading.Lock()
        self._mappings: dict[str, ToolCallMetadata] = {}
        self._counter = itertools.count()
        self._count = 0

    def next_request_index(self) -> int:
        """Return the current request index and advance the counter."""
        with self._lock:
            return self._advance()

    def _advance(self) -> int:
        index = self._count
        self._count += 1
        return index

    def current_request_count(self) -> int:
        with self._lock:
            return self._count

    def register_tool_use_with_context(
        self,
        tool_use_id: str,
        function_name: str,
        thought_signature: str | None = None,
        args: Any = None,
        conversation_id: str | None = None,
    ) -> None:
        """Remember a tool call, tagged with its request index and conversation."""
        conv_id = conversation_id if conversation_id is not None else "default"
        with self._lock:
            request_index = self._advance()
            self._mappings[tool_use_id] = ToolCallMetadata(
                function_name=function_name,
                thought_signature=thought_signature,
                args={} if args is None else args,
                timestamp=time.monotonic(),
                request_index=request_index,
                conversation_id=conv_id,
                original_id=tool_use_id,
            )
        logger.debug(
            "Registering tool use mapping: id=%s function=%s request_index=%d "
            "conversation=%s has_signature=%s",
            tool_use_id,
            function_name,
            request_index,
            conv_id,
            thought_signature is not None,
        )

    def register_tool_use(
        self,
        tool_use_id: str,
        function_name: str,
        thought_signature: str | None = None,
        args: Any = None,
    ) -> None:
        """Remember a tool call in the default conversation."""
        self.register_tool_use_with_context(tool_use_id, function_name, thought_signature, args, None)

    def get_function_name(self, tool_use_id: str) -> str | None:
        metadata = self.get_metadata(tool_use_id)
        return None if metadata is None else metadata.function_name

    def get_metadata(self, tool_use_id: str) -> ToolCallMetadata | None:
        with self._lock:
            return self._mappings.get(tool_use_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._mappings)

    def is_empty(self) -> bool:
        return len(self) == 0

    def cleanup_old_entries(self) -> int:
        """Drop entries older than the retention period; return how many were dropped."""
        now = time.monotonic()
        with self._lock:
            expired = [
                tool_id
                for tool_id, metadata in self._mappings.items()
                if now - metadata.timestamp > self.retention
            ]
            for tool_id in expired:
                del self._mappings[tool_id]
            remaining = len(self._mappings)
        if expired:
            logger.info(
                "Cleaned up old tool mappings: removed=%d total_remaining=%d",
                len(expired),
                remaining,
            )
        return len(expired)

    def clear(self) -> None:
        """Forget every mapping and reset the request counter."""
        with self._lock:
            self._mappings.clear()
            self._count = 0

    def get_by_conversation(self, conversation_id: str) -> list[tuple[str, ToolCallMetadata]]:
        with self._lock:
            return [
                (tool_id, metadata)
                for tool_id, metadata in self._mappings.items()
                if metadata.conversation_id == conversation_id
            ]

    def get_sorted_by_request_index(self) -> list[tuple[str, ToolCallMetadata]]:
        with self._lock:
            entries = list(self._mappings.items())
        return sorted(entries, key=lambda entry: entry[1].request_index)

    def verify_round_trip(self, tool_use_id: str) -> bool:
        """True if ``tool_use_id`` is known and matches the id it was registered under."""
        metadata = self.get_metadata(tool_use_id)
        return metadata is not None and metadata.original_id == tool_use_id


GLOBAL_STATE = ConversationState()