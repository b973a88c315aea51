"""Cache of tool declarations already converted to the Gemini form."""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, field

from .claude import ClaudeTool
from .gemini import GeminiFunctionDeclaration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheStats:
    """Size of the cache and the names of the tools it holds."""

    total_entries: int
    tools: list[str] = field(default_factory=list)


class ToolSchemaCache:
    """Thread-safe map from tool name to its Gemini function declaration.

    Tool schemas are defined once and reused on every request, so each one is
    converted only the first time its name is seen. Callers get their own copy
    of the cached declaration.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, GeminiFunctionDeclaration] = {}

    def get_or_transform(self, tool: ClaudeTool) -> GeminiFunctionDeclaration:
        """Return the declaration for ``tool``, converting and caching it on a miss."""
        with self._lock:
            cached = self._entries.get(tool.name)
            if cached is not None:
                logger.debug("Cache hit for tool schema: %s", tool.name)
                return copy.deepcopy(cached)

            logger.debug("Cache miss, transforming tool schema: %s", tool.name)
            transformed = GeminiFunctionDeclaration(
                name=tool.name,
                description=tool.description,
                parameters=copy.deepcopy(tool.input_schema),
            )
            self._entries[tool.name] = transformed
            return copy.deepcopy(transformed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def is_empty(self) -> bool:
        return len(self) == 0

    def clear(self) -> None:
        """Forget every cached declaration."""
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(total_entries=len(self._entries), tools=list(self._entries))


TOOL_CACHE = ToolSchemaCache()