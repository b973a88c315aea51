"""Data model of the Claude Messages API: requests, content blocks and SSE events."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

_U32_MAX = 2**32 - 1


def _expect_object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"expected an object for {what}, got {type(value).__name__}")
    return value


def _string(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _uint(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U32_MAX:
        raise ValueError(f"field `{key}` must be an unsigned 32-bit integer")
    return value


def _number(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field `{key}` must be a number")
    return float(value)


def _boolean(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"field `{key}` must be a boolean")
    return value


def _string_list(key: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"field `{key}` must be a list of strings")
    return list(value)


def _list(key: str, value: Any) -> list:
    if not isinstance(value, list):
        raise ValueError(f"field `{key}` must be a list")
    return value


def _required(
    data: dict, key: str, check: Optional[Callable[[str, Any], Any]] = None
) -> Any:
    """Return ``data[key]``, validated by ``check`` when one is given."""
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    return value if check is None else check(key, value)


def _optional(data: dict, key: str, check: Callable[[str, Any], Any]) -> Any:
    value = data.get(key)
    return None if value is None else check(key, value)


_SCHEMA_KEYS = frozenset(
    {"type", "description", "properties", "required", "enum", "items", "minimum", "maximum", "pattern"}
)


@dataclass
class JsonSchema:
    """The subset of JSON Schema that tool parameters are expressed in.

    Keys outside the supported subset are kept in ``additional`` but never
    written back out.
    """

    schema_type: str = ""
    description: str | None = None
    properties: dict[str, JsonSchema] | None = None
    required: list[str] | None = None
    enum_values: list[Any] | None = None
    items: JsonSchema | None = None
    minimum: float | None = None
    maximum: float | None = None
    pattern: str | None = None
    additional: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> JsonSchema:
        data = _expect_object(data, "schema")
        properties = data.get("properties")
        if properties is not None:
            properties = {
                name: cls.from_dict(sub)
                for name, sub in _expect_object(properties, "properties").items()
            }
        items = data.get("items")
        enum_values = _optional(data, "enum", _list)
        return cls(
            schema_type=_required(data, "type", _string),
            description=_optional(data, "description", _string),
            properties=properties,
            required=_optional(data, "required", _string_list),
            enum_values=None if enum_values is None else list(enum_values),
            items=None if items is None else cls.from_dict(items),
            minimum=_optional(data, "minimum", _number),
            maximum=_optional(data, "maximum", _number),
            pattern=_optional(data, "pattern", _string),
            additional={k: v for k, v in data.items() if k not in _SCHEMA_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.schema_type}
        if self.description is not None:
            out["description"] = self.description
        if self.properties is not None:
            out["properties"] = {name: sub.to_dict() for name, sub in self.properties.items()}
        if self.required is not None:
            out["required"] = list(self.required)
        if self.enum_values is not None:
            out["enum"] = list(self.enum_values)
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.minimum is not None:
            out["minimum"] = self.minimum
        if self.maximum is not None:
            out["maximum"] = self.maximum
        if self.pattern is not None:
            out["pattern"] = self.pattern
        return out


@dataclass
class TextBlock:
    """A plain text content block."""

    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass
class ToolUseBlock:
    """A tool invocation requested by the assistant."""

    id: str
    name: str
    input: Any

    def to_dict(self) -> dict[str, Any]:
        return {"type": "tool_use", "id": self.id, "name": self.name, "input": self.input}


@dataclass
class ToolResultBlock:
    """The outcome of a tool invocation, sent back by the user."""

    tool_use_id: str
    content: str
    is_error: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": "tool_result",
            "tool_use_id": self.tool_use_id,
            "content": self.content,
        }
        if self.is_error is not None:
            out["is_error"] = self.is_error
        return out


ContentBlock = Union[TextBlock, ToolUseBlock, ToolResultBlock]
Content = Union[str, "list[ContentBlock]"]


def parse_content_block(data: Any) -> ContentBlock:
    """Build a content block from its JSON form, dispatching on ``type``."""
    data = _expect_object(data, "content block")
    kind = data.get("type")
    if kind == "text":
        return TextBlock(_required(data, "text", _string))
    if kind == "tool_use":
        return ToolUseBlock(
            id=_required(data, "id", _string),
            name=_required(data, "name", _string),
            input=_required(data, "input"),
        )
    if kind == "tool_result":
        return ToolResultBlock(
            tool_use_id=_required(data, "tool_use_id", _string),
            content=_required(data, "content", _string),
            is_error=_optional(data, "is_error", _boolean),
        )
    raise ValueError(f"unknown content block type {kind!r}")


def parse_content(data: Any) -> Content:
    """Parse message content: either a string or a list of content blocks."""
    if isinstance(data, str):
        return data
    if isinstance(data, list):
        return [parse_content_block(item) for item in data]
    raise ValueError("content must be a string or a list of content blocks")


def content_to_json(content: Content) -> Any:
    """Return the JSON form of message content."""
    if isinstance(content, str):
        return content
    return [block.to_dict() for block in content]


@dataclass
class ClaudeMessage:
    """One turn of the conversation."""

    role: str
    content: Content

    @classmethod
    def from_dict(cls, data: Any) -> ClaudeMessage:
        data = _expect_object(data, "message")
        return cls(
            role=_required(data, "role", _string),
            content=parse_content(_required(data, "content")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": content_to_json(self.content)}


@dataclass
class ClaudeTool:
    """A tool the model may call."""

    name: str
    description: str
    input_schema: JsonSchema

    @classmethod
    def from_dict(cls, data: Any) -> ClaudeTool:
        data = _expect_object(data, "tool")
        return cls(
            name=_required(data, "name", _string),
            description=_required(data, "description", _string),
            input_schema=JsonSchema.from_dict(_required(data, "input_schema")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema.to_dict(),
        }


@dataclass
class ClaudeRequest:
    """A Messages API request."""

    model: str
    messages: list[ClaudeMessage]
    system: Content | None = None
    max_tokens: int | None = None
    temperature: float | None = None
    stop_sequences: list[str] | None = None
    stream: bool = False
    top_p: float | None = None
    top_k: int | None = None
    tools: list[ClaudeTool] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ClaudeRequest:
        data = _expect_object(data, "request")
        system = data.get("system")
        tools = _optional(data, "tools", _list)
        return cls(
            model=_required(data, "model", _string),
            messages=[ClaudeMessage.from_dict(m) for m in _required(data, "messages", _list)],
            system=None if system is None else parse_content(system),
            max_tokens=_optional(data, "max_tokens", _uint),
            temperature=_optional(data, "temperature", _number),
            stop_sequences=_optional(data, "stop_sequences", _string_list),
            stream=_boolean("stream", data.get("stream", False)),
            top_p=_optional(data, "top_p", _number),
            top_k=_optional(data, "top_k", _uint),
            tools=None if tools is None else [ClaudeTool.from_dict(t) for t in tools],
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> ClaudeRequest:
        return cls.from_dict(json.loads(text))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
        }
        if self.system is not None:
            out["system"] = content_to_json(self.system)
        if self.max_tokens is not None:
            out["max_tokens"] = self.max_tokens
        if self.temperature is not None:
            out["temperature"] = self.temperature
        if self.stop_sequences is not None:
            out["stop_sequences"] = list(self.stop_sequences)
        out["stream"] = self.stream
        if self.top_p is not None:
            out["top_p"] = self.top_p
        if self.top_k is not None:
            out["top_k"] = self.top_k
        if self.tools is not None:
            out["tools"] = [t.to_dict() for t in self.tools]
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)


@dataclass
class UsageInfo:
    """Token usage reported to the client."""

    input_tokens: int
    output_tokens: int

    def to_dict(self) -> dict[str, Any]:
        return {"input_tokens": self.input_tokens, "output_tokens": self.output_tokens}


@dataclass
class MessageMetadata:
    """The message envelope sent in a ``message_start`` event."""

    id: str
    model: str
    usage: UsageInfo
    role: str = "assistant"
    msg_type: str = "message"
    content: list[Any] = field(default_factory=list)
    stop_reason: str | None = None
    stop_sequence: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.msg_type,
            "role": self.role,
            "model": self.model,
            "content": list(self.content),
            "stop_reason": self.stop_reason,
            "stop_sequence": self.stop_sequence,
            "usage": self.usage.to_dict(),
        }


@dataclass
class ContentBlockMetadata:
    """The initial shape of a content block in ``content_block_start``."""

    text: str = ""
    block_type: str = "text"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.block_type, "text": self.text}


@dataclass
class TextDelta:
    """An increment of text within a content block."""

    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text_delta", "text": self.text}


@dataclass
class MessageDeltaData:
    """Final message-level changes: why generation stopped."""

    stop_reason: str | None = None
    stop_sequence: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"stop_reason": self.stop_reason, "stop_sequence": self.stop_sequence}


@dataclass
class ErrorInfo:
    """An error description carried by an ``error`` event."""

    error_type: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": self.message}


@dataclass
class MessageStart:
    message: MessageMetadata

    def to_dict(self) -> dict[str, Any]:
        return {"type": "message_start", "message": self.message.to_dict()}


@dataclass
class ContentBlockStart:
    index: int
    content_block: ContentBlockMetadata

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "content_block_start",
            "index": self.index,
            "content_block": self.content_block.to_dict(),
        }


@dataclass
class ContentBlockDelta:
    index: int
    delta: TextDelta

    def to_dict(self) -> dict[str, Any]:
        return {"type": "content_block_delta", "index": self.index, "delta": self.delta.to_dict()}


@dataclass
class ContentBlockStop:
    index: int

    def to_dict(self) -> dict[str, Any]:
        return {"type": "content_block_stop", "index": self.index}


@dataclass
class MessageDelta:
    delta: MessageDeltaData
    usage: UsageInfo

    def to_dict(self) -> dict[str, Any]:
        return {"type": "message_delta", "delta": self.delta.to_dict(), "usage": self.usage.to_dict()}


@dataclass
class MessageStop:
    def to_dict(self) -> dict[str, Any]:
        return {"type": "message_stop"}


@dataclass
class Ping:
    def to_dict(self) -> dict[str, Any]:
        return {"type": "ping"}


@dataclass
class ErrorEvent:
    error: ErrorInfo

    def to_dict(self) -> dict[str, Any]:
        return {"type": "error", "error": self.error.to_dict()}