"""Data model of the Gemini GenerateContent API: requests and streamed chunks."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Union

from .claude import JsonSchema

_U32_MAX = 2**32 - 1


def _expect_object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"expected an object for {what}, got {type(value).__name__}")
    return value


def _any(key: str, value: Any) -> Any:
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


def _list(key: str, value: Any) -> list:
    if not isinstance(value, list):
        raise ValueError(f"field `{key}` must be a list")
    return value


def _string_list(key: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"field `{key}` must be a list of strings")
    return list(value)


def _required(data: dict, key: str, check: Callable[[str, Any], Any]) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return check(key, data[key])


def _optional(data: dict, key: str, check: Callable[[str, Any], Any]) -> Any:
    value = data.get(key)
    return None if value is None else check(key, value)


@dataclass
class FunctionCall:
    """A function call emitted by the model."""

    name: str
    args: Any

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "args": self.args}


@dataclass
class FunctionResponse:
    """The result of a function call, fed back to the model."""

    name: str
    response: Any

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "response": self.response}


@dataclass
class InlineData:
    """Base64 payload with its MIME type."""

    mime_type: str
    data: str

    def to_dict(self) -> dict[str, Any]:
        return {"mimeType": self.mime_type, "data": self.data}


@dataclass
class TextPart:
    text: str
    thought_signature: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"text": self.text}
        if self.thought_signature is not None:
            out["thoughtSignature"] = self.thought_signature
        return out


@dataclass
class InlineDataPart:
    inline_data: InlineData

    def to_dict(self) -> dict[str, Any]:
        return {"inline_data": self.inline_data.to_dict()}


@dataclass
class FunctionCallPart:
    function_call: FunctionCall
    thought_signature: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"functionCall": self.function_call.to_dict()}
        if self.thought_signature is not None:
            out["thoughtSignature"] = self.thought_signature
        return out


@dataclass
class FunctionResponsePart:
    function_response: FunctionResponse

    def to_dict(self) -> dict[str, Any]:
        return {"functionResponse": self.function_response.to_dict()}


GeminiPart = Union[TextPart, InlineDataPart, FunctionCallPart, FunctionResponsePart]


def _text_part(data: dict) -> TextPart:
    # A thought signature attached to text is deliberately not kept.
    return TextPart(_required(data, "text", _string))


def _inline_data_part(data: dict) -> InlineDataPart:
    inline = _expect_object(_required(data, "inline_data", _any), "inline_data")
    return InlineDataPart(
        InlineData(_required(inline, "mimeType", _string), _required(inline, "data", _string))
    )


def _function_call(data: dict) -> FunctionCall:
    call = _expect_object(_required(data, "functionCall", _any), "functionCall")
    return FunctionCall(_required(call, "name", _string), _required(call, "args", _any))


def _function_call_with_thought(data: dict) -> FunctionCallPart:
    return FunctionCallPart(_function_call(data), _required(data, "thoughtSignature", _string))


def _function_call_part(data: dict) -> FunctionCallPart:
    return FunctionCallPart(_function_call(data))


def _function_response_part(data: dict) -> FunctionResponsePart:
    resp = _expect_object(_required(data, "functionResponse", _any), "functionResponse")
    return FunctionResponsePart(
        FunctionResponse(_required(resp, "name", _string), _required(resp, "response", _any))
    )


_PART_PARSERS = (
    _text_part,
    _inline_data_part,
    _function_call_with_thought,
    _function_call_part,
    _function_response_part,
)


def parse_part(data: Any) -> GeminiPart:
    """Build a part from its JSON form, trying each shape in turn."""
    data = _expect_object(data, "part")
    for parser in _PART_PARSERS:
        try:
            return parser(data)
        except ValueError:
            continue
    raise ValueError("data did not match any kind of Gemini part")


def _parse_parts(data: dict) -> list[GeminiPart]:
    return [parse_part(p) for p in _list("parts", data.get("parts", []))]


@dataclass
class GeminiContent:
    """A turn of conversation; role is ``user`` or ``model``."""

    role: str | None = None
    parts: list[GeminiPart] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> GeminiContent:
        data = _expect_object(data, "content")
        return cls(role=_optional(data, "role", _string), parts=_parse_parts(data))

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "parts": [p.to_dict() for p in self.parts]}


@dataclass
class GeminiSystemInstruction:
    parts: list[GeminiPart]

    @classmethod
    def from_dict(cls, data: Any) -> GeminiSystemInstruction:
        data = _expect_object(data, "systemInstruction")
        return cls([parse_part(p) for p in _required(data, "parts", _list)])

    def to_dict(self) -> dict[str, Any]:
        return {"parts": [p.to_dict() for p in self.parts]}


@dataclass
class GeminiFunctionDeclaration:
    name: str
    description: str
    parameters: JsonSchema

    @classmethod
    def from_dict(cls, data: Any) -> GeminiFunctionDeclaration:
        data = _expect_object(data, "function declaration")
        return cls(
            name=_required(data, "name", _string),
            description=_required(data, "description", _string),
            parameters=JsonSchema.from_dict(_required(data, "parameters", _any)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters.to_dict(),
        }


@dataclass
class GeminiTool:
    function_declarations: list[GeminiFunctionDeclaration]

    @classmethod
    def from_dict(cls, data: Any) -> GeminiTool:
        data = _expect_object(data, "tool")
        return cls(
            [GeminiFunctionDeclaration.from_dict(d) for d in _required(data, "functionDeclarations", _list)]
        )

    def to_dict(self) -> dict[str, Any]:
        return {"functionDeclarations": [d.to_dict() for d in self.function_declarations]}


@dataclass
class GenerationConfig:
    max_output_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    stop_sequences: list[str] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> GenerationConfig:
        data = _expect_object(data, "generationConfig")
        return cls(
            max_output_tokens=_optional(data, "maxOutputTokens", _uint),
            temperature=_optional(data, "temperature", _number),
            top_p=_optional(data, "topP", _number),
            top_k=_optional(data, "topK", _uint),
            stop_sequences=_optional(data, "stopSequences", _string_list),
        )

    def to_dict(self) -> dict[str, Any]:
        pairs = (
            ("maxOutputTokens", self.max_output_tokens),
            ("temperature", self.temperature),
            ("topP", self.top_p),
            ("topK", self.top_k),
            ("stopSequences", self.stop_sequences),
        )
        return {key: value for key, value in pairs if value is not None}


@dataclass
class SafetySetting:
    category: str
    threshold: str

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "threshold": self.threshold}


def _parse_safety_setting(data: Any) -> SafetySetting:
    data = _expect_object(data, "safety setting")
    return SafetySetting(_required(data, "category", _string), _required(data, "threshold", _string))


@dataclass
class GeminiRequest:
    """A GenerateContent request."""

    contents: list[GeminiContent]
    system_instruction: GeminiSystemInstruction | None = None
    generation_config: GenerationConfig | None = None
    safety_settings: list[SafetySetting] | None = None
    tools: list[GeminiTool] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> GeminiRequest:
        data = _expect_object(data, "request")
        system = data.get("systemInstruction")
        config = data.get("generationConfig")
        safety = _optional(data, "safetySettings", _list)
        tools = _optional(data, "tools", _list)
        return cls(
            contents=[GeminiContent.from_dict(c) for c in _required(data, "contents", _list)],
            system_instruction=None if system is None else GeminiSystemInstruction.from_dict(system),
            generation_config=None if config is None else GenerationConfig.from_dict(config),
            safety_settings=None if safety is None else [_parse_safety_setting(s) for s in safety],
            tools=None if tools is None else [GeminiTool.from_dict(t) for t in tools],
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> GeminiRequest:
        return cls.from_dict(json.loads(text))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"contents": [c.to_dict() for c in self.contents]}
        if self.system_instruction is not None:
            out["systemInstruction"] = self.system_instruction.to_dict()
        if self.generation_config is not None:
            out["generationConfig"] = self.generation_config.to_dict()
        if self.safety_settings is not None:
            out["safetySettings"] = [s.to_dict() for s in self.safety_settings]
        if self.tools is not None:
            out["tools"] = [t.to_dict() for t in self.tools]
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)


@dataclass
class SafetyRating:
    category: str
    probability: str

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "probability": self.probability}


def _parse_safety_ratings(key: str, value: Any) -> list[SafetyRating]:
    ratings = []
    for item in _list(key, value):
        item = _expect_object(item, "safety rating")
        ratings.append(
            SafetyRating(_required(item, "category", _string), _required(item, "probability", _string))
        )
    return ratings


@dataclass
class UsageMetadata:
    prompt_token_count: int | None = None
    candidates_token_count: int | None = None
    total_token_count: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> UsageMetadata:
        data = _expect_object(data, "usageMetadata")
        return cls(
            prompt_token_count=_optional(data, "promptTokenCount", _uint),
            candidates_token_count=_optional(data, "candidatesTokenCount", _uint),
            total_token_count=_optional(data, "totalTokenCount", _uint),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "promptTokenCount": self.prompt_token_count,
            "candidatesTokenCount": self.candidates_token_count,
            "totalTokenCount": self.total_token_count,
        }


@dataclass
class PromptFeedback:
    block_reason: str | None = None
    safety_ratings: list[SafetyRating] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> PromptFeedback:
        data = _expect_object(data, "promptFeedback")
        return cls(
            block_reason=_optional(data, "blockReason", _string),
            safety_ratings=_optional(data, "safetyRatings", _parse_safety_ratings),
        )

    def to_dict(self) -> dict[str, Any]:
        ratings = None if self.safety_ratings is None else [r.to_dict() for r in self.safety_ratings]
        return {"blockReason": self.block_reason, "safetyRatings": ratings}


@dataclass
class Candidate:
    content: GeminiContent | None = None
    finish_reason: str | None = None
    safety_ratings: list[SafetyRating] | None = None
    index: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Candidate:
        data = _expect_object(data, "candidate")
        content = data.get("content")
        return cls(
            content=None if content is None else GeminiContent.from_dict(content),
            finish_reason=_optional(data, "finishReason", _string),
            safety_ratings=_optional(data, "safetyRatings", _parse_safety_ratings),
            index=_optional(data, "index", _uint),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.content is not None:
            out["content"] = self.content.to_dict()
        if self.finish_reason is not None:
            out["finishReason"] = self.finish_reason
        if self.safety_ratings is not None:
            out["safetyRatings"] = [r.to_dict() for r in self.safety_ratings]
        if self.index is not None:
            out["index"] = self.index
        return out


@dataclass
class GeminiStreamChunk:
    """One object of a streamed GenerateContent response."""

    candidates: list[Candidate] = field(default_factory=list)
    usage_metadata: UsageMetadata | None = None
    prompt_feedback: PromptFeedback | None = None

    @classmethod
    def from_dict(cls, data: Any) -> GeminiStreamChunk:
        data = _expect_object(data, "stream chunk")
        usage = data.get("usageMetadata")
        feedback = data.get("promptFeedback")
        return cls(
            candidates=[Candidate.from_dict(c) for c in _list("candidates", data.get("candidates", []))],
            usage_metadata=None if usage is None else UsageMetadata.from_dict(usage),
            prompt_feedback=None if feedback is None else PromptFeedback.from_dict(feedback),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> GeminiStreamChunk:
        return cls.from_dict(json.loads(text))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"candidates": [c.to_dict() for c in self.candidates]}
        if self.usage_metadata is not None:
            out["usageMetadata"] = self.usage_metadata.to_dict()
        if self.prompt_feedback is not None:
            out["promptFeedback"] = self.prompt_feedback.to_dict()
        return out