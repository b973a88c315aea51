# codeproxy

Building blocks for a proxy that lets clients speaking the Claude Messages API
talk to Gemini-style backends: typed models for both wire formats, a store
that remembers tool calls across turns, a cache of tool declarations, usage
counters, and the interface an upstream provider client implements.

The package has no dependencies outside the standard library.

## Modules

- `codeproxy.claude`: the Claude side.
  - Request models: `ClaudeRequest` (with `from_dict`, `from_json`, `to_dict`,
    `to_json`), `ClaudeMessage`, `ClaudeTool` and `JsonSchema`.
  - Content blocks: `TextBlock`, `ToolUseBlock` and `ToolResultBlock`, with
    `parse_content_block`, `parse_content` and `content_to_json`. Message
    content is either a plain string or a list of blocks.
  - SSE event payloads, each with `to_dict`: `MessageStart`,
    `ContentBlockStart`, `ContentBlockDelta`, `ContentBlockStop`,
    `MessageDelta`, `MessageStop`, `Ping` and `ErrorEvent`. They are built
    from `MessageMetadata`, `ContentBlockMetadata`, `TextDelta`,
    `MessageDeltaData`, `UsageInfo` and `ErrorInfo`.
- `codeproxy.gemini`: the Gemini side.
  - Request models: `GeminiRequest`, `GeminiContent`,
    `GeminiSystemInstruction`, `GenerationConfig`, `SafetySetting`,
    `GeminiTool` and `GeminiFunctionDeclaration`.
  - Parts: `TextPart`, `InlineDataPart`, `FunctionCallPart` (with an optional
    thought signature) and `FunctionResponsePart`, and `parse_part` to read
    them.
  - Streamed responses: `GeminiStreamChunk`, `Candidate`, `UsageMetadata`,
    `PromptFeedback` and `SafetyRating`.
- `codeproxy.state`: `ConversationState`, a thread-safe map from tool-use id to
  `ToolCallMetadata`. The metadata holds the function name, thought signature,
  arguments, request index and conversation id. Entries older than the
  retention period (3600 seconds by default) are dropped by
  `cleanup_old_entries()`. The module holds a shared instance, `GLOBAL_STATE`.
- `codeproxy.cache`: `ToolSchemaCache`, which turns a `ClaudeTool` into a
  `GeminiFunctionDeclaration` once per tool name. Every caller gets its own
  copy of the declaration. `stats()` returns a `CacheStats`. The module holds a
  shared instance, `TOOL_CACHE`.
- `codeproxy.metrics`: `ToolMetrics`, a set of thread-safe counters.
  `record_transformation` takes the duration as a `timedelta` or as seconds.
  `snapshot()` returns a `MetricsSnapshot`, and `str()` of a snapshot gives a
  one-line summary. The module holds a shared instance, `TOOL_METRICS`.
- `codeproxy.provider`: `Provider`, an abstract base class for upstream
  clients. It has `stream_generate_content`, `needs_transformation` and `name`.
- `codeproxy.errors`: `ProxyError` and its subclasses `InvalidClaudeRequest`,
  `InvalidGeminiResponse`, `TransformationError`, `ConfigError`,
  `InternalError` and `UpstreamError`. `str()` of an error reads
  `"<label>: <message>"`, for example `"Upstream error: timeout"`.

When input does not match the expected shape, parsing raises `ValueError`.
Examples are a missing required field, a wrong type, or an integer outside the
unsigned 32-bit range.

`JsonSchema.to_dict()` writes only the schema fields Gemini accepts: `type`,
`description`, `properties`, `required`, `enum`, `items`, `minimum`, `maximum`
and `pattern`. `from_dict` keeps any other keys in `JsonSchema.additional`,
and `to_dict` never writes them out.

## Example

```python
from codeproxy.claude import ClaudeRequest
from codeproxy.gemini import GeminiStreamChunk
from codeproxy.state import ConversationState

request = ClaudeRequest.from_json(
    '{"model": "claude-3-5-sonnet", "messages": [{"role": "user", "content": "Hello"}]}'
)
print(request.model, len(request.messages))

chunk = GeminiStreamChunk.from_json(
    '{"candidates": [{"content": {"parts": [{"text": "Hi"}], "role": "model"},'
    ' "finishReason": "STOP"}]}'
)
print(chunk.candidates[0].finish_reason)  # STOP

state = ConversationState()
state.register_tool_use("toolu_1", "get_weather", None, {"location": "Paris"})
print(state.get_function_name("toolu_1"))  # get_weather
print(state.verify_round_trip("toolu_1"))   # True
```

## What this package does not do

This is a library of parts, not a running proxy:

- It has no command and no HTTP server.
- It has no concrete `Provider` implementation, so it sends nothing to any
  backend.
- It does not convert a `ClaudeRequest` into a `GeminiRequest`.
- It does not parse a streamed response body into `GeminiStreamChunk` objects
  incrementally, and it does not turn chunks into SSE text.

The models, state, cache and metrics here are what such code would be built
on.

## Tests

From a checkout of the package:

```
pip install -e ".[test]"
pytest
```