import json

import pytest

from codeproxy.claude import JsonSchema
from codeproxy.gemini import (
    Candidate,
    FunctionCall,
    FunctionCallPart,
    FunctionResponse,
    FunctionResponsePart,
    GeminiContent,
    GeminiFunctionDeclaration,
    GeminiRequest,
    GeminiStreamChunk,
    GeminiSystemInstruction,
    GeminiTool,
    GenerationConfig,
    InlineData,
    InlineDataPart,
    PromptFeedback,
    SafetyRating,
    SafetySetting,
    TextPart,
    UsageMetadata,
    parse_part,
)


def test_serialize_gemini_request():
    req = GeminiRequest(
        contents=[GeminiContent(role="user", parts=[TextPart("Hello")])],
        generation_config=GenerationConfig(max_output_tokens=100),
    )
    text = req.to_json()
    assert "maxOutputTokens" in text
    assert "contents" in text
    assert req.to_dict()["generationConfig"] == {"maxOutputTokens": 100}


def test_parse_gemini_stream_chunk():
    chunk = GeminiStreamChunk.from_json(
        """{
            "candidates": [{"content": {"parts": [{"text": "Hello"}], "role": "model"}}],
            "usageMetadata": {"promptTokenCount": 10, "candidatesTokenCount": 1}
        }"""
    )
    assert len(chunk.candidates) == 1
    assert chunk.usage_metadata.prompt_token_count == 10
    assert chunk.usage_metadata.candidates_token_count == 1
    assert chunk.usage_metadata.total_token_count is None


def test_parse_gemini_finish_chunk():
    chunk = GeminiStreamChunk.from_json(
        """{
            "candidates": [{
                "content": {"parts": [{"text": "!"}], "role": "model"},
                "finishReason": "STOP"
            }]
        }"""
    )
    assert chunk.candidates[0].finish_reason == "STOP"


def test_serialize_gemini_request_with_tools():
    req = GeminiRequest(
        contents=[GeminiContent(role="user", parts=[TextPart("What's the weather?")])],
        tools=[
            GeminiTool(
                [
                    GeminiFunctionDeclaration(
                        name="get_weather",
                        description="Get weather for a location",
                        parameters=JsonSchema(
                            schema_type="object",
                            properties={"location": JsonSchema(schema_type="string", description="City name")},
                            required=["location"],
                        ),
                    )
                ]
            )
        ],
    )
    text = req.to_json()
    assert "functionDeclarations" in text
    assert "get_weather" in text


def test_parse_function_call():
    chunk = GeminiStreamChunk.from_json(
        """{
            "candidates": [{
                "content": {
                    "parts": [{"functionCall": {"name": "get_weather", "args": {"location": "San Francisco"}}}],
                    "role": "model"
                }
            }]
        }"""
    )
    part = chunk.candidates[0].content.parts[0]
    assert part == FunctionCallPart(FunctionCall("get_weather", {"location": "San Francisco"}))
    assert part.thought_signature is None


def test_serialize_function_call_with_thought():
    part = FunctionCallPart(FunctionCall("test_tool", {"param": "value"}), "test_signature_123")
    obj = json.loads(json.dumps(part.to_dict()))
    assert obj["functionCall"]["name"] == "test_tool"
    assert obj["thoughtSignature"] == "test_signature_123"


def test_parse_function_call_keeps_thought_signature():
    part = parse_part({"functionCall": {"name": "TodoWrite", "args": {}}, "thoughtSignature": "sig"})
    assert part == FunctionCallPart(FunctionCall("TodoWrite", {}), "sig")


def test_text_thought_signature_is_dropped():
    assert parse_part({"text": "x", "thoughtSignature": "sig"}) == TextPart("x")


def test_split_text_part_parses():
    chunk = GeminiStreamChunk.from_json(
        '{"candidates":[{"content":{"parts":[{"text":"streaming"}],"role":"model"}}]}'
    )
    assert chunk.candidates[0].content.parts[0] == TextPart("streaming")


def test_function_call_needs_args():
    with pytest.raises(ValueError):
        parse_part({"functionCall": {"name": "f"}})


def test_unknown_part_rejected():
    with pytest.raises(ValueError):
        parse_part({"somethingElse": 1})


def test_inline_data_part_round_trip():
    raw = {"inline_data": {"mimeType": "image/png", "data": "aGVsbG8="}}
    part = parse_part(raw)
    assert part == InlineDataPart(InlineData("image/png", "aGVsbG8="))
    assert part.to_dict() == raw


def test_function_response_part_round_trip():
    part = FunctionResponsePart(FunctionResponse("get_weather", {"result": "Sunny", "error": False}))
    assert parse_part(part.to_dict()) == part


def test_content_defaults_when_empty():
    content = GeminiContent.from_dict({})
    assert content.role is None
    assert content.parts == []
    assert content.to_dict() == {"role": None, "parts": []}


def test_candidate_with_only_finish_reason():
    chunk = GeminiStreamChunk.from_json('{"candidates":[{"finishReason":"MAX_TOKENS"}]}')
    assert chunk.candidates[0].content is None
    assert chunk.candidates[0].finish_reason == "MAX_TOKENS"


def test_chunk_without_candidates():
    chunk = GeminiStreamChunk.from_dict({"promptFeedback": {"blockReason": "SAFETY"}})
    assert chunk.candidates == []
    assert chunk.prompt_feedback == PromptFeedback(block_reason="SAFETY")


def test_stream_chunk_round_trip():
    chunk = GeminiStreamChunk(
        candidates=[
            Candidate(
                content=GeminiContent("model", [TextPart("Hi")]),
                finish_reason="STOP",
                safety_ratings=[SafetyRating("HARM_CATEGORY_HARASSMENT", "NEGLIGIBLE")],
                index=0,
            )
        ],
        usage_metadata=UsageMetadata(10, 5, 15),
    )
    assert GeminiStreamChunk.from_dict(chunk.to_dict()) == chunk


def test_request_json_round_trip():
    req = GeminiRequest(
        contents=[
            GeminiContent("user", [TextPart("Echo hello")]),
            GeminiContent("model", [FunctionCallPart(FunctionCall("echo", {"text": "hello"}), "sig")]),
        ],
        system_instruction=GeminiSystemInstruction([TextPart("You are helpful")]),
        generation_config=GenerationConfig(max_output_tokens=500, temperature=0.7, top_k=1, stop_sequences=[]),
        safety_settings=[SafetySetting("HARM_CATEGORY_HATE_SPEECH", "BLOCK_NONE")],
        tools=[
            GeminiTool(
                [
                    GeminiFunctionDeclaration(
                        "echo",
                        "Echo text back",
                        JsonSchema(
                            schema_type="object",
                            properties={"text": JsonSchema(schema_type="string")},
                            required=["text"],
                        ),
                    )
                ]
            )
        ],
    )
    text = req.to_json()
    assert "systemInstruction" in text
    assert "generationConfig" in text
    assert GeminiRequest.from_json(text) == req


def test_request_requires_contents():
    with pytest.raises(ValueError):
        GeminiRequest.from_dict({"tools": []})


def test_usage_metadata_serializes_nulls():
    assert UsageMetadata(prompt_token_count=3).to_dict() == {
        "promptTokenCount": 3,
        "candidatesTokenCount": None,
        "totalTokenCount": None,
    }