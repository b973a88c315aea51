import pytest

from codeproxy.errors import (
    ConfigError,
    InternalError,
    InvalidClaudeRequest,
    InvalidGeminiResponse,
    ProxyError,
    TransformationError,
    UpstreamError,
)


def test_message_is_prefixed_with_label():
    cases = [
        (InvalidClaudeRequest("No messages provided"), "Invalid Claude request"),
        (InvalidGeminiResponse("No messages provided"), "Invalid Gemini response"),
        (TransformationError("No messages provided"), "Transformation error"),
        (ConfigError("No messages provided"), "Configuration error"),
        (InternalError("No messages provided"), "Internal error"),
        (UpstreamError("No messages provided"), "Upstream error"),
    ]
    for err, label in cases:
        assert str(err) == f"{label}: No messages provided"


def test_errors_are_caught_as_proxy_error():
    cases = [
        (InvalidClaudeRequest("boom"), "Invalid Claude request"),
        (InvalidGeminiResponse("boom"), "Invalid Gemini response"),
        (TransformationError("boom"), "Transformation error"),
        (ConfigError("boom"), "Configuration error"),
        (InternalError("boom"), "Internal error"),
        (UpstreamError("boom"), "Upstream error"),
    ]
    for err, label in cases:
        with pytest.raises(ProxyError) as info:
            raise err
        assert info.value is err
        assert info.value.message == "boom"
        assert str(info.value).startswith(label)


def test_message_kept_separately_from_label():
    err = UpstreamError("Gemini request failed: timeout")
    assert err.message == "Gemini request failed: timeout"
    assert err.args == ("Gemini request failed: timeout",)


def test_specific_error_not_caught_by_sibling():
    err = ConfigError("bad listen address")
    with pytest.raises(ConfigError) as info:
        try:
            raise err
        except UpstreamError:
            pytest.fail("sibling class must not match")
    assert info.value is err
    assert info.value.message == "bad listen address"
    assert not isinstance(info.value, UpstreamError)
    assert str(info.value) == "Configuration error: bad listen address"