"""Response normalizer tests."""

import json

from chat_relay.services.response_parser import (
    FALLBACK_MAX_CHARS,
    ResponseParser,
    extract_reply_text,
    resolve_path,
)


def test_openai_shape():
    data = {"choices": [{"message": {"role": "assistant", "content": "hello"}}]}
    assert extract_reply_text(data) == "hello"


def test_message_content_wins_over_vendor_shape():
    data = {
        "choices": [{"message": {"content": "A"}}],
        "data": [{"content": "B"}],
    }
    assert extract_reply_text(data) == "A"


def test_delta_shape_wins_over_data_shape():
    data = {
        "choices": [{"delta": {"content": "partial"}}],
        "data": [{"content": "B"}],
    }
    assert extract_reply_text(data) == "partial"


def test_empty_message_content_falls_through():
    data = {
        "choices": [{"message": {"content": ""}}],
        "data": [{"content": "B"}],
    }
    assert extract_reply_text(data) == "B"


def test_nested_result_shape():
    data = {"result": {"choices": [{"message": {"content": "nested"}}]}}
    assert extract_reply_text(data) == "nested"


def test_unknown_shape_falls_back_to_serialized_json():
    data = {"output": "something else", "n": 1}
    text = extract_reply_text(data)

    assert json.loads(text) == data


def test_fallback_is_truncated():
    data = {"blob": "x" * 5000}
    text = extract_reply_text(data)

    assert len(text) == FALLBACK_MAX_CHARS
    assert text.startswith('{"blob":"xxx')


def test_mismatched_container_types_do_not_raise():
    data = {"choices": {"message": "not-a-list"}, "data": "nope", "result": []}
    text = extract_reply_text(data)

    assert json.loads(text) == data


def test_resolve_path():
    data = {"a": [{"b": "c"}]}
    assert resolve_path(data, ("a", 0, "b")) == "c"
    assert resolve_path(data, ("a", 1, "b")) is None
    assert resolve_path(data, ("x",)) is None
    assert resolve_path(None, ("a",)) is None


def test_custom_limit():
    parser = ResponseParser(max_chars=10)
    assert parser.extract_text({"k": "v" * 100}) == '{"k":"vvvv'


def test_fallback_handles_integers_beyond_64_bits():
    data = {"id": 2 ** 70, "object": "unknown"}
    text = extract_reply_text(data)

    assert text == '{"id":1180591620717411303424,"object":"unknown"}'
    assert json.loads(text) == data


def test_matched_non_string_content_with_big_integer():
    data = {"choices": [{"message": {"content": [{"type": "text", "n": 2 ** 70}]}}]}

    assert json.loads(extract_reply_text(data)) == [{"type": "text", "n": 2 ** 70}]
