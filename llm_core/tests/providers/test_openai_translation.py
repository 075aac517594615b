"""Request translation for Chat Completions: messages, tools and parameters."""
from __future__ import annotations

import base64

import pytest

from llm_core.base.errors import TranslationError
from llm_core.base.models import (
    Attachment,
    ChatRequest,
    JSONSchema,
    Message,
    SamplingParams,
    SchemaProperty,
    Tool,
    ToolCall,
    ToolChoice,
)
from llm_core.openai.messages import build_openai_messages
from llm_core.openai.params import build_stream_params, tool_choice_to_openai

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8


def test_plain_messages_keep_order_and_roles():
    wire, prompts = build_openai_messages(
        [Message(role="system", content="be brief"), Message(role="user", content="hi")]
    )
    assert wire == [  # nosec B101 - pytest assert in tests
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "hi"},
    ]
    assert prompts == ["be brief", "hi"]  # nosec B101 - pytest assert in tests


def test_assistant_tool_calls_and_tool_result():
    wire, _ = build_openai_messages(
        [
            Message(role="user", content="weather?"),
            Message(
                role="assistant",
                tool_calls=[ToolCall(id="call_1", name="get_weather", arguments="")],
            ),
            Message(role="tool", content='{"temp": 21}', tool_call_id="call_1"),
        ]
    )
    assistant, tool = wire[1], wire[2]
    assert assistant["content"] is None  # nosec B101 - pytest assert in tests
    assert assistant["tool_calls"] == [  # nosec B101 - pytest assert in tests
        {"id": "call_1", "type": "function", "function": {"name": "get_weather", "arguments": "{}"}}
    ]
    assert tool == {"role": "tool", "content": '{"temp": 21}', "tool_call_id": "call_1"}  # nosec B101 - pytest assert in tests


def test_attachments_become_content_parts():
    wire, prompts = build_openai_messages(
        [
            Message(
                role="user",
                content="look",
                attachments=[
                    Attachment(data=PNG, file_name="pic.png"),
                    Attachment(data=b"line one", file_name="notes.txt"),
                ],
            )
        ]
    )
    parts = wire[0]["content"]
    assert parts[0] == {"type": "text", "text": "look"}  # nosec B101 - pytest assert in tests
    assert parts[1]["type"] == "image_url"  # nosec B101 - pytest assert in tests
    assert parts[1]["image_url"]["url"] == "data:image/png;base64," + base64.b64encode(PNG).decode()  # nosec B101 - pytest assert in tests
    assert parts[2] == {"type": "text", "text": "[attachment:notes.txt]\nline one"}  # nosec B101 - pytest assert in tests
    assert "[attachment:notes.txt]" in prompts[0]  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "message",
    [
        Message(role="narrator", content="x"),
        Message(role="tool", content="x"),
        Message(role="user", attachments=[Attachment(data=b"\xff\xfe\x00\x01", mime_type="application/zip")]),
    ],
)
def test_untranslatable_messages_raise(message):
    with pytest.raises(TranslationError):
        build_openai_messages([message])


def _request(**kw) -> ChatRequest:
    return ChatRequest(model="gpt-test", messages=[Message(role="user", content="hi")], **kw)


def test_stream_params_omit_unset_sampling():
    params = build_stream_params(_request(), "gpt-test", [])
    for key in ("temperature", "top_p", "max_completion_tokens", "tools", "tool_choice"):
        assert key not in params  # nosec B101 - pytest assert in tests


def test_stream_params_map_limits_sampling_and_tools():
    tool = Tool(
        name="get_weather",
        description="Current weather",
        parameters=JSONSchema(
            properties={"city": SchemaProperty(type="string")}, required=["city"]
        ),
    )
    request = _request(
        max_tokens=128,
        sampling=SamplingParams(temperature=0.0, top_p=0.5, top_k=40),
        tools=[tool],
        tool_choice=ToolChoice(type="force", name="get_weather"),
    )
    params = build_stream_params(request, "gpt-test", [])
    assert params["max_completion_tokens"] == 128  # nosec B101 - pytest assert in tests
    assert params["temperature"] == 0.0  # nosec B101 - explicit zero is sent
    assert params["top_p"] == 0.5  # nosec B101 - pytest assert in tests
    assert "top_k" not in params  # nosec B101 - pytest assert in tests
    fn = params["tools"][0]["function"]
    assert fn["name"] == "get_weather"  # nosec B101 - pytest assert in tests
    assert fn["parameters"]["required"] == ["city"]  # nosec B101 - pytest assert in tests
    assert params["tool_choice"] == {"type": "function", "function": {"name": "get_weather"}}  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "choice,expected",
    [
        (None, None),
        (ToolChoice(type="auto"), "auto"),
        (ToolChoice(type="none"), "none"),
        (ToolChoice(type="force"), "required"),
    ],
)
def test_tool_choice_mapping(choice, expected):
    assert tool_choice_to_openai(choice) == expected  # nosec B101 - pytest assert in tests


def test_unknown_tool_choice_raises():
    with pytest.raises(TranslationError):
        tool_choice_to_openai(ToolChoice(type="sometimes"))
