from __future__ import annotations

import base64

import pytest
from pydantic import ValidationError

from llm_core.base.dto import ChatRequestDTO, MessageDTO, SamplingDTO


def _payload(**kw):
    base = {"model": "gpt-test", "messages": [{"role": "user", "content": "hi"}]}
    base.update(kw)
    return base


def test_minimal_request_converts_to_domain():
    request = ChatRequestDTO.model_validate(_payload(trace_id="t-1")).to_request()
    assert request.model == "gpt-test"  # nosec B101 - pytest assert in tests
    assert request.messages[0].role == "user"  # nosec B101 - pytest assert in tests
    assert request.tool_choice is None  # nosec B101 - pytest assert in tests
    assert request.sampling.temperature is None  # nosec B101 - pytest assert in tests
    assert request.trace_id == "t-1"  # nosec B101 - pytest assert in tests


def test_full_request_with_tools_and_attachments():
    payload = _payload(
        messages=[
            {"role": "system", "content": "be brief"},
            {
                "role": "user",
                "attachments": [{"data": base64.b64encode(b"notes").decode(), "file_name": "n.txt"}],
            },
            {
                "role": "assistant",
                "tool_calls": [
                    {
                        "id": "c1",
                        "name": "lookup",
                        "arguments": "{}",
                        "thought_signature": base64.b64encode(b"sig").decode(),
                    }
                ],
            },
            {"role": "tool", "tool_call_id": "c1", "content": "42"},
        ],
        max_tokens=64,
        sampling={"temperature": 0.0, "top_p": 1.0, "top_k": 0},
        tools=[
            {
                "name": "lookup",
                "parameters": {"properties": {"q": {"type": "string"}}, "required": ["q"]},
            }
        ],
        tool_choice={"type": "force", "name": "lookup"},
    )
    request = ChatRequestDTO.model_validate(payload).to_request()
    assert request.messages[1].attachments[0].data == b"notes"  # nosec B101 - pytest assert in tests
    assert request.messages[2].tool_calls[0].thought_signature == b"sig"  # nosec B101 - pytest assert in tests
    assert request.tools[0].parameters.required == ["q"]  # nosec B101 - pytest assert in tests
    assert request.tool_choice.type == "force"  # nosec B101 - pytest assert in tests
    assert request.sampling.top_k == 0  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "payload",
    [
        _payload(model=""),
        _payload(messages=[]),
        _payload(max_tokens=-1),
        _payload(messages=[{"role": "narrator", "content": "x"}]),
        _payload(messages=[{"role": "user", "content": "  "}]),
        _payload(messages=[{"role": "tool", "content": "x"}]),
        _payload(messages=[{"role": "user", "content": "x", "tool_calls": [{"name": "f"}]}]),
        _payload(messages=[{"role": "user", "attachments": [{"data": "not base64!"}]}]),
        _payload(tools=[{"name": "a"}, {"name": "a"}]),
        _payload(tools=[{"name": "a", "parameters": {"required": ["missing"]}}]),
        _payload(tools=[{"name": "a"}], tool_choice={"type": "force", "name": "b"}),
        _payload(tool_choice={"type": "auto", "name": "a"}),
        _payload(tool_choice={"type": "sometimes"}),
    ],
)
def test_invalid_requests_are_rejected(payload):
    with pytest.raises(ValidationError):
        ChatRequestDTO.model_validate(payload)


@pytest.mark.parametrize(
    "field,value",
    [("temperature", 2.5), ("temperature", -0.1), ("top_p", 1.5), ("top_k", -1)],
)
def test_sampling_bounds(field, value):
    with pytest.raises(ValidationError):
        SamplingDTO(**{field: value})


def test_assistant_message_may_be_empty():
    msg = MessageDTO(role="assistant")
    assert msg.to_domain().content == ""  # nosec B101 - pytest assert in tests
