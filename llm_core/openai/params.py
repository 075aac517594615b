"""Assemble ``chat.completions.create`` keyword arguments for streaming calls."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from ..base.errors import TranslationError
from ..base.logging import get_logger
from ..base.models import ChatRequest, Tool, ToolChoice, ToolChoiceType

PROVIDER = "openai"

_logger = get_logger("openai.params")


def tools_to_openai(tools: List[Tool]) -> List[Dict[str, Any]]:
    return [
        {
            "type": "function",
            "function": {
                "name": t.name,
                "description": t.description,
                "parameters": t.parameters.to_dict(),
            },
        }
        for t in tools
    ]


def tool_choice_to_openai(choice: Optional[ToolChoice]) -> Union[str, Dict[str, Any], None]:
    """Map the unified tool choice; ``None`` leaves the parameter unset.

    ``force`` without a name becomes ``"required"``; with a name it pins the
    function.
    """
    if choice is None:
        return None
    kind = str(getattr(choice.type, "value", choice.type) or "")
    if kind == "":
        return None
    if kind == ToolChoiceType.AUTO.value:
        return "auto"
    if kind == ToolChoiceType.NONE.value:
        return "none"
    if kind == ToolChoiceType.FORCE.value:
        if choice.name:
            return {"type": "function", "function": {"name": choice.name}}
        return "required"
    raise TranslationError(f"unsupported tool choice type: {kind}", provider=PROVIDER)


def build_stream_params(request: ChatRequest, model: str, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Return kwargs for a streaming Chat Completions call.

    ``stream_options.include_usage`` asks for a final usage chunk. Unset
    sampling values are omitted; explicit zeros are sent. ``top_k`` has no
    Chat Completions equivalent and is dropped.
    """
    params: Dict[str, Any] = {
        "model": model,
        "messages": messages,
        "stream": True,
        "stream_options": {"include_usage": True},
    }
    if request.max_tokens > 0:
        params["max_completion_tokens"] = int(request.max_tokens)
    sampling = request.sampling
    if sampling.temperature is not None:
        params["temperature"] = float(sampling.temperature)
    if sampling.top_p is not None:
        params["top_p"] = float(sampling.top_p)
    if sampling.top_k is not None:
        _logger.debug("top_k is not supported by chat completions; dropping it")
    if request.tools:
        params["tools"] = tools_to_openai(request.tools)
    choice = tool_choice_to_openai(request.tool_choice)
    if choice is not None:
        params["tool_choice"] = choice
    return params


__all__ = ["build_stream_params", "tools_to_openai", "tool_choice_to_openai"]
