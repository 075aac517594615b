"""``GenerateContentConfig`` assembly for streaming GenAI calls."""
from __future__ import annotations

from typing import List, Optional

from google.genai import types

from ..base.errors import TranslationError
from ..base.models import ChatRequest, Tool, ToolChoice, ToolChoiceType
from ..config.defaults import GENAI_MAX_OUTPUT_TOKENS

PROVIDER = "gemini"


def tools_to_genai(tools: List[Tool]) -> Optional[List[types.Tool]]:
    if not tools:
        return None
    return [
        types.Tool(
            function_declarations=[
                types.FunctionDeclaration(
                    name=t.name,
                    description=t.description or None,
                    parameters_json_schema=t.parameters.to_dict(),
                )
            ]
        )
        for t in tools
    ]


def tool_choice_to_genai(choice: Optional[ToolChoice]) -> Optional[types.ToolConfig]:
    """auto -> AUTO, none -> NONE, force -> ANY (optionally pinned by name)."""
    if choice is None:
        return None
    kind = str(getattr(choice.type, "value", choice.type) or "")
    if kind == "":
        return None
    if kind == ToolChoiceType.AUTO.value:
        mode = types.FunctionCallingConfigMode.AUTO
    elif kind == ToolChoiceType.NONE.value:
        mode = types.FunctionCallingConfigMode.NONE
    elif kind == ToolChoiceType.FORCE.value:
        return types.ToolConfig(
            function_calling_config=types.FunctionCallingConfig(
                mode=types.FunctionCallingConfigMode.ANY,
                allowed_function_names=[choice.name] if choice.name else None,
            )
        )
    else:
        raise TranslationError(f"unsupported tool choice type: {kind}", provider=PROVIDER)
    return types.ToolConfig(function_calling_config=types.FunctionCallingConfig(mode=mode))


def build_generation_config(
    request: ChatRequest, system_instruction: Optional[types.Content]
) -> types.GenerateContentConfig:
    """Map limits, sampling and tools. Unset sampling values stay unset."""
    kwargs = {
        "system_instruction": system_instruction,
        "tools": tools_to_genai(request.tools),
        "tool_config": tool_choice_to_genai(request.tool_choice),
    }
    if request.max_tokens > 0:
        kwargs["max_output_tokens"] = min(int(request.max_tokens), GENAI_MAX_OUTPUT_TOKENS)
    sampling = request.sampling
    if sampling.temperature is not None:
        kwargs["temperature"] = float(sampling.temperature)
    if sampling.top_p is not None:
        kwargs["top_p"] = float(sampling.top_p)
    if sampling.top_k is not None:
        kwargs["top_k"] = float(sampling.top_k)
    return types.GenerateContentConfig(**{k: v for k, v in kwargs.items() if v is not None})


__all__ = ["build_generation_config", "tools_to_genai", "tool_choice_to_genai"]
