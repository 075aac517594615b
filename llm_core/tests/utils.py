"""Fakes and chunk builders shared by the provider stream tests.

Chunks mirror the attribute shape of the SDK objects the adapters read; the
adapters only use ``getattr`` so ``SimpleNamespace`` is enough.
"""
from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, Iterable, List


class FakeNativeStream:
    """Iterable stand-in for an SDK stream; records ``close()`` calls."""

    def __init__(self, chunks: Iterable[Any], error: BaseException | None = None) -> None:
        self._chunks = list(chunks)
        self._error = error
        self.closed = False

    def __iter__(self):
        for chunk in self._chunks:
            if self.closed:
                return
            yield chunk
        if self._error is not None:
            raise self._error

    def close(self) -> None:
        self.closed = True


class FakeOpenAISDK:
    """Mimics ``OpenAI().chat.completions.create`` for streaming calls."""

    def __init__(self, native: Any = None, error: BaseException | None = None) -> None:
        self.calls: List[Dict[str, Any]] = []
        self._native = native
        self._error = error
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **params: Any) -> Any:
        self.calls.append(params)
        if self._error is not None:
            raise self._error
        return self._native


class FakeGenAISDK:
    """Mimics ``genai.Client().models.generate_content_stream``."""

    def __init__(self, native: Any = None, error: BaseException | None = None) -> None:
        self.calls: List[Dict[str, Any]] = []
        self._native = native
        self._error = error
        self.models = SimpleNamespace(generate_content_stream=self._stream)

    def _stream(self, **params: Any) -> Any:
        self.calls.append(params)
        if self._error is not None:
            raise self._error
        return self._native


def openai_chunk(
    content: str | None = None,
    *,
    finish_reason: str | None = None,
    tool_calls: list | None = None,
    usage: Any = None,
    choices: bool = True,
) -> SimpleNamespace:
    if not choices:
        return SimpleNamespace(choices=[], usage=usage)
    delta = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(
        choices=[SimpleNamespace(delta=delta, finish_reason=finish_reason)], usage=usage
    )


def openai_tool_delta(index: int, id: str | None = None, name: str | None = None, arguments: str | None = None):
    return SimpleNamespace(
        index=index, id=id, function=SimpleNamespace(name=name, arguments=arguments)
    )


def openai_usage(prompt: int, completion: int, total: int) -> SimpleNamespace:
    return SimpleNamespace(prompt_tokens=prompt, completion_tokens=completion, total_tokens=total)


def genai_chunk(
    parts: list | None = None,
    *,
    finish_reason: Any = None,
    usage: Any = None,
) -> SimpleNamespace:
    candidate = SimpleNamespace(content=SimpleNamespace(parts=parts or []), finish_reason=finish_reason)
    return SimpleNamespace(candidates=[candidate], usage_metadata=usage)


def genai_text(text: str) -> SimpleNamespace:
    return SimpleNamespace(text=text, function_call=None, thought_signature=None)


def genai_call(name: str, args: dict | None, *, id: str | None = None, signature: bytes | None = None):
    return SimpleNamespace(
        text=None,
        function_call=SimpleNamespace(id=id, name=name, args=args),
        thought_signature=signature,
    )


def genai_usage(prompt: int, candidates: int, total: int) -> SimpleNamespace:
    return SimpleNamespace(
        prompt_token_count=prompt, candidates_token_count=candidates, total_token_count=total
    )
