"""OpenAI-compatible chat client.

``OpenAIClient`` implements :class:`LlmClient` over the ``openai`` SDK's
Chat Completions API. Any OpenAI-compatible gateway works through
``base_url``. Requests are translated before the network call, so
translation failures never start a stream.
"""
from __future__ import annotations

import time
from typing import Any, Callable, Optional

from openai import OpenAI

from ..base.cancellation import CancellationToken
from ..base.errors import ErrorCode, ProviderError, wrap_exception
from ..base.logging import LogContext, get_logger
from ..base.models import ChatRequest, ChatResponse
from ..base.streaming import StreamState, abandon_stream_start, chat_via_stream
from ..base.tokens import AsyncTokenCounter, default_async_counter
from ..config import get_provider_config
from .messages import build_openai_messages
from .params import build_stream_params
from .stream import OpenAIStream

PROVIDER = "openai"

CounterFactory = Callable[[], AsyncTokenCounter]


class OpenAIClient:
    """Chat client for OpenAI and OpenAI-compatible endpoints.

    Args:
        api_key: Overrides the configured key (``OPENAI_API_KEY``).
        base_url: Overrides the configured endpoint (``OPENAI_BASE_URL``).
        default_model: Used when a request leaves ``model`` empty.
        client: Pre-built SDK client; skips configuration entirely.
        counter_factory: Builds the per-stream token counter. Defaults to
            ``cl100k_base`` with a logged rune-mode fallback.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        default_model: Optional[str] = None,
        client: Any = None,
        counter_factory: Optional[CounterFactory] = None,
    ) -> None:
        cfg = get_provider_config(
            PROVIDER, {"api_key": api_key, "base_url": base_url, "model": default_model}
        )
        self._api_key = cfg.get("api_key")
        self._base_url = cfg.get("base_url")
        self._default_model = cfg.get("model") or ""
        self._client = client
        self._logger = get_logger("openai")
        self._counter_factory = counter_factory or (lambda: default_async_counter(self._logger))

    @property
    def provider_name(self) -> str:
        return PROVIDER

    def default_model(self) -> str:
        return self._default_model

    def _sdk(self) -> Any:
        if self._client is None:
            if not self._api_key:
                raise ProviderError(
                    code=ErrorCode.AUTH,
                    message="missing API key (set OPENAI_API_KEY)",
                    provider=PROVIDER,
                )
            self._client = OpenAI(api_key=self._api_key, base_url=self._base_url)
        return self._client

    def chat_stream(
        self, request: ChatRequest, token: Optional[CancellationToken] = None
    ) -> OpenAIStream:
        """Start a streamed completion.

        Raises:
            TranslationError: the request cannot be expressed for this provider.
            ProviderError: the streaming call could not be started.
        """
        start = time.perf_counter()
        model = request.model or self._default_model
        messages, prompt_texts = build_openai_messages(request.messages)
        params = build_stream_params(request, model, messages)

        counter = self._counter_factory()
        counter.set_prompt_count(counter.count_prompt_messages(prompt_texts))

        stream_token = token.child() if token is not None else CancellationToken()
        try:
            native = self._sdk().chat.completions.create(**params)
        except ProviderError:
            abandon_stream_start(stream_token, counter)
            raise
        except Exception as exc:
            abandon_stream_start(stream_token, counter)
            raise wrap_exception(exc, provider=PROVIDER, model=model) from exc

        state = StreamState(
            token=stream_token,
            counter=counter,
            logger=self._logger,
            ctx=LogContext(provider=PROVIDER, model=model, request_id=request.trace_id or None),
            start=start,
        )
        return OpenAIStream(native, state=state, model=model).start()

    def chat(
        self, request: ChatRequest, token: Optional[CancellationToken] = None
    ) -> ChatResponse:
        """Run the request to completion through :meth:`chat_stream`."""
        return chat_via_stream(lambda: self.chat_stream(request, token))


__all__ = ["OpenAIClient"]
